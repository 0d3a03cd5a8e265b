# tests/conftest.py
import pytest

SAMPLE_HTML_WITH_YALE = """
<!DOCTYPE html>
<html>
<head>
  <title>Yale University Test Page</title>
  <meta charset="utf-8">
</head>
<body>
  <header>
    <h1>Welcome to Yale University</h1>
    <nav>
      <ul>
        <li><a href="https://www.yale.edu/about">About Yale</a></li>
        <li><a href="https://www.yale.edu/admissions">Yale Admissions</a></li>
      </ul>
    </nav>
  </header>
  <main>
    <p>Yale University is a private Ivy League research university in New Haven, Connecticut.</p>
    <p>Yale was founded in 1701 as the Collegiate School.</p>
    <img src="https://www.yale.edu/images/logo.png" alt="Yale Logo">
    <!-- Yale footer starts here -->
    <p>Contact us at <a href="mailto:info@yale.edu">the admissions office</a>.</p>
  </main>
</body>
</html>
"""

HTML_WITHOUT_YALE = """
<!DOCTYPE html>
<html>
<head>
  <title>Test Page</title>
</head>
<body>
  <h1>Hello World</h1>
  <p>This is a test page with no Fale references.</p>
</body>
</html>
"""


@pytest.fixture
def sample_html_with_yale() -> str:
    return SAMPLE_HTML_WITH_YALE


@pytest.fixture
def html_without_yale() -> str:
    return HTML_WITHOUT_YALE
