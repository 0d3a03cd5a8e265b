# src/rewriter/dom/transformer.py
import logging
from typing import Iterable, Optional

from bs4 import BeautifulSoup, Tag

from rewriter.dom.core import DEFAULT_SKIP_TAGS, iter_text_nodes
from rewriter.model import TransformResult
from rewriter.services.term_substitution_service import TermSubstitutionService

logger = logging.getLogger(__name__)

DEFAULT_PARSER = "lxml"


class DocumentTransformer:
    """
    Rewrites the visible text of an HTML document.

    Only text nodes under <body> are passed through the substitution service;
    tags, attribute values (href, src, alt, mailto: links) and comments are
    serialized exactly as parsed. The <title> sits in <head> and is rewritten
    on its own.
    """

    def __init__(
            self,
            substitution_service: Optional[TermSubstitutionService] = None,
            parser: str = DEFAULT_PARSER,
            skip_tags: Iterable[str] = DEFAULT_SKIP_TAGS,
    ):
        self.substitution_service = substitution_service or TermSubstitutionService()
        self.parser = parser
        self.skip_tags = frozenset(skip_tags)

    def transform(self, html: Optional[str]) -> TransformResult:
        """
        Parses `html`, substitutes the target term in body text and title,
        and returns the re-serialized document with the new title.

        Args:
            html (str): Raw HTML. Malformed markup is repaired by the parser.

        Returns:
            TransformResult: Serialized HTML, substituted title and the number
                             of body text nodes that changed.
        """
        if not html:
            return TransformResult(html="", title="")

        # Leading BOM would otherwise end up as body text
        soup = BeautifulSoup(html.lstrip('\ufeff'), self.parser)

        replaced = self._rewrite_body(soup.body) if soup.body else 0
        title = self._rewrite_title(soup)

        logger.debug("Rewrote %d text node(s); title=%r", replaced, title)
        return TransformResult(html=str(soup), title=title, replacements=replaced)

    def _rewrite_body(self, body: Tag) -> int:
        replaced = 0
        for node in iter_text_nodes(body, self.skip_tags):
            text = str(node)
            new_text = self.substitution_service.substitute(text)
            if new_text != text:
                node.replace_with(new_text)
                replaced += 1
        return replaced

    def _rewrite_title(self, soup: BeautifulSoup) -> str:
        """
        Rewrites every <title> element and returns the first one's new text,
        or "" when the document has no title.
        """
        titles = []
        for title_tag in soup.find_all("title"):
            title = self.substitution_service.substitute(title_tag.get_text())
            title_tag.string = title
            titles.append(title)
        return titles[0] if titles else ""


_default_transformer = DocumentTransformer()


def transform(html: Optional[str]) -> TransformResult:
    """
    Transforms a document with the fixed Yale -> Fale rule.
    Configured terms apply through a transformer built by the server or CLI.
    """
    return _default_transformer.transform(html)
