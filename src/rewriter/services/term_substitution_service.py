# src/rewriter/services/term_substitution_service.py
import re
from typing import Optional

from rewriter.model import SubstitutionRule


class TermSubstitutionService:
    """
    Replaces every case-insensitive occurrence of a literal term in a string.

    Matching is a plain substring scan: partial-word hits ("Yalemen") are
    replaced too. The replacement is always inserted in its configured casing,
    regardless of how the matched text was cased.
    """

    def __init__(self, rule: Optional[SubstitutionRule] = None):
        self.rule = rule or SubstitutionRule()
        self._pattern = re.compile(re.escape(self.rule.target), re.IGNORECASE)

    @property
    def target(self) -> str:
        return self.rule.target

    @property
    def replacement(self) -> str:
        return self.rule.replacement

    def substitute(self, text: str) -> str:
        if not text:
            return text
        # A callable keeps backslashes in the replacement literal.
        return self._pattern.sub(lambda _match: self.rule.replacement, text)


_default_service = TermSubstitutionService()


def substitute(text: str) -> str:
    """Applies the fixed Yale -> Fale rule, independent of settings.json."""
    return _default_service.substitute(text)
