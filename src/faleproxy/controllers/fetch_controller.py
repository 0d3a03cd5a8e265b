# src/faleproxy/controllers/fetch_controller.py
import logging
from typing import Any, Dict, Optional

from fetcher.services.http_fetch_service import DEFAULT_USER_AGENT, HttpFetchService
from rewriter.dom.core import DEFAULT_SKIP_TAGS
from rewriter.dom.transformer import DEFAULT_PARSER, DocumentTransformer
from rewriter.model import SubstitutionRule, TransformResult
from rewriter.services.term_substitution_service import TermSubstitutionService
from faleproxy.core.managers.config_manager import ConfigManager

logger = logging.getLogger(__name__)


def build_transformer(config: ConfigManager) -> DocumentTransformer:
    """Creates a DocumentTransformer from the 'rewrite' settings."""
    defaults = SubstitutionRule()
    rule = SubstitutionRule(
        target=config.get_nested("rewrite.target_term", defaults.target),
        replacement=config.get_nested("rewrite.replacement_term", defaults.replacement),
    )
    return DocumentTransformer(
        substitution_service=TermSubstitutionService(rule),
        parser=config.get_nested("rewrite.parser", DEFAULT_PARSER),
        skip_tags=config.get_nested("rewrite.skip_tags", sorted(DEFAULT_SKIP_TAGS)),
    )


def build_fetch_service(config: ConfigManager) -> HttpFetchService:
    """Creates an HttpFetchService from the 'fetch' settings."""
    return HttpFetchService(
        timeout=float(config.get_nested("fetch.timeout", 15.0)),
        user_agent=config.get_nested("fetch.user_agent", DEFAULT_USER_AGENT),
    )


class FetchController:
    """
    Orchestrates a proxy request: download the page, rewrite it and shape
    the JSON payload returned to the browser.
    """

    def __init__(
            self,
            fetch_service: HttpFetchService,
            transformer: DocumentTransformer,
    ):
        self.fetch_service = fetch_service
        self.transformer = transformer

    @classmethod
    def from_config(cls, config: ConfigManager) -> "FetchController":
        return cls(build_fetch_service(config), build_transformer(config))

    def transform(self, html: Optional[str]) -> TransformResult:
        return self.transformer.transform(html)

    def fetch_and_transform(self, url: str) -> Dict[str, Any]:
        """
        Fetches `url` and returns the rewritten document as a response payload.

        Raises:
            FetchError: If the page could not be downloaded.
        """
        page = self.fetch_service.fetch(url)
        result = self.transform(page.content)
        logger.info(
            "Rewrote %s: %d text node(s) changed, title=%r",
            url, result.replacements, result.title
        )
        return {
            "success": True,
            "content": result.html,
            "title": result.title,
            "originalUrl": url,
        }
