# src/fetcher/model.py
from typing import Optional

from pydantic import BaseModel


class FetchResult(BaseModel):
    url: str
    final_url: str
    status_code: int
    content_type: Optional[str] = None
    content: str = ""
    elapsed_time: float = 0.0


class FetchError(Exception):
    """Raised when a document could not be retrieved."""

    def __init__(self, url: str, detail: str):
        super().__init__(detail)
        self.url = url
        self.detail = detail
