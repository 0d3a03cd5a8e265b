# src/rewriter/model.py
from pydantic import BaseModel, Field


class SubstitutionRule(BaseModel):
    """A literal term and the fixed string that replaces every match of it."""
    target: str = Field(default="Yale", min_length=1)
    replacement: str = "Fale"


class TransformResult(BaseModel):
    """
    Output of a single document transformation.

    `replacements` counts the body text nodes that were rewritten; the title
    is handled separately and is not included.
    """
    html: str = ""
    title: str = ""
    replacements: int = 0
