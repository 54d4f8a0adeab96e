"""
Pydantic schemas for structured language-model output
"""
from typing import List, Optional, Union
from pydantic import BaseModel, Field


class ArticleSummary(BaseModel):
    """
    Summary of a single article: a short story plus key bullets.
    """
    short_story: str = ""
    bullets: List[str] = Field(default_factory=list)


class ReceiptVerdict(BaseModel):
    """
    Verdict on a payment screenshot.
    """
    ok: bool = False
    amount: Optional[Union[float, str]] = None
    time: Optional[str] = None
    gateway: Optional[str] = None
    txid: Optional[str] = None
    reason: Optional[str] = None
