"""
Data models for the AEO Scout fetch layer.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class PageData:
    """Holds the final URL, HTTP status and HTML text of a fetched page."""

    url: str
    content: str
    status: int


@dataclass(frozen=True, slots=True)
class LinkStatus:
    """Outcome of one broken-link probe; ``status`` is None when no response came back."""

    url: str
    status: Optional[int]
    broken: bool
