"""Исключения конвейера аудита.

Только :class:`FetchError` прерывает аудит; остальные сбои (robots.txt,
битый JSON-LD, сетевые ошибки проверки ссылок) превращаются в значения
по умолчанию или в найденные проблемы отчёта.
"""
from __future__ import annotations

from typing import Optional

__all__ = ["AuditError", "FetchError"]


class AuditError(Exception):
    """Base class for all audit pipeline errors."""


class FetchError(AuditError):
    """The page HTML could not be retrieved."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        self.url = url
        self.reason = reason
        self.status = status
        suffix = f" (HTTP {status})" if status is not None else ""
        super().__init__(f"Failed to fetch {url}{suffix}: {reason}")
