"""
Crawler-access analysis of robots.txt for the tracked AI/answer-engine agents.
"""
from __future__ import annotations

import re
from typing import Dict, List, Tuple

from aeo_scout.models import TRACKED_AGENTS, Access

__all__ = ["summarize_robots", "parse_directives"]

_AGENT_SPLIT_RE = re.compile(r"[\s,]+")


def parse_directives(text: str) -> List[Tuple[str, str]]:
    """Strip comments and blank lines; return ``(directive, value)`` pairs.

    Directive names are lower-cased, values are kept verbatim (trimmed).
    """
    pairs: List[Tuple[str, str]] = []
    for raw in text.splitlines():
        line = raw.split("#", 1)[0].strip()
        if not line or ":" not in line:
            continue
        key, _, val = line.partition(":")
        pairs.append((key.strip().lower(), val.strip()))
    return pairs


def summarize_robots(text: str) -> Dict[str, Access]:
    """Classify access for every tracked agent as ``allow``, ``block`` or ``partial``.

    Each ``User-agent`` line replaces the set of active agents. A
    ``Disallow: /`` for an active agent blocks it for good; any other
    ``Disallow`` path turns ``allow`` into ``partial``. ``Allow`` lines never
    relax a decision. Agents that are not tracked are ignored, and tracked
    agents that are never mentioned stay ``allow``.
    """
    result: Dict[str, Access] = {agent: "allow" for agent in TRACKED_AGENTS}
    current: List[str] = []

    for directive, value in parse_directives(text or ""):
        if directive == "user-agent":
            current = [a for a in _AGENT_SPLIT_RE.split(value) if a]
            continue
        if directive != "disallow" or not value.startswith("/"):
            continue
        for agent in current:
            if agent not in result:
                continue
            if value == "/":
                result[agent] = "block"
            elif result[agent] == "allow":
                result[agent] = "partial"
    return result
