"""aeo_scout.scanners: six independent rule-based category scanners."""

from aeo_scout.scanners.base import CheckList, category_score
from aeo_scout.scanners.content import scan_content
from aeo_scout.scanners.links import scan_links
from aeo_scout.scanners.meta import scan_meta
from aeo_scout.scanners.navigation import scan_navigation
from aeo_scout.scanners.schema import scan_schema
from aeo_scout.scanners.structure import scan_structure

#: synchronous scanners, keyed by category name, in report order (Links is async)
SYNC_SCANNERS = {
    "Structure": scan_structure,
    "Meta": scan_meta,
    "Schema": scan_schema,
    "Navigation": scan_navigation,
    "Content": scan_content,
}

CATEGORIES = (*SYNC_SCANNERS, "Links")

__all__ = [
    "CATEGORIES",
    "SYNC_SCANNERS",
    "CheckList",
    "category_score",
    "scan_content",
    "scan_links",
    "scan_meta",
    "scan_navigation",
    "scan_schema",
    "scan_structure",
]
