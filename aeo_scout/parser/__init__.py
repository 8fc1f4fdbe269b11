"""aeo_scout.parser: HTML parsing helpers and the extraction engine."""
