"""aeo_scout.crawler: page/robots fetching, robots.txt access analysis and link probes."""
