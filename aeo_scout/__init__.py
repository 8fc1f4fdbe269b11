# aeo_scout/__init__.py
"""
AEO Scout package initializer.
Defines package version; the CLI lives in :mod:`aeo_scout.cli`.
"""
__version__ = "0.1.0"

__all__ = ["__version__"]
