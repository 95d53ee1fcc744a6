# ============================================================================
# VERSION - REDSHIFT SCHEMA
# ============================================================================
"""
Version information for redshift_schema.

This is the single source of truth for the package version.
"""
__version__ = "0.1.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))
