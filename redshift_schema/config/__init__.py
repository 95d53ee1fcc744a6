# ============================================================================
# CONFIGURATION MODULE
# ============================================================================
# STATUS: Core - Configuration and defaults
# PURPOSE: Centralized configuration management
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Module

Provides centralized defaults for table definitions and DDL execution.
"""

from redshift_schema.config.defaults import (
    TableDefaults,
    ColumnDefaults,
    DDLDefaults,
    TABLE_DEFAULTS,
    COLUMN_DEFAULTS,
    Defaults,
    get_defaults,
    reset_defaults,
)

__all__ = [
    "TableDefaults",
    "ColumnDefaults",
    "DDLDefaults",
    "TABLE_DEFAULTS",
    "COLUMN_DEFAULTS",
    "Defaults",
    "get_defaults",
    "reset_defaults",
]
