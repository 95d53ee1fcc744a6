# ============================================================================
# CONFIGURATION DEFAULTS
# ============================================================================
# STATUS: Core - Default configuration values
# PURPOSE: Centralized defaults for table layout, columns and DDL execution
# CREATED: 18 OCT 2026
# ============================================================================
"""
Configuration Defaults

Provides the defaults used when tables and columns are declared, and the
settings that control how rendered DDL is executed.

Design:
- Immutable dataclasses for defaults
- Table and column defaults are fixed (definitions rely on them)
- DDL execution settings accept environment variable overrides
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from redshift_schema.contracts import ColumnType, DistStyle, SortStyle


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class TableDefaults:
    """
    Defaults applied when a table definition omits a layout attribute.

    Applied both when the argument is omitted and when it is None.
    """
    schema: str = "public"
    sortstyle: str = SortStyle.COMPOUND.value
    diststyle: str = DistStyle.EVEN.value


@dataclass(frozen=True)
class ColumnDefaults:
    """
    Defaults for column declarations.
    """
    primary_key_name: str = "id"
    primary_key_type: str = ColumnType.PRIMARY_KEY.value
    # Requires the uuid-ossp extension (or an equivalent function)
    uuid_default_function: str = "uuid_generate_v4()"


@dataclass(frozen=True)
class DDLDefaults:
    """
    Defaults for rendering and executing DDL statements.
    """
    if_not_exists: bool = False
    dry_run: bool = False
    log_statements: bool = True

    @classmethod
    def from_env(cls) -> "DDLDefaults":
        """Create from environment variables."""
        return cls(
            if_not_exists=_env_flag("REDSHIFT_DDL_IF_NOT_EXISTS", False),
            dry_run=_env_flag("REDSHIFT_DDL_DRY_RUN", False),
            log_statements=_env_flag("REDSHIFT_DDL_LOG_STATEMENTS", True),
        )


TABLE_DEFAULTS = TableDefaults()
COLUMN_DEFAULTS = ColumnDefaults()


# ============================================================================
# GLOBAL DEFAULTS INSTANCE
# ============================================================================

@dataclass
class Defaults:
    """Container for all default configurations."""
    table: TableDefaults = field(default_factory=TableDefaults)
    column: ColumnDefaults = field(default_factory=ColumnDefaults)
    ddl: DDLDefaults = field(default_factory=DDLDefaults)

    @classmethod
    def from_env(cls) -> "Defaults":
        """Create all defaults, reading overridable values from the environment."""
        return cls(ddl=DDLDefaults.from_env())


_defaults: Optional[Defaults] = None


def get_defaults() -> Defaults:
    """Get global defaults instance."""
    global _defaults
    if _defaults is None:
        _defaults = Defaults.from_env()
    return _defaults


def reset_defaults() -> None:
    """Reset defaults (for testing)."""
    global _defaults
    _defaults = None


# ============================================================================
# EXPORTS
# ============================================================================

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
