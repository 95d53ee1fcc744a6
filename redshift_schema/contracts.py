# ============================================================================
# BASE CONTRACTS & ENUMS
# ============================================================================
# STATUS: Foundation - Type tags and Redshift keyword enums
# PURPOSE: Define the semantic column types and physical-layout keywords
# CREATED: 18 OCT 2026
# EXPORTS: ColumnType, SortStyle, DistStyle, ColumnEncoding, Collation
# DEPENDENCIES: enum
# ============================================================================
"""
Base contracts for Redshift schema definitions.

Every value here is a ``str`` enum, so members compare equal to the plain
strings callers pass in (``ColumnType.UUID == "uuid"``). Definitions store
the plain string; the enums are the vocabulary the DDL stage checks against.
"""

from enum import Enum
from typing import Any


# ============================================================================
# COLUMN TYPES
# ============================================================================

class ColumnType(str, Enum):
    """
    Semantic column type tags.

    PRIMARY_KEY is reserved: it means "auto-generated surrogate key" and is
    distinct from key types such as UUID.
    """
    PRIMARY_KEY = "primary_key"
    STRING = "string"
    TEXT = "text"
    INTEGER = "integer"
    BIGINT = "bigint"
    FLOAT = "float"
    DECIMAL = "decimal"
    NUMERIC = "numeric"
    DATETIME = "datetime"
    TIMESTAMP = "timestamp"
    TIME = "time"
    DATE = "date"
    BOOLEAN = "boolean"
    JSON = "json"
    JSONB = "jsonb"
    UUID = "uuid"


def type_tag(value: Any) -> str:
    """Return the plain string tag for an enum member or any other value."""
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


# ============================================================================
# PHYSICAL LAYOUT
# ============================================================================

class SortStyle(str, Enum):
    """
    Sort key styles.

    COMPOUND sorts by the key columns in order; INTERLEAVED gives each
    key column equal weight.
    """
    COMPOUND = "COMPOUND"
    INTERLEAVED = "INTERLEAVED"


class DistStyle(str, Enum):
    """
    Row distribution styles across compute nodes.
    """
    EVEN = "EVEN"      # Round-robin
    KEY = "KEY"        # Hash of the distribution key column
    ALL = "ALL"        # Full copy on every node
    AUTO = "AUTO"      # Let Redshift choose

    def accepts_distkey(self) -> bool:
        """Check whether a DISTKEY clause may accompany this style."""
        return self in (DistStyle.KEY, DistStyle.EVEN)


class ColumnEncoding(str, Enum):
    """Column compression encodings accepted in an ENCODE clause."""
    RAW = "RAW"
    AZ64 = "AZ64"
    BYTEDICT = "BYTEDICT"
    DELTA = "DELTA"
    DELTA32K = "DELTA32K"
    LZO = "LZO"
    MOSTLY8 = "MOSTLY8"
    MOSTLY16 = "MOSTLY16"
    MOSTLY32 = "MOSTLY32"
    RUNLENGTH = "RUNLENGTH"
    TEXT255 = "TEXT255"
    TEXT32K = "TEXT32K"
    ZSTD = "ZSTD"


class Collation(str, Enum):
    """Column collations accepted in a COLLATE clause."""
    CASE_SENSITIVE = "CASE_SENSITIVE"
    CASE_INSENSITIVE = "CASE_INSENSITIVE"


def parse_keyword(enum_class, value: Any, label: str):
    """
    Resolve a keyword (case-insensitive) to a member of ``enum_class``.

    Raises:
        ValueError: If the value is not one of the enum's members
    """
    text = type_tag(value).upper()
    try:
        return enum_class(text)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_class)
        raise ValueError(f"Unknown {label} '{value}' (expected one of: {allowed})") from None


__all__ = [
    "ColumnType",
    "SortStyle",
    "DistStyle",
    "ColumnEncoding",
    "Collation",
    "type_tag",
    "parse_keyword",
]
