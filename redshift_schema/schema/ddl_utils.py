# ============================================================================
# DDL UTILITIES
# ============================================================================
# STATUS: Core - Shared helpers for Redshift DDL generation
# PURPOSE: Type mapping, qualified names, comment and schema builders
# CREATED: 18 OCT 2026
# EXPORTS: NATIVE_DATABASE_TYPES, type_to_sql, table_identifier, CommentBuilder, SchemaUtils
# DEPENDENCIES: psycopg
# ============================================================================
"""
DDL Utilities - Shared SQL Generation Patterns.

All builders return psycopg.sql.Composed objects for safe execution.
Identifiers are always composed with sql.Identifier; only validated
keywords and type names are emitted as raw SQL.

Usage:
    from redshift_schema.schema.ddl_utils import CommentBuilder, table_identifier

    stmt = CommentBuilder.table(table_identifier("events", "analytics"), "Raw events")
    cursor.execute(stmt)
"""

import re
from typing import Dict, List, Optional, Sequence, Union

from psycopg import sql

from redshift_schema.contracts import ColumnType


# ============================================================================
# TYPE MAPPING
# ============================================================================

NATIVE_DATABASE_TYPES: Dict[str, str] = {
    # IDENTITY(1,1) and PRIMARY KEY are added by the column renderer
    ColumnType.PRIMARY_KEY.value: "INTEGER",
    ColumnType.STRING.value: "VARCHAR",
    ColumnType.TEXT.value: "VARCHAR(MAX)",
    ColumnType.INTEGER.value: "INTEGER",
    ColumnType.BIGINT.value: "BIGINT",
    ColumnType.FLOAT.value: "DOUBLE PRECISION",
    ColumnType.DECIMAL.value: "DECIMAL",
    ColumnType.NUMERIC.value: "NUMERIC",
    ColumnType.DATETIME.value: "TIMESTAMP",
    ColumnType.TIME.value: "TIME",
    ColumnType.DATE.value: "DATE",
    ColumnType.BOOLEAN.value: "BOOLEAN",
    ColumnType.JSON.value: "JSON",
    ColumnType.JSONB.value: "JSONB",
    ColumnType.UUID.value: "UUID",
}

_RAW_TYPE_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9_ ]*(\(\s*[A-Za-z0-9]+(\s*,\s*[0-9]+)?\s*\))?$")


def _integer_type(limit) -> str:
    """Pick the integer type for a byte size limit."""
    if limit is None or limit in (3, 4):
        return "INTEGER"
    if limit in (1, 2):
        return "SMALLINT"
    if limit in (5, 6, 7, 8):
        return "BIGINT"
    raise ValueError(f"No integer type has byte size {limit}. Use a decimal with scale 0 instead.")


def type_to_sql(
    type_name: str,
    limit=None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
    type_map: Optional[Dict[str, str]] = None,
) -> str:
    """
    Map a column type tag to a Redshift type.

    Args:
        type_name: Canonical type tag (unknown tags pass through upper-cased)
        limit: Length for strings, byte size for integers
        precision: Decimal precision
        scale: Decimal scale
        type_map: Overrides for NATIVE_DATABASE_TYPES

    Returns:
        Redshift type string

    Raises:
        ValueError: If the type cannot be rendered safely
    """
    types = {**NATIVE_DATABASE_TYPES, **(type_map or {})}

    if type_name == ColumnType.INTEGER.value and type_name not in (type_map or {}):
        return _integer_type(limit)

    native = types.get(type_name)
    if native is None:
        native = type_name.upper()
        if not _RAW_TYPE_PATTERN.match(native):
            raise ValueError(f"Cannot render column type '{type_name}'")
        return native

    if type_name in (ColumnType.DECIMAL.value, ColumnType.NUMERIC.value) and precision is not None:
        if scale is not None:
            return f"{native}({int(precision)},{int(scale)})"
        return f"{native}({int(precision)})"

    if type_name == ColumnType.STRING.value and limit is not None:
        if str(limit).upper() == "MAX":
            return f"{native}(MAX)"
        return f"{native}({int(limit)})"

    return native


# ============================================================================
# NAMES
# ============================================================================

def normalize_columns(columns: Union[str, Sequence[str]]) -> List[str]:
    """Convert single column or sequence to list."""
    if isinstance(columns, str):
        return [columns]
    return list(columns)


def table_identifier(name: str, schema: Optional[str] = None) -> sql.Identifier:
    """
    Build a (possibly schema-qualified) table identifier.

    A dotted ``name`` ("analytics.events") carries its own schema and
    takes precedence over ``schema``.
    """
    if "." in name:
        return sql.Identifier(*name.split(".", 1))
    if schema:
        return sql.Identifier(schema, name)
    return sql.Identifier(name)


# ============================================================================
# COMMENT BUILDER
# ============================================================================

class CommentBuilder:
    """
    Builder for COMMENT statements.
    """

    @staticmethod
    def table(table: sql.Identifier, comment: str) -> sql.Composed:
        """Add comment to table."""
        return sql.SQL("COMMENT ON TABLE {} IS {}").format(
            table,
            sql.Literal(comment)
        )

    @staticmethod
    def column(table: sql.Identifier, column: str, comment: str) -> sql.Composed:
        """Add comment to column."""
        return sql.SQL("COMMENT ON COLUMN {}.{} IS {}").format(
            table,
            sql.Identifier(column),
            sql.Literal(comment)
        )


# ============================================================================
# SCHEMA UTILITIES
# ============================================================================

class SchemaUtils:
    """
    Utility methods for schema-level DDL operations.
    """

    @staticmethod
    def create_schema(schema: str, if_not_exists: bool = True) -> sql.Composed:
        """Create schema."""
        if if_not_exists:
            return sql.SQL("CREATE SCHEMA IF NOT EXISTS {}").format(sql.Identifier(schema))
        return sql.SQL("CREATE SCHEMA {}").format(sql.Identifier(schema))

    @staticmethod
    def drop_schema(schema: str, cascade: bool = False) -> sql.Composed:
        """
        Drop schema.

        WARNING: with cascade=True this destroys every table in the schema.
        """
        stmt = sql.SQL("DROP SCHEMA IF EXISTS {}").format(sql.Identifier(schema))
        if cascade:
            stmt = sql.SQL("{} CASCADE").format(stmt)
        return stmt


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    'NATIVE_DATABASE_TYPES',
    'type_to_sql',
    'normalize_columns',
    'table_identifier',
    'CommentBuilder',
    'SchemaUtils',
]
