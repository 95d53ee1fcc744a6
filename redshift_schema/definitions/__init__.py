# ============================================================================
# DEFINITIONS MODULE
# ============================================================================
# STATUS: Definition exports
# PURPOSE: Central export point for table and column definitions
# CREATED: 18 OCT 2026
# ============================================================================
"""
Definitions Module - Central Export Point

Redshift definitions are exported under their plain names; the generic
layer they extend lives in ``redshift_schema.definitions.base``.
"""

from redshift_schema.definitions.base import (
    ColumnDefinition as GenericColumnDefinition,
    TableDefinition as GenericTableDefinition,
    Table as GenericTable,
    IndexSpec,
    ForeignKeySpec,
    aliased_types,
)
from redshift_schema.definitions.redshift import (
    ColumnMethods,
    ColumnDefinition,
    TableDefinition,
    Table,
)

__all__ = [
    # Redshift
    "ColumnMethods",
    "ColumnDefinition",
    "TableDefinition",
    "Table",
    # Generic
    "GenericColumnDefinition",
    "GenericTableDefinition",
    "GenericTable",
    "IndexSpec",
    "ForeignKeySpec",
    "aliased_types",
]
