# ============================================================================
# REDSHIFT SCHEMA PACKAGE
# ============================================================================
# STATUS: Package initialization
# PURPOSE: Export contracts, definitions and DDL tooling
# CREATED: 18 OCT 2026
# ============================================================================

from redshift_schema.__version__ import __version__
from redshift_schema.contracts import ColumnType, SortStyle, DistStyle, ColumnEncoding, Collation
from redshift_schema.definitions import (
    ColumnMethods,
    ColumnDefinition,
    TableDefinition,
    Table,
)
from redshift_schema.schema import RedshiftDDLGenerator, SchemaStatements

__all__ = [
    "__version__",
    # Enums
    "ColumnType",
    "SortStyle",
    "DistStyle",
    "ColumnEncoding",
    "Collation",
    # Definitions
    "ColumnMethods",
    "ColumnDefinition",
    "TableDefinition",
    "Table",
    # DDL
    "RedshiftDDLGenerator",
    "SchemaStatements",
]
