# ============================================================================
# SCHEMA MODULE
# ============================================================================
# STATUS: Core - DDL rendering and execution
# PURPOSE: Render Redshift table definitions as DDL and run it
# CREATED: 18 OCT 2026
# ============================================================================

from redshift_schema.schema.ddl_utils import (
    CommentBuilder,
    SchemaUtils,
    NATIVE_DATABASE_TYPES,
    type_to_sql,
    table_identifier,
)
from redshift_schema.schema.sql_generator import RedshiftDDLGenerator
from redshift_schema.schema.statements import SchemaStatements

__all__ = [
    # Generator
    "RedshiftDDLGenerator",
    "SchemaStatements",
    # Utilities
    "CommentBuilder",
    "SchemaUtils",
    "NATIVE_DATABASE_TYPES",
    "type_to_sql",
    "table_identifier",
]
