# ============================================================================
# SCHEMA STATEMENTS
# ============================================================================
# STATUS: Core - Migration-style schema operations
# PURPOSE: Build definitions, render them and execute on a psycopg connection
# CREATED: 18 OCT 2026
# EXPORTS: SchemaStatements
# DEPENDENCIES: psycopg
# ============================================================================
"""
Schema Statements.

Entry points for migration code. Each operation builds the Redshift
definitions, renders them with RedshiftDDLGenerator and passes the
statements to ``execute``. Every statement is recorded in ``statements``;
it is sent to the connection only when one is configured and dry_run is off.

Usage:
    schema = SchemaStatements(conn)

    with schema.create_table("events", id="uuid", distkey="user_id", sortkey="created_at") as t:
        t.bigint("user_id", null=False)
        t.jsonb("payload")
        t.timestamps()

    with schema.change_table("events", schema="public") as t:
        t.json("context", encoding="zstd")
        t.remove("payload")

    # Dry run (record and log SQL without executing)
    schema = SchemaStatements(dry_run=True)
"""

from contextlib import contextmanager
from typing import Any, Dict, List, Optional, Sequence, Union

from psycopg import sql

from redshift_schema.config.defaults import COLUMN_DEFAULTS, get_defaults
from redshift_schema.definitions.redshift import ColumnDefinition, Table, TableDefinition
from redshift_schema.logging import ComponentType, get_logger, log_context
from redshift_schema.schema.ddl_utils import CommentBuilder, SchemaUtils, table_identifier
from redshift_schema.schema.sql_generator import RedshiftDDLGenerator

logger = get_logger(__name__, ComponentType.STATEMENTS)


class SchemaStatements:
    """
    Create, alter and drop Redshift tables.
    """

    def __init__(
        self,
        conn=None,
        dry_run: Optional[bool] = None,
        if_not_exists: Optional[bool] = None,
        generator: Optional[RedshiftDDLGenerator] = None,
    ):
        """
        Args:
            conn: psycopg connection (None to only record statements)
            dry_run: Record and log statements without executing
                     (defaults to REDSHIFT_DDL_DRY_RUN)
            if_not_exists: Render CREATE TABLE IF NOT EXISTS
                           (defaults to REDSHIFT_DDL_IF_NOT_EXISTS)
            generator: DDL generator to render with
        """
        ddl_defaults = get_defaults().ddl
        self.conn = conn
        self.dry_run = ddl_defaults.dry_run if dry_run is None else dry_run
        self.if_not_exists = ddl_defaults.if_not_exists if if_not_exists is None else if_not_exists
        self.log_statements = ddl_defaults.log_statements
        self.generator = generator or RedshiftDDLGenerator()
        self.statements: List[sql.Composed] = []

    # =========================================================================
    # EXECUTION
    # =========================================================================

    def execute(self, statement: sql.Composed) -> sql.Composed:
        """
        Record a statement and run it on the connection.

        Args:
            statement: Statement to execute

        Returns:
            The statement
        """
        self.statements.append(statement)

        if self.log_statements:
            prefix = "[DRY RUN] " if self.dry_run else ""
            logger.info(f"{prefix}{statement.as_string(None)}")

        if self.dry_run or self.conn is None:
            return statement

        try:
            with self.conn.cursor() as cur:
                cur.execute(statement)
        except Exception as e:
            logger.error(f"DDL statement failed: {e}")
            raise

        return statement

    # =========================================================================
    # TABLES
    # =========================================================================

    def new_table_definition(self, name: str, **options) -> TableDefinition:
        return TableDefinition(name, **options)

    @contextmanager
    def create_table(
        self,
        table_name: str,
        id: Union[str, bool] = COLUMN_DEFAULTS.primary_key_type,
        primary_key: Optional[Union[str, Sequence[str]]] = None,
        primary_key_options: Optional[Dict[str, Any]] = None,
        force: bool = False,
        **options,
    ):
        """
        Declare and create a table.

        Args:
            table_name: Table name
            id: Primary key type, or False for no implicit primary key
            primary_key: Primary key column name, or a list of column
                         names for a table-level PRIMARY KEY constraint
            primary_key_options: Column options for the primary key
                                 (e.g. {"default": None} for a UUID key)
            force: DROP TABLE IF EXISTS before creating
            **options: TableDefinition options (temporary, options, as_,
                       comment, sortstyle, sortkey, diststyle, distkey, schema)

        Yields:
            TableDefinition to declare columns on
        """
        td = self.new_table_definition(table_name, **options)

        if isinstance(primary_key, (list, tuple)):
            td.primary_keys = list(primary_key)
        elif id is not False and td.as_ is None:
            td.primary_key(
                primary_key or COLUMN_DEFAULTS.primary_key_name,
                id,
                **(primary_key_options or {}),
            )

        with log_context(schema=td.schema, table=table_name, operation="create_table"):
            yield td
            self.create_table_from_definition(td, force=force)

    def create_table_from_definition(self, table_definition: TableDefinition, force: bool = False) -> None:
        """Render and execute a populated table definition."""
        td = table_definition
        if force:
            self.drop_table(td.name, schema=None if td.temporary else td.schema, if_exists=True)

        self.execute(self.generator.create_table(td, if_not_exists=self.if_not_exists))
        for stmt in self.generator.indexes(td):
            self.execute(stmt)
        for stmt in self.generator.comments(td):
            self.execute(stmt)
        logger.info(f"Created table {td.name} with {len(td.columns)} columns")

    @contextmanager
    def change_table(self, table_name: str, schema: Optional[str] = None):
        """
        Alter an existing table.

        Args:
            table_name: Table name (may be "schema.table")
            schema: Schema the table lives in (None for the search_path)

        Yields:
            Table handle; each declaration executes immediately
        """
        with log_context(schema=schema, table=table_name, operation="change_table"):
            yield Table(table_name, self, schema=schema)

    def drop_table(self, table_name: str, schema: Optional[str] = None, if_exists: bool = False) -> None:
        self.execute(self.generator.drop_table(table_name, schema=schema, if_exists=if_exists))

    def rename_table(self, table_name: str, new_name: str, schema: Optional[str] = None) -> None:
        self.execute(self.generator.rename_table(table_name, new_name, schema=schema))

    def create_schema(self, schema: str, if_not_exists: bool = True) -> None:
        self.execute(SchemaUtils.create_schema(schema, if_not_exists=if_not_exists))

    # =========================================================================
    # COLUMNS
    # =========================================================================

    def add_column(
        self,
        table_name: str,
        column_name,
        type,
        schema: Optional[str] = None,
        **options,
    ) -> ColumnDefinition:
        """
        Add a column to an existing table.

        The column is built by the Redshift table definition factory, so
        ``encoding`` and UUID handling match create_table.
        """
        column = self.new_table_definition(table_name).new_column_definition(
            str(column_name), type, options
        )
        with log_context(schema=schema, table=table_name, column=column.name, operation="add_column"):
            self.execute(self.generator.add_column(table_name, column, schema=schema))
            if column.comment:
                self.execute(CommentBuilder.column(
                    table_identifier(table_name, schema), column.name, column.comment
                ))
        return column

    def remove_column(self, table_name: str, column_name, schema: Optional[str] = None) -> None:
        self.execute(self.generator.remove_column(table_name, str(column_name), schema=schema))

    def rename_column(
        self,
        table_name: str,
        column_name,
        new_column_name,
        schema: Optional[str] = None,
    ) -> None:
        self.execute(self.generator.rename_column(
            table_name, str(column_name), str(new_column_name), schema=schema
        ))

    # =========================================================================
    # INDEXES
    # =========================================================================

    def add_index(self, table_name: str, column_name, schema: Optional[str] = None, **options) -> None:
        """No-op: Redshift has no secondary indexes."""
        logger.warning(f"Skipping add_index on {table_name} ({column_name}): not supported by Redshift")

    def remove_index(self, table_name: str, schema: Optional[str] = None, **options) -> None:
        """No-op: Redshift has no secondary indexes."""
        logger.warning(f"Skipping remove_index on {table_name}: not supported by Redshift")


__all__ = ['SchemaStatements']
