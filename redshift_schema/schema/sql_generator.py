# ============================================================================
# REDSHIFT DDL GENERATOR
# ============================================================================
# STATUS: Core - DDL generation from table definitions
# PURPOSE: Render Redshift CREATE/ALTER/DROP TABLE statements
# CREATED: 18 OCT 2026
# EXPORTS: RedshiftDDLGenerator
# DEPENDENCIES: psycopg
# ============================================================================
"""
Redshift DDL Generator.

Renders populated TableDefinition / ColumnDefinition objects as
psycopg.sql.Composed statements. This is the only place definitions are
checked against Redshift: layout keywords, encodings, collations and the
columns named by DISTKEY / SORTKEY.

Rendered table layout:
    CREATE TABLE "public"."events" (...)
        DISTSTYLE KEY DISTKEY ("user_id") COMPOUND SORTKEY ("created_at")

Usage:
    generator = RedshiftDDLGenerator()
    stmt = generator.create_table(table_definition)
    cursor.execute(stmt)
"""

from typing import Dict, List, Optional

from psycopg import sql

from redshift_schema.contracts import (
    Collation,
    ColumnEncoding,
    ColumnType,
    DistStyle,
    SortStyle,
    parse_keyword,
    type_tag,
)
from redshift_schema.definitions.redshift import ColumnDefinition, TableDefinition
from redshift_schema.logging import ComponentType, get_logger
from redshift_schema.schema.ddl_utils import (
    CommentBuilder,
    normalize_columns,
    table_identifier,
    type_to_sql,
)

logger = get_logger(__name__, ComponentType.GENERATOR)


class RedshiftDDLGenerator:
    """
    Convert Redshift table definitions to DDL statements.
    """

    def __init__(self, type_map: Optional[Dict[str, str]] = None):
        """
        Initialize the generator.

        Args:
            type_map: Overrides for the native type mapping
                      (e.g. {"json": "SUPER"})
        """
        self.type_map = dict(type_map or {})

    # =========================================================================
    # NAMES
    # =========================================================================

    @staticmethod
    def table_name(table_definition: TableDefinition) -> sql.Identifier:
        """Qualified table name; temporary tables are never schema-qualified."""
        if table_definition.temporary:
            return sql.Identifier(table_definition.name)
        return table_identifier(table_definition.name, table_definition.schema)

    # =========================================================================
    # COLUMNS
    # =========================================================================

    def column_type(self, column: ColumnDefinition) -> str:
        """Redshift type for a column; ``sql_type`` wins when set."""
        if column.sql_type:
            return column.sql_type
        return type_to_sql(
            type_tag(column.type),
            limit=column.limit,
            precision=column.precision,
            scale=column.scale,
            type_map=self.type_map,
        )

    @staticmethod
    def default_sql(column: ColumnDefinition) -> Optional[sql.Composable]:
        """
        Render a column default.

        Composable values are emitted raw. A string default containing "()"
        on a UUID column is a generator function call and is emitted raw.
        Everything else is a literal.
        """
        value = column.default
        if value is None:
            return None
        if isinstance(value, sql.Composable):
            return value
        if type_tag(column.type) == ColumnType.UUID.value and isinstance(value, str) and "()" in value:
            return sql.SQL(value)
        return sql.Literal(value)

    def column_sql(self, column: ColumnDefinition) -> sql.Composed:
        """
        Render one column for CREATE TABLE / ADD COLUMN.

        Args:
            column: Column definition

        Returns:
            sql.Composed column clause
        """
        is_pk_type = type_tag(column.type) == ColumnType.PRIMARY_KEY.value
        is_identity = is_pk_type or bool(column.auto_increment)
        default = self.default_sql(column)

        if is_identity and default is not None:
            raise ValueError(
                f"Column '{column.name}' cannot have both a DEFAULT and IDENTITY(1,1)"
            )

        parts: List[sql.Composable] = [
            sql.Identifier(column.name),
            sql.SQL(" "),
            sql.SQL(self.column_type(column)),
        ]

        if default is not None:
            parts.extend([sql.SQL(" DEFAULT "), default])
        elif is_identity:
            parts.append(sql.SQL(" IDENTITY(1,1)"))

        encode = getattr(column, "encode", None)
        if encode:
            encoding = parse_keyword(ColumnEncoding, encode, "column encoding")
            parts.append(sql.SQL(" ENCODE {}").format(sql.SQL(encoding.value)))

        if column.collation:
            collation = parse_keyword(Collation, column.collation, "collation")
            parts.append(sql.SQL(" COLLATE {}").format(sql.SQL(collation.value)))

        if column.null is False:
            parts.append(sql.SQL(" NOT NULL"))

        if is_pk_type or column.primary_key:
            parts.append(sql.SQL(" PRIMARY KEY"))

        if column.first or column.after:
            logger.debug(f"Ignoring position hint for column {column.name} (not supported by Redshift)")

        return sql.SQL("").join(parts)

    # =========================================================================
    # TABLE LAYOUT
    # =========================================================================

    @staticmethod
    def _check_layout_keys(table_definition: TableDefinition) -> None:
        """DISTKEY / SORTKEY must name declared columns (skipped for CREATE TABLE AS)."""
        if not table_definition.columns:
            return

        keys = []
        if table_definition.sortkey:
            keys.extend(("SORTKEY", k) for k in normalize_columns(table_definition.sortkey))
        if table_definition.distkey:
            keys.append(("DISTKEY", table_definition.distkey))

        for clause, key in keys:
            if key not in table_definition:
                raise ValueError(
                    f"{clause} column '{key}' is not defined on table '{table_definition.name}'"
                )

    def table_attributes(self, table_definition: TableDefinition) -> List[sql.Composable]:
        """
        Render DISTSTYLE / DISTKEY / SORTKEY and free-form table options.

        Raises:
            ValueError: On unknown keywords or an invalid DISTSTYLE/DISTKEY pair
        """
        diststyle = parse_keyword(DistStyle, table_definition.diststyle, "distribution style")
        sortstyle = parse_keyword(SortStyle, table_definition.sortstyle, "sort style")

        attributes: List[sql.Composable] = []

        if table_definition.distkey:
            if not diststyle.accepts_distkey():
                raise ValueError(
                    f"DISTSTYLE {diststyle.value} cannot be combined with "
                    f"DISTKEY '{table_definition.distkey}' on table '{table_definition.name}'"
                )
            attributes.append(sql.SQL("DISTSTYLE KEY"))
            attributes.append(
                sql.SQL("DISTKEY ({})").format(sql.Identifier(table_definition.distkey))
            )
        elif diststyle is DistStyle.KEY:
            raise ValueError(f"DISTSTYLE KEY requires a DISTKEY on table '{table_definition.name}'")
        else:
            attributes.append(sql.SQL("DISTSTYLE {}").format(sql.SQL(diststyle.value)))

        if table_definition.sortkey:
            sortkey = normalize_columns(table_definition.sortkey)
            attributes.append(
                sql.SQL("{} SORTKEY ({})").format(
                    sql.SQL(sortstyle.value),
                    sql.SQL(", ").join(sql.Identifier(c) for c in sortkey),
                )
            )

        if table_definition.options:
            attributes.append(sql.SQL(table_definition.options))

        return attributes

    # =========================================================================
    # TABLE GENERATION
    # =========================================================================

    def create_table(self, table_definition: TableDefinition, if_not_exists: bool = False) -> sql.Composed:
        """
        Generate CREATE TABLE DDL from a table definition.

        Args:
            table_definition: Populated Redshift table definition
            if_not_exists: Add IF NOT EXISTS (ignored for CREATE TABLE AS)

        Returns:
            sql.Composed CREATE TABLE statement

        Raises:
            ValueError: If the definition cannot be rendered
        """
        td = table_definition
        if td.as_ is None and not td.columns:
            raise ValueError(f"Table '{td.name}' has no columns")

        self._check_layout_keys(td)
        name = self.table_name(td)
        logger.debug(f"Generating table {td.schema}.{td.name} ({len(td.columns)} columns)")

        head = sql.SQL("CREATE {temporary}TABLE {if_not_exists}{name}").format(
            temporary=sql.SQL("TEMPORARY " if td.temporary else ""),
            if_not_exists=sql.SQL("IF NOT EXISTS " if if_not_exists and td.as_ is None else ""),
            name=name,
        )
        attributes = self.table_attributes(td)

        if td.as_ is not None:
            query = sql.SQL(td.as_) if isinstance(td.as_, str) else td.as_
            return sql.SQL(" ").join([head, *attributes, sql.SQL("AS"), query])

        elements: List[sql.Composable] = [self.column_sql(c) for c in td.columns]

        if td.primary_keys:
            column_keys = [c.name for c in td.columns if c.is_primary_key()]
            if column_keys:
                raise ValueError(
                    f"Table '{td.name}' declares PRIMARY KEY ({', '.join(td.primary_keys)}) "
                    f"and column-level primary key(s): {', '.join(column_keys)}"
                )
            elements.append(
                sql.SQL("PRIMARY KEY ({})").format(
                    sql.SQL(", ").join(sql.Identifier(c) for c in td.primary_keys)
                )
            )

        for fk in td.foreign_keys:
            constraint = sql.SQL("FOREIGN KEY ({}) REFERENCES {} ({})").format(
                sql.Identifier(fk.column),
                table_identifier(fk.to_table, None if td.temporary else td.schema),
                sql.Identifier(fk.primary_key),
            )
            if fk.name:
                constraint = sql.SQL("CONSTRAINT {} {}").format(sql.Identifier(fk.name), constraint)
            elements.append(constraint)

        body = sql.SQL("{} ({})").format(head, sql.SQL(", ").join(elements))
        return sql.SQL(" ").join([body, *attributes])

    def comments(self, table_definition: TableDefinition) -> List[sql.Composed]:
        """COMMENT statements for the table and its columns."""
        name = self.table_name(table_definition)
        statements = []
        if table_definition.comment:
            statements.append(CommentBuilder.table(name, table_definition.comment))
        for column in table_definition.columns:
            if column.comment:
                statements.append(CommentBuilder.column(name, column.name, column.comment))
        return statements

    def indexes(self, table_definition: TableDefinition) -> List[sql.Composed]:
        """
        Redshift has no secondary indexes: declared indexes are skipped.

        Returns:
            Always an empty list
        """
        for index in table_definition.indexes:
            logger.warning(
                f"Skipping index on {table_definition.name} ({', '.join(index.columns)}): "
                f"Redshift does not support secondary indexes"
            )
        return []

    # =========================================================================
    # ALTER / DROP
    # =========================================================================

    def add_column(self, table_name: str, column: ColumnDefinition, schema: Optional[str] = None) -> sql.Composed:
        """ALTER TABLE ... ADD COLUMN."""
        return sql.SQL("ALTER TABLE {} ADD COLUMN {}").format(
            table_identifier(table_name, schema),
            self.column_sql(column),
        )

    @staticmethod
    def remove_column(table_name: str, column_name: str, schema: Optional[str] = None) -> sql.Composed:
        """ALTER TABLE ... DROP COLUMN."""
        return sql.SQL("ALTER TABLE {} DROP COLUMN {}").format(
            table_identifier(table_name, schema),
            sql.Identifier(column_name),
        )

    @staticmethod
    def rename_column(
        table_name: str,
        column_name: str,
        new_column_name: str,
        schema: Optional[str] = None,
    ) -> sql.Composed:
        """ALTER TABLE ... RENAME COLUMN."""
        return sql.SQL("ALTER TABLE {} RENAME COLUMN {} TO {}").format(
            table_identifier(table_name, schema),
            sql.Identifier(column_name),
            sql.Identifier(new_column_name),
        )

    @staticmethod
    def rename_table(table_name: str, new_name: str, schema: Optional[str] = None) -> sql.Composed:
        """ALTER TABLE ... RENAME TO (the new name is never schema-qualified)."""
        return sql.SQL("ALTER TABLE {} RENAME TO {}").format(
            table_identifier(table_name, schema),
            sql.Identifier(new_name),
        )

    @staticmethod
    def drop_table(table_name: str, schema: Optional[str] = None, if_exists: bool = False) -> sql.Composed:
        """DROP TABLE."""
        return sql.SQL("DROP TABLE {if_exists}{name}").format(
            if_exists=sql.SQL("IF EXISTS " if if_exists else ""),
            name=table_identifier(table_name, schema),
        )


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = ['RedshiftDDLGenerator']
