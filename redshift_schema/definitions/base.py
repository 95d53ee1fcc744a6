# ============================================================================
# GENERIC SCHEMA DEFINITIONS
# ============================================================================
# STATUS: Core - Dialect-neutral table and column definitions
# PURPOSE: Table builder, column record and alter-table handle with override seams
# CREATED: 18 OCT 2026
# EXPORTS: ColumnDefinition, TableDefinition, Table, ColumnMethods, aliased_types
# DEPENDENCIES: pydantic
# ============================================================================
"""
Generic Schema Definitions.

Describes tables and columns before they are handed to a DDL stage.
Dialects extend these classes through two seams:

    - ``TableDefinition.new_column_definition`` builds the column record
      from the declared options.
    - ``TableDefinition.create_column_definition`` chooses the record class.

Usage:
    td = TableDefinition("users")
    td.primary_key("id")
    td.string("email", null=False, limit=320)
    td.timestamps()

    for column in td.columns:
        print(column.name, column.type)
"""

from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from redshift_schema.config.defaults import COLUMN_DEFAULTS
from redshift_schema.contracts import ColumnType, type_tag
from redshift_schema.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.DEFINITIONS)


# ============================================================================
# TYPE ALIASES
# ============================================================================

TYPE_ALIASES: Dict[str, str] = {
    ColumnType.TIMESTAMP.value: ColumnType.DATETIME.value,
}


def aliased_types(name: str, fallback: str) -> str:
    """
    Map an alias type name to its canonical tag.

    Args:
        name: Type name as declared
        fallback: Value returned when ``name`` is not an alias

    Returns:
        Canonical type tag
    """
    return TYPE_ALIASES.get(name, fallback)


# ============================================================================
# RECORDS
# ============================================================================

class ColumnDefinition(BaseModel):
    """
    One column's declared shape.

    Populated field by field by ``TableDefinition.new_column_definition``.
    """

    name: str
    type: str
    limit: Optional[Any] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    default: Optional[Any] = None
    null: Optional[bool] = None
    first: Optional[bool] = None
    after: Optional[str] = None
    auto_increment: Optional[bool] = None
    primary_key: Optional[bool] = None
    collation: Optional[str] = None
    sql_type: Optional[str] = None
    comment: Optional[str] = None

    model_config = {"frozen": False, "arbitrary_types_allowed": True}


class IndexSpec(BaseModel):
    """Index declared on a table."""

    table: str
    columns: List[str]
    name: Optional[str] = None
    unique: bool = False
    options: Dict[str, Any] = Field(default_factory=dict)


class ForeignKeySpec(BaseModel):
    """Foreign key declared on a table."""

    from_table: str
    to_table: str
    column: str
    primary_key: str = "id"
    name: Optional[str] = None


def _singularize(table_name: str) -> str:
    if table_name.endswith("ies"):
        return table_name[:-3] + "y"
    if table_name.endswith("s"):
        return table_name[:-1]
    return table_name


# ============================================================================
# COLUMN METHODS
# ============================================================================

class ColumnMethods:
    """
    Typed column helpers.

    Shared by table definitions and alter-table handles; both provide
    ``column(name, type, **options)``.
    """

    def column(self, name, type, **options):
        raise NotImplementedError

    def primary_key(self, name, type=COLUMN_DEFAULTS.primary_key_type, **options):
        """Declare a primary key column."""
        options["primary_key"] = True
        return self.column(name, type, **options)

    def _typed(self, type: str, names, options: Dict[str, Any]):
        for name in names:
            self.column(name, type, **options)
        return self

    def string(self, *names, **options):
        return self._typed(ColumnType.STRING.value, names, options)

    def text(self, *names, **options):
        return self._typed(ColumnType.TEXT.value, names, options)

    def integer(self, *names, **options):
        return self._typed(ColumnType.INTEGER.value, names, options)

    def bigint(self, *names, **options):
        return self._typed(ColumnType.BIGINT.value, names, options)

    def float(self, *names, **options):
        return self._typed(ColumnType.FLOAT.value, names, options)

    def decimal(self, *names, **options):
        return self._typed(ColumnType.DECIMAL.value, names, options)

    def numeric(self, *names, **options):
        return self._typed(ColumnType.NUMERIC.value, names, options)

    def datetime(self, *names, **options):
        return self._typed(ColumnType.DATETIME.value, names, options)

    def timestamp(self, *names, **options):
        return self._typed(ColumnType.TIMESTAMP.value, names, options)

    def time(self, *names, **options):
        return self._typed(ColumnType.TIME.value, names, options)

    def date(self, *names, **options):
        return self._typed(ColumnType.DATE.value, names, options)

    def boolean(self, *names, **options):
        return self._typed(ColumnType.BOOLEAN.value, names, options)

    def uuid(self, *names, **options):
        return self._typed(ColumnType.UUID.value, names, options)

    def timestamps(self, **options):
        """Declare ``created_at`` and ``updated_at`` (NOT NULL unless overridden)."""
        options.setdefault("null", False)
        self.column("created_at", ColumnType.DATETIME.value, **options)
        self.column("updated_at", ColumnType.DATETIME.value, **options)
        return self


# ============================================================================
# TABLE DEFINITION
# ============================================================================

class TableDefinition(ColumnMethods):
    """
    A table being created.

    Holds the ordered column collection plus indexes, foreign keys and an
    optional explicit primary key column list.
    """

    column_class: ClassVar[type] = ColumnDefinition

    def __init__(
        self,
        name: str,
        temporary: bool = False,
        options: Optional[str] = None,
        as_: Optional[Any] = None,
        comment: Optional[str] = None,
    ):
        self.columns_hash: Dict[str, ColumnDefinition] = {}
        self.indexes: List[IndexSpec] = []
        self.foreign_keys: List[ForeignKeySpec] = []
        self.primary_keys: Optional[List[str]] = None
        self.temporary = temporary
        self.options = options
        self.as_ = as_
        self.name = name
        self.comment = comment

    @property
    def columns(self) -> List[ColumnDefinition]:
        """Columns in declaration order."""
        return list(self.columns_hash.values())

    def __getitem__(self, name) -> ColumnDefinition:
        return self.columns_hash[str(name)]

    def __contains__(self, name) -> bool:
        return str(name) in self.columns_hash

    def column(self, name, type, **options):
        """
        Declare a column.

        Args:
            name: Column name (unique within the table)
            type: Type tag or alias
            **options: Column options; ``index`` also records an index

        Raises:
            ValueError: If a column with this name was already declared
        """
        name = str(name)
        index = options.pop("index", None)

        if name in self.columns_hash:
            raise ValueError(f"Column '{name}' is already defined on table '{self.name}'")

        column = self.new_column_definition(name, type, options)
        self.columns_hash[name] = column
        logger.debug(f"Declared column {self.name}.{name} ({column.type})")

        if index:
            self.index(name, **(index if isinstance(index, dict) else {}))
        return self

    def remove_column(self, name) -> None:
        self.columns_hash.pop(str(name), None)

    def index(self, column_name: Union[str, List[str]], **options):
        """Record an index on one or more columns."""
        columns = [column_name] if isinstance(column_name, str) else list(column_name)
        self.indexes.append(IndexSpec(
            table=self.name,
            columns=columns,
            name=options.pop("name", None),
            unique=bool(options.pop("unique", False)),
            options=options,
        ))
        return self

    def foreign_key(self, to_table: str, **options):
        """
        Record a foreign key to ``to_table``.

        The local column defaults to ``<singular to_table>_id``.
        """
        self.foreign_keys.append(ForeignKeySpec(
            from_table=self.name,
            to_table=to_table,
            column=options.get("column") or f"{_singularize(to_table)}_id",
            primary_key=options.get("primary_key") or "id",
            name=options.get("name"),
        ))
        return self

    def references(self, *names, type=ColumnType.BIGINT.value, index=False, foreign_key=False, **options):
        """
        Declare ``<name>_id`` reference columns.

        Args:
            *names: Referenced entity names (e.g. "user")
            type: Column type of the reference column
            index: Also record an index (True or index options)
            foreign_key: True to reference ``<name>s``, or the table name
            **options: Column options
        """
        for name in names:
            column_name = f"{name}_id"
            self.column(column_name, type, **options)
            if index:
                self.index(column_name, **(index if isinstance(index, dict) else {}))
            if foreign_key:
                to_table = foreign_key if isinstance(foreign_key, str) else f"{name}s"
                self.foreign_key(to_table, column=column_name)
        return self

    def new_column_definition(self, name, type, options: Dict[str, Any]) -> ColumnDefinition:
        """Build the column record for a declaration."""
        type = type_tag(type)
        type = aliased_types(type, type)
        column = self.create_column_definition(name, type)
        column.limit = options.get("limit")
        column.precision = options.get("precision")
        column.scale = options.get("scale")
        column.default = options.get("default")
        column.null = options.get("null")
        column.first = options.get("first")
        column.after = options.get("after")
        column.auto_increment = options.get("auto_increment")
        column.primary_key = type == ColumnType.PRIMARY_KEY.value or bool(options.get("primary_key"))
        column.collation = options.get("collation")
        column.comment = options.get("comment")
        return column

    def create_column_definition(self, name: str, type: str) -> ColumnDefinition:
        return self.column_class(name=name, type=type)


# ============================================================================
# TABLE (ALTER HANDLE)
# ============================================================================

class Table(ColumnMethods):
    """
    Handle on an existing table.

    Each declaration is forwarded to ``base`` (a schema-statements object
    providing add_column/remove_column/rename_column/add_index/remove_index)
    together with ``schema``, so an ALTER reaches the right table.
    """

    def __init__(self, name: str, base, schema: Optional[str] = None):
        self.name = name
        self.schema = schema
        self._base = base

    def column(self, column_name, type, **options):
        index = options.pop("index", None)
        self._base.add_column(self.name, column_name, type, schema=self.schema, **options)
        if index:
            self.index(column_name, **(index if isinstance(index, dict) else {}))
        return self

    def remove(self, *column_names):
        for column_name in column_names:
            self._base.remove_column(self.name, column_name, schema=self.schema)
        return self

    def rename(self, column_name, new_column_name):
        self._base.rename_column(self.name, column_name, new_column_name, schema=self.schema)
        return self

    def index(self, column_name, **options):
        self._base.add_index(self.name, column_name, schema=self.schema, **options)
        return self

    def remove_index(self, **options):
        self._base.remove_index(self.name, schema=self.schema, **options)
        return self


__all__ = [
    "TYPE_ALIASES",
    "aliased_types",
    "ColumnDefinition",
    "IndexSpec",
    "ForeignKeySpec",
    "ColumnMethods",
    "TableDefinition",
    "Table",
]
