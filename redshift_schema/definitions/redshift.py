# ============================================================================
# REDSHIFT SCHEMA DEFINITIONS
# ============================================================================
# STATUS: Core - Redshift table and column definitions
# PURPOSE: Distribution/sort layout, ENCODE hints, JSON and UUID key columns
# CREATED: 18 OCT 2026
# EXPORTS: ColumnMethods, ColumnDefinition, TableDefinition, Table
# DEPENDENCIES: pydantic
# ============================================================================
"""
Redshift Schema Definitions.

Extends the generic definitions with Redshift physical layout attributes
and column helpers:

    - DISTSTYLE / DISTKEY and SORTKEY with its sort style on tables
    - ENCODE hints on columns (declared with ``encoding=``)
    - ``json`` / ``jsonb`` columns
    - UUID primary keys defaulting to ``uuid_generate_v4()``

UUID primary keys:
    td.primary_key("id", "uuid")

    By default the key uses ``uuid_generate_v4()`` from the uuid-ossp
    extension, which must be available on the database. Pass another
    function as ``default`` to use it instead. Passing ``default=None``
    disables generation; every insert must then supply the key, e.g.
    ``str(uuid.uuid4())`` set by the application before saving.

Usage:
    td = TableDefinition("events", distkey="user_id", sortkey="created_at")
    td.primary_key("id", "uuid")
    td.bigint("user_id", null=False)
    td.jsonb("payload", encoding="zstd")
    td.timestamps()
"""

from typing import Any, Dict, List, Optional, Union

from redshift_schema.config.defaults import COLUMN_DEFAULTS, TABLE_DEFAULTS
from redshift_schema.contracts import ColumnType, type_tag
from redshift_schema.definitions import base
from redshift_schema.logging import ComponentType, get_logger

logger = get_logger(__name__, ComponentType.DEFINITIONS)


# ============================================================================
# COLUMN METHODS
# ============================================================================

class ColumnMethods:
    """
    Redshift column helpers.

    Mixed in ahead of a generic table definition or table handle; relies on
    the host's ``column`` and generic ``primary_key``.
    """

    def primary_key(self, name, type=COLUMN_DEFAULTS.primary_key_type, **options):
        """
        Declare the primary key column.

        Non-UUID types go through the generic primary key path unchanged.
        For UUID keys a caller-supplied ``default`` is kept as is, including
        ``None``; otherwise the key defaults to ``uuid_generate_v4()``.
        """
        if type_tag(type) != ColumnType.UUID.value:
            return super().primary_key(name, type, **options)

        if "default" not in options:
            options["default"] = COLUMN_DEFAULTS.uuid_default_function
        options["primary_key"] = True
        logger.debug(f"UUID primary key {name} (default={options['default']!r})")
        return self.column(name, ColumnType.UUID.value, **options)

    def json(self, name, **options):
        return self.column(name, ColumnType.JSON.value, **options)

    def jsonb(self, name, **options):
        return self.column(name, ColumnType.JSONB.value, **options)


# ============================================================================
# COLUMN DEFINITION
# ============================================================================

class ColumnDefinition(base.ColumnDefinition):
    """
    Generic column record plus the ENCODE hint.
    """

    encode: Optional[str] = None

    def is_primary_key(self) -> bool:
        """True if flagged as a primary key or typed as the reserved primary key type."""
        return bool(self.primary_key) or type_tag(self.type) == ColumnType.PRIMARY_KEY.value


# ============================================================================
# TABLE DEFINITION
# ============================================================================

class TableDefinition(ColumnMethods, base.TableDefinition):
    """
    A Redshift table being created.

    ``schema``, ``sortstyle`` and ``diststyle`` fall back to their defaults
    when omitted or None. ``sortkey`` and ``distkey`` are stored as given;
    checking them against the columns is left to the DDL stage.
    """

    column_class = ColumnDefinition

    def __init__(
        self,
        name: str,
        temporary: bool = False,
        options: Optional[str] = None,
        as_: Optional[Any] = None,
        *,
        comment: Optional[str] = None,
        sortstyle: Optional[str] = TABLE_DEFAULTS.sortstyle,
        sortkey: Optional[Union[str, List[str]]] = None,
        diststyle: Optional[str] = TABLE_DEFAULTS.diststyle,
        distkey: Optional[str] = None,
        schema: Optional[str] = TABLE_DEFAULTS.schema,
    ):
        super().__init__(name, temporary=temporary, options=options, as_=as_, comment=comment)
        self.schema = TABLE_DEFAULTS.schema if schema is None else schema
        self.sortstyle = TABLE_DEFAULTS.sortstyle if sortstyle is None else sortstyle
        self.sortkey = sortkey
        self.diststyle = TABLE_DEFAULTS.diststyle if diststyle is None else diststyle
        self.distkey = distkey

    def new_column_definition(self, name, type, options: Dict[str, Any]) -> ColumnDefinition:
        """Build a Redshift column record; ``encoding`` becomes ``encode``."""
        column = super().new_column_definition(name, type, options)
        column.encode = options.get("encoding")
        return column


# ============================================================================
# TABLE (ALTER HANDLE)
# ============================================================================

class Table(ColumnMethods, base.Table):
    """Handle on an existing Redshift table."""


__all__ = [
    "ColumnMethods",
    "ColumnDefinition",
    "TableDefinition",
    "Table",
]
