# ============================================================================
# SCHEMA STATEMENTS TESTS
# ============================================================================
# STATUS: Tests - Migration-style schema operations
# PURPOSE: Verify create/change/drop flows, execution and dry runs
# CREATED: 18 OCT 2026
# ============================================================================
"""
Schema Statements Tests

Unit tests for SchemaStatements with a mocked psycopg connection:
- create_table with integer and UUID primary keys
- change_table forwarding to ALTER TABLE statements
- dry runs and statement recording
- error propagation from the connection

Run with:
    pytest tests/test_schema_statements.py -v
"""

import logging

import pytest
from unittest.mock import MagicMock

from redshift_schema.config.defaults import reset_defaults
from redshift_schema.definitions.redshift import Table, TableDefinition
from redshift_schema.schema.statements import SchemaStatements


def rendered(schema):
    return [stmt.as_string(None) for stmt in schema.statements]


@pytest.fixture(autouse=True)
def _clean_defaults(monkeypatch):
    for name in ("REDSHIFT_DDL_IF_NOT_EXISTS", "REDSHIFT_DDL_DRY_RUN", "REDSHIFT_DDL_LOG_STATEMENTS"):
        monkeypatch.delenv(name, raising=False)
    reset_defaults()
    yield
    reset_defaults()


@pytest.fixture
def conn():
    connection = MagicMock()
    connection.cursor.return_value.__exit__.return_value = False
    return connection


def cursor_of(connection):
    return connection.cursor.return_value.__enter__.return_value


# ============================================================================
# CREATE TABLE
# ============================================================================


class TestCreateTable:
    def test_default_integer_primary_key(self):
        schema = SchemaStatements()
        with schema.create_table("users") as t:
            t.string("email", null=False)
        assert rendered(schema) == [
            'CREATE TABLE "public"."users" '
            '("id" INTEGER IDENTITY(1,1) PRIMARY KEY, "email" VARCHAR NOT NULL) DISTSTYLE EVEN'
        ]

    def test_yields_redshift_table_definition(self):
        schema = SchemaStatements()
        with schema.create_table("events", distkey="id") as t:
            assert isinstance(t, TableDefinition)
            assert t.distkey == "id"
            assert t.schema == "public"

    def test_uuid_id(self):
        schema = SchemaStatements()
        with schema.create_table("stuffs", id="uuid") as t:
            t.string("content")
        assert t["id"].default == "uuid_generate_v4()"
        assert t["id"].primary_key is True
        assert '"id" UUID DEFAULT uuid_generate_v4() PRIMARY KEY' in rendered(schema)[0]

    def test_uuid_id_with_none_default(self):
        schema = SchemaStatements()
        with schema.create_table("stuffs", id="uuid", primary_key_options={"default": None}) as t:
            t.string("content")
        assert t["id"].default is None
        assert t["id"].primary_key is True

    def test_no_id(self):
        schema = SchemaStatements()
        with schema.create_table("stuffs", id=False) as t:
            t.primary_key("id", "uuid", default=None)
            t.uuid("foo_id")
            t.timestamps()
        assert [c.name for c in t.columns] == ["id", "foo_id", "created_at", "updated_at"]
        assert t["id"].default is None

    def test_custom_primary_key_name(self):
        schema = SchemaStatements()
        with schema.create_table("events", primary_key="event_id") as t:
            pass
        assert [c.name for c in t.columns] == ["event_id"]

    def test_composite_primary_key(self):
        schema = SchemaStatements()
        with schema.create_table("memberships", primary_key=["user_id", "group_id"]) as t:
            t.bigint("user_id", "group_id")
        assert t.primary_keys == ["user_id", "group_id"]
        assert 'PRIMARY KEY ("user_id", "group_id")' in rendered(schema)[0]

    def test_force_drops_first(self):
        schema = SchemaStatements()
        with schema.create_table("events", force=True) as t:
            t.string("name")
        stmts = rendered(schema)
        assert stmts[0] == 'DROP TABLE IF EXISTS "public"."events"'
        assert stmts[1].startswith('CREATE TABLE "public"."events"')

    def test_comments_follow_create(self):
        schema = SchemaStatements()
        with schema.create_table("events", comment="Raw events") as t:
            t.string("name")
        assert rendered(schema)[1] == "COMMENT ON TABLE \"public\".\"events\" IS 'Raw events'"

    def test_if_not_exists_from_env(self, monkeypatch):
        monkeypatch.setenv("REDSHIFT_DDL_IF_NOT_EXISTS", "true")
        reset_defaults()
        schema = SchemaStatements()
        with schema.create_table("events") as t:
            t.string("name")
        assert rendered(schema)[0].startswith("CREATE TABLE IF NOT EXISTS")

    def test_nothing_emitted_when_block_raises(self):
        schema = SchemaStatements()
        with pytest.raises(RuntimeError):
            with schema.create_table("events") as t:
                t.string("name")
                raise RuntimeError("abort")
        assert schema.statements == []

    def test_executes_on_connection(self, conn):
        schema = SchemaStatements(conn)
        with schema.create_table("events") as t:
            t.string("name")
        cursor_of(conn).execute.assert_called_once_with(schema.statements[0])


# ============================================================================
# CHANGE TABLE
# ============================================================================


class TestChangeTable:
    def test_yields_table_handle(self):
        schema = SchemaStatements()
        with schema.change_table("events") as t:
            assert isinstance(t, Table)
            assert t.name == "events"

    def test_column_operations(self):
        schema = SchemaStatements()
        with schema.change_table("events") as t:
            t.json("context", encoding="zstd")
            t.jsonb("payload")
            t.remove("legacy")
            t.rename("kind", "event_kind")
        assert rendered(schema) == [
            'ALTER TABLE "events" ADD COLUMN "context" JSON ENCODE ZSTD',
            'ALTER TABLE "events" ADD COLUMN "payload" JSONB',
            'ALTER TABLE "events" DROP COLUMN "legacy"',
            'ALTER TABLE "events" RENAME COLUMN "kind" TO "event_kind"',
        ]

    def test_uuid_primary_key(self):
        schema = SchemaStatements()
        with schema.change_table("events") as t:
            t.primary_key("id", "uuid")
        assert rendered(schema) == [
            'ALTER TABLE "events" ADD COLUMN "id" UUID DEFAULT uuid_generate_v4() PRIMARY KEY'
        ]

    def test_alters_table_in_its_schema(self):
        schema = SchemaStatements()
        with schema.create_table("events", schema="analytics") as t:
            t.string("kind")
        with schema.change_table("events", schema="analytics") as t:
            assert t.schema == "analytics"
            t.json("payload", comment="Raw body")
            t.remove("kind")
            t.rename("payload", "body")
        stmts = rendered(schema)
        assert stmts[0].startswith('CREATE TABLE "analytics"."events"')
        assert stmts[1:] == [
            'ALTER TABLE "analytics"."events" ADD COLUMN "payload" JSON',
            "COMMENT ON COLUMN \"analytics\".\"events\".\"payload\" IS 'Raw body'",
            'ALTER TABLE "analytics"."events" DROP COLUMN "kind"',
            'ALTER TABLE "analytics"."events" RENAME COLUMN "payload" TO "body"',
        ]

    def test_index_is_noop(self, caplog):
        schema = SchemaStatements()
        with caplog.at_level(logging.WARNING):
            with schema.change_table("events") as t:
                t.string("kind", index=True)
                t.remove_index(name="idx_events_kind")
        assert rendered(schema) == ['ALTER TABLE "events" ADD COLUMN "kind" VARCHAR']
        assert "add_index" in caplog.text
        assert "remove_index" in caplog.text


# ============================================================================
# OTHER OPERATIONS
# ============================================================================


class TestOtherOperations:
    def test_add_column_returns_definition(self):
        schema = SchemaStatements()
        column = schema.add_column("events", "amount", "decimal", precision=12, scale=2, comment="Total")
        assert column.type == "decimal"
        assert rendered(schema) == [
            'ALTER TABLE "events" ADD COLUMN "amount" DECIMAL(12,2)',
            "COMMENT ON COLUMN \"events\".\"amount\" IS 'Total'",
        ]

    def test_table_and_schema_operations(self):
        schema = SchemaStatements()
        schema.create_schema("analytics")
        schema.rename_table("analytics.events", "events_v2")
        schema.drop_table("events_v2", schema="analytics")
        assert rendered(schema) == [
            'CREATE SCHEMA IF NOT EXISTS "analytics"',
            'ALTER TABLE "analytics"."events" RENAME TO "events_v2"',
            'DROP TABLE "analytics"."events_v2"',
        ]


# ============================================================================
# EXECUTION
# ============================================================================


class TestExecute:
    def test_dry_run_does_not_touch_connection(self, conn):
        schema = SchemaStatements(conn, dry_run=True)
        schema.drop_table("events")
        conn.cursor.assert_not_called()
        assert len(schema.statements) == 1

    def test_dry_run_from_env(self, conn, monkeypatch):
        monkeypatch.setenv("REDSHIFT_DDL_DRY_RUN", "1")
        reset_defaults()
        schema = SchemaStatements(conn)
        assert schema.dry_run is True
        schema.drop_table("events")
        conn.cursor.assert_not_called()

    def test_statements_logged(self, caplog):
        schema = SchemaStatements(dry_run=True)
        with caplog.at_level(logging.INFO):
            schema.drop_table("events")
        assert '[DRY RUN] DROP TABLE "events"' in caplog.text

    def test_error_propagates(self, conn, caplog):
        cursor_of(conn).execute.side_effect = RuntimeError("permission denied")
        schema = SchemaStatements(conn)
        with caplog.at_level(logging.ERROR):
            with pytest.raises(RuntimeError, match="permission denied"):
                schema.drop_table("events")
        assert "DDL statement failed" in caplog.text
