# ============================================================================
# STRUCTURED LOGGING
# ============================================================================
# STATUS: Core - Structured logging with context
# PURPOSE: Tag DDL log lines with the schema/table/column being worked on
# CREATED: 18 OCT 2026
# ============================================================================
"""
Structured Logging

Log lines from the definitions, the generator and the statements layer carry
the object they concern (``schema.table.column``) and the schema operation
running (create_table, change_table, add_column).

Usage:
    from redshift_schema.logging import get_logger, log_context

    logger = get_logger(__name__, ComponentType.STATEMENTS)

    with log_context(schema="analytics", table="events", operation="create_table"):
        logger.info("Created table")

    # Human:  2026-10-18 12:00:00 INFO     redshift_schema.schema.statements
    #         [analytics.events] create_table: Created table
    # JSON:   {"level": "INFO", ..., "component": "statements",
    #          "target": "analytics.events", "operation": "create_table", ...}
"""

import json
import logging
import os
import sys
import threading
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional, Union


class ComponentType(str, Enum):
    """Which layer emitted a log line."""
    DEFINITIONS = "definitions"
    GENERATOR = "generator"
    STATEMENTS = "statements"


@dataclass(frozen=True)
class LogContext:
    """
    The schema object and operation a log line belongs to.

    Contexts nest: an inner ``log_context`` only overrides the fields it
    sets, so a column-level block inside ``change_table`` keeps the table.
    """
    schema: Optional[str] = None
    table: Optional[str] = None
    column: Optional[str] = None
    operation: Optional[str] = None

    def merge(self, **values) -> "LogContext":
        known = {f.name for f in fields(self)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise TypeError(f"Unknown log context field(s): {', '.join(unknown)}")
        return replace(self, **{k: v for k, v in values.items() if v is not None})

    @property
    def target(self) -> Optional[str]:
        """Dotted ``schema.table.column`` path of the object, if any."""
        parts = [p for p in (self.schema, self.table, self.column) if p]
        return ".".join(parts) if parts else None

    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


_local = threading.local()


def _stack() -> list:
    if not hasattr(_local, "stack"):
        _local.stack = []
    return _local.stack


def get_current_context() -> LogContext:
    """Innermost active context (empty outside any ``log_context`` block)."""
    stack = _stack()
    return stack[-1] if stack else LogContext()


@contextmanager
def log_context(**values):
    """
    Tag log lines in the block with schema/table/column/operation.

    None values keep the enclosing block's value.

    Example:
        with log_context(table="events", column="payload", operation="add_column"):
            logger.info("Adding column")
    """
    context = get_current_context().merge(**values)
    stack = _stack()
    stack.append(context)
    try:
        yield context
    finally:
        stack.pop()


def _record_context(record: logging.LogRecord) -> LogContext:
    # ContextLogger snapshots the context when the call is made; records from
    # plain loggers fall back to whatever is active while formatting.
    return getattr(record, "log_context", None) or get_current_context()


class StructuredFormatter(logging.Formatter):
    """One JSON object per line, for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        component = getattr(record, "component", None)
        if component:
            data["component"] = component
        if context.target:
            data["target"] = context.target
        data.update(context.to_dict())
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class HumanFormatter(logging.Formatter):
    """``<time> <LEVEL> <logger> [<target>] <operation>: <message>``"""

    def format(self, record: logging.LogRecord) -> str:
        context = _record_context(record)
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")

        where = f" [{context.target}]" if context.target else ""
        if context.operation:
            where += f" {context.operation}"

        result = f"{timestamp} {record.levelname.ljust(8)} {record.name}{where}: {record.getMessage()}"
        if record.exc_info:
            result += f"\n{self.formatException(record.exc_info)}"
        return result


class ContextLogger(logging.LoggerAdapter):
    """Stamps each record with its component and the active log context."""

    def process(self, msg, kwargs):
        kwargs["extra"] = {
            **(kwargs.get("extra") or {}),
            "component": self.extra.get("component"),
            "log_context": get_current_context(),
        }
        return msg, kwargs


def get_logger(name: str, component: Optional[ComponentType] = None) -> ContextLogger:
    """
    Get a context-aware logger.

    Args:
        name: Logger name (usually ``__name__``)
        component: Layer the logger belongs to
    """
    return ContextLogger(
        logging.getLogger(name),
        {"component": component.value if component is not None else None},
    )


def configure_logging(level: Union[str, int] = "INFO", json_output: bool = False) -> None:
    """
    Install a single stdout handler on the root logger.

    Args:
        level: Log level name or number
        json_output: JSON lines instead of human-readable output
                     (also enabled by LOG_FORMAT=json)
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    use_json = json_output or os.getenv("LOG_FORMAT", "").lower() == "json"

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter() if use_json else HumanFormatter())

    root = logging.getLogger()
    root.setLevel(level)
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)


# ============================================================================
# EXPORTS
# ============================================================================

__all__ = [
    "ComponentType",
    "LogContext",
    "StructuredFormatter",
    "HumanFormatter",
    "ContextLogger",
    "get_logger",
    "configure_logging",
    "log_context",
    "get_current_context",
]
