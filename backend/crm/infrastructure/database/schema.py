"""Physical schema configuration for MySQL (utf8mb4).

MySQL's legacy InnoDB row formats cap an index key column at 767 bytes.
With utf8mb4 (4 bytes per character) an indexed VARCHAR therefore holds at
most 191 characters. The identity tables are declared with wider generic
sizes, so at startup ``SchemaRegistrar``:

1. rewrites identity keys and indexed names to the key length (191),
2. rewrites bounded, non-indexed identity fields to the bounded length (255),
3. caps every column that stores a copy of a capped key (foreign keys),
4. sets the table-wide charset and collation on every table.

The registrar only edits ``MetaData``; it runs once before ``create_all``
and is safe to run again.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any

from sqlalchemy import (
    Column,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
    inspect,
)
from sqlalchemy.engine import Connection

from crm.config import Settings, get_settings
from crm.domain.exceptions import SchemaConfigurationError, SchemaConflictError

logger = logging.getLogger(__name__)


class ColumnCap(str, Enum):
    """Which configured length a column is capped at."""

    KEY = "key"
    BOUNDED = "bounded"


IDENTITY_COLUMN_CAPS: dict[str, dict[str, ColumnCap]] = {
    "roles": {
        "id": ColumnCap.KEY,
        "name": ColumnCap.KEY,
        "normalized_name": ColumnCap.KEY,
        "concurrency_stamp": ColumnCap.BOUNDED,
    },
    "users": {
        "id": ColumnCap.KEY,
        "user_name": ColumnCap.KEY,
        "normalized_user_name": ColumnCap.KEY,
        "email": ColumnCap.BOUNDED,
        "normalized_email": ColumnCap.KEY,
        "concurrency_stamp": ColumnCap.BOUNDED,
        "security_stamp": ColumnCap.BOUNDED,
        "phone_number": ColumnCap.BOUNDED,
    },
    "user_logins": {
        "login_provider": ColumnCap.KEY,
        "provider_key": ColumnCap.KEY,
        "provider_display_name": ColumnCap.BOUNDED,
        "user_id": ColumnCap.KEY,
    },
    "user_tokens": {
        "user_id": ColumnCap.KEY,
        "login_provider": ColumnCap.KEY,
        "name": ColumnCap.KEY,
    },
    "user_roles": {
        "user_id": ColumnCap.KEY,
        "role_id": ColumnCap.KEY,
    },
    "role_claims": {
        "role_id": ColumnCap.KEY,
    },
    "user_claims": {
        "user_id": ColumnCap.KEY,
    },
}


@dataclass(frozen=True)
class SchemaConfiguration:
    """Storage constraints applied to the model metadata at startup."""

    key_length: int = 191
    bounded_length: int = 255
    charset: str = "utf8mb4"
    collation: str = "utf8mb4_0900_ai_ci"
    max_index_bytes: int = 767
    bytes_per_char: int = 4

    def __post_init__(self) -> None:
        if self.key_length < 1 or self.bounded_length < 1:
            raise SchemaConfigurationError("Column lengths must be positive")
        if self.key_length > self.max_key_length:
            raise SchemaConfigurationError(
                f"Key length {self.key_length} needs {self.key_length * self.bytes_per_char} bytes "
                f"at {self.bytes_per_char} bytes/char; the index limit is {self.max_index_bytes}"
            )
        if self.bounded_length < self.key_length:
            raise SchemaConfigurationError(
                f"Bounded length {self.bounded_length} is shorter than key length {self.key_length}"
            )

    @property
    def max_key_length(self) -> int:
        """Longest indexable VARCHAR under the widest character encoding."""
        return self.max_index_bytes // self.bytes_per_char

    def length_for(self, cap: ColumnCap) -> int:
        return self.key_length if cap is ColumnCap.KEY else self.bounded_length

    @classmethod
    def from_settings(cls, settings: Settings) -> "SchemaConfiguration":
        return cls(
            key_length=settings.schema_key_length,
            bounded_length=settings.schema_bounded_length,
            charset=settings.database_charset,
            collation=settings.database_collation,
            max_index_bytes=settings.schema_max_index_bytes,
            bytes_per_char=settings.schema_bytes_per_char,
        )


@lru_cache
def get_schema_configuration() -> SchemaConfiguration:
    """The process-wide schema configuration, built once from settings."""
    return SchemaConfiguration.from_settings(get_settings())


def _indexed_columns(table: Table) -> set[Column]:
    columns: set[Column] = set()
    for index in table.indexes:
        columns.update(index.columns)
    for constraint in table.constraints:
        if isinstance(constraint, (UniqueConstraint, PrimaryKeyConstraint)):
            columns.update(constraint.columns)
    columns.update(column for column in table.columns if column.foreign_keys)
    return columns


class SchemaRegistrar:
    """Applies a ``SchemaConfiguration`` to SQLAlchemy ``MetaData``."""

    def __init__(
        self,
        config: SchemaConfiguration,
        column_caps: dict[str, dict[str, ColumnCap]] | None = None,
    ):
        self._config = config
        self._column_caps = column_caps if column_caps is not None else IDENTITY_COLUMN_CAPS

    def apply(self, metadata: MetaData) -> None:
        """Rewrite column lengths and table options in place.

        Raises ``SchemaConfigurationError`` if an indexed string column is
        still too wide for the index byte limit once the caps are applied.
        """
        capped_keys: set[str] = set()

        for table_name, caps in self._column_caps.items():
            table = metadata.tables.get(table_name)
            if table is None:
                logger.debug("Table '%s' not registered — skipping its overrides", table_name)
                continue
            for column_name, cap in caps.items():
                table.c[column_name].type = String(self._config.length_for(cap))
                if cap is ColumnCap.KEY:
                    capped_keys.add(f"{table_name}.{column_name}")

        # Columns holding copies of capped keys must not be wider than the key
        for table in metadata.sorted_tables:
            for column in table.columns:
                if not isinstance(column.type, String):
                    continue
                if any(fk.target_fullname in capped_keys for fk in column.foreign_keys):
                    column.type = String(self._config.key_length)

        too_wide = self.oversized_index_columns(metadata)
        if too_wide:
            raise SchemaConfigurationError(
                f"Indexed columns exceed {self._config.max_index_bytes} bytes at "
                f"{self._config.bytes_per_char} bytes/char: "
                + ", ".join(f"{table}.{column} ({length})" for table, column, length in too_wide)
            )

        for table in metadata.tables.values():
            table.dialect_kwargs["mysql_charset"] = self._config.charset
            table.dialect_kwargs["mysql_collate"] = self._config.collation

        logger.info(
            "Schema registered: %d tables, key length %d, bounded length %d, %s / %s",
            len(metadata.tables),
            self._config.key_length,
            self._config.bounded_length,
            self._config.charset,
            self._config.collation,
        )

    def oversized_index_columns(self, metadata: MetaData) -> list[tuple[str, str, int | None]]:
        """``(table, column, length)`` of every indexed string column over the byte limit.

        Covers explicit indexes, unique and primary key constraints, and
        foreign key columns (MySQL indexes those implicitly).
        """
        found: list[tuple[str, str, int | None]] = []
        for table in metadata.sorted_tables:
            for column in sorted(_indexed_columns(table), key=lambda c: c.name):
                if not isinstance(column.type, String):
                    continue
                length = column.type.length
                if length is None or length > self._config.max_key_length:
                    found.append((table.name, column.name, length))
        return found

    @staticmethod
    def describe(metadata: MetaData) -> dict[str, dict[str, Any]]:
        """Deterministic snapshot of string column lengths and table options."""
        snapshot: dict[str, dict[str, Any]] = {}
        for name in sorted(metadata.tables):
            table = metadata.tables[name]
            snapshot[name] = {
                "options": {
                    key: table.dialect_kwargs[key]
                    for key in sorted(table.dialect_kwargs)
                },
                "columns": {
                    column.name: column.type.length
                    for column in table.columns
                    if isinstance(column.type, String)
                },
            }
        return snapshot


def verify_physical_schema(connection: Connection, metadata: MetaData) -> None:
    """Compare declared VARCHAR lengths with the tables that already exist.

    Raises ``SchemaConflictError`` on the first mismatch. Tables that do not
    exist yet are skipped.
    """
    inspector = inspect(connection)
    existing = set(inspector.get_table_names())

    for table in metadata.sorted_tables:
        if table.name not in existing:
            continue
        physical = {col["name"]: col["type"] for col in inspector.get_columns(table.name)}
        for column in table.columns:
            if not isinstance(column.type, String) or column.type.length is None:
                continue
            declared = column.type.length
            if column.name not in physical:
                raise SchemaConflictError(table.name, column.name, declared, None)
            actual = getattr(physical[column.name], "length", None)
            if actual != declared:
                raise SchemaConflictError(table.name, column.name, declared, actual)

    logger.debug("Physical schema matches %d declared tables", len(metadata.tables))
