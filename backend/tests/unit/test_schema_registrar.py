"""Unit tests for SchemaConfiguration and SchemaRegistrar."""

import pytest
from sqlalchemy import (
    Column,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    UniqueConstraint,
)
from sqlalchemy.dialects import mysql
from sqlalchemy.schema import CreateTable

from crm.config import Settings
from crm.domain.exceptions import SchemaConfigurationError
from crm.infrastructure.database.base import Base
from crm.infrastructure.database.models import UserModel
from crm.infrastructure.database.schema import SchemaConfiguration, SchemaRegistrar


def _fresh_metadata() -> MetaData:
    """Copy of the model tables so each test registers its own schema."""
    metadata = MetaData()
    for table in Base.metadata.sorted_tables:
        table.to_metadata(metadata)
    return metadata


@pytest.fixture
def registered() -> MetaData:
    metadata = _fresh_metadata()
    SchemaRegistrar(SchemaConfiguration()).apply(metadata)
    return metadata


def _length(metadata: MetaData, table: str, column: str) -> int | None:
    return metadata.tables[table].c[column].type.length


@pytest.mark.parametrize(
    "table, column",
    [
        ("users", "id"),
        ("users", "user_name"),
        ("users", "normalized_user_name"),
        ("users", "normalized_email"),
        ("roles", "id"),
        ("roles", "name"),
        ("roles", "normalized_name"),
        ("user_logins", "login_provider"),
        ("user_logins", "provider_key"),
        ("user_logins", "user_id"),
        ("user_tokens", "user_id"),
        ("user_tokens", "login_provider"),
        ("user_tokens", "name"),
        ("user_roles", "user_id"),
        ("user_roles", "role_id"),
        ("role_claims", "role_id"),
        ("user_claims", "user_id"),
    ],
)
def test_keys_and_indexed_names_use_key_length(registered, table, column):
    assert _length(registered, table, column) == 191


@pytest.mark.parametrize(
    "table, column",
    [
        ("users", "email"),
        ("users", "concurrency_stamp"),
        ("users", "security_stamp"),
        ("users", "phone_number"),
        ("roles", "concurrency_stamp"),
        ("user_logins", "provider_display_name"),
    ],
)
def test_bounded_fields_use_bounded_length(registered, table, column):
    assert _length(registered, table, column) == 255


def test_foreign_key_copies_of_user_ids_are_capped(registered):
    assert _length(registered, "todo_tasks", "assigned_user_id") == 191


def test_unrelated_columns_are_left_alone(registered):
    assert _length(registered, "contacts", "email") == 255
    assert _length(registered, "user_tokens", "value") is None
    assert _length(registered, "users", "password_hash") is None


def test_every_table_gets_charset_and_collation(registered):
    for table in registered.tables.values():
        assert table.dialect_kwargs["mysql_charset"] == "utf8mb4"
        assert table.dialect_kwargs["mysql_collate"] == "utf8mb4_0900_ai_ci"


def test_apply_is_idempotent(registered):
    before = SchemaRegistrar.describe(registered)
    SchemaRegistrar(SchemaConfiguration()).apply(registered)
    assert SchemaRegistrar.describe(registered) == before


def test_apply_is_deterministic_across_metadata_instances(registered):
    other = _fresh_metadata()
    SchemaRegistrar(SchemaConfiguration()).apply(other)
    assert SchemaRegistrar.describe(other) == SchemaRegistrar.describe(registered)


def test_custom_configuration_is_honoured():
    metadata = _fresh_metadata()
    config = SchemaConfiguration(
        key_length=100, bounded_length=200, charset="utf8mb4", collation="utf8mb4_unicode_ci",
    )
    SchemaRegistrar(config).apply(metadata)

    assert _length(metadata, "users", "normalized_user_name") == 100
    assert _length(metadata, "users", "email") == 200
    assert _length(metadata, "todo_tasks", "assigned_user_id") == 100
    assert metadata.tables["customers"].dialect_kwargs["mysql_collate"] == "utf8mb4_unicode_ci"


def test_long_user_name_is_accepted_at_declaration_time(registered):
    user = UserModel(user_name="u" * 300)

    assert len(user.user_name) == 300
    assert _length(registered, "users", "user_name") == 191


def test_mysql_ddl_renders_caps_and_table_options(registered):
    ddl = str(CreateTable(registered.tables["users"]).compile(dialect=mysql.dialect()))

    assert "VARCHAR(191)" in ddl
    assert "VARCHAR(255)" in ddl
    assert "VARCHAR(450)" not in ddl
    assert "CHARSET=utf8mb4" in ddl
    assert "utf8mb4_0900_ai_ci" in ddl


def test_default_key_length_fits_the_legacy_index_limit():
    config = SchemaConfiguration()
    assert config.max_key_length == 191
    assert config.key_length * config.bytes_per_char <= config.max_index_bytes


def test_key_length_over_the_index_limit_is_rejected():
    with pytest.raises(SchemaConfigurationError):
        SchemaConfiguration(key_length=192)


def test_bounded_length_shorter_than_key_is_rejected():
    with pytest.raises(SchemaConfigurationError):
        SchemaConfiguration(key_length=191, bounded_length=100)


def test_configuration_is_built_from_settings():
    settings = Settings(
        schema_key_length=150,
        schema_bounded_length=300,
        database_collation="utf8mb4_unicode_ci",
    )
    config = SchemaConfiguration.from_settings(settings)

    assert config.key_length == 150
    assert config.bounded_length == 300
    assert config.collation == "utf8mb4_unicode_ci"
    assert config.charset == "utf8mb4"


def test_every_indexed_string_column_fits_the_index_limit(registered):
    config = SchemaConfiguration()
    too_wide = []
    for table in registered.sorted_tables:
        indexed = [col for index in table.indexes for col in index.columns]
        indexed += [
            col
            for constraint in table.constraints
            if isinstance(constraint, (UniqueConstraint, PrimaryKeyConstraint))
            for col in constraint.columns
        ]
        for column in indexed:
            if isinstance(column.type, String):
                length = column.type.length
                if length is None or length * config.bytes_per_char > config.max_index_bytes:
                    too_wide.append((table.name, column.name, length))

    assert not too_wide


def test_customer_name_uses_key_length(registered):
    assert _length(registered, "customers", "name") == 191


def test_oversized_indexed_column_is_rejected():
    metadata = MetaData()
    Table(
        "widgets",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("code", String(200)),
        Index("ix_widgets_code", "code"),
    )

    with pytest.raises(SchemaConfigurationError, match=r"widgets\.code \(200\)"):
        SchemaRegistrar(SchemaConfiguration()).apply(metadata)


def test_oversized_unique_column_is_rejected():
    metadata = MetaData()
    Table(
        "widgets",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("slug", String(255), unique=True),
    )

    with pytest.raises(SchemaConfigurationError, match=r"widgets\.slug"):
        SchemaRegistrar(SchemaConfiguration()).apply(metadata)


def test_wide_columns_outside_indexes_are_accepted():
    metadata = MetaData()
    Table(
        "widgets",
        metadata,
        Column("id", Integer, primary_key=True),
        Column("description", String(1000)),
    )

    SchemaRegistrar(SchemaConfiguration()).apply(metadata)

    assert SchemaRegistrar(SchemaConfiguration()).oversized_index_columns(metadata) == []
