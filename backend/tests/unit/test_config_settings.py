"""Unit tests for application settings configuration."""

from pathlib import Path

from crm.config import Settings


def test_settings_uses_backend_env_file_independent_of_cwd():
    """Settings should always include backend/.env as an env source."""
    env_files = Settings.model_config.get("env_file")
    assert env_files is not None

    normalized = {str(Path(item)) for item in env_files}
    expected_backend_env = str(Path(__file__).resolve().parents[2] / ".env")

    assert expected_backend_env in normalized
    assert str(Path(".env")) in normalized


def test_schema_defaults_target_mysql_utf8mb4(monkeypatch):
    for name in ("DATABASE_CHARSET", "DATABASE_COLLATION", "SCHEMA_KEY_LENGTH"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings(_env_file=None)

    assert settings.database_charset == "utf8mb4"
    assert settings.database_collation == "utf8mb4_0900_ai_ci"
    assert settings.schema_key_length == 191
    assert settings.schema_bounded_length == 255


def test_schema_settings_read_from_environment(monkeypatch):
    monkeypatch.setenv("SCHEMA_KEY_LENGTH", "128")

    settings = Settings(_env_file=None)

    assert settings.schema_key_length == 128
