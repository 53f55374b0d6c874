"""Shared fixtures: every test starts from a clean environment and directory."""

import pytest

from postgressor.infra.postgres import ConnectionConfig

_ENV_VARS = ("DATABASE_URL", "RAILS_ENV", "APP_ENV", "POSTGRESSOR_VERBOSE")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Clear connection-related variables and run inside a temp directory."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def connection_config():
    """A fully populated connection for app_test."""
    return ConnectionConfig(
        database="app_test",
        host="localhost",
        port=5432,
        user="app",
        password="secret",
    )


@pytest.fixture
def write_database_yml(tmp_path):
    """Write config/database.yml under the working directory."""

    def _write(content: str):
        path = tmp_path / "config" / "database.yml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path

    return _write
