# File: tests/conftest.py
# Contains pytest fixtures for the Voyager metadata database and a throwaway Laravel project.

import json
from pathlib import Path
from typing import Any, Callable, Dict, Generator

import pytest
from django.db import connections, DEFAULT_DB_ALIAS

from voyager_to_filament.config_validation import ToolConfigSchema
from voyager_to_filament.introspection_django import setup_django


# --- Constants ---
# Assumes conftest.py is in tests/ subdirectory relative to project root
TEST_SCHEMAS_DIR = Path(__file__).parent / "schemas"
VOYAGER_SCHEMA_FILE = TEST_SCHEMAS_DIR / "voyager_blog.sql"


def run_sql_file(schema_file: Path) -> None:
    """Execute a ';' separated SQL file statement by statement."""
    statements = [s.strip() for s in schema_file.read_text(encoding="utf-8").split(";")]
    with connections[DEFAULT_DB_ALIAS].cursor() as cursor:
        for statement in statements:
            if statement:
                cursor.execute(statement)


def drop_voyager_tables() -> None:
    with connections[DEFAULT_DB_ALIAS].cursor() as cursor:
        cursor.execute("DROP TABLE IF EXISTS data_rows")
        cursor.execute("DROP TABLE IF EXISTS data_types")


# --- Fixture for the Django connection (SQLite file database) ---
@pytest.fixture(scope="session", autouse=True)
def database_settings(tmp_path_factory) -> Dict[str, Any]:
    """
    Configures Django once per session against a SQLite file.

    Returns the DATABASES mapping so configs built in tests point at the same file.
    """
    db_path = tmp_path_factory.mktemp("voyager_db") / "voyager.sqlite3"
    databases = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": str(db_path),
        }
    }
    setup_django(databases, "voyager-to-filament-tests")
    return databases


# --- Fixture to Load the Voyager schema ---
@pytest.fixture
def voyager_db(database_settings) -> Generator[None, Any, None]:
    """Loads the blog BREAD metadata fresh for each test and drops it afterwards."""
    drop_voyager_tables()
    run_sql_file(VOYAGER_SCHEMA_FILE)
    yield
    drop_voyager_tables()


@pytest.fixture
def empty_voyager_db(voyager_db) -> None:
    """Voyager tables present but without any BREAD definitions."""
    with connections[DEFAULT_DB_ALIAS].cursor() as cursor:
        cursor.execute("DELETE FROM data_rows")
        cursor.execute("DELETE FROM data_types")


@pytest.fixture
def no_voyager_tables(database_settings) -> None:
    drop_voyager_tables()


# --- Fixtures for the target Laravel project ---
@pytest.fixture
def laravel_project(tmp_path) -> Path:
    """A minimal Laravel project root with Filament required in composer.json."""
    project_root = tmp_path / "laravel"
    project_root.mkdir()
    composer = {
        "name": "laravel/laravel",
        "require": {
            "php": "^8.2",
            "laravel/framework": "^11.0",
            "tcg/voyager": "^1.7",
            "filament/filament": "^4.0",
        },
    }
    (project_root / "composer.json").write_text(json.dumps(composer, indent=4), encoding="utf-8")
    return project_root


@pytest.fixture
def make_config(database_settings, laravel_project) -> Callable[..., ToolConfigSchema]:
    """Factory for validated configurations targeting the test database and project."""

    def _make_config(**overrides: Any) -> ToolConfigSchema:
        raw_config: Dict[str, Any] = {
            "databases": database_settings,
            "project_root": str(laravel_project),
            "SECRET_KEY": "voyager-to-filament-tests",
        }
        raw_config.update(overrides)
        return ToolConfigSchema.model_validate(raw_config)

    return _make_config


@pytest.fixture
def resources_dir(laravel_project) -> Path:
    return laravel_project / "app" / "Filament" / "Admin" / "Resources"
