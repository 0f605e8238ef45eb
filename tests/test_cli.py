"""
Tests for the command line entry point
"""

import json
import logging

import pytest
import yaml

from voyager_to_filament.cli import build_parser, main


@pytest.fixture(autouse=True)
def restore_root_logging():
    """main() replaces the root handlers; put pytest's back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def config_file(tmp_path, database_settings):
    config_path = tmp_path / "voyager.yaml"
    config_path.write_text(yaml.safe_dump({"databases": database_settings}), encoding="utf-8")
    return config_path


class TestParser:
    """build_parser"""

    def test_unset_flags_are_none(self):
        args = build_parser().parse_args([])
        assert args.model is None
        assert args.all is None
        assert args.force is None
        assert args.dry_run is None
        assert args.with_relationships is None
        assert args.verbose is False

    def test_repeated_models(self):
        args = build_parser().parse_args(["--model", "Post", "-m", "App\\Models\\Category", "--with-relationships"])
        assert args.model == ["Post", "App\\Models\\Category"]
        assert args.with_relationships is True


class TestMain:
    """main() exit codes and side effects"""

    def test_converts_all(self, voyager_db, config_file, laravel_project, resources_dir):
        exit_code = main(["-c", str(config_file), "--project-root", str(laravel_project), "--all", "--no-color"])

        assert exit_code == 0
        assert (resources_dir / "PostResource.php").is_file()
        assert (resources_dir / "CategoryResource" / "Tables" / "CategoriesTable.php").is_file()

    def test_single_model(self, voyager_db, config_file, laravel_project, resources_dir):
        exit_code = main(["-c", str(config_file), "--project-root", str(laravel_project), "-m", "User", "--no-color"])

        assert exit_code == 0
        assert (resources_dir / "UserResource.php").is_file()
        assert not (resources_dir / "PostResource.php").exists()

    def test_dry_run(self, voyager_db, config_file, laravel_project):
        exit_code = main(["-c", str(config_file), "--project-root", str(laravel_project), "--dry-run", "--no-color"])

        assert exit_code == 0
        assert not (laravel_project / "app").exists()

    def test_missing_voyager_tables(self, no_voyager_tables, config_file, laravel_project):
        exit_code = main(["-c", str(config_file), "--project-root", str(laravel_project), "--no-color"])
        assert exit_code == 1

    def test_missing_filament(self, voyager_db, config_file, tmp_path):
        project_root = tmp_path / "plain-laravel"
        project_root.mkdir()
        (project_root / "composer.json").write_text(json.dumps({"require": {}}), encoding="utf-8")

        exit_code = main(["-c", str(config_file), "--project-root", str(project_root), "--no-color"])

        assert exit_code == 1
        assert not (project_root / "app").exists()

    def test_invalid_configuration(self, tmp_path):
        config_path = tmp_path / "broken.yaml"
        config_path.write_text(yaml.safe_dump({"databases": {"voyager": {"ENGINE": "x", "NAME": "y"}}}), encoding="utf-8")

        with pytest.raises(SystemExit) as excinfo:
            main(["-c", str(config_path), "--no-color"])
        assert excinfo.value.code == 1

    def test_missing_project_root(self, config_file, tmp_path):
        exit_code = main(["-c", str(config_file), "--project-root", str(tmp_path / "missing"), "--no-color"])
        assert exit_code == 1
