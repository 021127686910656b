"""
Tests for the nexdrive CLI.
"""
from argparse import Namespace
from unittest.mock import patch

import pytest

import cli
from settings_service import reset_settings_cache

SETTINGS = """\
[env]
env = "dev"
log_level = "INFO"

[env_db_aliases]
dev = "garage"

[db_paths]
garage = "garage.db"
"""


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text(SETTINGS)
    reset_settings_cache()
    yield path
    reset_settings_cache()


class TestLogLevel:
    def test_prints_current_level(self, settings_file, capsys):
        assert cli.cmd_log_level(Namespace(level=None), settings_path=settings_file) == 0
        assert capsys.readouterr().out.strip() == "INFO"

    def test_sets_level(self, settings_file, capsys):
        assert cli.cmd_log_level(Namespace(level="debug"), settings_path=settings_file) == 0
        assert 'log_level = "DEBUG"' in settings_file.read_text()

        cli.cmd_log_level(Namespace(level=None), settings_path=settings_file)
        assert capsys.readouterr().out.strip().endswith("DEBUG")

    def test_rejects_unknown_level(self, settings_file):
        assert cli.cmd_log_level(Namespace(level="LOUD"), settings_path=settings_file) == 1
        assert 'log_level = "INFO"' in settings_file.read_text()

    def test_same_level_is_noop(self, settings_file, capsys):
        assert cli.cmd_log_level(Namespace(level="INFO"), settings_path=settings_file) == 0
        assert "already INFO" in capsys.readouterr().out


class TestParser:
    def test_list_requires_owner(self):
        with pytest.raises(SystemExit):
            cli.build_parser().parse_args(["list"])

    def test_list_args(self):
        args = cli.build_parser().parse_args(["list", "user-1", "--alias", "garage", "-v"])
        assert args.owner_id == "user-1"
        assert args.alias == "garage"
        assert args.verbose

    def test_no_command_prints_help(self, capsys):
        assert cli.main([]) == 0
        assert "nexdrive" in capsys.readouterr().out


class TestStoreCommands:
    def test_init_db_and_list(self, store, gateway, alice, capsys):
        import asyncio
        from services.configuration_service import create_default

        asyncio.run(gateway.save(create_default(), alice))

        with patch("cli._make_store", return_value=store):
            assert cli.main(["init-db"]) == 0
            assert cli.main(["list", alice.principal_id, "-v"]) == 0

        out = capsys.readouterr().out
        assert "ok" in out
        assert "Porsche 911 GT3 in Racing Red" in out
        assert "$170,000" in out

    def test_list_no_builds(self, store, capsys):
        with patch("cli._make_store", return_value=store):
            assert cli.main(["list", "nobody", "-v"]) == 0
        assert "no builds" in capsys.readouterr().out

    def test_init_db_fails_when_store_does_not_answer(self, store, capsys):
        with patch("cli._make_store", return_value=store), patch.object(store.db, "ping", return_value=False):
            assert cli.main(["init-db"]) == 1
        assert "did not answer" in capsys.readouterr().out
