"""Tests for contactdb CLI commands."""

import logging

import pytest
from click.testing import CliRunner

from contactdb.cli.main import LOG_LEVEL_ENV_VAR, cli, resolve_log_level
from contactdb.hidden_update.config import CONFIG_ENV_VAR
from contactdb.hooks import HookRegistry


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clear_hook_registry():
    HookRegistry.clear()
    yield
    HookRegistry.clear()


@pytest.fixture
def no_env_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


class TestHooksList:
    def test_lists_builtin_hooks(self, runner):
        result = runner.invoke(cli, ["hooks", "list"])
        assert result.exit_code == 0
        assert "recordLastSeen" in result.output
        assert "updateTimestamp" in result.output
        assert "2 registered hook function(s)" in result.output

    def test_shows_hook_lists(self, runner):
        result = runner.invoke(cli, ["hooks", "list"])
        assert "notice, change, after_change" in result.output


class TestConfigValidate:
    def test_defaults_are_valid(self, runner, no_env_config):
        result = runner.invoke(cli, ["config", "validate"])
        assert result.exit_code == 0
        assert "0 hidden update function(s)" in result.output
        assert "Configuration is valid" in result.output

    def test_valid_file(self, runner, tmp_path):
        path = tmp_path / "contactdb.yaml"
        path.write_text(
            "hidden_update:\n"
            "  functions: [recordLastSeen, 'contactdb.hooks:update_timestamp']\n"
        )
        result = runner.invoke(cli, ["config", "validate", "--path", str(path)])
        assert result.exit_code == 0
        assert "✓ recordLastSeen" in result.output
        assert "✓ contactdb.hooks:update_timestamp" in result.output

    def test_unknown_function_fails(self, runner, tmp_path):
        path = tmp_path / "contactdb.yaml"
        path.write_text("hidden_update:\n  functions: [doesNotExist]\n")
        result = runner.invoke(cli, ["config", "validate", "--path", str(path)])
        assert result.exit_code == 1
        assert "not registered" in result.output

    def test_reads_env_config(self, runner, tmp_path, monkeypatch):
        path = tmp_path / "contactdb.yaml"
        path.write_text("hidden_update:\n  suppress_on_notice: false\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        result = runner.invoke(cli, ["config", "validate"])
        assert result.exit_code == 0
        assert "suppress_on_notice: False" in result.output

    def test_missing_path(self, runner, tmp_path):
        result = runner.invoke(
            cli, ["config", "validate", "--path", str(tmp_path / "missing.yaml")]
        )
        assert result.exit_code != 0


class TestLogLevel:
    def test_resolves_known_names(self):
        assert resolve_log_level("debug") == logging.DEBUG
        assert resolve_log_level(" Warning ") == logging.WARNING

    def test_unknown_name_raises(self):
        with pytest.raises(ValueError, match="Unknown log level 'verbose'"):
            resolve_log_level("verbose")

    def test_unknown_env_level_fails_cleanly(self, runner):
        result = runner.invoke(
            cli, ["hooks", "list"], env={LOG_LEVEL_ENV_VAR: "verbose"}
        )
        assert result.exit_code == 1
        assert "Unknown log level 'verbose'" in result.output
        assert "registered hook function" not in result.output

    def test_known_env_level_accepted(self, runner):
        result = runner.invoke(cli, ["hooks", "list"], env={LOG_LEVEL_ENV_VAR: "debug"})
        assert result.exit_code == 0
