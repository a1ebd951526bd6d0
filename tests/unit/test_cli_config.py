"""
Unit tests for the config CLI commands.
"""

import pytest
import yaml
from click.testing import CliRunner

from hostel_notify.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(monkeypatch, clean_environment, temp_config_dir):
    path = temp_config_dir / "client-config.yaml"
    monkeypatch.setenv("HOSTEL_NOTIFY_CONFIG_PATH", str(path))
    return path


class TestConfigShow:
    """Tests for config show."""

    def test_show_defaults(self, runner, config_path):
        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "http://localhost:8000/api" in result.output
        assert "not set" in result.output
        assert "Items per page:   12" in result.output

    def test_show_masks_token(self, runner, config_path, monkeypatch):
        monkeypatch.setenv("HOSTEL_NOTIFY_API_TOKEN", "tok_test_1234567890abcdef")

        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 0
        assert "tok_test_1234567890abcdef" not in result.output
        assert "tok_…cdef" in result.output

    def test_show_broken_file(self, runner, config_path):
        config_path.write_text("server_url: [unclosed\n")

        result = runner.invoke(cli, ["config", "show"])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestConfigSet:
    """Tests for the set-* commands."""

    def test_set_server(self, runner, config_path):
        result = runner.invoke(cli, ["config", "set-server", "https://hostel.example.edu/api/"])

        assert result.exit_code == 0
        saved = yaml.safe_load(config_path.read_text())
        assert saved["server_url"] == "https://hostel.example.edu/api"

    def test_set_server_invalid(self, runner, config_path):
        result = runner.invoke(cli, ["config", "set-server", "ftp://nowhere"])

        assert result.exit_code == 1
        assert not config_path.exists()

    def test_set_token(self, runner, config_path):
        result = runner.invoke(cli, ["config", "set-token", "abc123"])

        assert result.exit_code == 0
        assert yaml.safe_load(config_path.read_text())["api_token"] == "abc123"

    def test_set_page_size(self, runner, config_path):
        result = runner.invoke(cli, ["config", "set-page-size", "20"])

        assert result.exit_code == 0
        assert yaml.safe_load(config_path.read_text())["items_per_page"] == 20

    def test_set_page_size_rejects_zero(self, runner, config_path):
        result = runner.invoke(cli, ["config", "set-page-size", "0"])

        assert result.exit_code == 1
        assert "items_per_page" in result.output
