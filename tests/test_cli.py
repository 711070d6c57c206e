"""Tests for the command-line interface."""

import logging
from unittest.mock import MagicMock, patch

import pytest
import requests
from click.testing import CliRunner

from server_watchdog_client.cli import logger, main, setup_logging

CONFIG = """
host: 127.0.0.1
port: 3004
api_key: set-some-key
default_channel: default
"""


@pytest.fixture
def restore_logger():
    handlers = list(logger.handlers)
    level = logger.level
    yield logger
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "client.yaml"
    path.write_text(CONFIG)
    return str(path)


def response(status_code, text=""):
    mock_response = MagicMock()
    mock_response.status_code = status_code
    mock_response.text = text
    return mock_response


class TestNotifyCommands:
    """Test error/warn/info commands."""

    @patch("server_watchdog_client.client.requests.post")
    def test_error_command(self, mock_post, config_file):
        """error sends an error notification."""
        mock_post.return_value = response(200)

        result = CliRunner().invoke(main, ["-c", config_file, "error", "Something broke"])

        assert result.exit_code == 0
        assert "Sent error message" in result.output
        assert mock_post.call_args[1]["json"] == {
            "message": "Something broke",
            "channel": "default",
            "severity": "error",
        }

    @patch("server_watchdog_client.client.requests.post")
    def test_warn_command_with_channel(self, mock_post, config_file):
        """warn honours --channel."""
        mock_post.return_value = response(200)

        result = CliRunner().invoke(main, ["-c", config_file, "warn", "Careful", "--channel", "ops"])

        assert result.exit_code == 0
        assert mock_post.call_args[1]["json"]["channel"] == "ops"
        assert mock_post.call_args[1]["json"]["severity"] == "warn"

    @patch("server_watchdog_client.client.requests.post")
    def test_server_error_exits_nonzero(self, mock_post, config_file):
        """A non-200 answer is reported and exits 1."""
        mock_post.return_value = response(401, "bad key")

        result = CliRunner().invoke(main, ["-c", config_file, "info", "hello"])

        assert result.exit_code == 1
        assert "Error: bad key [Status: 401]" in result.output
        assert "HTTP 401" in result.output

    @patch("server_watchdog_client.client.requests.post")
    def test_connection_error_exits_nonzero(self, mock_post, config_file):
        """Transport failures are reported and exit 1."""
        mock_post.side_effect = requests.exceptions.ConnectionError("refused")

        result = CliRunner().invoke(main, ["-c", config_file, "info", "hello"])

        assert result.exit_code == 1
        assert "refused" in result.output

    def test_missing_config(self):
        """Network commands require a config file."""
        result = CliRunner().invoke(main, ["error", "hello"])

        assert result.exit_code == 1
        assert "configuration file is required" in result.output


class TestWatchCommands:
    """Test watch/unwatch commands."""

    @patch("server_watchdog_client.client.requests.post")
    def test_watch_command(self, mock_post, config_file):
        """watch sends the given pid, name and severity."""
        mock_post.return_value = response(200)

        result = CliRunner().invoke(
            main,
            ["-c", config_file, "watch", "1234", "--name", "worker", "--severity", "warn"],
        )

        assert result.exit_code == 0
        assert "Watching process #1234" in result.output
        assert mock_post.call_args[1]["json"] == {
            "pid": 1234,
            "name": "worker",
            "channel": "default",
            "severity": "warn",
        }

    def test_watch_rejects_unknown_severity(self, config_file):
        """Unknown severities are rejected by the option parser."""
        result = CliRunner().invoke(main, ["-c", config_file, "watch", "1234", "--severity", "bogus"])

        assert result.exit_code != 0

    @patch("server_watchdog_client.client.requests.post")
    def test_unwatch_defaults_to_self(self, mock_post, config_file):
        """unwatch without pid targets the running process."""
        mock_post.return_value = response(200)

        result = CliRunner().invoke(main, ["-c", config_file, "unwatch"])

        assert result.exit_code == 0
        body = mock_post.call_args[1]["json"]
        assert body["pid"] > 0
        assert body["channel"] == "default"


class TestConfigCommands:
    """Test validate/init commands."""

    def test_validate(self, config_file):
        """validate prints a summary of a valid file."""
        result = CliRunner().invoke(main, ["-c", config_file, "validate"])

        assert result.exit_code == 0
        assert "http://127.0.0.1:3004/" in result.output
        assert "set-some-key" not in result.output

    def test_validate_invalid(self, tmp_path):
        """validate reports configuration errors."""
        path = tmp_path / "bad.yaml"
        path.write_text("host: localhost\nport: 70000\n")

        result = CliRunner().invoke(main, ["-c", str(path), "validate"])

        assert result.exit_code == 1
        assert "Invalid port" in result.output

    def test_init_writes_loadable_config(self, tmp_path):
        """init writes a sample config that validates."""
        path = tmp_path / "sample.yaml"

        result = CliRunner().invoke(main, ["init", "-o", str(path)])
        assert result.exit_code == 0

        result = CliRunner().invoke(main, ["-c", str(path), "validate"])
        assert result.exit_code == 0

    def test_validate_malformed_yaml(self, tmp_path):
        """A YAML syntax error is reported instead of a traceback."""
        path = tmp_path / "bad.yaml"
        path.write_text("host: [unclosed\n")

        result = CliRunner().invoke(main, ["-c", str(path), "validate"])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error loading config" in result.output


class TestLogging:
    """Test logging setup."""

    def test_setup_logging(self, restore_logger):
        """setup_logging sets the level and adds a console handler."""
        before = len(restore_logger.handlers)

        setup_logging("DEBUG")

        assert restore_logger.level == logging.DEBUG
        assert len(restore_logger.handlers) == before + 1
        assert isinstance(restore_logger.handlers[-1], logging.StreamHandler)

    def test_setup_logging_unknown_level(self, restore_logger):
        """Unknown level names fall back to INFO."""
        setup_logging("chatty")

        assert restore_logger.level == logging.INFO

    @patch("server_watchdog_client.client.requests.post")
    def test_verbose_logs_skipped_message(self, mock_post, config_file, restore_logger):
        """--verbose shows the DEBUG record for a skipped empty message."""
        result = CliRunner().invoke(main, ["-v", "-c", config_file, "error", ""])

        assert result.exit_code == 0
        assert "[DEBUG] Skipping empty error notification" in result.output
        assert mock_post.call_count == 0

    @patch("server_watchdog_client.client.requests.post")
    def test_verbose_logs_request(self, mock_post, config_file, restore_logger):
        """--verbose shows outgoing requests."""
        mock_post.return_value = response(200)

        result = CliRunner().invoke(main, ["-v", "-c", config_file, "info", "hello"])

        assert result.exit_code == 0
        assert "POST http://127.0.0.1:3004/notify" in result.output
        assert "set-some-key" not in result.output
