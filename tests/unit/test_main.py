"""
Unit tests for the command-line entry point
"""

import pytest

from main import QuizSystem, create_parser, main


@pytest.mark.unit
class TestCommandLine:
    """Test cases for argument parsing and the status command"""

    def test_api_arguments(self):
        args = create_parser().parse_args(["api", "--host", "127.0.0.1", "--port", "9001"])
        assert args.command == "api"
        assert args.host == "127.0.0.1"
        assert args.port == 9001

    def test_api_defaults_come_from_config(self):
        args = create_parser().parse_args(["api"])
        assert args.host is None
        assert args.port is None

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "usage" in capsys.readouterr().out.lower()

    def test_show_system_status(self, capsys, monkeypatch):
        monkeypatch.delenv("PORT", raising=False)
        QuizSystem().show_system_status()

        out = capsys.readouterr().out
        assert "Daily Quote Quiz" in out
        assert "Today's quote: 2025-09-08" in out
        assert "Timezone: Asia/Seoul" in out
