"""Tests for the CLI entry point."""

import logging
from unittest.mock import patch

import pytest

from nrbuild.__main__ import (
    AVAILABLE_COMMANDS,
    configure_logging,
    create_parser,
    main,
)


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("nrbuild.__main__.configure_logging") as mock:
        yield mock


class TestParser:

    def test_defaults(self):
        args = create_parser().parse_args([])
        assert args.command == "build"
        assert args.verbose == 0
        assert args.config_path is None

    def test_verbosity_count(self):
        assert create_parser().parse_args(["scan", "-vv"]).verbose == 2


class TestMain:

    def test_version(self, capsys):
        assert main(["--version"]) == 0
        assert "nrbuild version" in capsys.readouterr().out

    def test_main_help(self, capsys):
        assert main(["--help"]) == 0
        out = capsys.readouterr().out
        for command in AVAILABLE_COMMANDS:
            assert command in out

    def test_command_help(self, capsys):
        assert main(["build", "--help"]) == 0
        assert "nrbuild build [options]" in capsys.readouterr().out

    def test_short_help_after_command(self, capsys):
        assert main(["scan", "-h"]) == 0
        out = capsys.readouterr().out
        assert "nrbuild scan [options]" in out
        assert "Available commands" not in out

    def test_unknown_command(self, capsys):
        assert main(["deploy"]) == 1
        assert "Unknown command: deploy" in capsys.readouterr().out

    def test_scan_dispatch(self, in_temp_dir, make_node, capsys):
        make_node("alpha")

        assert main(["scan"]) == 0
        assert "alpha [OK]" in capsys.readouterr().out

    def test_config_path_forwarded(self, in_temp_dir, make_node, capsys):
        make_node("alpha", root="flows")
        (in_temp_dir / "ci.yaml").write_text("options:\n  nodesDirectory: flows\n")

        assert main(["scan", "-c", str(in_temp_dir / "ci.yaml")]) == 0
        assert "flows" in capsys.readouterr().out

    def test_build_defaults_to_info(self, in_temp_dir, no_logging_setup):
        main(["build"])

        assert no_logging_setup.call_args.kwargs["verbose"] == 1

    def test_unexpected_error_exit_code(self, in_temp_dir):
        with patch("nrbuild.__main__.dispatch_command", side_effect=RuntimeError("boom")):
            assert main(["scan"]) == 1


class TestConfigureLogging:

    def test_uses_ini_file(self, temp_dir):
        ini = temp_dir / "logging.ini"
        ini.write_text("[loggers]\nkeys=root\n")

        with patch("logging.config.fileConfig") as file_config:
            configure_logging(logging_config=ini)

        file_config.assert_called_once_with(ini)

    def test_level_from_verbosity(self):
        with patch("logging.basicConfig") as basic_config:
            configure_logging(verbose=2)

        assert basic_config.call_args.kwargs["level"] == logging.DEBUG
