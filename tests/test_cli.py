"""Tests for the connector-service command line."""

import importlib
import json

import pytest
import structlog

from connector_service.cli import commands
from connector_service.cli.main import main
from connector_service.cli.parser import create_parser


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


@pytest.fixture
def use_context(monkeypatch, context):
    monkeypatch.setattr(commands, "_context", lambda args, config: context)
    return context


class TestParser:
    """Argument parsing."""

    def test_connector_arguments(self):
        args = create_parser().parse_args(
            ["connector", "--id", "42", "--full", "--org", "wso2", "--module", "twitter", "--name", "Client"]
        )

        assert args.command == "connector"
        assert args.connector_id == "42"
        assert args.full is True
        assert args.org == "wso2"
        assert args.version == ""
        assert args.file is None

    def test_connector_requires_name(self):
        with pytest.raises(SystemExit):
            create_parser().parse_args(["connector", "--org", "wso2"])

    def test_connectors_defaults(self):
        args = create_parser().parse_args(["--debug", "connectors"])

        assert args.debug is True
        assert args.package == ""
        assert args.file == ""


class TestCommands:
    """Command handlers."""

    def test_connectors_prints_both_sources(self, use_context, config, build_project, capsys):
        args = create_parser().parse_args(["connectors", "--file", str(build_project / "client.bal")])

        code = commands.run_command("connectors", args, config)

        out = json.loads(capsys.readouterr().out)
        assert code == 0
        assert out["central"] == []
        assert [c["name"] for c in out["local"]] == ["Client", "StreamClient"]

    def test_connector_found(self, use_context, config, bala_cache, capsys):
        args = create_parser().parse_args(
            ["connector", "--org", "wso2", "--module", "twitter", "--version", "1.0.0", "--name", "Client"]
        )

        code = commands.run_command("connector", args, config)

        assert code == 0
        assert json.loads(capsys.readouterr().out)["name"] == "Client"

    def test_connector_not_found(self, use_context, config, capsys):
        args = create_parser().parse_args(["connector", "--name", "Nope"])

        code = commands.run_command("connector", args, config)

        assert code == 1
        assert capsys.readouterr().out.strip() == "null"

    def test_unknown_command(self, config, capsys):
        code = commands.run_command("bogus", None, config)

        assert code == 1
        assert "Unknown command: bogus" in capsys.readouterr().err

    def test_client_message_printer(self, capsys):
        commands.print_client_message({"type": 1, "message": "Operation 'x' failed!"})

        assert capsys.readouterr().err == "[error] Operation 'x' failed!\n"


class TestMain:
    """Entry point."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "connector-service" in capsys.readouterr().out

    def test_errors_become_exit_code(self, monkeypatch, capsys):
        def explode(command, args, config):
            raise RuntimeError("boom")

        cli_main = importlib.import_module("connector_service.cli.main")
        monkeypatch.setattr(cli_main, "run_command", explode)

        assert main(["connectors"]) == 1
        assert "Error: boom" in capsys.readouterr().err
