"""Tests for the command line interface."""

import importlib
import logging

import click
import httpx
import pytest
from click.testing import CliRunner

from algolia_search.__main__ import main
from algolia_search.cli import cli
from algolia_search.cli.utils import open_client
from algolia_search.client import SearchClient
from algolia_search.security import generate_secured_api_key

search_command = importlib.import_module("algolia_search.cli.commands.search")
indexes_command = importlib.import_module("algolia_search.cli.commands.indexes")
keys_command = importlib.import_module("algolia_search.cli.commands.keys")
logs_command = importlib.import_module("algolia_search.cli.commands.logs")


@pytest.fixture
def runner():
    return CliRunner()


def fake_open_client(handler):
    def open_client(ctx):
        http_client = httpx.Client(transport=httpx.MockTransport(handler))
        return SearchClient("myapp", "secret", http_client=http_client)

    return open_client


def test_secured_key(runner):
    result = runner.invoke(cli, ["secured-key", "private", "public", "--user-token", "user42"])

    assert result.exit_code == 0
    assert result.output.strip() == generate_secured_api_key("private", "public", "user42")


def test_search(runner, monkeypatch):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"hits": [{"name": "Jimmie"}], "nbHits": 1})

    monkeypatch.setattr(search_command, "open_client", fake_open_client(handler))

    result = runner.invoke(cli, ["search", "contacts", "jimmie", "--hits-per-page", "5"])

    assert result.exit_code == 0
    assert "Jimmie" in result.output
    assert seen[0].url.raw_path == b"/1/indexes/contacts?hitsPerPage=5&query=jimmie"


def test_indexes_table(runner, monkeypatch):
    def handler(request):
        return httpx.Response(
            200,
            json={"items": [{"name": "contacts", "entries": 12, "updatedAt": "2024-01-01"}]},
        )

    monkeypatch.setattr(indexes_command, "open_client", fake_open_client(handler))

    result = runner.invoke(cli, ["indexes"])

    assert result.exit_code == 0
    assert "contacts" in result.output


def test_service_error_exits_with_failure(runner, monkeypatch):
    def handler(request):
        return httpx.Response(403, json={"message": "Invalid Application-ID or API key"})

    monkeypatch.setattr(indexes_command, "open_client", fake_open_client(handler))

    result = runner.invoke(cli, ["indexes"])

    assert result.exit_code == 1
    assert "Invalid Application-ID or API key" in result.output


def test_missing_configuration_exits_with_failure(runner, tmp_path):
    result = runner.invoke(cli, ["--config-dir", str(tmp_path), "keys"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output


def test_main_entry_point(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["secured-key", "private", "public"])

    assert excinfo.value.code == 0
    assert generate_secured_api_key("private", "public") in capsys.readouterr().out


def test_logs_only_errors(runner, monkeypatch):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"logs": [{"answer_code": "403"}]})

    monkeypatch.setattr(logs_command, "open_client", fake_open_client(handler))

    result = runner.invoke(cli, ["logs", "--length", "20", "--only-errors"])

    assert result.exit_code == 0
    assert "403" in result.output
    assert seen[0].url.raw_path == b"/1/logs?length=20&onlyErrors=true"


def test_keys(runner, monkeypatch):
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json={"keys": [{"value": "abc123", "acl": ["search"]}]})

    monkeypatch.setattr(keys_command, "open_client", fake_open_client(handler))

    result = runner.invoke(cli, ["keys"])

    assert result.exit_code == 0
    assert "abc123" in result.output
    assert seen[0].method == "GET"
    assert seen[0].url.raw_path == b"/1/keys"


def test_unreachable_hosts_hint(runner, monkeypatch):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    monkeypatch.setattr(keys_command, "open_client", fake_open_client(handler))

    result = runner.invoke(cli, ["keys"])

    assert result.exit_code == 1
    assert "Hosts unreachable" in result.output
    assert "No host could be reached." in result.output


@pytest.fixture
def root_level():
    root_logger = logging.getLogger()
    level, handlers = root_logger.level, root_logger.handlers[:]
    yield root_logger
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def config_dir(tmp_path):
    (tmp_path / "algolia.yaml").write_text(
        "application_id: myapp\napi_key: secret\nlog_level: debug\n"
    )
    return tmp_path


def test_configured_log_level_applied(root_level, config_dir):
    ctx = click.Context(cli, obj={"config_dir": str(config_dir), "verbose": 0})

    with open_client(ctx):
        assert root_level.level == logging.DEBUG


def test_verbose_flag_overrides_configured_log_level(root_level, config_dir):
    ctx = click.Context(cli, obj={"config_dir": str(config_dir), "verbose": 1})
    root_level.setLevel(logging.INFO)

    with open_client(ctx):
        assert root_level.level == logging.INFO
