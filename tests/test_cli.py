"""Tests for the crocodoc command line."""

import json

import pytest
import yaml
from click.testing import CliRunner

from crocodoc.cli.main import cli

from conftest import DOCUMENT_TEXT, TEST_TOKEN, FakeCrocodocServer


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def server(monkeypatch):
    """Route every client created by the CLI to one fake server."""
    fake = FakeCrocodocServer()
    monkeypatch.setattr("crocodoc.api.client.requests.Session", lambda: fake)
    return fake


def invoke(runner, *args):
    return runner.invoke(cli, ["--api-token", TEST_TOKEN, *args], obj={})


class TestInstallCommand:
    """Tests for `crocodoc install`."""

    def test_install(self, runner, tmp_path):
        result = runner.invoke(cli, ["install", "--api-token", "abc123", "-d", str(tmp_path)], obj={})

        assert result.exit_code == 0, result.output
        data = yaml.safe_load((tmp_path / "config" / "crocodoc.yml").read_text())
        assert data["token"] == "abc123"
        assert (tmp_path / "config" / "initializers" / "crocodoc.py").exists()

    def test_install_requires_token(self, runner, tmp_path):
        result = runner.invoke(cli, ["install", "-d", str(tmp_path)], obj={})
        assert result.exit_code != 0
        assert not (tmp_path / "config").exists()

    def test_install_refuses_to_overwrite(self, runner, tmp_path):
        runner.invoke(cli, ["install", "--api-token", "abc123", "-d", str(tmp_path)], obj={})
        result = runner.invoke(cli, ["install", "--api-token", "other", "-d", str(tmp_path)], obj={})
        assert result.exit_code == 1


class TestClientCommands:
    """Tests for the commands wrapping the API client."""

    def test_upload_and_status(self, runner, server):
        result = invoke(runner, "upload", "http://www.example.com/text.doc")
        assert result.exit_code == 0, result.output
        uuid = json.loads(result.output)["uuid"]

        result = invoke(runner, "status", uuid, "666")
        assert result.exit_code == 0, result.output
        entries = json.loads(result.output)
        assert entries[0]["uuid"] == uuid
        assert "invalid" in entries[1]["error"]

    def test_delete_unknown_document_fails(self, runner, server):
        result = invoke(runner, "delete", "666")
        assert result.exit_code == 1
        assert "HTTP Error 400" in result.output

    def test_session_prints_viewer_url(self, runner, server):
        server.documents.add("doc-1")
        result = invoke(runner, "session", "doc-1", "--editable", "--user", "1,Luke")

        assert result.exit_code == 0, result.output
        assert result.output.startswith("https://crocodoc.com/view/")
        params = server.last_request["params"]
        assert params["editable"] == "true"
        assert "admin" not in params

    def test_thumbnail_prints_url(self, runner, server):
        result = invoke(runner, "thumbnail", "doc-1", "--size", "300x250")

        assert result.exit_code == 0, result.output
        assert result.output.strip() == (
            f"https://crocodoc.com/api/v2/download/thumbnail?size=300x250&token={TEST_TOKEN}&uuid=doc-1"
        )
        assert server.requests == []

    def test_view_does_not_need_token(self, runner, server, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["view", "abc"], obj={})

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "https://crocodoc.com/view/abc"
        assert server.requests == []

    def test_view_uses_configured_url(self, runner, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("CROCODOC_VIEW_URL", "https://docs.example.com/view")
        result = runner.invoke(cli, ["view", "abc"], obj={})
        assert result.output.strip() == "https://docs.example.com/view/abc"

    def test_download_prints_url(self, runner, server):
        result = invoke(runner, "download", "doc-1", "--pdf")
        assert result.output.strip() == (
            f"https://crocodoc.com/api/v2/download/document?pdf=true&token={TEST_TOKEN}&uuid=doc-1"
        )

    def test_text_to_file(self, runner, server, tmp_path):
        output = tmp_path / "doc.txt"
        result = invoke(runner, "text", "doc-1", "-o", str(output))

        assert result.exit_code == 0, result.output
        assert output.read_text(encoding="utf-8") == DOCUMENT_TEXT

    def test_missing_token_fails(self, runner, server, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(cli, ["text", "doc-1"], obj={})
        assert result.exit_code == 1
        assert "Invalid Crocodoc configuration" in result.output
