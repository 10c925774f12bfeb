"""
Tests for the gemini-rag CLI.

The action context is patched so commands run against the in-memory backend.
"""

import json
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from gemini_rag import __version__
from gemini_rag.actions import RagContext
from gemini_rag.cli import app, parse_metadata
from gemini_rag.settings import ENV_VARS

runner = CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for names in ENV_VARS.values():
        for name in names:
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def patched_context(rag_client):
    contexts = []

    def create(settings):
        context = RagContext(
            client=rag_client,
            store_display_name=settings.store_display_name,
            model=settings.model,
        )
        contexts.append(context)
        return context

    with patch("gemini_rag.cli.create_context", side_effect=create):
        yield contexts


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"gemini-rag {__version__}" in result.output


class TestCommands:
    def test_query_prints_json(self, patched_context, genai_client):
        genai_client.aio.models.response = {
            "candidates": [{"content": {"parts": [{"text": "Forty-two"}]}}]
        }

        result = runner.invoke(app, ["-q", "query", "What is the answer?"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["success"] is True
        assert payload["data"]["text"] == "Forty-two"
        assert payload["data"]["model"] == "gemini-2.5-pro"

    def test_store_option_overrides_display_name(self, patched_context, genai_client):
        result = runner.invoke(app, ["-q", "--store", "team-docs", "ensure-store"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["displayName"] == "team-docs"
        assert patched_context[0].store_display_name == "team-docs"

    def test_config_file(self, patched_context, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("gemini_rag:\n  store_display_name: from-file\n")

        result = runner.invoke(app, ["-q", "--config", str(config), "ensure-store"])

        assert result.exit_code == 0, result.output
        assert patched_context[0].store_display_name == "from-file"

    def test_upload_content_with_metadata(self, patched_context, genai_client):
        result = runner.invoke(
            app,
            ["-q", "upload-content", "hello", "--display-name", "hello.txt", "-m", '{"lang": "en"}'],
        )

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["data"]["metadata"] == {"lang": "en"}
        upload = genai_client.aio.file_search_stores.upload_calls[0]
        assert upload["data"] == b"hello"

    def test_upload_content_from_file(self, patched_context, genai_client, tmp_path):
        source = tmp_path / "notes.txt"
        source.write_text("from disk", encoding="utf-8")

        result = runner.invoke(
            app, ["-q", "upload-content", "--from-file", str(source), "--display-name", "notes.txt"]
        )

        assert result.exit_code == 0, result.output
        assert genai_client.aio.file_search_stores.upload_calls[0]["data"] == b"from disk"

    def test_upload_content_requires_content(self, patched_context):
        result = runner.invoke(app, ["-q", "upload-content", "--display-name", "x.txt"])
        assert result.exit_code == 1
        assert patched_context == []

    def test_failed_action_exits_nonzero(self, patched_context):
        result = runner.invoke(app, ["-q", "list-stores", "--page-size", "500"])

        assert result.exit_code == 1
        assert '"error_type": "validation"' in result.output

    def test_invalid_metadata_json(self, patched_context):
        result = runner.invoke(
            app, ["-q", "upload-content", "x", "--display-name", "x.txt", "-m", "{not json"]
        )
        assert result.exit_code == 1
        assert "Invalid JSON" in result.output


class TestConfigurationErrors:
    def test_missing_api_key(self):
        result = runner.invoke(app, ["-q", "ensure-store"])
        assert result.exit_code == 1
        assert "GOOGLE_API_KEY" in result.output

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "loud")
        result = runner.invoke(app, ["ensure-store"])
        assert result.exit_code == 1
        assert "Configuration validation failed" in result.output


class TestParseMetadata:
    def test_none(self):
        assert parse_metadata(None) is None

    def test_from_file(self, tmp_path):
        path = tmp_path / "meta.json"
        path.write_text('{"year": 2024}')
        assert parse_metadata(f"@{path}") == {"year": 2024}

    def test_non_object_rejected(self):
        import typer

        with pytest.raises(typer.Exit):
            parse_metadata("[1, 2]")
