"""
Tests for settings loading (YAML file, environment, overrides).
"""

import logging

import pytest

from gemini_rag.exceptions import ConfigurationError
from gemini_rag.settings import RagSettings, load_settings


class TestDefaults:
    def test_defaults(self):
        settings = load_settings(environ={})
        assert settings.api_key == ""
        assert settings.store_display_name == "default"
        assert settings.model == "gemini-2.5-pro"
        assert settings.log_level == "info"
        assert settings.logging_level == logging.INFO
        assert settings.poll_interval == 5.0
        assert settings.default_page_size == 20

    def test_require_api_key(self):
        with pytest.raises(ConfigurationError, match="GOOGLE_API_KEY"):
            RagSettings().require_api_key()
        RagSettings(api_key="k").require_api_key()


class TestEnvironment:
    def test_environment_values(self):
        settings = load_settings(
            environ={
                "GOOGLE_API_KEY": "key-1",
                "STORE_DISPLAY_NAME": "team-docs",
                "GEMINI_MODEL": "gemini-2.5-flash",
                "LOG_LEVEL": "DEBUG",
                "POLL_INTERVAL": "0.25",
                "DEFAULT_PAGE_SIZE": "50",
            }
        )
        assert settings.api_key == "key-1"
        assert settings.store_display_name == "team-docs"
        assert settings.model == "gemini-2.5-flash"
        assert settings.log_level == "debug"
        assert settings.poll_interval == 0.25
        assert settings.default_page_size == 50

    def test_gemini_api_key_fallback(self):
        assert load_settings(environ={"GEMINI_API_KEY": "alt"}).api_key == "alt"
        env = {"GOOGLE_API_KEY": "main", "GEMINI_API_KEY": "alt"}
        assert load_settings(environ=env).api_key == "main"

    def test_warn_level_alias(self):
        assert load_settings(environ={"LOG_LEVEL": "warn"}).logging_level == logging.WARNING

    @pytest.mark.parametrize(
        "env",
        [
            {"LOG_LEVEL": "verbose"},
            {"POLL_INTERVAL": "0"},
            {"DEFAULT_PAGE_SIZE": "101"},
            {"POLL_INTERVAL": "soon"},
        ],
    )
    def test_invalid_values(self, env):
        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            load_settings(environ=env)


class TestConfigFile:
    def test_yaml_section(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("gemini_rag:\n  store_display_name: from-file\n  poll_interval: 2\n")

        settings = load_settings(config, environ={})

        assert settings.store_display_name == "from-file"
        assert settings.poll_interval == 2.0

    def test_flat_yaml(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("model: gemini-2.5-flash\n")
        assert load_settings(config, environ={}).model == "gemini-2.5-flash"

    def test_environment_overrides_file(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("gemini_rag:\n  store_display_name: from-file\n")

        settings = load_settings(config, environ={"STORE_DISPLAY_NAME": "from-env"})

        assert settings.store_display_name == "from-env"

    def test_overrides_win_and_none_is_ignored(self, tmp_path):
        settings = load_settings(
            environ={"STORE_DISPLAY_NAME": "from-env"},
            store_display_name="from-cli",
            model=None,
        )
        assert settings.store_display_name == "from-cli"
        assert settings.model == "gemini-2.5-pro"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Config file not found"):
            load_settings(tmp_path / "absent.yaml", environ={})

    def test_invalid_yaml(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("gemini_rag: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_settings(config, environ={})

    def test_non_mapping_yaml(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_settings(config, environ={})
