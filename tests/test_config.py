"""Tests for app.config.Settings.from_env."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from app.config import DEFAULT_TEMPLATE_DIR, Settings


class TestSettingsFromEnv:
    def test_defaults(self):
        settings = Settings.from_env({})
        assert settings.content_dir == Path(".")
        assert settings.content_url is None
        assert settings.template_dir == DEFAULT_TEMPLATE_DIR
        assert settings.template_name == "post.html"
        assert settings.reload_templates is True
        assert settings.highlight_style == "dracula"
        assert settings.port == 3030

    def test_overrides(self):
        settings = Settings.from_env(
            {
                "SLUGPRESS_CONTENT_DIR": "/srv/posts",
                "SLUGPRESS_RELOAD_TEMPLATES": "false",
                "SLUGPRESS_PORT": "8080",
                "SLUGPRESS_HIGHLIGHT_STYLE": "monokai",
            }
        )
        assert settings.content_dir == Path("/srv/posts")
        assert settings.reload_templates is False
        assert settings.port == 8080
        assert settings.highlight_style == "monokai"

    def test_empty_values_are_ignored(self):
        settings = Settings.from_env({"SLUGPRESS_CONTENT_URL": ""})
        assert settings.content_url is None

    def test_unrelated_variables_are_ignored(self):
        settings = Settings.from_env({"PORT": "1", "CONTENT_DIR": "/nope"})
        assert settings.port == 3030

    def test_invalid_port(self):
        with pytest.raises(ValidationError):
            Settings.from_env({"SLUGPRESS_PORT": "0"})
