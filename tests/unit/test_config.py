"""Unit tests for config.py."""

import sys
from pathlib import Path

import pytest
import yaml

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from roulette.config import (
    API_KEY_ENV_VAR,
    ApiConfig,
    RetryConfig,
    RouletteConfig,
    SamplingConfig,
    apply_env_overrides,
    load_config,
    save_config_template,
    validate_config,
)


class TestDefaults:
    """Test cases for default values."""

    def test_api_defaults(self):
        config = ApiConfig()

        assert config.api_key == ""
        assert config.base_url == "https://www.googleapis.com/youtube/v3"

    def test_sampling_defaults(self):
        config = SamplingConfig()

        assert config.max_pages == 5
        assert config.page_size == 50

    def test_retry_defaults(self):
        config = RetryConfig()

        assert config.max_attempts == 5
        assert config.base_delay == 1.0
        assert config.retry_video_phase is True

    def test_defaults_validate(self):
        validate_config(RouletteConfig())


class TestValidateConfig:
    """Test cases for validate_config."""

    @pytest.mark.parametrize(
        "section,field_name,value",
        [
            ("sampling", "max_pages", 0),
            ("sampling", "max_pages", 21),
            ("sampling", "page_size", 51),
            ("retry", "max_attempts", 0),
            ("retry", "base_delay", 0),
            ("api", "base_url", "ftp://example.com"),
            ("api", "timeout_seconds", 0),
            ("logging", "level", "LOUD"),
            ("ui", "locale", "fr"),
        ],
    )
    def test_out_of_bounds(self, section, field_name, value):
        config = RouletteConfig()
        setattr(getattr(config, section), field_name, value)

        with pytest.raises(ValueError):
            validate_config(config)


class TestLoadConfig:
    """Test cases for load_config."""

    @pytest.fixture(autouse=True)
    def clear_env(self, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)

    def test_no_path_returns_defaults(self):
        config = load_config()
        assert config == RouletteConfig()

    def test_load_from_yaml(self, tmp_path):
        config_path = tmp_path / "roulette.yaml"
        config_path.write_text(
            yaml.dump(
                {
                    "api": {"api_key": "file-key", "timeout_seconds": 5},
                    "sampling": {"max_pages": 3, "unknown": True},
                    "ui": {"locale": "ko"},
                }
            ),
            encoding="utf-8",
        )

        config = load_config(str(config_path))

        assert config.api.api_key == "file-key"
        assert config.api.timeout_seconds == 5
        assert config.sampling.max_pages == 3
        assert config.sampling.page_size == 50
        assert config.ui.locale == "ko"

    def test_env_key_wins(self, tmp_path, monkeypatch):
        config_path = tmp_path / "roulette.yaml"
        config_path.write_text(yaml.dump({"api": {"api_key": "file-key"}}), encoding="utf-8")
        monkeypatch.setenv(API_KEY_ENV_VAR, "env-key")

        config = load_config(str(config_path))

        assert config.api.api_key == "env-key"

    def test_empty_file_uses_defaults(self, tmp_path):
        config_path = tmp_path / "empty.yaml"
        config_path.write_text("", encoding="utf-8")

        assert load_config(str(config_path)) == RouletteConfig()

    def test_non_dict_file(self, tmp_path):
        config_path = tmp_path / "list.yaml"
        config_path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(str(config_path))

    def test_invalid_yaml(self, tmp_path):
        config_path = tmp_path / "broken.yaml"
        config_path.write_text("api: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_config(str(config_path))

    def test_out_of_bounds_file(self, tmp_path):
        config_path = tmp_path / "bounds.yaml"
        config_path.write_text(yaml.dump({"sampling": {"max_pages": 100}}), encoding="utf-8")

        with pytest.raises(ValueError, match="max_pages"):
            load_config(str(config_path))


class TestEnvOverrides:
    """Test cases for apply_env_overrides."""

    def test_blank_env_ignored(self):
        config = RouletteConfig()
        config.api.api_key = "file-key"

        apply_env_overrides(config, {API_KEY_ENV_VAR: "   "})

        assert config.api.api_key == "file-key"

    def test_env_applied(self):
        config = apply_env_overrides(RouletteConfig(), {API_KEY_ENV_VAR: " abc "})
        assert config.api.api_key == "abc"


class TestSaveConfigTemplate:
    """Test cases for save_config_template."""

    def test_template_round_trips(self, tmp_path, monkeypatch):
        monkeypatch.delenv(API_KEY_ENV_VAR, raising=False)
        output = tmp_path / "template.yaml"

        save_config_template(str(output))

        data = yaml.safe_load(output.read_text(encoding="utf-8"))
        assert data["api"]["api_key"] == ""
        assert data["sampling"]["max_pages"] == 5
        assert load_config(str(output)) == RouletteConfig()
