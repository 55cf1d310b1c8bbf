"""
Unit tests for configuration management.
"""

import pytest

from review_scope.config import (
    AppConfig,
    ConfigManager,
    GitHubConfig,
    LoggingConfig,
    ReviewConfig,
    DEFAULT_MARKER_PREFIX,
)


def make_config(**review_overrides) -> AppConfig:
    return AppConfig(
        github=GitHubConfig(token="ghp_test"),
        review=ReviewConfig(**review_overrides),
        logging=LoggingConfig(),
    )


class TestAppConfig:
    """Unit tests for AppConfig."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "ghp_env")
        monkeypatch.setenv("GITHUB_TIMEOUT", "12")
        monkeypatch.setenv("INCLUDE_EXTENSIONS", ".py,.ts")
        monkeypatch.setenv("KEEP_UNCLASSIFIABLE_FILES", "false")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")

        config = AppConfig.from_env()

        assert config.github.token == "ghp_env"
        assert config.github.timeout_seconds == 12
        assert config.review.include_extensions == ".py,.ts"
        assert config.review.keep_unclassifiable_files is False
        assert config.review.marker_prefix == DEFAULT_MARKER_PREFIX
        assert config.logging.level == "DEBUG"

    def test_from_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "github:\n"
            "  api_base_url: https://github.example.com/api/v3\n"
            "  per_page: 50\n"
            "review:\n"
            "  marker_prefix: '<!-- ai-review -->'\n"
            "  exclude_paths: vendor/,dist/\n"
            "debug: true\n",
            encoding="utf-8",
        )

        config = AppConfig.from_yaml(str(config_file))

        assert config.github.api_base_url == "https://github.example.com/api/v3"
        assert config.github.per_page == 50
        assert config.review.marker_prefix == "<!-- ai-review -->"
        assert config.review.exclude_paths == "vendor/,dist/"
        assert config.logging.level == "INFO"
        assert config.debug is True

    def test_from_yaml_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            AppConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_validate_defaults(self):
        make_config().validate()

    def test_validate_collects_errors(self):
        config = make_config(marker_prefix="  ")
        config.github.per_page = 500
        config.logging.level = "LOUD"

        with pytest.raises(ValueError) as exc_info:
            config.validate()

        message = str(exc_info.value)
        assert "page size" in message
        assert "marker prefix" in message
        assert "Invalid log level" in message

    def test_to_dict_omits_token(self):
        data = make_config().to_dict()

        assert "token" not in data["github"]
        assert data["review"]["keep_unclassifiable_files"] is True


class TestConfigManager:
    """Unit tests for ConfigManager."""

    def test_update_nested_setting(self):
        manager = ConfigManager(make_config())

        manager.update_config(**{"review.include_paths": "src/", "debug": True})

        assert manager.config.review.include_paths == "src/"
        assert manager.config.debug is True
        assert manager.config.github.token == "ghp_test"

    def test_update_rejects_invalid_values(self):
        manager = ConfigManager(make_config())

        with pytest.raises(ValueError):
            manager.update_config(**{"logging.level": "LOUD"})

    def test_update_unknown_section(self):
        manager = ConfigManager(make_config())

        with pytest.raises(KeyError):
            manager.update_config(**{"storage.port": 1})
