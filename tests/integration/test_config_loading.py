"""Integration tests for configuration loading with layered precedence.

Tests the real load_config() function with actual YAML files, environment
variables, and CLI overrides to verify precedence: defaults < YAML < ENV < CLI.
"""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from provgate.infrastructure.config.load import load_config

pytestmark = pytest.mark.integration


@pytest.fixture()
def yaml_config(tmp_path: Path) -> Path:
    """Write a minimal YAML config and return its path."""
    config = {
        "app_name": "provgate-test",
        "environment": "test",
        "providers": {
            "dist_dir": str(tmp_path / "dist"),
            "source_dir": str(tmp_path / "providers"),
        },
        "execution": {"timeout_seconds": 20},
        "http": {
            "timeout_seconds": 15.0,
            "user_agent": "TestAgent/1.0",
        },
        "base_urls": {"overrides": {"vega": "https://vega.example"}},
        "build": {"command": ["make", "providers"]},
        "logging": {"level": "DEBUG", "format": "console"},
    }
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(config), encoding="utf-8")
    return path


class TestDefaultsOnly:
    """Load with no YAML, no ENV, no CLI: pure defaults."""

    def test_defaults_produce_valid_config(self) -> None:
        config = load_config()
        assert config.app_name == "provgate"
        assert config.environment == "dev"
        assert config.dist_dir == Path("./dist")
        assert config.source_dir == Path("./providers")
        assert config.catalog_filename == "catalog.ts"
        assert config.execution_timeout_seconds is None
        assert config.http_timeout_seconds == 30.0
        assert config.log_level == "INFO"
        assert config.log_format == "console"  # dev → console
        assert config.build.command == ["node", "build.js"]
        assert config.base_urls.source_url is None

    def test_defaults_derive_log_format_from_environment(self) -> None:
        config = load_config(cli_overrides={"environment": "prod"})
        assert config.log_format == "json"


class TestYamlOverrides:
    """YAML values override defaults."""

    def test_yaml_overrides_defaults(self, yaml_config: Path, tmp_path: Path) -> None:
        config = load_config(config_path=yaml_config)
        assert config.app_name == "provgate-test"
        assert config.environment == "test"
        assert config.dist_dir == tmp_path / "dist"
        assert config.execution_timeout_seconds == 20
        assert config.http_timeout_seconds == 15.0
        assert config.http_user_agent == "TestAgent/1.0"
        assert config.base_urls.overrides == {"vega": "https://vega.example"}
        assert config.build.command == ["make", "providers"]
        assert config.log_level == "DEBUG"

    def test_yaml_file_not_found_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(config_path=tmp_path / "nonexistent.yaml")

    def test_yaml_partial_override_preserves_defaults(self, tmp_path: Path) -> None:
        """YAML that only sets build.timeout_seconds keeps other defaults."""
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({"build": {"timeout_seconds": 60}}), encoding="utf-8")

        config = load_config(config_path=path)
        assert config.build.timeout_seconds == 60
        assert config.build.command == ["node", "build.js"]  # default preserved
        assert config.http_follow_redirects is True

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError, match="mapping"):
            load_config(config_path=path)

    def test_empty_yaml_is_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(config_path=path).app_name == "provgate"


class TestEnvOverrides:
    """Environment variables override YAML and defaults."""

    def test_env_overrides_yaml(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROVGATE_LOG_LEVEL", "WARNING")
        monkeypatch.setenv("PROVGATE_EXECUTION_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("PROVGATE_DIST_DIR", "/srv/dist")

        config = load_config(config_path=yaml_config)
        assert config.log_level == "WARNING"
        assert config.execution_timeout_seconds == 2.5
        assert config.dist_dir == Path("/srv/dist")
        # YAML values not overridden by ENV stay
        assert config.app_name == "provgate-test"

    def test_env_base_url_source(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PROVGATE_BASE_URL_SOURCE", "https://example.com/urls.json")
        config = load_config()
        assert config.base_urls.source_url == "https://example.com/urls.json"

    def test_dotenv_file_feeds_env_layer(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("PROVGATE_SOURCE_DIR", raising=False)
        dotenv = tmp_path / ".env"
        dotenv.write_text("PROVGATE_SOURCE_DIR=/srv/providers\n", encoding="utf-8")

        config = load_config(dotenv_path=dotenv)
        assert config.source_dir == Path("/srv/providers")

    def test_missing_dotenv_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(dotenv_path=tmp_path / "missing.env")


class TestCliOverrides:
    """CLI overrides beat everything (highest precedence)."""

    def test_cli_overrides_yaml_and_env(
        self, yaml_config: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("PROVGATE_LOG_LEVEL", "WARNING")

        config = load_config(
            config_path=yaml_config,
            cli_overrides={"log_level": "ERROR", "dist_dir": "/cli/dist"},
        )
        assert config.log_level == "ERROR"
        assert config.dist_dir == Path("/cli/dist")

    def test_cli_overrides_with_sectioned_format(self, yaml_config: Path) -> None:
        config = load_config(
            config_path=yaml_config,
            cli_overrides={"execution": {"timeout_seconds": 5.0}},
        )
        assert config.execution_timeout_seconds == 5.0


class TestValidation:
    def test_non_positive_execution_timeout_rejected(self) -> None:
        with pytest.raises(ValueError):
            load_config(cli_overrides={"execution_timeout_seconds": 0})

    def test_catalog_filename_must_be_bare(self) -> None:
        with pytest.raises(ValueError):
            load_config(cli_overrides={"catalog_filename": "../catalog.ts"})

    def test_sectioned_dump_round_trips(self, yaml_config: Path) -> None:
        config = load_config(config_path=yaml_config)
        again = load_config(cli_overrides=config.to_sectioned_dict())
        assert again == config
