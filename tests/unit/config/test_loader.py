"""Unit tests for TOML configuration loader."""

import tomllib
from pathlib import Path

import pytest

from indexer_agent.config.loader import (
    deep_merge,
    config_files,
    find_config_dir,
    get_environment,
    load_config,
    load_toml,
)


class TestDeepMerge:
    """Tests for deep_merge function."""

    def test_merge_nested_sections(self) -> None:
        """Nested graph_node sections are merged key by key."""
        base = {"graph_node": {"admin_endpoint": "http://a:8020", "timeout_seconds": 30}}
        override = {"graph_node": {"admin_endpoint": "http://b:8020"}}
        result = deep_merge(base, override)
        assert result == {
            "graph_node": {"admin_endpoint": "http://b:8020", "timeout_seconds": 30}
        }

    def test_override_replaces_non_dict(self) -> None:
        """Non-dict values in override replace base values."""
        result = deep_merge({"log_level": "INFO"}, {"log_level": "DEBUG"})
        assert result == {"log_level": "DEBUG"}

    def test_base_unmodified(self) -> None:
        """Original base dictionary is not modified."""
        base = {"log_level": "INFO"}
        deep_merge(base, {"paused_target_node": "index_node_1"})
        assert base == {"log_level": "INFO"}


class TestLoadToml:
    """Tests for load_toml function."""

    def test_load_valid_toml(self, tmp_path: Path) -> None:
        """Valid TOML file is loaded correctly."""
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[graph_node]\nadmin_endpoint = "http://graph-node:8020"')

        assert load_toml(toml_file) == {
            "graph_node": {"admin_endpoint": "http://graph-node:8020"}
        }

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        """Missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Invalid TOML syntax raises error."""
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("invalid = [unclosed")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(invalid_file)


class TestGetEnvironment:
    """Tests for get_environment function."""

    def test_returns_env_var_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Returns INDEXER_ENV value when set."""
        monkeypatch.setenv("INDEXER_ENV", "production")
        assert get_environment() == "production"

    def test_defaults_to_development(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults to 'development' when INDEXER_ENV not set."""
        monkeypatch.delenv("INDEXER_ENV", raising=False)
        assert get_environment() == "development"


class TestFindConfigDir:
    """Tests for find_config_dir function."""

    def test_uses_env_var_when_set(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Uses INDEXER_CONFIG_DIR when set."""
        monkeypatch.setenv("INDEXER_CONFIG_DIR", str(test_config_dir))
        assert find_config_dir() == test_config_dir

    def test_raises_for_missing_env_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Raises error when INDEXER_CONFIG_DIR doesn't exist."""
        monkeypatch.setenv("INDEXER_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError):
            find_config_dir()

    def test_searches_upwards_for_default_toml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """The nearest config/ holding default.toml is used."""
        monkeypatch.delenv("INDEXER_CONFIG_DIR", raising=False)
        (tmp_path / "config").mkdir()
        (tmp_path / "config" / "default.toml").write_text("log_level = 'INFO'")
        nested = tmp_path / "ops" / "runs"
        nested.mkdir(parents=True)

        assert find_config_dir(nested) == (tmp_path / "config").resolve()

    def test_returns_none_without_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A config/ without default.toml is not picked up."""
        monkeypatch.delenv("INDEXER_CONFIG_DIR", raising=False)
        (tmp_path / "config").mkdir()

        assert find_config_dir(tmp_path) is None


class TestConfigFiles:
    """Tests for config_files function."""

    def test_existing_files_in_merge_order(self, test_config_dir: Path, mock_toml_files) -> None:
        """default.toml comes first, missing overlays are skipped."""
        mock_toml_files({"default.toml": "", "staging.toml": ""})

        assert config_files(test_config_dir, "staging") == [
            test_config_dir / "default.toml",
            test_config_dir / "staging.toml",
        ]
        assert config_files(test_config_dir, "production") == [test_config_dir / "default.toml"]

    def test_default_environment_not_loaded_twice(
        self, test_config_dir: Path, mock_toml_files
    ) -> None:
        """INDEXER_ENV=default reads default.toml once."""
        mock_toml_files({"default.toml": ""})

        assert config_files(test_config_dir, "default") == [test_config_dir / "default.toml"]


class TestLoadConfig:
    """Tests for load_config function."""

    def test_merges_environment_config(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Environment config overrides default config."""
        mock_toml_files({
            "default.toml": "log_level = 'INFO'\napp_name = 'indexer'",
            "production.toml": "log_level = 'WARNING'",
        })
        monkeypatch.setenv("INDEXER_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("INDEXER_ENV", "production")

        assert load_config() == {"log_level": "WARNING", "app_name": "indexer"}

    def test_missing_files_yield_empty_config(
        self, test_config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """An empty config directory falls back to model defaults."""
        monkeypatch.setenv("INDEXER_CONFIG_DIR", str(test_config_dir))
        monkeypatch.setenv("INDEXER_ENV", "nonexistent")

        assert load_config() == {}

    def test_explicit_directory_and_environment(
        self, test_config_dir: Path, mock_toml_files, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Arguments take precedence over INDEXER_CONFIG_DIR and INDEXER_ENV."""
        mock_toml_files({
            "default.toml": "[graph_node]\ntimeout_seconds = 30.0",
            "staging.toml": "[graph_node]\ntimeout_seconds = 5.0",
        })
        monkeypatch.setenv("INDEXER_ENV", "production")

        config = load_config(config_dir=test_config_dir, environment="staging")

        assert config == {"graph_node": {"timeout_seconds": 5.0}}

    def test_no_config_dir_yields_empty_config(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Running outside a project directory uses defaults only."""
        monkeypatch.delenv("INDEXER_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)

        assert load_config() == {}
