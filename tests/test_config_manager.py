"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from cartree.config import (
    DEFAULT_CONFIG_PATH,
    CartreeConfig,
    ConfigError,
    ConfigManager,
    flatten_for_env,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager(env={})


def test_default_path_lives_in_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    assert manager.config_path == DEFAULT_CONFIG_PATH.expanduser()
    assert manager.config_path == tmp_path / ".cartree" / "config.yaml"


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    text = path.read_text(encoding="utf-8")
    assert "cartree configuration file" in text
    assert "Last updated:" in text
    config = manager.load(include_env=False)
    assert config == CartreeConfig()
    assert config.discovery.marker_filename == ".project"
    assert "node_modules" in config.discovery.excluded_directories


def test_resolve_with_precedence_respects_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.save({"discovery": {"marker_filename": ".cartridge"}, "cli": {"max_depth": 1}})

    env = {"CARTREE__CLI__MAX_DEPTH": "2", "CARTREE__LOGGING__LEVEL": "DEBUG", "OTHER": "x"}
    cli = {"cli.max_depth": 3}

    config = manager.load(cli_overrides=cli, env_overrides=env)

    assert config.discovery.marker_filename == ".cartridge"
    assert config.logging.level == "DEBUG"
    # CLI overrides take precedence over environment
    assert config.cli.max_depth == 3


def test_environment_lists_are_parsed_as_yaml(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    env = {"CARTREE__DISCOVERY__EXCLUDED_DIRECTORIES": "[.git, dist]"}

    config = manager.load(env_overrides=env)

    assert config.discovery.excluded_directories == [".git", "dist"]


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=CartreeConfig(), file_overrides={"discovery": {"nope": 1}})


def test_resolve_with_precedence_invalid_value_raises() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=CartreeConfig(),
            cli_overrides={"cli.max_depth": -1},
        )


def test_conflicting_dotted_override_raises() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=CartreeConfig(),
            cli_overrides={"logging": "loud", "logging.level": "INFO"},
        )


def test_flatten_for_env_round_trips_defaults() -> None:
    flat = flatten_for_env(CartreeConfig())

    assert flat["CARTREE__DISCOVERY__MARKER_FILENAME"] == ".project"
    assert flat["CARTREE__DISCOVERY__FOLLOW_SYMLINKS"] == "False"
    assert flat["CARTREE__CLI__MAX_DEPTH"] == "0"
