"""Tests for ignr.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from ignr.config import (
    AppConfig,
    AppPaths,
    ConfigError,
    DEFAULT_TEMPLATE_URL,
    load_config,
    write_default_config,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path / "config.yml", environ={})

    assert isinstance(config, AppConfig)
    assert config.templates.template_dir is None
    assert config.templates.template_url == DEFAULT_TEMPLATE_URL
    assert config.templates.prefer_local is True
    assert config.templates.always_include == []
    assert config.detection.max_depth == 10
    assert config.detection.detect_os is True
    assert config.detection.detect_ide is True
    assert config.paths.data_dir is None


def test_default_config_file_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "config.yml"
    write_default_config(path)

    assert load_config(path, environ={}) == AppConfig()


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text(
        """
templates:
  template_dir: "~/templates"
  prefer_local: false
  always_include: [macos, vscode]
detection:
  max_depth: 3
  detect_os: false
paths:
  data_dir: /srv/ignr
""",
        encoding="utf-8",
    )

    config = load_config(config_file, environ={})

    assert config.templates.template_dir == "~/templates"
    assert config.templates.prefer_local is False
    assert config.templates.always_include == ["macos", "vscode"]
    assert config.detection.max_depth == 3
    assert config.detection.detect_os is False
    assert config.detection.detect_ide is True
    assert config.paths.data_dir == "/srv/ignr"


def test_environment_overrides_file(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text("detection:\n  max_depth: 3\n", encoding="utf-8")

    config = load_config(
        config_file,
        environ={
            "IGNR_DETECTION__MAX_DEPTH": "5",
            "IGNR_TEMPLATES__PREFER_LOCAL": "false",
            "IGNR_TEMPLATES__ALWAYS_INCLUDE": "linux,vim",
            "UNRELATED": "1",
        },
    )

    assert config.detection.max_depth == 5
    assert config.templates.prefer_local is False
    assert config.templates.always_include == ["linux", "vim"]


def test_invalid_yaml_raises(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text("templates: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file, environ={})


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file, environ={})


def test_invalid_values_raise(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_text("detection:\n  max_depth: -1\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(config_file, environ={})

    config_file.write_text("templates:\n  prefer_local: maybe\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(config_file, environ={})


def test_paths_follow_xdg_variables(tmp_path: Path) -> None:
    env = {
        "XDG_CONFIG_HOME": str(tmp_path / "cfg"),
        "XDG_DATA_HOME": str(tmp_path / "data"),
        "XDG_CACHE_HOME": str(tmp_path / "cache"),
    }

    paths = AppPaths.discover(environ=env)

    assert paths.config_file == tmp_path / "cfg" / "ignr" / "config.yml"
    assert paths.data_dir == tmp_path / "data" / "ignr"
    assert paths.cache_dir == tmp_path / "cache" / "ignr"
    assert paths.templates_dir == tmp_path / "data" / "ignr" / "templates"


def test_directory_override_points_at_config_file(tmp_path: Path) -> None:
    paths = AppPaths.discover(tmp_path, environ={"XDG_DATA_HOME": str(tmp_path)})

    assert paths.config_file == tmp_path / "config.yml"


def test_apply_overrides_uses_configured_paths(tmp_path: Path) -> None:
    paths = AppPaths(
        config_file=tmp_path / "config.yml",
        data_dir=tmp_path / "data",
        cache_dir=tmp_path / "cache",
    )
    config = AppConfig()
    config.paths.data_dir = str(tmp_path / "elsewhere")

    updated = paths.apply_overrides(config)

    assert updated.data_dir == tmp_path / "elsewhere"
    assert updated.cache_dir == tmp_path / "cache"


def test_undecodable_config_raises(tmp_path: Path) -> None:
    config_file = tmp_path / "config.yml"
    config_file.write_bytes(b"templates:\n  prefer_local: \xff\n")

    with pytest.raises(ConfigError, match="config.yml"):
        load_config(config_file, environ={})
