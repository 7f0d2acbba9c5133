"""Configuration loading for ignr (config.yml plus environment overlay)."""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import ConfigError

APP_NAME = "ignr"
CONFIG_FILENAME = "config.yml"
ENV_PREFIX = "IGNR_"
ENV_SEPARATOR = "__"
DEFAULT_TEMPLATE_URL = "https://www.toptal.com/developers/gitignore/api"

DEFAULT_CONFIG_TEXT = f"""\
# Configuration for ignr
# Auto-detect languages/tools and generate .gitignore files

templates:
  # Local directory containing custom .gitignore templates
  # template_dir: ~/.config/ignr/templates

  # Remote URL to fetch templates from (gitignore.io compatible API)
  template_url: {DEFAULT_TEMPLATE_URL}

  # Whether to prefer local/custom templates over embedded ones
  prefer_local: true

  # Templates to always include in generated .gitignore
  # always_include: [macos, vscode]
  always_include: []

detection:
  # Maximum directory depth to scan for technology detection
  max_depth: 10

  # Whether to auto-detect OS and add OS-specific patterns
  detect_os: true

  # Whether to detect IDE/editor directories and add patterns
  detect_ide: true

paths:
  # Override the data directory (defaults to $XDG_DATA_HOME/ignr)
  # Synced and embedded templates are stored here
  # data_dir: ~/.local/share/ignr

  # Override the cache directory (defaults to $XDG_CACHE_HOME/ignr)
  # cache_dir: ~/.cache/ignr
"""


@dataclass
class TemplatesConfig:
    """Template lookup settings."""

    template_dir: Optional[str] = None
    template_url: Optional[str] = DEFAULT_TEMPLATE_URL
    prefer_local: bool = True
    always_include: List[str] = field(default_factory=list)


@dataclass
class DetectionConfig:
    """Technology detection settings."""

    max_depth: int = 10
    detect_os: bool = True
    detect_ide: bool = True


@dataclass
class PathsConfig:
    """Overrides for the data and cache directories."""

    data_dir: Optional[str] = None
    cache_dir: Optional[str] = None


@dataclass
class AppConfig:
    """Effective configuration after defaults, file and environment are merged."""

    templates: TemplatesConfig = field(default_factory=TemplatesConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    paths: PathsConfig = field(default_factory=PathsConfig)


@dataclass
class AppPaths:
    """Resolved filesystem locations used by ignr."""

    config_file: Path
    data_dir: Path
    cache_dir: Path

    @classmethod
    def discover(
        cls,
        override: Path | str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "AppPaths":
        env = os.environ if environ is None else environ
        if override is not None:
            expanded = expand_path(str(override))
            config_file = expanded / CONFIG_FILENAME if expanded.is_dir() else expanded
        else:
            config_file = _xdg_dir("XDG_CONFIG_HOME", ".config", env) / CONFIG_FILENAME
        return cls(
            config_file=config_file,
            data_dir=_xdg_dir("XDG_DATA_HOME", ".local/share", env),
            cache_dir=_xdg_dir("XDG_CACHE_HOME", ".cache", env),
        )

    def apply_overrides(self, config: AppConfig) -> "AppPaths":
        data_dir = self.data_dir
        cache_dir = self.cache_dir
        if config.paths.data_dir:
            data_dir = expand_path(config.paths.data_dir)
        if config.paths.cache_dir:
            cache_dir = expand_path(config.paths.cache_dir)
        return AppPaths(config_file=self.config_file, data_dir=data_dir, cache_dir=cache_dir)

    @property
    def templates_dir(self) -> Path:
        return self.data_dir / "templates"

    def __str__(self) -> str:
        return f"config: {self.config_file}, data: {self.data_dir}, cache: {self.cache_dir}"


def load_config(
    config_path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from disk and overlay ``IGNR_<SECTION>__<KEY>`` variables."""
    data: Dict[str, Any] = {}
    if config_path is not None and config_path.is_file():
        data = _read_config(config_path)

    env = os.environ if environ is None else environ
    _apply_environment(data, env)

    templates_data = _as_section(data, "templates")
    detection_data = _as_section(data, "detection")
    paths_data = _as_section(data, "paths")

    templates = TemplatesConfig()
    if "template_dir" in templates_data:
        templates.template_dir = _as_str(templates_data["template_dir"])
    if "template_url" in templates_data:
        templates.template_url = _as_str(templates_data["template_url"])
    if "prefer_local" in templates_data:
        templates.prefer_local = _as_bool(templates_data["prefer_local"], "templates.prefer_local")
    if "always_include" in templates_data:
        templates.always_include = _as_str_list(templates_data["always_include"])

    detection = DetectionConfig()
    if "max_depth" in detection_data:
        detection.max_depth = _as_depth(detection_data["max_depth"])
    if "detect_os" in detection_data:
        detection.detect_os = _as_bool(detection_data["detect_os"], "detection.detect_os")
    if "detect_ide" in detection_data:
        detection.detect_ide = _as_bool(detection_data["detect_ide"], "detection.detect_ide")

    paths = PathsConfig(
        data_dir=_as_str(paths_data.get("data_dir")),
        cache_dir=_as_str(paths_data.get("cache_dir")),
    )

    return AppConfig(templates=templates, detection=detection, paths=paths)


def write_default_config(path: Path) -> None:
    """Write the commented default configuration file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TEXT, encoding="utf-8")


def config_to_dict(config: AppConfig) -> Dict[str, Any]:
    return asdict(config)


def expand_path(value: str) -> Path:
    """Expand ``~`` and environment variables in a configured path."""
    return Path(os.path.expandvars(os.path.expanduser(value)))


def _xdg_dir(variable: str, fallback: str, environ: Mapping[str, str]) -> Path:
    base = environ.get(variable)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / fallback / APP_NAME


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError(f"reading {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _apply_environment(data: Dict[str, Any], environ: Mapping[str, str]) -> None:
    for name, raw in environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX):]
        if ENV_SEPARATOR not in remainder:
            continue
        section_name, key = remainder.lower().split(ENV_SEPARATOR, 1)
        section = data.get(section_name)
        if not isinstance(section, dict):
            section = {}
            data[section_name] = section
        section[key] = _parse_env_value(raw)


def _parse_env_value(raw: str) -> Any:
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw


def _as_section(data: Mapping[str, Any], name: str) -> Dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return value


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (str, int, float, bool)):
        text = str(value).strip()
        return text or None
    return None


def _as_bool(value: Any, key: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    if isinstance(value, int):
        return bool(value)
    raise ConfigError(f"'{key}' must be a boolean, got {value!r}")


def _as_depth(value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError("'detection.max_depth' must be an integer")
    try:
        depth = int(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'detection.max_depth' must be an integer, got {value!r}") from exc
    if depth < 0:
        raise ConfigError("'detection.max_depth' must not be negative")
    return depth


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    raise ConfigError("'templates.always_include' must be a list")


__all__ = [
    "AppConfig",
    "AppPaths",
    "ConfigError",
    "DEFAULT_CONFIG_TEXT",
    "DetectionConfig",
    "PathsConfig",
    "TemplatesConfig",
    "config_to_dict",
    "expand_path",
    "load_config",
    "write_default_config",
]
