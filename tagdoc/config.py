"""Configuration loading for tagdoc (.tagdoc.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

_CONFIG_NAME = ".tagdoc.yml"
_DEFAULT_MARKDOWN_EXTENSIONS = ["extra"]


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class WarningConfig:
    """Warning categories switched off for a run."""

    disabled: List[str] = field(default_factory=list)


@dataclass
class TagConfig:
    """Tag plugin enablement. ``None`` means every available plugin."""

    enabled: Optional[List[str]] = None


@dataclass
class LoggingConfig:
    """Console and file logging requested by the config file."""

    verbose: bool = False
    quiet: bool = False
    file: Optional[Path] = None


@dataclass
class TagdocConfig:
    """Represents the settings defined in .tagdoc.yml."""

    root: Path
    external_classes: List[str] = field(default_factory=list)
    warnings: WarningConfig = field(default_factory=WarningConfig)
    tags: TagConfig = field(default_factory=TagConfig)
    markdown_extensions: List[str] = field(
        default_factory=lambda: list(_DEFAULT_MARKDOWN_EXTENSIONS)
    )
    logging: Optional[LoggingConfig] = None


def load_config(config_path: Path) -> TagdocConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return TagdocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{_CONFIG_NAME} must contain a mapping at the root")

    warnings = WarningConfig()
    warning_data = _as_dict(data.get("warnings"))
    if warning_data:
        warnings.disabled = _as_str_list(warning_data.get("disabled"))

    tags = TagConfig()
    tag_data = _as_dict(data.get("tags"))
    if tag_data and tag_data.get("enabled") is not None:
        tags.enabled = _as_str_list(tag_data.get("enabled"))

    markdown_data = _as_dict(data.get("markdown"))
    extensions = list(_DEFAULT_MARKDOWN_EXTENSIONS)
    if markdown_data and markdown_data.get("extensions") is not None:
        extensions = _as_str_list(markdown_data.get("extensions"))

    logging_config = None
    if isinstance(data.get("logging"), dict):
        logging_data = data["logging"]
        log_file = logging_data.get("file")
        logging_config = LoggingConfig(
            verbose=bool(logging_data.get("verbose", False)),
            quiet=bool(logging_data.get("quiet", False)),
            file=root / str(log_file) if log_file else None,
        )

    return TagdocConfig(
        root=root,
        external_classes=_as_str_list(data.get("external")),
        warnings=warnings,
        tags=tags,
        markdown_extensions=extensions,
        logging=logging_config,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / _CONFIG_NAME).resolve()
    if config_path.name != _CONFIG_NAME:
        return (config_path.parent / _CONFIG_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "ConfigError",
    "LoggingConfig",
    "TagConfig",
    "TagdocConfig",
    "WarningConfig",
    "load_config",
]
