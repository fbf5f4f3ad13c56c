from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from minitask.defaults import (
    DEFAULT_EDITOR,
    INITIAL_CAPACITY,
    default_storage_path,
    resolve_capacity,
    resolve_config_path,
    resolve_editor,
    resolve_storage_path,
)
from minitask.errors import ConfigError


@dataclass(frozen=True)
class Config:
    storage_path: Path
    editor: Optional[str]
    initial_capacity: int = INITIAL_CAPACITY

    def editor_or_default(self) -> str:
        """Editor for composing a new task; falls back to DEFAULT_EDITOR."""
        return self.editor or DEFAULT_EDITOR


def _read_yaml(cfg_path: Path) -> dict[str, Any]:
    if not cfg_path.exists():
        return {}
    try:
        raw = yaml.safe_load(cfg_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Cannot read config {cfg_path}: {exc}") from exc
    if not isinstance(raw, dict):
        raise ConfigError(f"Top-level config must be a YAML mapping: {cfg_path}")
    return raw


def _parse_capacity(value: Any, source: str) -> int:
    try:
        capacity = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"initial_capacity from {source} must be an integer, got {value!r}") from None
    if capacity < 1:
        raise ConfigError(f"initial_capacity from {source} must be at least 1, got {capacity}")
    return capacity


def load_config(storage_path: str | None = None, config_path: str | None = None) -> Config:
    """Build the per-invocation config: CLI option > env var > YAML file > default."""
    cfg_path = resolve_config_path(config_path)
    raw = _read_yaml(cfg_path)

    path = resolve_storage_path(storage_path)
    if path is None:
        yaml_path = raw.get("storage_path")
        path = Path(str(yaml_path)).expanduser() if yaml_path else default_storage_path()

    editor = resolve_editor()
    if editor is None:
        yaml_editor = raw.get("editor")
        editor = (str(yaml_editor).strip() or None) if yaml_editor else None

    env_capacity = resolve_capacity()
    if env_capacity is not None:
        capacity = _parse_capacity(env_capacity, "environment")
    elif "initial_capacity" in raw:
        capacity = _parse_capacity(raw["initial_capacity"], str(cfg_path))
    else:
        capacity = INITIAL_CAPACITY

    return Config(storage_path=path, editor=editor, initial_capacity=capacity)
