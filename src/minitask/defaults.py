"""Shared constants: env var names, default paths, resolvers.

Single source of truth for where the task file lives and which editor runs.
Resolvers read the environment at call time, not import time.
"""

from __future__ import annotations

import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Env var names
# ---------------------------------------------------------------------------

ENV_FILE = "MINITASK_FILE"
ENV_CONFIG = "MINITASK_CONFIG"
ENV_CAPACITY = "MINITASK_CAPACITY"
ENV_EDITOR = "EDITOR"

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

STORAGE_FILE_NAME = ".tasks.bin"
BACKUP_SUFFIX = ".bak"
DEFAULT_CONFIG_PATH = "~/.config/minitask/config.yaml"
DEFAULT_EDITOR = "nvim"
INITIAL_CAPACITY = 8


# ---------------------------------------------------------------------------
# Resolvers
# ---------------------------------------------------------------------------


def home_dir() -> Path:
    """User home, or the current directory when it cannot be determined."""
    try:
        return Path.home()
    except RuntimeError:
        return Path(".")


def resolve_storage_path(explicit: str | None = None) -> Path | None:
    """Resolve the task file: explicit > ENV_FILE. None means 'use config/default'."""
    raw = explicit or os.getenv(ENV_FILE)
    if raw:
        return Path(raw).expanduser()
    return None


def default_storage_path() -> Path:
    return home_dir() / STORAGE_FILE_NAME


def resolve_config_path(explicit: str | None = None) -> Path:
    """Resolve the YAML config file: explicit > ENV_CONFIG > default."""
    raw = explicit or os.getenv(ENV_CONFIG) or DEFAULT_CONFIG_PATH
    return Path(raw).expanduser()


def resolve_editor() -> str | None:
    """Editor command from the environment, None when unset or blank."""
    editor = os.getenv(ENV_EDITOR, "").strip()
    return editor or None


def resolve_capacity() -> str | None:
    """Raw capacity override from the environment; validated by config."""
    return os.getenv(ENV_CAPACITY, "").strip() or None


def backup_path(path: str | Path) -> Path:
    """Sibling path the corrupt file is copied to: <path>.bak"""
    path = Path(path)
    return path.with_name(path.name + BACKUP_SUFFIX)
