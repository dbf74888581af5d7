"""Unified Salvo app-data paths."""

from __future__ import annotations

import os
import sys
from pathlib import Path


def resolve_app_data_root() -> Path:
    """Resolve app-data root directory for Salvo runtime state."""
    configured = os.getenv("SALVO_APP_DATA_DIR", "").strip()
    if configured:
        candidate = Path(configured)
        if candidate.is_absolute():
            return candidate
        return resolve_game_root() / candidate
    return resolve_game_root() / "appdata"


def resolve_game_root() -> Path:
    """Resolve the runtime game root directory."""
    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            return Path(executable).resolve().parent
    return Path(__file__).resolve().parents[3]


def resolve_logs_dir() -> Path:
    """Resolve logs directory, honouring SALVO_LOG_DIR."""
    configured = os.getenv("SALVO_LOG_DIR", "").strip()
    if not configured:
        return resolve_app_data_root() / "logs"
    candidate = Path(configured)
    if candidate.is_absolute():
        return candidate
    return resolve_app_data_root() / candidate


def ensure_app_data_dirs() -> dict[str, Path]:
    """Create app-data directories and return resolved paths."""
    root = resolve_app_data_root()
    logs = resolve_logs_dir()
    root.mkdir(parents=True, exist_ok=True)
    logs.mkdir(parents=True, exist_ok=True)
    return {"root": root, "logs": logs}
