"""Application configuration and env loading."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

from salvo.game.core.fleet import ensure_valid_config
from salvo.game.core.models import BOARD_SIZE, DEFAULT_FLEET, GameConfig, ShipSpec


def load_env_file(path: str = ".env", *, override_existing: bool = True) -> None:
    """Load KEY=VALUE pairs from an env file into process environment.

    By default, values from the env file overwrite existing environment variables.
    """
    env_path = _resolve_env_path(path)
    if not env_path.exists():
        return

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip()
        if not key:
            continue

        if len(value) >= 2 and value[0] == value[-1] and value[0] in {"'", '"'}:
            value = value[1:-1]

        if override_existing or key not in os.environ:
            os.environ[key] = value


def load_default_env_files(
    *, override_existing: bool = True, paths: Sequence[str] | None = None
) -> None:
    """Load split env files with optional local overrides.

    Precedence is left-to-right because later loads may overwrite previous values.
    Default order:
    1) appdata/config/.env.app
    2) appdata/config/.env.app.local
    3) .env.app
    4) .env.app.local
    """
    to_load = (
        tuple(paths)
        if paths is not None
        else (
            "appdata/config/.env.app",
            "appdata/config/.env.app.local",
            ".env.app",
            ".env.app.local",
        )
    )
    for path in to_load:
        load_env_file(path, override_existing=override_existing)


def parse_fleet(raw: str) -> tuple[ShipSpec, ...]:
    """Parse ``"Carrier:5,Battleship:4"`` into a fleet definition."""
    ships: list[ShipSpec] = []
    for chunk in raw.split(","):
        entry = chunk.strip()
        if not entry:
            continue
        name, sep, length = entry.rpartition(":")
        if not sep or not name.strip():
            raise ValueError(f"Invalid fleet entry '{entry}', expected NAME:LENGTH.")
        try:
            ships.append(ShipSpec(name=name.strip(), length=int(length)))
        except ValueError as exc:
            raise ValueError(f"Invalid ship length in '{entry}'.") from exc
    if not ships:
        raise ValueError("Fleet definition is empty.")
    return tuple(ships)


def load_game_config(environ: Mapping[str, str] | None = None) -> GameConfig:
    """Build the game configuration from SALVO_BOARD_SIZE and SALVO_FLEET."""
    env = os.environ if environ is None else environ
    raw_size = env.get("SALVO_BOARD_SIZE", "").strip()
    try:
        size = int(raw_size) if raw_size else BOARD_SIZE
    except ValueError as exc:
        raise ValueError(f"SALVO_BOARD_SIZE must be an integer, got '{raw_size}'.") from exc
    raw_fleet = env.get("SALVO_FLEET", "").strip()
    fleet = parse_fleet(raw_fleet) if raw_fleet else DEFAULT_FLEET
    return ensure_valid_config(GameConfig(board_size=size, fleet=fleet))


def _resolve_env_path(path: str) -> Path:
    """Resolve env path from cwd, frozen exe dir, then project root."""
    candidate = Path(path)
    if candidate.exists():
        return candidate

    if getattr(sys, "frozen", False):
        executable = getattr(sys, "executable", "")
        if executable:
            frozen_dir_candidate = Path(executable).resolve().parent / path
            if frozen_dir_candidate.exists():
                return frozen_dir_candidate

    # Fallback for IDE run configs with different working directory.
    project_root = Path(__file__).resolve().parents[3]
    return project_root / path
