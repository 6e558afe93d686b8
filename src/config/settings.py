"""Global configuration for the color ramp engine."""

from __future__ import annotations

import os
from typing import Final


def _env_gamut() -> str:
    value = os.environ.get("COLOR_RAMPS_GAMUT", "p3").strip().lower()
    if value not in ("p3", "srgb"):
        raise ValueError(f"COLOR_RAMPS_GAMUT must be 'p3' or 'srgb', got {value!r}")
    return value


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return max(0, int(raw))
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


# Gamut every generated color is mapped into before it is compared or serialized
DEFAULT_GAMUT: Final = _env_gamut()
LOG_LEVEL: Final = os.environ.get("COLOR_RAMPS_LOG_LEVEL", "WARNING").upper()

# Cap on outer seed-adjustment iterations; callers wanting a time budget lower this
MAX_SEED_RETRIES: Final = _env_int("COLOR_RAMPS_MAX_SEED_RETRIES", 25)
