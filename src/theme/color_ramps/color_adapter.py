"""Color math boundary for the ramp engine, backed by ``coloraide``.

Everything the engine needs from a color library goes through here:
parsing, OKLCH construction and inspection, gamut membership and mapping,
WCAG 2.1 contrast and hex serialization. Colors handed out are ``coloraide``
``Color`` objects; callers treat them as immutable and clone before mutating.

Gamut names used across the engine are ``"p3"`` and ``"srgb"``.
"""

from __future__ import annotations

import math
from typing import Tuple

from coloraide import Color

from config import settings

from .ramp_types import RampError

__all__ = [
    "Color",
    "InvalidSeedColorError",
    "GAMUT_MAP_METHOD",
    "gamut_space",
    "parse_color",
    "clamp_to_gamut",
    "oklch_color",
    "oklch_coords",
    "with_lightness",
    "in_gamut",
    "contrast_wcag21",
    "to_hex",
    "is_achromatic_hue",
    "WHITE",
    "BLACK",
]

_GAMUT_SPACES = {"p3": "display-p3", "srgb": "srgb"}

# Chroma reduction in OKLCH, the approach CSS Color 4 describes for gamut mapping
GAMUT_MAP_METHOD = "oklch-chroma"


class InvalidSeedColorError(RampError, ValueError):
    """Raised when a seed color string cannot be parsed."""

    def __init__(self, value: object, reason: str) -> None:
        super().__init__(f'Invalid seed color "{value}": {reason}')
        self.value = value
        self.reason = reason


def gamut_space(gamut: str) -> str:
    try:
        return _GAMUT_SPACES[gamut]
    except KeyError:
        raise ValueError(f"Unsupported gamut: {gamut}") from None


def parse_color(value: str) -> Color:
    if not isinstance(value, str):
        raise InvalidSeedColorError(value, "expected a color string")
    try:
        return Color(value.strip())
    except (ValueError, TypeError) as exc:
        raise InvalidSeedColorError(value, str(exc) or "unrecognized color") from exc


def clamp_to_gamut(color: Color, gamut: str = settings.DEFAULT_GAMUT) -> Color:
    """Map ``color`` into ``gamut`` and return it as a new OKLCH color."""
    return color.convert(gamut_space(gamut)).fit(method=GAMUT_MAP_METHOD).convert("oklch")


def oklch_color(lightness: float, chroma: float, hue: float) -> Color:
    return Color("oklch", [lightness, chroma, hue])


def oklch_coords(color: Color) -> Tuple[float, float, float]:
    """Return ``(l, c, h)``; ``h`` is NaN for achromatic colors."""
    if color.space() != "oklch":
        color = color.convert("oklch")
    return float(color["lightness"]), float(color["chroma"]), float(color["hue"])


def with_lightness(color: Color, lightness: float) -> Color:
    if color.space() != "oklch":
        color = color.convert("oklch")
    return color.clone().set("lightness", lightness)


def in_gamut(color: Color, gamut: str) -> bool:
    return color.in_gamut(gamut_space(gamut))


def contrast_wcag21(a: Color, b: Color) -> float:
    return float(a.contrast(b, method="wcag21"))


def to_hex(color: Color) -> str:
    return color.convert("srgb").to_string(hex=True)


def is_achromatic_hue(hue: float) -> bool:
    return not math.isfinite(hue)


WHITE = Color("#fff").convert("oklch")
BLACK = Color("#000").convert("oklch")
