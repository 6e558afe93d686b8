"""Tunables shared by the ramp search, taper and builder modules.

- Iteration caps and epsilons for the bisection searches
- Contrast margins (universal top-up, light text bias)
- Accent scale reference lightness thresholds
- Contrast combinations used to validate finished ramps
- Default seed colors
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Tuple

# Minimum lightness difference noticed by the bisection searches.
LIGHTNESS_EPSILON: float = 1e-3

MAX_BISECTION_ITERATIONS: int = 25
CHROMA_CAPACITY_ITERATIONS: int = 18

# Added to every contrast target above 1 to absorb rounding and search imprecision.
UNIVERSAL_CONTRAST_TOPUP: float = 0.05

# How much more contrast black text must achieve over white text before the
# "prefer lighter" bias gives up on white. Highest value found empirically that
# still lets every contrast in the default configs be solved.
WHITE_TEXT_CONTRAST_MARGIN: float = 3.1

# Accent ramps pin their surface2 to the background ramp's lightness; these
# bounds keep that pin away from mid-range values the accent constraints cannot
# satisfy.
ACCENT_SCALE_BASE_LIGHTNESS_THRESHOLDS: Mapping[str, Tuple[float, float]] = {
    "lighter": (0.2, 0.4),
    "darker": (0.75, 0.98),
}


@dataclass(frozen=True)
class ContrastCombination:
    """Every foreground in ``fgs`` must reach ``target`` against every ``bgs``."""

    bgs: Tuple[str, ...]
    fgs: Tuple[str, ...]
    target: float


CONTRAST_COMBINATIONS: Tuple[ContrastCombination, ...] = (
    ContrastCombination(("surface1", "surface2", "surface3"), ("fgSurface3", "fgSurface4"), 4.5),
    ContrastCombination(("surface4", "surface5"), ("fgSurface4",), 4.5),
    ContrastCombination(("bgFill1",), ("fgFill",), 4.5),
    ContrastCombination(("bgFillInverted1",), ("fgFillInverted",), 4.5),
    ContrastCombination(("surface1", "surface2", "surface3"), ("stroke3",), 3.0),
)

DEFAULT_SEED_COLORS: Dict[str, str] = {
    "bg": "#f8f8f8",
    "primary": "#3858e9",
    "info": "#0090ff",
    "success": "#4ab866",
    "warning": "#f0b849",
    "error": "#cc1818",
}

__all__ = [
    "LIGHTNESS_EPSILON",
    "MAX_BISECTION_ITERATIONS",
    "CHROMA_CAPACITY_ITERATIONS",
    "UNIVERSAL_CONTRAST_TOPUP",
    "WHITE_TEXT_CONTRAST_MARGIN",
    "ACCENT_SCALE_BASE_LIGHTNESS_THRESHOLDS",
    "ContrastCombination",
    "CONTRAST_COMBINATIONS",
    "DEFAULT_SEED_COLORS",
]
