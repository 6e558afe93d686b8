"""Contrast utilities for validating finished ramps.

Public API:
- contrast_ratio(fg: str, bg: str) -> float
- validate_ramp_contrast(result: RampResult, combinations=CONTRAST_COMBINATIONS) -> list[str]

Each combination lists background roles, foreground roles and the WCAG 2.1
target every foreground must reach on every background.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from .color_adapter import contrast_wcag21, parse_color
from .constants import CONTRAST_COMBINATIONS, ContrastCombination
from .ramp_cache import RampCaches
from .ramp_types import RampResult

__all__ = ["contrast_ratio", "validate_ramp_contrast"]


def contrast_ratio(fg: str, bg: str, *, caches: Optional[RampCaches] = None) -> float:
    fg_color = parse_color(fg)
    bg_color = parse_color(bg)
    if caches is None:
        return contrast_wcag21(fg_color, bg_color)
    return caches.contrast_of(fg_color, bg_color)


def validate_ramp_contrast(
    result: RampResult,
    combinations: Iterable[ContrastCombination] = CONTRAST_COMBINATIONS,
    *,
    caches: Optional[RampCaches] = None,
) -> List[str]:
    """Check foreground/background role pairs of a built ramp.

    Returns
    -------
    list[str]
        A list of failure messages (empty if all pass).
    """
    failures: List[str] = []
    for combo in combinations:
        for bg_role in combo.bgs:
            for fg_role in combo.fgs:
                if bg_role not in result.ramp or fg_role not in result.ramp:
                    missing = bg_role if bg_role not in result.ramp else fg_role
                    failures.append(f"[missing-role] {fg_role} on {bg_role}: no {missing} in ramp")
                    continue
                fg = result.ramp[fg_role].color
                bg = result.ramp[bg_role].color
                ratio = contrast_ratio(fg, bg, caches=caches)
                if ratio < combo.target:
                    failures.append(
                        f"[contrast-fail] {fg_role} on {bg_role}: ratio={ratio:.2f} < "
                        f"{combo.target} (fg={fg} bg={bg})"
                    )
    return failures
