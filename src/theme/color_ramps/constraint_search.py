"""Find a color meeting a contrast target against a reference.

Solves for a lightness L such that the seed, moved to L (and optionally
chroma-tapered), reaches ``target`` WCAG contrast against ``reference`` while
moving in a single direction (lighter or darker).

Search outline:
 1. target <= 1 is trivially met by the seed itself.
 2. A lightness constraint pins L: ``force`` applies it unconditionally,
    ``only_if_succeeds`` returns it only when it already meets the target.
 3. White (lighter) or black (darker) bounds what is reachable. If even the
    boundary misses the target, raise in strict mode or return the boundary
    with ``reached=False``.
 4. Otherwise bisect between the reference lightness (assumed to fail) and the
    boundary (known to succeed). The result only moves on a success, so once
    the boundary check passes the returned color always meets the target.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from config import settings

from .color_adapter import BLACK, WHITE, Color, clamp_to_gamut, oklch_color, oklch_coords
from .constants import LIGHTNESS_EPSILON, MAX_BISECTION_ITERATIONS
from .ramp_cache import RampCaches
from .ramp_types import RAMP_DIRECTIONS, RampError
from .taper_chroma import TaperChromaOptions, taper_chroma

_logger = logging.getLogger(__name__)

__all__ = [
    "LightnessConstraint",
    "SearchResult",
    "UnreachableTargetError",
    "find_color_meeting_requirements",
]


class UnreachableTargetError(RampError):
    """Raised in strict mode when even the directional boundary misses the target."""

    def __init__(self, target: float, direction: str, achieved: float) -> None:
        super().__init__(
            f"Contrast target {target:.2f}:1 unreachable in {direction} direction "
            f"(boundary achieves {achieved:.3f}:1)."
        )
        self.target = target
        self.direction = direction
        self.achieved = achieved


@dataclass(frozen=True)
class LightnessConstraint:
    kind: Literal["force", "only_if_succeeds"]
    value: float

    def __post_init__(self) -> None:
        if self.kind not in ("force", "only_if_succeeds"):
            raise ValueError(f"Unknown lightness constraint kind: {self.kind}")


@dataclass(frozen=True)
class SearchResult:
    color: Color
    reached: bool
    achieved: float


def _candidate(
    seed: Color,
    lightness: float,
    taper_options: Optional[TaperChromaOptions],
    caches: RampCaches,
    gamut: str,
) -> Color:
    _, chroma, hue = oklch_coords(seed)
    if taper_options is not None:
        tapered = taper_chroma(seed, lightness, taper_options, cache=caches.chroma_capacity)
        lightness, chroma = tapered.lightness, tapered.chroma
    return clamp_to_gamut(oklch_color(lightness, chroma, hue), gamut)


def find_color_meeting_requirements(
    reference: Color,
    seed: Color,
    target: float,
    direction: str,
    *,
    lightness_constraint: Optional[LightnessConstraint] = None,
    taper_chroma_options: Optional[TaperChromaOptions] = None,
    strict: bool = True,
    caches: Optional[RampCaches] = None,
    gamut: str = settings.DEFAULT_GAMUT,
) -> SearchResult:
    if direction not in RAMP_DIRECTIONS:
        raise ValueError(f"Unknown search direction: {direction}")
    # A target of 1 means the same color; anything lower is meaningless.
    if target <= 1:
        return SearchResult(color=seed.clone(), reached=True, achieved=1.0)

    caches = caches if caches is not None else RampCaches()

    if lightness_constraint is not None:
        pinned = _candidate(seed, lightness_constraint.value, taper_chroma_options, caches, gamut)
        pinned_contrast = caches.contrast_of(reference, pinned)
        if lightness_constraint.kind == "force" or pinned_contrast >= target:
            _logger.debug(
                "applied %s lightness %.4f (contrast %.3f, target %.3f)",
                lightness_constraint.kind,
                lightness_constraint.value,
                pinned_contrast,
                target,
            )
            return SearchResult(
                color=pinned, reached=pinned_contrast >= target, achieved=pinned_contrast
            )

    boundary_l = 1.0 if direction == "lighter" else 0.0
    boundary = WHITE if direction == "lighter" else BLACK
    boundary_contrast = caches.contrast_of(reference, boundary)

    if boundary_contrast < target:
        if strict:
            raise UnreachableTargetError(target, direction, boundary_contrast)
        _logger.debug(
            "target %.3f unreachable %s, boundary achieves %.3f",
            target,
            direction,
            boundary_contrast,
        )
        return SearchResult(color=boundary.clone(), reached=False, achieved=boundary_contrast)

    # Bracket: worse fails, better meets.
    worse_l = oklch_coords(reference)[0]
    better_l = boundary_l
    best_contrast = boundary_contrast
    result = boundary.clone()

    iterations = 0
    while iterations < MAX_BISECTION_ITERATIONS and abs(better_l - worse_l) > LIGHTNESS_EPSILON:
        iterations += 1
        mid_l = (worse_l + better_l) / 2
        candidate = _candidate(seed, mid_l, taper_chroma_options, caches, gamut)
        contrast = caches.contrast_of(reference, candidate)
        if contrast >= target:
            better_l = mid_l
            best_contrast = contrast
            result = candidate
        else:
            worse_l = mid_l

    return SearchResult(color=result, reached=True, achieved=best_contrast)
