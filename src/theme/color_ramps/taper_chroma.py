"""Gamut-safe chroma tapering for ramp steps.

Given the seed and a target lightness, the chroma of the generated color is
derived from how much chroma the gamut can hold at that lightness, scaled by
how vivid the seed is relative to its own capacity:

    C_intended = alpha * Cmax(Lt, H0) * (C_seed / Cmax(Ls, H0)) ** carry

A raised-cosine taper on |Lt - Ls| then softly desaturates steps far from the
seed, and the result is clamped downward only: it never leaves the gamut and
never exceeds the seed's own chroma.

Achromatic seeds (chroma below ``achroma_epsilon`` or undefined hue) stay gray
unless ``hue_fallback`` is configured.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from config import settings

from .color_adapter import Color, in_gamut, is_achromatic_hue, oklch_color, oklch_coords
from .constants import CHROMA_CAPACITY_ITERATIONS
from .ramp_cache import ChromaCapacityCache

__all__ = [
    "TaperChromaOptions",
    "TaperResult",
    "taper_chroma",
    "max_chroma_at",
    "continuous_taper",
]


@dataclass(frozen=True)
class TaperChromaOptions:
    gamut: str = settings.DEFAULT_GAMUT
    alpha: float = 0.65  # fraction of Cmax at the target lightness
    carry: float = 0.5  # seed vividness carry exponent, in [0, 1]
    chroma_upper_bound: float = 0.45  # hard cap for the capacity search
    # Distance in L over which the floor multiplier is reached, per side
    radius_light: float = 0.2
    radius_dark: float = 0.2
    floor_light: float = 0.85
    floor_dark: float = 0.85
    hue_fallback: Optional[float] = None  # degrees, used for achromatic seeds
    achroma_epsilon: float = 0.005


@dataclass(frozen=True)
class TaperResult:
    lightness: float
    chroma: float


DEFAULT_TAPER_OPTIONS = TaperChromaOptions()


def _clamp01(x: float) -> float:
    if x < 0:
        return 0.0
    if x > 1:
        return 1.0
    return x


def _normalize_hue(h: float) -> float:
    return h % 360.0


def _raised_cosine(u: float) -> float:
    x = _clamp01(u)
    return 0.5 - 0.5 * math.cos(math.pi * x)


def continuous_taper(seed_l: float, target_l: float, options: TaperChromaOptions) -> float:
    """Chroma multiplier in [floor, 1] as a function of distance from the seed."""
    d = target_l - seed_l
    if d >= 0:
        radius, floor = options.radius_light, options.floor_light
    else:
        radius, floor = options.radius_dark, options.floor_dark
    u = abs(d) / radius if radius > 0 else 1.0
    w = _raised_cosine(min(u, 1.0))
    return 1 - (1 - floor) * w


def _search_max_chroma(lightness: float, hue: float, gamut: str, cap: float) -> float:
    lo, hi, ok = 0.0, cap, 0.0
    for _ in range(CHROMA_CAPACITY_ITERATIONS):
        mid = (lo + hi) / 2
        if in_gamut(oklch_color(lightness, mid, hue), gamut):
            ok = lo = mid
        else:
            hi = mid
    return ok


def max_chroma_at(
    lightness: float,
    hue: float,
    gamut: str,
    cap: float,
    cache: Optional[ChromaCapacityCache] = None,
) -> float:
    """Largest chroma that stays in ``gamut`` at fixed (lightness, hue), up to ``cap``."""
    l_fixed = _clamp01(lightness)
    h_fixed = _normalize_hue(hue)
    if cache is None:
        return _search_max_chroma(l_fixed, h_fixed, gamut, cap)
    return cache.get_or_compute(
        l_fixed, h_fixed, gamut, cap, lambda: _search_max_chroma(l_fixed, h_fixed, gamut, cap)
    )


def taper_chroma(
    seed: Color,
    target_lightness: float,
    options: Optional[TaperChromaOptions] = None,
    *,
    cache: Optional[ChromaCapacityCache] = None,
) -> TaperResult:
    opts = options or DEFAULT_TAPER_OPTIONS
    seed_l, seed_c, seed_h = oklch_coords(seed)
    seed_c = max(0.0, seed_c)
    l_out = _clamp01(target_lightness)

    if seed_c < opts.achroma_epsilon or is_achromatic_hue(seed_h):
        if opts.hue_fallback is None:
            # Respect an intentionally gray seed
            return TaperResult(lightness=l_out, chroma=0.0)
        seed_h = _normalize_hue(opts.hue_fallback)

    seed_l = _clamp01(seed_l)
    cap = opts.chroma_upper_bound
    cmax_seed = max_chroma_at(seed_l, seed_h, opts.gamut, cap, cache)
    cmax_target = max_chroma_at(l_out, seed_h, opts.gamut, cap, cache)

    seed_vividness = _clamp01(seed_c / (cmax_seed if cmax_seed > 0 else 1e-6))
    planned = opts.alpha * cmax_target * seed_vividness ** _clamp01(opts.carry)
    planned *= continuous_taper(seed_l, l_out, opts)

    if not in_gamut(oklch_color(l_out, planned, seed_h), opts.gamut):
        planned = max_chroma_at(l_out, seed_h, opts.gamut, min(planned, cap), cache)

    return TaperResult(lightness=l_out, chroma=min(planned, seed_c))
