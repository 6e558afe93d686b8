"""In-memory caches for the expensive color math of a ramp build.

Building a ramp compares and serializes the same colors many times over, and
the chroma taper keeps asking for the in-gamut chroma capacity of nearby
lightness/hue pairs. These caches are plain dicts owned by whoever creates
them (usually one ``RampBuilder``); nothing is shared at module level.

Design notes:
 - ``ColorStringCache`` is keyed by color value (space + coordinates + alpha),
   so structurally equal colors share an entry even when they are distinct
   objects.
 - ``ContrastCache`` keys on the unordered pair of hex strings, so
   ``contrast_of(a, b) == contrast_of(b, a)``.
 - ``ChromaCapacityCache`` keys on quantized ``(l, h, gamut, cap)`` to stay small.
 - No eviction; call ``clear()`` between unrelated batches of work.
 - Not thread-safe: give each worker thread its own ``RampCaches``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Dict, Hashable, Optional, Tuple

from .color_adapter import Color, contrast_wcag21, to_hex

__all__ = [
    "ColorStringCache",
    "ContrastCache",
    "ChromaCapacityCache",
    "RampCaches",
    "quantize",
]


def quantize(value: float, step: float) -> float:
    return round(value / step) * step


def _value_key(color: Color) -> Tuple[Hashable, ...]:
    coords = tuple(None if math.isnan(v) else float(v) for v in color.coords())
    return (color.space(), coords, float(color.alpha()))


class ColorStringCache:
    """Canonical hex string per color value."""

    def __init__(self) -> None:
        self._store: Dict[Tuple[Hashable, ...], str] = {}
        self.hits = 0
        self.misses = 0

    def string_of(self, color: Color) -> str:
        key = _value_key(color)
        cached = self._store.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        value = to_hex(color)
        self._store[key] = value
        return value

    def clear(self) -> None:
        self._store.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._store)


class ContrastCache:
    """WCAG 2.1 contrast per unordered pair of colors."""

    def __init__(self, strings: Optional[ColorStringCache] = None) -> None:
        # Empty caches are falsy; test identity so a shared cache is kept
        self._strings = strings if strings is not None else ColorStringCache()
        self._store: Dict[Tuple[str, str], float] = {}
        self.hits = 0
        self.misses = 0

    @property
    def strings(self) -> ColorStringCache:
        return self._strings

    def contrast_of(self, a: Color, b: Color) -> float:
        sa = self._strings.string_of(a)
        sb = self._strings.string_of(b)
        key = (sa, sb) if sa <= sb else (sb, sa)
        cached = self._store.get(key)
        if cached is not None:
            self.hits += 1
            return cached
        self.misses += 1
        value = contrast_wcag21(a, b)
        self._store[key] = value
        return value

    def clear(self) -> None:
        """Drop contrast entries; a shared string cache is left to its owner."""
        self._store.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._store)


class ChromaCapacityCache:
    """Max in-gamut chroma per quantized (lightness, hue, gamut, cap)."""

    L_STEP = 1e-3
    H_STEP = 1e-1
    CAP_STEP = 1e-3

    def __init__(self) -> None:
        self._store: Dict[Tuple[str, float, float, float], float] = {}

    def _key(self, lightness: float, hue: float, gamut: str, cap: float) -> Tuple[str, float, float, float]:
        return (
            gamut,
            quantize(lightness, self.L_STEP),
            quantize(hue % 360.0, self.H_STEP),
            quantize(cap, self.CAP_STEP),
        )

    def get_or_compute(
        self,
        lightness: float,
        hue: float,
        gamut: str,
        cap: float,
        compute_fn: Callable[[], float],
    ) -> float:
        key = self._key(lightness, hue, gamut, cap)
        cached = self._store.get(key)
        if cached is not None:
            return cached
        value = compute_fn()
        self._store[key] = value
        return value

    def clear(self) -> None:
        self._store.clear()

    def __len__(self) -> int:
        return len(self._store)


@dataclass
class RampCaches:
    strings: ColorStringCache = field(default_factory=ColorStringCache)
    contrast: ContrastCache = field(init=False)
    chroma_capacity: ChromaCapacityCache = field(default_factory=ChromaCapacityCache)

    def __post_init__(self) -> None:
        self.contrast = ContrastCache(self.strings)

    def contrast_of(self, a: Color, b: Color) -> float:
        return self.contrast.contrast_of(a, b)

    def string_of(self, color: Color) -> str:
        return self.strings.string_of(color)

    def clear(self) -> None:
        self.strings.clear()
        self.contrast.clear()
        self.chroma_capacity.clear()
