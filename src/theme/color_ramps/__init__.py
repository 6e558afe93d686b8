"""Accessible color ramp engine.

Derives a full palette of interdependent roles (surfaces, strokes, fills,
foregrounds) from one seed color so that every role meets its WCAG 2.1
contrast requirement against its reference, keeping the seed's hue and
tapering its chroma away from the seed lightness.

Quick start:
    from theme.color_ramps import build_bg_ramp, build_accent_ramp
    bg = build_bg_ramp("#f8f8f8")
    primary = build_accent_ramp("#3858e9", bg)
"""

from .color_adapter import InvalidSeedColorError, clamp_to_gamut, parse_color  # noqa: F401
from .constants import CONTRAST_COMBINATIONS, DEFAULT_SEED_COLORS  # noqa: F401
from .constraint_search import (  # noqa: F401
    LightnessConstraint,
    SearchResult,
    UnreachableTargetError,
    find_color_meeting_requirements,
)
from .contrast import contrast_ratio, validate_ramp_contrast  # noqa: F401
from .dependency import CircularDependencyError, sort_by_dependency  # noqa: F401
from .ramp_builder import (  # noqa: F401
    RampBuilder,
    build_accent_ramp,
    build_bg_ramp,
    build_default_ramps,
    build_ramp,
)
from .ramp_cache import RampCaches  # noqa: F401
from .ramp_configs import ACCENT_RAMP_CONFIG, BG_RAMP_CONFIG  # noqa: F401
from .ramp_types import (  # noqa: F401
    RAMP_ROLES,
    ContrastRequirement,
    LightnessOverride,
    RampEntry,
    RampError,
    RampResult,
    RampStepConfig,
)
from .taper_chroma import TaperChromaOptions, TaperResult, taper_chroma  # noqa: F401

__version__ = "0.1.0"
