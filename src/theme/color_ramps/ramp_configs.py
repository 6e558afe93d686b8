"""Built-in ramp configurations.

BG_RAMP:     seed => surface2 => {bgFill1, surface3 => all other roles}
ACCENT_RAMP: seed => bgFill1 => surface2 => surface3 => all other roles
"""

from __future__ import annotations

from dataclasses import replace
from typing import Dict

from .ramp_types import ContrastRequirement, LightnessOverride, RampStepConfig
from .taper_chroma import TaperChromaOptions

__all__ = ["BG_RAMP_CONFIG", "ACCENT_RAMP_CONFIG"]

# #f0f0f0 on dark ramps, #1e1e1e on light ones
FOREGROUND_HIGH_CONTRAST_LIGHTNESS = LightnessOverride.by_direction(lighter=0.9551, darker=0.235)
# #b4b4b4 / #747474
FOREGROUND_MEDIUM_CONTRAST_LIGHTNESS = LightnessOverride.by_direction(lighter=0.77, darker=0.56)
# #969696 (7:1 vs black) / #555555 (7:1 vs white)
BG_FILL_LIGHTNESS = LightnessOverride.by_direction(lighter=0.67, darker=0.45)

BG_SURFACE_TAPER_CHROMA = TaperChromaOptions(alpha=0.7)
FG_TAPER_CHROMA = TaperChromaOptions(alpha=0.6, floor_light=0.2, floor_dark=0.2)
STROKE_TAPER_CHROMA = TaperChromaOptions(
    alpha=0.6, radius_dark=0.01, radius_light=0.01, floor_light=0.8, floor_dark=0.8
)
ACCENT_SURFACE_TAPER_CHROMA = TaperChromaOptions(alpha=0.75, radius_dark=0.01, radius_light=0.01)


def _step(reference: str, follow: str, target: float, **kwargs) -> ContrastRequirement:
    return ContrastRequirement(reference=reference, follow_direction=follow, target=target, **kwargs)  # type: ignore[arg-type]


_FG_SURFACE4 = RampStepConfig(
    contrast=_step("surface3", "main", 7, prefer_lighter=True),
    lightness=FOREGROUND_HIGH_CONTRAST_LIGHTNESS,
    taper_chroma_options=FG_TAPER_CHROMA,
)

BG_RAMP_CONFIG: Dict[str, RampStepConfig] = {
    # Surfaces
    "surface1": RampStepConfig(
        contrast=_step("surface2", "opposite", 1.02, ignore_when_adjusting_seed=True),
        taper_chroma_options=BG_SURFACE_TAPER_CHROMA,
    ),
    "surface2": RampStepConfig(contrast=_step("seed", "main", 1)),
    "surface3": RampStepConfig(
        contrast=_step("surface2", "main", 1.02),
        taper_chroma_options=BG_SURFACE_TAPER_CHROMA,
    ),
    "surface4": RampStepConfig(
        contrast=_step("surface2", "main", 1.08),
        taper_chroma_options=BG_SURFACE_TAPER_CHROMA,
    ),
    "surface5": RampStepConfig(
        contrast=_step("surface2", "main", 1.2),
        taper_chroma_options=BG_SURFACE_TAPER_CHROMA,
    ),
    "surface6": RampStepConfig(
        contrast=_step("surface2", "main", 1.4),
        taper_chroma_options=BG_SURFACE_TAPER_CHROMA,
    ),
    # Fills
    "bgFill1": RampStepConfig(
        contrast=_step("surface2", "main", 4),
        lightness=BG_FILL_LIGHTNESS,
    ),
    "bgFill2": RampStepConfig(contrast=_step("bgFill1", "main", 1.2)),
    "bgFillInverted1": RampStepConfig(contrast=_step("bgFillInverted2", "opposite", 1.2)),
    "bgFillInverted2": _FG_SURFACE4,
    "bgFillDark": RampStepConfig(
        # Always dark, whatever the ramp direction
        contrast=_step("surface3", "darker", 7, ignore_when_adjusting_seed=True),
        lightness=FOREGROUND_HIGH_CONTRAST_LIGHTNESS,
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
    # Strokes
    "stroke1": RampStepConfig(
        contrast=_step("stroke3", "opposite", 2.2),
        taper_chroma_options=STROKE_TAPER_CHROMA,
    ),
    "stroke2": RampStepConfig(
        contrast=_step("stroke3", "opposite", 1.5),
        taper_chroma_options=STROKE_TAPER_CHROMA,
    ),
    "stroke3": RampStepConfig(
        contrast=_step("surface3", "main", 3),
        taper_chroma_options=STROKE_TAPER_CHROMA,
    ),
    "stroke4": RampStepConfig(
        contrast=_step("stroke3", "main", 1.5),
        taper_chroma_options=STROKE_TAPER_CHROMA,
    ),
    # Foregrounds on surfaces
    "fgSurface1": RampStepConfig(
        contrast=_step("surface3", "main", 2, prefer_lighter=True),
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
    "fgSurface2": RampStepConfig(
        contrast=_step("surface3", "main", 3, prefer_lighter=True),
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
    "fgSurface3": RampStepConfig(
        contrast=_step("surface3", "main", 4.5, prefer_lighter=True),
        lightness=FOREGROUND_MEDIUM_CONTRAST_LIGHTNESS,
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
    "fgSurface4": _FG_SURFACE4,
    # Foregrounds on fills
    "fgFill": RampStepConfig(
        contrast=_step("bgFill1", "best", 4.5, prefer_lighter=True),
        lightness=FOREGROUND_HIGH_CONTRAST_LIGHTNESS,
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
    "fgFillInverted": RampStepConfig(
        contrast=_step("bgFillInverted1", "best", 4.5, prefer_lighter=True),
        lightness=FOREGROUND_HIGH_CONTRAST_LIGHTNESS,
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
    "fgFillDark": RampStepConfig(
        contrast=_step("bgFillDark", "best", 4.5, prefer_lighter=True),
        lightness=FOREGROUND_HIGH_CONTRAST_LIGHTNESS,
        taper_chroma_options=FG_TAPER_CHROMA,
    ),
}

ACCENT_RAMP_CONFIG: Dict[str, RampStepConfig] = {
    **BG_RAMP_CONFIG,
    "surface1": replace(
        BG_RAMP_CONFIG["surface1"], taper_chroma_options=ACCENT_SURFACE_TAPER_CHROMA
    ),
    "surface2": RampStepConfig(
        contrast=_step(
            "bgFill1",
            "opposite",
            BG_RAMP_CONFIG["bgFill1"].contrast.target,
            ignore_when_adjusting_seed=True,
        ),
        taper_chroma_options=ACCENT_SURFACE_TAPER_CHROMA,
    ),
    "surface3": replace(
        BG_RAMP_CONFIG["surface3"], taper_chroma_options=ACCENT_SURFACE_TAPER_CHROMA
    ),
    "surface4": replace(
        BG_RAMP_CONFIG["surface4"], taper_chroma_options=ACCENT_SURFACE_TAPER_CHROMA
    ),
    "surface5": replace(
        BG_RAMP_CONFIG["surface5"], taper_chroma_options=ACCENT_SURFACE_TAPER_CHROMA
    ),
    "surface6": replace(
        BG_RAMP_CONFIG["surface6"], taper_chroma_options=ACCENT_SURFACE_TAPER_CHROMA
    ),
    "bgFill1": RampStepConfig(contrast=_step("seed", "main", 1)),
    "stroke3": replace(
        BG_RAMP_CONFIG["stroke3"], same_as_if_possible="fgSurface3", taper_chroma_options=None
    ),
    "stroke4": replace(BG_RAMP_CONFIG["stroke4"], taper_chroma_options=None),
    # Accent foregrounds keep the seed's saturation
    "fgSurface1": replace(BG_RAMP_CONFIG["fgSurface1"], taper_chroma_options=None),
    "fgSurface2": replace(BG_RAMP_CONFIG["fgSurface2"], taper_chroma_options=None),
    "fgSurface3": replace(
        BG_RAMP_CONFIG["fgSurface3"], taper_chroma_options=None, same_as_if_possible="bgFill1"
    ),
    "fgSurface4": replace(BG_RAMP_CONFIG["fgSurface4"], taper_chroma_options=None),
}
