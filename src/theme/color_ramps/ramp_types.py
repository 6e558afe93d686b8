"""Value objects describing ramp configurations and results.

A ramp is a fixed set of named roles (surfaces, strokes, fills, foregrounds).
Each role is configured with a contrast requirement against a reference role
(or the ``seed`` pseudo-role), an optional lightness override and optional
chroma taper options. Builders produce a ``RampResult`` mapping every role to
a hex color plus a warning flag.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Literal, Mapping, Optional, Tuple

if TYPE_CHECKING:
    from .taper_chroma import TaperChromaOptions

__all__ = [
    "RampError",
    "RampDirection",
    "FollowDirection",
    "SEED",
    "RAMP_ROLES",
    "RAMP_DIRECTIONS",
    "FOLLOW_DIRECTIONS",
    "opposite_direction",
    "LightnessOverride",
    "NO_LIGHTNESS_OVERRIDE",
    "ContrastRequirement",
    "RampStepConfig",
    "RampConfig",
    "RampEntry",
    "RampResult",
]


class RampError(RuntimeError):
    """Base class for color ramp engine errors."""


RampDirection = Literal["lighter", "darker"]
FollowDirection = Literal["main", "opposite", "best", "lighter", "darker"]

SEED = "seed"

RAMP_ROLES: Tuple[str, ...] = (
    # Surfaces (nuanced variations around the seed)
    "surface1",
    "surface2",
    "surface3",
    "surface4",
    "surface5",
    "surface6",
    # Strokes
    "stroke1",
    "stroke2",
    "stroke3",
    "stroke4",
    # Stronger backgrounds for primary UI elements
    "bgFill1",
    "bgFill2",
    "bgFillInverted1",
    "bgFillInverted2",
    "bgFillDark",
    # Foregrounds on surfaces
    "fgSurface1",
    "fgSurface2",
    "fgSurface3",
    "fgSurface4",
    # Foregrounds on fills
    "fgFill",
    "fgFillInverted",
    "fgFillDark",
)

RAMP_DIRECTIONS: Tuple[str, ...] = ("lighter", "darker")
FOLLOW_DIRECTIONS: Tuple[str, ...] = ("main", "opposite", "best", "lighter", "darker")


def opposite_direction(direction: str) -> RampDirection:
    if direction not in RAMP_DIRECTIONS:
        raise ValueError(f"Unknown ramp direction: {direction}")
    return "lighter" if direction == "darker" else "darker"


@dataclass(frozen=True)
class LightnessOverride:
    """Preferred lightness for a role, as plain data.

    ``kind`` is one of ``none`` (no override), ``fixed`` (``value`` regardless of
    direction) or ``by_direction`` (``lighter`` / ``darker`` picked by the
    direction the role is searched in).
    """

    kind: Literal["none", "fixed", "by_direction"] = "none"
    value: Optional[float] = None
    lighter: Optional[float] = None
    darker: Optional[float] = None

    def __post_init__(self) -> None:
        if self.kind not in ("none", "fixed", "by_direction"):
            raise ValueError(f"Unknown lightness override kind: {self.kind}")
        if self.kind == "fixed" and self.value is None:
            raise ValueError("fixed lightness override requires a value")
        if self.kind == "by_direction" and (self.lighter is None or self.darker is None):
            raise ValueError("by_direction lightness override requires lighter and darker values")

    @classmethod
    def fixed(cls, value: float) -> "LightnessOverride":
        return cls(kind="fixed", value=value)

    @classmethod
    def by_direction(cls, *, lighter: float, darker: float) -> "LightnessOverride":
        return cls(kind="by_direction", lighter=lighter, darker=darker)

    def resolve(self, direction: str) -> Optional[float]:
        if self.kind == "fixed":
            return self.value
        if self.kind == "by_direction":
            return self.lighter if direction == "lighter" else self.darker
        return None


NO_LIGHTNESS_OVERRIDE = LightnessOverride()


@dataclass(frozen=True)
class ContrastRequirement:
    """Contrast a role must reach against its reference.

    follow_direction:
      - main: the ramp's main direction
      - opposite: the other direction
      - best: whichever direction has more contrast headroom
      - lighter / darker: hardcoded, regardless of the ramp direction
    prefer_lighter biases ``best`` toward light foregrounds, countering WCAG's
    under-statement of white text contrast over mid-lightness backgrounds.
    ignore_when_adjusting_seed keeps a miss on this role from triggering the
    seed rescaling loop (and from being flagged as a warning).
    """

    reference: str
    follow_direction: FollowDirection
    target: float
    prefer_lighter: bool = False
    ignore_when_adjusting_seed: bool = False

    def __post_init__(self) -> None:
        if self.target < 1:
            raise ValueError(f"Contrast target must be >= 1, got {self.target}")
        if self.follow_direction not in FOLLOW_DIRECTIONS:
            raise ValueError(f"Unknown follow direction: {self.follow_direction}")


@dataclass(frozen=True)
class RampStepConfig:
    contrast: ContrastRequirement
    lightness: LightnessOverride = NO_LIGHTNESS_OVERRIDE
    taper_chroma_options: Optional[TaperChromaOptions] = None
    # Reuse this role's color when it already meets the requirement
    same_as_if_possible: Optional[str] = None


RampConfig = Mapping[str, RampStepConfig]


@dataclass(frozen=True)
class RampEntry:
    color: str
    warning: bool = False


@dataclass
class RampResult:
    ramp: Dict[str, RampEntry] = field(default_factory=dict)
    direction: RampDirection = "lighter"

    def __getitem__(self, role: str) -> RampEntry:
        return self.ramp[role]

    def colors(self) -> Dict[str, str]:
        return {role: entry.color for role, entry in self.ramp.items()}

    def warnings(self) -> List[str]:
        return [role for role, entry in self.ramp.items() if entry.warning]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "ramp": {
                role: {"color": entry.color, "warning": entry.warning}
                for role, entry in self.ramp.items()
            },
            "direction": self.direction,
        }
