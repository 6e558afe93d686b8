"""Ramp builder: derive every role of a ramp from one seed color.

One pass walks the roles in dependency order and solves each role's contrast
requirement against its (already computed) reference. When a pass leaves a
requirement unmet, the builder bisects the seed's own lightness and re-runs
the whole pass, keeping the last ramp that met every requirement. If no such
ramp turns up, the first pass is returned with its warnings intact.

The rescaling bracket is steered by the direction of the most severe failure
of the first pass (deficit weighted by how much moving the seed can help).
This is a heuristic, not a joint optimization; warnings on the result signal
when it did not converge.

Usage:
    from theme.color_ramps import build_ramp, BG_RAMP_CONFIG
    result = build_ramp("#3858e9", BG_RAMP_CONFIG)
    result["surface2"].color
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from config import settings

from .color_adapter import (
    BLACK,
    WHITE,
    Color,
    clamp_to_gamut,
    oklch_coords,
    parse_color,
    with_lightness,
)
from .constants import (
    ACCENT_SCALE_BASE_LIGHTNESS_THRESHOLDS,
    DEFAULT_SEED_COLORS,
    LIGHTNESS_EPSILON,
    MAX_BISECTION_ITERATIONS,
    UNIVERSAL_CONTRAST_TOPUP,
    WHITE_TEXT_CONTRAST_MARGIN,
)
from .constraint_search import LightnessConstraint, find_color_meeting_requirements
from .dependency import sort_by_dependency
from .ramp_cache import RampCaches
from .ramp_configs import ACCENT_RAMP_CONFIG, BG_RAMP_CONFIG
from .ramp_types import (
    SEED,
    RampDirection,
    RampEntry,
    RampError,
    RampResult,
    RampStepConfig,
    opposite_direction,
)

_logger = logging.getLogger(__name__)

__all__ = [
    "RampPass",
    "RampBuilder",
    "adjust_contrast_target",
    "compute_better_fg_color_direction",
    "clamp_accent_scale_reference_lightness",
    "build_ramp",
    "build_bg_ramp",
    "build_accent_ramp",
    "build_default_ramps",
]


def adjust_contrast_target(target: float) -> float:
    if target == 1:
        return 1.0
    # Top-up absorbs rounding and search imprecision
    return target + UNIVERSAL_CONTRAST_TOPUP


def compute_better_fg_color_direction(
    seed: Color,
    prefer_lighter: bool = False,
    *,
    caches: Optional[RampCaches] = None,
) -> Tuple[RampDirection, RampDirection]:
    """Return ``(better, worse)``: which direction gives more contrast against ``seed``."""
    caches = caches if caches is not None else RampCaches()
    against_black = caches.contrast_of(seed, BLACK)
    against_white = caches.contrast_of(seed, WHITE)
    margin = WHITE_TEXT_CONTRAST_MARGIN if prefer_lighter else 0.0
    if against_black > against_white + margin:
        return "darker", "lighter"
    return "lighter", "darker"


def clamp_accent_scale_reference_lightness(raw_lightness: float, direction: str) -> float:
    lo, hi = ACCENT_SCALE_BASE_LIGHTNESS_THRESHOLDS[direction]
    return max(lo, min(hi, raw_lightness))


@dataclass
class RampPass:
    """Outcome of one pass over the sorted roles."""

    entries: Dict[str, RampEntry] = field(default_factory=dict)
    satisfied: bool = True
    unsatisfied_direction: RampDirection = "lighter"
    max_weighted_deficit: float = 0.0

    def failing_roles(self) -> List[str]:
        return [role for role, entry in self.entries.items() if entry.warning]


class RampBuilder:
    """Builds ramps; owns the caches shared by every build it runs.

    A builder is meant for a single thread. Reusing one across builds of
    related ramps (a background ramp and its accents) lets them share cached
    contrast and chroma capacity results; call ``caches.clear()`` to drop them.
    """

    def __init__(
        self,
        caches: Optional[RampCaches] = None,
        *,
        gamut: str = settings.DEFAULT_GAMUT,
        max_seed_retries: int = settings.MAX_SEED_RETRIES,
    ) -> None:
        self.caches = caches if caches is not None else RampCaches()
        self.gamut = gamut
        self.max_seed_retries = max_seed_retries

    # Public API -----------------------------------------------------------
    def build(
        self,
        seed: str,
        config: Mapping[str, RampStepConfig],
        *,
        main_direction: Optional[RampDirection] = None,
        pin_lightness: Optional[Tuple[str, float]] = None,
        rescale_to_fit_contrast_targets: bool = True,
    ) -> RampResult:
        seed_color = clamp_to_gamut(parse_color(seed), self.gamut)

        if main_direction is not None:
            main_dir: RampDirection = main_direction
            opp_dir = opposite_direction(main_direction)
        else:
            main_dir, opp_dir = compute_better_fg_color_direction(seed_color, caches=self.caches)

        sorted_roles = sort_by_dependency(config)

        first = self.calculate_ramp(
            seed_color, sorted_roles, config, main_dir, pin_lightness=pin_lightness
        )
        _logger.debug(
            "first pass: seed=%s direction=%s satisfied=%s unsatisfied_direction=%s",
            self.caches.string_of(seed_color),
            main_dir,
            first.satisfied,
            first.unsatisfied_direction,
        )
        entries = first.entries

        if not first.satisfied and rescale_to_fit_contrast_targets:
            entries = self._rescale_seed(
                seed_color, sorted_roles, config, main_dir, first, pin_lightness, entries
            )

        result = RampResult(ramp=dict(entries), direction=main_dir)
        # surface1 reads as "behind" surface2 and surface3 "in front" whatever the direction
        if main_dir == "darker" and "surface1" in result.ramp and "surface3" in result.ramp:
            result.ramp["surface1"], result.ramp["surface3"] = (
                result.ramp["surface3"],
                result.ramp["surface1"],
            )

        warned = result.warnings()
        if warned:
            _logger.warning(
                "ramp for %s misses contrast targets on: %s", seed, ", ".join(warned)
            )
        return result

    def calculate_ramp(
        self,
        seed: Color,
        sorted_roles: List[str],
        config: Mapping[str, RampStepConfig],
        main_direction: RampDirection,
        *,
        pin_lightness: Optional[Tuple[str, float]] = None,
    ) -> RampPass:
        """Run one pass over ``sorted_roles`` with ``seed`` (already gamut-clamped)."""
        outcome = RampPass()
        calculated: Dict[str, Color] = {SEED: seed}

        for role in sorted_roles:
            step = config[role]
            requirement = step.contrast
            reference = calculated.get(requirement.reference)
            if reference is None:
                raise RampError(
                    f"Reference color for step {role} not found: {requirement.reference}"
                )
            adjusted_target = adjust_contrast_target(requirement.target)

            if step.same_as_if_possible:
                candidate = calculated.get(step.same_as_if_possible)
                if (
                    candidate is not None
                    and self.caches.contrast_of(reference, candidate) >= adjusted_target
                ):
                    calculated[role] = candidate
                    outcome.entries[role] = RampEntry(color=self.caches.string_of(candidate))
                    continue

            direction = self._resolve_direction(
                reference, requirement.follow_direction, requirement.prefer_lighter, main_direction
            )

            constraint: Optional[LightnessConstraint] = None
            if pin_lightness is not None and pin_lightness[0] == role:
                constraint = LightnessConstraint("force", pin_lightness[1])
            else:
                preferred = step.lightness.resolve(direction)
                if preferred is not None:
                    constraint = LightnessConstraint("only_if_succeeds", preferred)

            found = find_color_meeting_requirements(
                reference,
                seed,
                adjusted_target,
                direction,
                lightness_constraint=constraint,
                taper_chroma_options=step.taper_chroma_options,
                strict=False,
                caches=self.caches,
                gamut=self.gamut,
            )

            if not found.reached and not requirement.ignore_when_adjusting_seed:
                outcome.satisfied = False
                # Weight by how much moving the seed would help: a seed already far
                # from the reference has little room to improve this constraint.
                deficit = adjusted_target - found.achieved
                weighted = deficit / self.caches.contrast_of(seed, reference)
                if weighted > outcome.max_weighted_deficit:
                    outcome.max_weighted_deficit = weighted
                    outcome.unsatisfied_direction = direction

            calculated[role] = found.color
            outcome.entries[role] = RampEntry(
                color=self.caches.string_of(found.color),
                warning=not requirement.ignore_when_adjusting_seed and not found.reached,
            )

        return outcome

    # Internal helpers -----------------------------------------------------
    def _resolve_direction(
        self,
        reference: Color,
        follow: str,
        prefer_lighter: bool,
        main_direction: RampDirection,
    ) -> RampDirection:
        if follow == "main":
            return main_direction
        if follow == "opposite":
            return opposite_direction(main_direction)
        if follow == "best":
            return compute_better_fg_color_direction(
                reference, prefer_lighter, caches=self.caches
            )[0]
        return follow  # type: ignore[return-value]

    def _rescale_seed(
        self,
        seed: Color,
        sorted_roles: List[str],
        config: Mapping[str, RampStepConfig],
        main_direction: RampDirection,
        first: RampPass,
        pin_lightness: Optional[Tuple[str, float]],
        entries: Dict[str, RampEntry],
    ) -> Dict[str, RampEntry]:
        worse_l = oklch_coords(seed)[0]
        # A lighter ramp gains contrast by darkening the seed, a darker one by lightening it.
        better_l = 0.0 if first.unsatisfied_direction == "lighter" else 1.0
        max_iterations = min(self.max_seed_retries, MAX_BISECTION_ITERATIONS)
        _logger.info(
            "rescaling seed: failing roles=%s bracket=[%.4f, %.4f]",
            ", ".join(first.failing_roles()),
            worse_l,
            better_l,
        )

        found_satisfying = False
        iterations = 0
        while iterations < max_iterations and abs(better_l - worse_l) > LIGHTNESS_EPSILON:
            iterations += 1
            new_seed = clamp_to_gamut(with_lightness(seed, (worse_l + better_l) / 2), self.gamut)
            new_seed_l = oklch_coords(new_seed)[0]
            attempt = self.calculate_ramp(
                new_seed, sorted_roles, config, main_direction, pin_lightness=pin_lightness
            )
            _logger.debug(
                "retry %d: seed_l=%.4f bracket=[%.4f, %.4f] satisfied=%s",
                iterations,
                new_seed_l,
                worse_l,
                better_l,
                attempt.satisfied,
            )
            if attempt.satisfied:
                better_l = new_seed_l
                # Only a fully satisfying ramp replaces the answer
                entries = attempt.entries
                found_satisfying = True
            elif first.unsatisfied_direction != main_direction:
                # Failing against the main direction: moved too far, pull back
                better_l = new_seed_l
            else:
                # Failing along the main direction: not far enough yet
                worse_l = new_seed_l

        _logger.info(
            "seed rescaling finished after %d iterations (satisfying ramp found: %s)",
            iterations,
            found_satisfying,
        )
        return entries


def build_ramp(
    seed: str,
    config: Mapping[str, RampStepConfig],
    *,
    main_direction: Optional[RampDirection] = None,
    pin_lightness: Optional[Tuple[str, float]] = None,
    rescale_to_fit_contrast_targets: bool = True,
    builder: Optional[RampBuilder] = None,
) -> RampResult:
    """Build a ramp with a fresh builder (and caches) unless one is supplied."""
    builder = builder or RampBuilder()
    return builder.build(
        seed,
        config,
        main_direction=main_direction,
        pin_lightness=pin_lightness,
        rescale_to_fit_contrast_targets=rescale_to_fit_contrast_targets,
    )


def build_bg_ramp(
    seed: str = DEFAULT_SEED_COLORS["bg"], *, builder: Optional[RampBuilder] = None
) -> RampResult:
    return build_ramp(seed, BG_RAMP_CONFIG, builder=builder)


def build_accent_ramp(
    seed: str,
    bg_ramp: RampResult,
    *,
    rescale_to_fit_contrast_targets: bool = True,
    builder: Optional[RampBuilder] = None,
) -> RampResult:
    """Build an accent ramp matching the direction and surface of ``bg_ramp``."""
    bg_surface_l = oklch_coords(parse_color(bg_ramp["surface2"].color))[0]
    return build_ramp(
        seed,
        ACCENT_RAMP_CONFIG,
        main_direction=bg_ramp.direction,
        pin_lightness=(
            "surface2",
            clamp_accent_scale_reference_lightness(bg_surface_l, bg_ramp.direction),
        ),
        rescale_to_fit_contrast_targets=rescale_to_fit_contrast_targets,
        builder=builder,
    )


def build_default_ramps(
    seeds: Optional[Mapping[str, str]] = None, *, builder: Optional[RampBuilder] = None
) -> Dict[str, RampResult]:
    """Build the ``bg`` ramp plus one accent ramp per remaining seed."""
    merged = {**DEFAULT_SEED_COLORS, **(seeds or {})}
    builder = builder or RampBuilder()
    bg_ramp = build_bg_ramp(merged["bg"], builder=builder)
    ramps: Dict[str, RampResult] = {"bg": bg_ramp}
    for name, seed in merged.items():
        if name == "bg":
            continue
        ramps[name] = build_accent_ramp(seed, bg_ramp, builder=builder)
    return ramps
