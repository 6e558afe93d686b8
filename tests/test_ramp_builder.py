import pytest

from theme.color_ramps import (
    ACCENT_RAMP_CONFIG,
    BG_RAMP_CONFIG,
    DEFAULT_SEED_COLORS,
    RAMP_ROLES,
    CircularDependencyError,
    InvalidSeedColorError,
    RampBuilder,
    build_accent_ramp,
    build_default_ramps,
    build_ramp,
)
from theme.color_ramps.color_adapter import BLACK, WHITE, clamp_to_gamut, oklch_coords, parse_color, to_hex
from theme.color_ramps.dependency import sort_by_dependency
from theme.color_ramps.ramp_builder import (
    RampPass,
    adjust_contrast_target,
    clamp_accent_scale_reference_lightness,
    compute_better_fg_color_direction,
)
from theme.color_ramps.ramp_types import ContrastRequirement, RampEntry, RampResult, RampStepConfig


def _lightness(hex_color):
    return oklch_coords(parse_color(hex_color))[0]


# --- helpers ---------------------------------------------------------------


def test_adjust_contrast_target():
    assert adjust_contrast_target(1) == 1.0
    assert adjust_contrast_target(4.5) == pytest.approx(4.55)


def test_better_fg_direction(caches):
    assert compute_better_fg_color_direction(WHITE, caches=caches) == ("darker", "lighter")
    assert compute_better_fg_color_direction(BLACK, caches=caches) == ("lighter", "darker")
    # Mid blue already favors white text, with or without the bias
    blue = clamp_to_gamut(parse_color("#3858e9"))
    assert compute_better_fg_color_direction(blue, caches=caches)[0] == "lighter"
    assert compute_better_fg_color_direction(blue, True, caches=caches)[0] == "lighter"


def test_better_fg_direction_bias_only_applies_when_preferred(caches):
    # #8a8a8a: about 6.1:1 against black, 3.5:1 against white
    mid = clamp_to_gamut(parse_color("#8a8a8a"))
    plain = compute_better_fg_color_direction(mid, caches=caches)[0]
    biased = compute_better_fg_color_direction(mid, True, caches=caches)[0]
    assert plain == "darker"
    assert biased == "lighter"


def test_clamp_accent_scale_reference_lightness():
    assert clamp_accent_scale_reference_lightness(0.1, "lighter") == 0.2
    assert clamp_accent_scale_reference_lightness(0.3, "lighter") == 0.3
    assert clamp_accent_scale_reference_lightness(0.5, "lighter") == 0.4
    assert clamp_accent_scale_reference_lightness(0.5, "darker") == 0.75
    assert clamp_accent_scale_reference_lightness(0.99, "darker") == 0.98


# --- full builds -----------------------------------------------------------


def test_surface2_keeps_seed():
    seed = "#3858e9"
    result = build_ramp(seed, BG_RAMP_CONFIG, rescale_to_fit_contrast_targets=False)
    assert result["surface2"].color == to_hex(clamp_to_gamut(parse_color(seed)))
    assert sorted(result.ramp) == sorted(RAMP_ROLES)


def test_default_build_darkens_seed_to_fit_targets():
    # White text tops out near 5.6:1 on #3858e9, short of fgSurface4's 7:1,
    # so the default build moves the seed darker until every target holds.
    seed = "#3858e9"
    result = build_ramp(seed, BG_RAMP_CONFIG)
    assert result.direction == "lighter"
    assert result.warnings() == []
    assert result["surface2"].color != to_hex(clamp_to_gamut(parse_color(seed)))
    assert _lightness(result["surface2"].color) < _lightness(seed)


def test_default_bg_ramp_needs_no_adjustment(default_bg_ramp):
    assert default_bg_ramp.direction == "darker"
    assert default_bg_ramp["surface2"].color == DEFAULT_SEED_COLORS["bg"]
    assert default_bg_ramp.warnings() == []


def test_dark_seed_ramps_lighter():
    result = build_ramp("#1e1e1e", BG_RAMP_CONFIG, rescale_to_fit_contrast_targets=False)
    assert result.direction == "lighter"
    assert _lightness(result["fgSurface4"].color) > _lightness(result["surface2"].color)


@pytest.mark.parametrize("seed", ["#f8f8f8", "#1e1e1e"])
def test_surfaces_ordered_by_lightness(seed):
    result = build_ramp(seed, BG_RAMP_CONFIG, rescale_to_fit_contrast_targets=False)
    s1, s2, s3 = (_lightness(result[r].color) for r in ("surface1", "surface2", "surface3"))
    assert s1 <= s2 + 1e-6
    assert s2 <= s3 + 1e-6


def test_darker_ramp_swaps_surface1_and_surface3():
    # Compared against the unswapped pass of the same seed and direction, which
    # isolates the swap from any difference between lighter and darker searches.
    builder = RampBuilder()
    seed = "#f8f8f8"
    result = builder.build(
        seed, BG_RAMP_CONFIG, main_direction="darker", rescale_to_fit_contrast_targets=False
    )
    raw = builder.calculate_ramp(
        clamp_to_gamut(parse_color(seed)),
        sort_by_dependency(BG_RAMP_CONFIG),
        BG_RAMP_CONFIG,
        "darker",
    )
    assert result["surface1"] == raw.entries["surface3"]
    assert result["surface3"] == raw.entries["surface1"]


def test_white_seed_builds_with_warnings_only_on_tracked_roles():
    result = build_ramp("#ffffff", BG_RAMP_CONFIG)
    assert sorted(result.ramp) == sorted(RAMP_ROLES)
    for role in result.warnings():
        assert not BG_RAMP_CONFIG[role].contrast.ignore_when_adjusting_seed


def test_pin_lightness_forces_role():
    result = build_ramp(
        "#f8f8f8",
        BG_RAMP_CONFIG,
        pin_lightness=("surface4", 0.5),
        rescale_to_fit_contrast_targets=False,
    )
    assert _lightness(result["surface4"].color) == pytest.approx(0.5, abs=0.01)


def test_invalid_seed_raises():
    with pytest.raises(InvalidSeedColorError):
        build_ramp("definitely not a color", BG_RAMP_CONFIG)


def test_cyclic_config_raises_before_building():
    step = RampStepConfig(contrast=ContrastRequirement("b", "main", 1.5))
    other = RampStepConfig(contrast=ContrastRequirement("a", "main", 1.5))
    with pytest.raises(CircularDependencyError):
        build_ramp("#3858e9", {"a": step, "b": other})


def test_same_as_if_possible_reuses_color():
    config = {
        "base": RampStepConfig(contrast=ContrastRequirement("seed", "main", 1)),
        "strong": RampStepConfig(contrast=ContrastRequirement("base", "lighter", 3)),
        "echo": RampStepConfig(
            contrast=ContrastRequirement("base", "lighter", 2), same_as_if_possible="strong"
        ),
    }
    result = build_ramp("#3858e9", config, rescale_to_fit_contrast_targets=False)
    assert result["echo"] == result["strong"]


# --- seed rescaling --------------------------------------------------------


class ScriptedBuilder(RampBuilder):
    """Replays canned passes instead of solving, recording the seeds tried."""

    def __init__(self, passes, **kwargs):
        super().__init__(**kwargs)
        self.passes = list(passes)
        self.seeds = []

    def calculate_ramp(self, seed, sorted_roles, config, main_direction, *, pin_lightness=None):
        self.seeds.append(oklch_coords(seed)[0])
        if len(self.passes) > 1:
            return self.passes.pop(0)
        return self.passes[0]


def _pass(color, satisfied):
    return RampPass(
        entries={"surface2": RampEntry(color, warning=not satisfied)},
        satisfied=satisfied,
        unsatisfied_direction="lighter",
    )


def test_rescaling_keeps_last_satisfying_pass():
    builder = ScriptedBuilder([_pass("#111111", False), _pass("#222222", True), _pass("#333333", False)])
    result = builder.build("#3858e9", BG_RAMP_CONFIG, main_direction="lighter")
    assert result["surface2"].color == "#222222"
    assert len(builder.seeds) <= 1 + 25


def test_rescaling_without_success_returns_first_pass():
    builder = ScriptedBuilder([_pass("#111111", False), _pass("#333333", False)])
    result = builder.build("#3858e9", BG_RAMP_CONFIG, main_direction="lighter")
    assert result["surface2"].color == "#111111"
    assert result.warnings() == ["surface2"]


def test_rescaling_disabled_runs_one_pass():
    builder = ScriptedBuilder([_pass("#111111", False)])
    builder.build(
        "#3858e9", BG_RAMP_CONFIG, main_direction="lighter", rescale_to_fit_contrast_targets=False
    )
    assert len(builder.seeds) == 1


def test_rescaling_respects_retry_cap():
    builder = ScriptedBuilder([_pass("#111111", False)], max_seed_retries=3)
    builder.build("#3858e9", BG_RAMP_CONFIG, main_direction="lighter")
    assert len(builder.seeds) == 4


def test_rescaling_moves_seed_toward_failure_direction():
    # Failing along the main (lighter) direction darkens the seed step by step
    builder = ScriptedBuilder([_pass("#111111", False)], max_seed_retries=5)
    builder.build("#3858e9", BG_RAMP_CONFIG, main_direction="lighter")
    first, *retries = builder.seeds
    assert all(b < a for a, b in zip([first] + retries, retries))


# --- accent ramps ----------------------------------------------------------


def test_accent_ramp_follows_bg_ramp(default_bg_ramp, session_builder):
    accent = build_accent_ramp(DEFAULT_SEED_COLORS["primary"], default_bg_ramp, builder=session_builder)
    assert accent.direction == default_bg_ramp.direction
    assert sorted(accent.ramp) == sorted(ACCENT_RAMP_CONFIG)
    # surface2 pinned to the (clamped) background surface lightness
    bg_l = _lightness(default_bg_ramp["surface2"].color)
    expected = clamp_accent_scale_reference_lightness(bg_l, default_bg_ramp.direction)
    assert _lightness(accent["surface2"].color) == pytest.approx(expected, abs=0.01)


def test_build_default_ramps(session_builder):
    ramps = build_default_ramps(builder=session_builder)
    assert set(ramps) == set(DEFAULT_SEED_COLORS)
    for name, ramp in ramps.items():
        assert ramp.direction == ramps["bg"].direction, name
        assert sorted(ramp.ramp) == sorted(RAMP_ROLES)


def test_accent_ramp_can_skip_rescaling():
    bg = RampResult(ramp={"surface2": RampEntry("#f8f8f8")}, direction="darker")
    builder = ScriptedBuilder([_pass("#111111", False)])
    result = build_accent_ramp("#3858e9", bg, rescale_to_fit_contrast_targets=False, builder=builder)
    assert len(builder.seeds) == 1
    assert result.direction == "darker"
    assert result.warnings() == ["surface2"]
