# Shared fixtures for the color ramp tests.
# Full ramp builds cost a few hundred searches each, so the background ramp
# used by several modules is built once per session.

import pytest

from theme.color_ramps import DEFAULT_SEED_COLORS, RampBuilder, RampCaches, build_bg_ramp


@pytest.fixture
def caches():
    return RampCaches()


@pytest.fixture(scope="session")
def session_builder():
    return RampBuilder()


@pytest.fixture(scope="session")
def default_bg_ramp(session_builder):
    return build_bg_ramp(DEFAULT_SEED_COLORS["bg"], builder=session_builder)
