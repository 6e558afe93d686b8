from theme.color_ramps.color_adapter import BLACK, WHITE, parse_color
from theme.color_ramps.ramp_cache import (
    ChromaCapacityCache,
    ColorStringCache,
    ContrastCache,
    RampCaches,
    quantize,
)


def test_quantize_rounds_to_step():
    assert quantize(0.50004, 1e-3) == quantize(0.5, 1e-3)
    assert quantize(0.5006, 1e-3) != quantize(0.5, 1e-3)


def test_string_cache_is_keyed_by_value():
    cache = ColorStringCache()
    # Two distinct objects, same value
    assert cache.string_of(parse_color("#ff0000")) == "#ff0000"
    assert cache.string_of(parse_color("#ff0000")) == "#ff0000"
    assert cache.misses == 1
    assert cache.hits == 1
    assert len(cache) == 1


def test_string_cache_handles_achromatic_hue():
    cache = ColorStringCache()
    white = WHITE.clone()
    assert cache.string_of(white) == "#ffffff"
    assert cache.string_of(WHITE) == "#ffffff"
    assert cache.hits == 1


def test_contrast_cache_is_symmetric():
    cache = ContrastCache()
    forward = cache.contrast_of(WHITE, BLACK)
    backward = cache.contrast_of(BLACK, WHITE)
    assert forward == backward
    assert cache.misses == 1
    assert cache.hits == 1


def test_contrast_cache_clear_resets_counters():
    cache = ContrastCache()
    cache.contrast_of(WHITE, BLACK)
    cache.clear()
    assert len(cache) == 0
    assert cache.hits == cache.misses == 0


def test_chroma_capacity_cache_computes_once_for_nearby_keys():
    cache = ChromaCapacityCache()
    calls = []

    def compute():
        calls.append(1)
        return 0.2

    assert cache.get_or_compute(0.5, 264.0, "p3", 0.45, compute) == 0.2
    assert cache.get_or_compute(0.50004, 264.01, "p3", 0.45, compute) == 0.2
    assert len(calls) == 1
    # Gamut is part of the key
    cache.get_or_compute(0.5, 264.0, "srgb", 0.45, compute)
    assert len(calls) == 2


def test_ramp_caches_share_string_cache():
    caches = RampCaches()
    caches.contrast_of(WHITE, BLACK)
    assert len(caches.strings) == 2
    caches.clear()
    assert len(caches.strings) == 0
    assert len(caches.contrast) == 0
    assert len(caches.chroma_capacity) == 0


def test_ramp_caches_wire_one_string_cache_into_contrast():
    caches = RampCaches()
    # The string cache starts empty (falsy) and must still be the shared one
    assert caches.contrast.strings is caches.strings
    caches.contrast_of(WHITE, BLACK)
    caches.string_of(WHITE)
    assert caches.strings.misses == 2
    assert caches.strings.hits == 1
    caches.clear()
    assert len(caches.contrast.strings) == 0


def test_contrast_cache_clear_keeps_shared_strings():
    strings = ColorStringCache()
    cache = ContrastCache(strings)
    cache.contrast_of(WHITE, BLACK)
    cache.clear()
    assert len(cache) == 0
    assert len(strings) == 2
