import dataclasses
import random
import uuid

import numpy as np
import pytest

from planetforge.core.coloring import EARTHLIKE
from planetforge.core.errors import InvalidParameter, NumericDegenerate
from planetforge.core.lighting import Light
from planetforge.core.planet import FALLBACK_NOISE, Planet
from planetforge.core.terrain import TerrainKind


ZERO = uuid.UUID(int=0)


@pytest.fixture(scope="module")
def zero_planet():
    return Planet(seed=ZERO, origin=(0.0, 0.0), radius=64.0, colors=EARTHLIKE)


@pytest.fixture(scope="module")
def lit_render(zero_planet):
    return zero_planet.generate(128, Light(direction=(1.0, 0.0, 0.0)))


def disc_mask(size):
    centres = (np.arange(size) + 0.5 - size / 2) / (size / 2)
    x = centres[np.newaxis, :]
    y = -centres[:, np.newaxis]
    return x * x + y * y <= 1.0


# ===== REFERENCE RENDER =====

def test_reference_render_shape(lit_render):
    assert (lit_render.width, lit_render.height) == (128, 128)
    assert lit_render.pixels.shape == (128, 128, 4)
    assert lit_render.pixels.dtype == np.uint8


def test_reference_render_corners_are_transparent(lit_render):
    for row, col in [(0, 0), (0, 127), (127, 0), (127, 127)]:
        assert lit_render.alpha[row, col] == 0


def test_reference_render_middle_row_is_opaque(lit_render):
    assert np.count_nonzero(lit_render.alpha[64]) >= 126


def test_lit_side_is_brighter(zero_planet):
    light = Light(direction=(1.0, 0.0, 0.0))
    right = zero_planet.sample(64, 120, 128, light)
    left = zero_planet.sample(64, 7, 128, light)
    assert right.shade > left.shade
    assert left.shade == light.ambient


def test_silhouette_matches_disc(zero_planet):
    image = zero_planet.generate(32)
    assert np.array_equal(image.alpha > 0, disc_mask(32))


def test_stats_count_every_planet_pixel(lit_render):
    assert sum(lit_render.stats.values()) == lit_render.opaque_pixels
    assert all(isinstance(kind, TerrainKind) for kind in lit_render.stats)
    assert sum(lit_render.coverage().values()) == pytest.approx(1.0)


# ===== DETERMINISM =====

def test_generation_is_deterministic(zero_planet):
    light = Light.from_angle(0.7)
    first = zero_planet.generate(24, light)
    second = zero_planet.generate(24, light)
    assert np.array_equal(first.pixels, second.pixels)
    assert first.stats == second.stats


def test_worker_count_does_not_change_output(zero_planet):
    light = Light.from_angle(2.1, elevation=0.3)
    single = zero_planet.generate(40, light, workers=1)
    pooled = zero_planet.generate(40, light, workers=4)
    assert np.array_equal(single.pixels, pooled.pixels)


def test_equal_planets_render_equal_images():
    a = Planet(seed=uuid.UUID(int=99))
    b = Planet(seed="00000000-0000-0000-0000-000000000063")
    assert a == b
    assert np.array_equal(a.generate(16).pixels, b.generate(16).pixels)


def test_different_seeds_render_different_images():
    a = Planet(seed=uuid.UUID(int=1)).generate(32)
    b = Planet(seed=uuid.UUID(int=2)).generate(32)
    assert not np.array_equal(a.pixels, b.pixels)


def test_terrain_is_resolution_independent(zero_planet):
    for row, col in [(3, 4), (8, 8), (12, 6), (5, 13)]:
        small = zero_planet.sample(row, col, 16)
        large = zero_planet.sample(row * 3 + 1, col * 3 + 1, 48)
        assert small.on_sphere and large.on_sphere
        assert small.base_color == large.base_color
        assert small.kind is large.kind


def test_terrain_ignores_radius_and_origin():
    near = Planet(seed=ZERO, radius=1.0)
    far = Planet(seed=ZERO, origin=(1.5e8, -2e7), radius=69_911.0)
    for row, col in [(4, 4), (8, 2), (10, 11)]:
        assert near.sample(row, col, 16).base_color == far.sample(row, col, 16).base_color


def test_generate_does_not_mutate_planet(zero_planet):
    before = dataclasses.replace(zero_planet)
    zero_planet.generate(8, Light())
    assert zero_planet == before
    with pytest.raises(dataclasses.FrozenInstanceError):
        zero_planet.radius = 2.0


# ===== PIXEL PIPELINE =====

def test_unlit_render_uses_base_colors(zero_planet):
    pixel = zero_planet.sample(8, 8, 16)
    assert pixel.on_sphere
    assert pixel.shade == 1.0
    assert pixel.color == pixel.base_color


def test_off_sphere_sample(zero_planet):
    pixel = zero_planet.sample(0, 0, 16)
    assert not pixel.on_sphere
    assert pixel.color == (0, 0, 0, 0)
    assert pixel.kind is None


def test_light_tint_is_applied(zero_planet):
    red = Light(direction=(0.0, 0.0, 1.0), color=(255, 0, 0))
    pixel = zero_planet.sample(8, 8, 16, red)
    assert pixel.color[1] == 0 and pixel.color[2] == 0


def test_degenerate_noise_falls_back_to_lowest_band(monkeypatch):
    planet = Planet(seed=uuid.UUID(int=12345))

    def broken(point):
        raise NumericDegenerate("boom")

    monkeypatch.setattr(planet._sampler, "sample", broken)
    noise, kind, color = planet.terrain_at((0.0, 0.0, 1.0))
    assert noise == FALLBACK_NOISE
    assert kind is TerrainKind.DEEP_WATER
    assert color == EARTHLIKE.color_for(TerrainKind.DEEP_WATER, 0.0)


def test_huge_origin_still_renders():
    planet = Planet(seed=ZERO, origin=(1e300, -1e300), radius=1e300)
    image = planet.generate(8)
    assert image.opaque_pixels > 0


# ===== VALIDATION =====

@pytest.mark.parametrize("radius", [0.0, -5.0, float("nan"), float("inf"), "big", True])
def test_invalid_radius(radius):
    with pytest.raises(InvalidParameter):
        Planet(seed=ZERO, radius=radius)


@pytest.mark.parametrize("origin", [(0.0,), (1.0, 2.0, 3.0), (float("nan"), 0.0), "xy"])
def test_invalid_origin(origin):
    with pytest.raises(InvalidParameter):
        Planet(seed=ZERO, origin=origin)


def test_invalid_seed_and_colors():
    with pytest.raises(InvalidParameter):
        Planet(seed="not-a-uuid")
    with pytest.raises(InvalidParameter):
        Planet(seed=ZERO, colors="earthlike")


@pytest.mark.parametrize("size", [0, -3, 2.5, True, "64", None])
def test_invalid_size(zero_planet, size):
    with pytest.raises(InvalidParameter):
        zero_planet.generate(size)


def test_invalid_light_and_workers(zero_planet):
    with pytest.raises(InvalidParameter):
        zero_planet.generate(8, light=(1.0, 0.0, 0.0))
    with pytest.raises(InvalidParameter):
        zero_planet.generate(8, workers=0)


def test_invalid_parameter_is_a_value_error():
    with pytest.raises(ValueError):
        Planet(seed=ZERO, radius=0.0)


# ===== CONSTRUCTION HELPERS =====

def test_calculate_origin():
    assert Planet.calculate_origin(0.0, 10.0) == pytest.approx((10.0, 0.0))
    x, y = Planet.calculate_origin(-2.35619, 150_200_000.0)
    assert x < 0 and y < 0


def test_random_planets_are_reproducible_with_rng():
    a = Planet.random(rng=random.Random(5))
    b = Planet.random(rng=random.Random(5))
    assert a.seed == b.seed
    assert Planet.random().seed != Planet.random().seed


# ===== IMAGE =====

def test_image_saves_png(tmp_path, zero_planet):
    image = zero_planet.generate(16)
    path = image.save(tmp_path / "nested" / "planet.png")
    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_image_to_surface(zero_planet):
    image = zero_planet.generate(16)
    surface = image.to_surface()
    assert surface.get_size() == (16, 16)
    assert tuple(surface.get_at((8, 8))) == tuple(image.pixels[8, 8])
    assert len(image.to_bytes()) == 16 * 16 * 4
