import math

import pytest

from planetforge.core.compositor import Canvas, composite, with_coverage
from planetforge.core.errors import InvalidParameter
from planetforge.core.lighting import Light, shade


def test_facing_the_light_is_fully_lit():
    light = Light(direction=(0.0, 0.0, 1.0))
    assert shade((0.0, 0.0, 1.0), light) == pytest.approx(1.0)


def test_back_side_gets_exactly_the_ambient_floor():
    light = Light(direction=(1.0, 0.0, 0.0), ambient=0.2)
    assert shade((-1.0, 0.0, 0.0), light) == 0.2
    assert shade((-0.6, 0.0, 0.8), light) == 0.2


def test_zero_intensity_is_ambient_only():
    light = Light(direction=(0.0, 0.0, 1.0), intensity=0.0, ambient=0.1)
    assert shade((0.0, 0.0, 1.0), light) == pytest.approx(0.1)


def test_shade_stays_in_unit_range():
    light = Light(direction=(0.3, 0.2, 1.0), intensity=5.0)
    for i in range(50):
        theta = i * 0.37
        normal = (math.cos(theta) * 0.6, math.sin(theta) * 0.6, 0.8)
        assert light.ambient <= shade(normal, light) <= 1.0


def shades_by_angle(light, axis):
    """Shade of normals rotated away from ``axis`` in 1 degree steps, 0 to 120 degrees."""
    ax, az = axis
    result = []
    for degrees in range(121):
        theta = math.radians(degrees)
        normal = (ax * math.cos(theta) - az * math.sin(theta), 0.0, az * math.cos(theta) + ax * math.sin(theta))
        result.append(shade(normal, light))
    return result


def test_shade_does_not_increase_with_angle_to_light():
    frontal = shades_by_angle(Light(direction=(0.0, 0.0, 1.0)), (0.0, 1.0))
    side = shades_by_angle(Light(direction=(0.6, 0.0, 0.8)), (0.6, 0.8))
    dark_limb = shades_by_angle(Light(direction=(0.6, 0.0, 0.8), limb_darkening=1.0), (0.6, 0.8))
    for values in (frontal, side, dark_limb):
        assert all(b <= a + 1e-12 for a, b in zip(values, values[1:]))
        assert all(v == values[-1] for v in values[91:])


def test_default_side_light_falls_off_from_the_subsolar_point():
    light = Light(direction=(1.0, 0.0, 0.0))
    values = []
    for degrees in range(0, 91, 5):
        theta = math.radians(degrees)
        values.append(shade((math.cos(theta), 0.0, math.sin(theta)), light))
    assert values[0] == pytest.approx(1.0)
    assert all(b <= a for a, b in zip(values, values[1:]))


def test_limb_darkening_dims_towards_the_terminator():
    light = Light(direction=(1.0, 0.0, 0.0), ambient=0.0, limb_darkening=0.5)
    assert shade((1.0, 0.0, 0.0), light) == pytest.approx(1.0)
    oblique = (0.5, 0.0, math.sqrt(0.75))
    assert shade(oblique, light) == pytest.approx(0.5 * 0.75)
    assert shade(oblique, Light(direction=(1.0, 0.0, 0.0), ambient=0.0, limb_darkening=0.0)) == pytest.approx(0.5)


def test_direction_is_normalized():
    light = Light(direction=(3.0, 0.0, 4.0))
    assert light.direction_to() == pytest.approx((0.6, 0.0, 0.8))


def test_two_component_direction_lies_in_image_plane():
    assert Light(direction=(0.0, 2.0)).direction_to() == pytest.approx((0.0, 1.0, 0.0))


def test_from_angle():
    assert Light.from_angle(0.0).direction_to() == pytest.approx((1.0, 0.0, 0.0))
    assert Light.from_angle(math.pi / 2).direction_to() == pytest.approx((0.0, 1.0, 0.0), abs=1e-12)
    raised = Light.from_angle(0.0, elevation=math.pi / 2).direction_to()
    assert raised == pytest.approx((0.0, 0.0, 1.0), abs=1e-12)


def test_point_light_direction_depends_on_surface_point():
    light = Light.at((10.0, 0.0, 0.0), ambient=0.12, limb_darkening=0.25)
    assert light.direction_to((0.0, 0.0, 0.0)) == pytest.approx((1.0, 0.0, 0.0))
    assert light.direction_to((10.0, -5.0, 0.0)) == pytest.approx((0.0, 1.0, 0.0))
    assert shade((1.0, 0.0, 0.0), light, (0.0, 0.0, 0.0)) == pytest.approx(1.0)
    assert shade((0.0, 1.0, 0.0), light, (0.0, 0.0, 0.0)) == light.ambient


def test_point_light_on_the_surface_does_not_fail():
    light = Light.at((1.0, 2.0, 3.0))
    assert light.direction_to((1.0, 2.0, 3.0)) == (0.0, 0.0, 1.0)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"direction": (0.0, 0.0, 0.0)},
        {"direction": (math.nan, 0.0, 1.0)},
        {"direction": (1.0,)},
        {"intensity": -1.0},
        {"intensity": math.inf},
        {"ambient": 1.5},
        {"limb_darkening": -0.1},
        {"color": (300, 0, 0)},
        {"color": (1, 2)},
        {"intensity": "1"},
        {"ambient": None},
        {"limb_darkening": "x"},
        {"intensity": True},
    ],
)
def test_invalid_lights(kwargs):
    with pytest.raises(InvalidParameter):
        Light(**kwargs)


def test_lights_are_hashable_values():
    assert Light.from_angle(0.5) == Light.from_angle(0.5)
    assert len({Light.from_angle(0.5), Light.from_angle(0.5)}) == 1


# ===== COMPOSITING =====

def test_composite_scales_rgb_and_keeps_alpha():
    assert composite((200, 100, 50, 255), 0.5) == (100, 50, 25, 255)
    assert composite((200, 100, 50, 7), 1.0) == (200, 100, 50, 7)
    assert composite((200, 100, 50, 255), 2.0) == (200, 100, 50, 255)
    assert composite((200, 100, 50, 255), -1.0) == (0, 0, 0, 255)


def test_composite_applies_light_tint():
    assert composite((200, 100, 50, 255), 1.0, (255, 0, 0)) == (200, 0, 0, 255)


def test_with_coverage():
    color = (10, 20, 30, 255)
    assert with_coverage(color, 1.0) == color
    assert with_coverage(color, 0.5) == (10, 20, 30, 127)
    assert with_coverage(color, 0.0) == (10, 20, 30, 1)


def test_canvas_stripes_cover_every_row_once():
    canvas = Canvas(20)
    stripes = list(canvas.stripes(8))
    assert [(s.start, s.stop) for s in stripes] == [(0, 8), (8, 16), (16, 20)]
    assert list(Canvas(3).stripes(0)) == [range(0, 1), range(1, 2), range(2, 3)]


def test_canvas_put_and_clear():
    canvas = Canvas(2)
    canvas.put(0, 1, (1, 2, 3, 4))
    assert tuple(canvas.pixels[0, 1]) == (1, 2, 3, 4)
    canvas.clear(0, 1)
    assert canvas.pixels.sum() == 0
