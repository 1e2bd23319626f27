import pytest

from planetforge.core.coloring import EARTHLIKE, ColoringScheme
from planetforge.core.planet import Planet
from planetforge.data.presets import (
    PRESET_PLANETS,
    SCHEMES,
    get_preset,
    get_scheme,
    list_presets,
    list_schemes,
)


def test_builtin_schemes_are_listed():
    names = list_schemes()
    assert names == sorted(names)
    assert {"earthlike", "barren", "mars", "gas_giant", "ice_giant", "molten"} <= set(names)
    assert get_scheme("earthlike") is EARTHLIKE


def test_scheme_lookup_is_forgiving():
    assert get_scheme("Gas-Giant") is SCHEMES["gas_giant"]
    assert get_scheme("MARS") is SCHEMES["mars"]


def test_unknown_scheme_lists_available():
    with pytest.raises(KeyError, match="Available"):
        get_scheme("plaid")


@pytest.mark.parametrize("name", sorted(SCHEMES))
def test_every_scheme_covers_unit_range(name):
    scheme = get_scheme(name)
    assert isinstance(scheme, ColoringScheme)
    assert scheme.bands[-1].upper == 1.0
    for i in range(21):
        color = scheme.color_for(scheme.classify(i / 20), i / 20)
        assert len(color) == 4 and color[3] == 255


def test_presets():
    assert "earth" in list_presets()
    earth = get_preset("Earth")
    assert isinstance(earth, Planet)
    assert earth.colors is EARTHLIKE
    assert get_preset("jupiter").radius > earth.radius
    assert len({planet.seed for planet in PRESET_PLANETS.values()}) == len(PRESET_PLANETS)
    with pytest.raises(KeyError):
        get_preset("pluto")


def test_preset_renders(tmp_path):
    image = get_preset("mars").generate(12)
    assert image.opaque_pixels > 0
