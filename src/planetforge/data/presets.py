"""Built-in coloring schemes and preset planets."""
from __future__ import annotations

import uuid

from planetforge.core.coloring import EARTHLIKE, ColoringScheme
from planetforge.core.planet import Planet
from planetforge.core.terrain import TerrainKind as K


# =======================
#   COLORING SCHEMES
# =======================
BARREN = ColoringScheme.from_pairs(
    "barren",
    [
        (0.40, (80, 80, 80), K.LOWLAND),        # Dark crater floors
        (0.52, (105, 105, 105), K.LOWLAND),     # Dim gray
        (0.62, (128, 128, 128), K.HIGHLAND),    # Gray base
        (1.00, (192, 192, 192), K.PEAK),        # Silver crater rims
    ],
    band_shading=0.06,
)

MARS = ColoringScheme.from_pairs(
    "mars",
    [
        (0.42, (120, 60, 30), K.LOWLAND),       # Dark brown basins
        (0.52, (193, 68, 14), K.LOWLAND),       # Red-orange plains
        (0.60, (210, 105, 30), K.HIGHLAND),     # Chocolate highlands
        (1.00, (160, 82, 45), K.PEAK),          # Sienna ridges
    ],
    band_shading=0.08,
    polar_latitude=0.93,
    polar_color=(240, 232, 226),
)

GAS_GIANT = ColoringScheme.from_pairs(
    "gas_giant",
    [
        (0.40, (139, 90, 43), K.LOWLAND),       # Dark band
        (0.48, (166, 124, 82), K.LOWLAND),      # Brown band
        (0.56, (201, 144, 57), K.HIGHLAND),     # Jupiter tan
        (0.64, (234, 214, 183), K.HIGHLAND),    # Light cream band
        (1.00, (205, 92, 92), K.PEAK),          # Storm red
    ],
    blend=0.03,
    band_shading=0.04,
)

ICE_GIANT = ColoringScheme.from_pairs(
    "ice_giant",
    [
        (0.44, (65, 105, 225), K.DEEP_WATER),   # Royal blue
        (0.52, (100, 149, 237), K.SHALLOW_WATER),  # Cornflower blue
        (0.60, (72, 209, 204), K.LOWLAND),      # Medium turquoise
        (1.00, (176, 224, 230), K.HIGHLAND),    # Powder blue
    ],
    blend=0.05,
    band_shading=0.05,
    polar_latitude=0.9,
    polar_color=(224, 255, 255),
)

MOLTEN = ColoringScheme.from_pairs(
    "molten",
    [
        (0.40, (255, 215, 0), K.LOWLAND),       # Lava yellow (hottest)
        (0.45, (255, 140, 0), K.LOWLAND),       # Lava orange
        (0.50, (255, 69, 0), K.LOWLAND),        # Lava orange-red
        (0.62, (50, 40, 35), K.HIGHLAND),       # Charred surface
        (1.00, (30, 30, 30), K.PEAK),           # Dark rock
    ],
    band_shading=0.05,
)

SCHEMES: dict[str, ColoringScheme] = {
    scheme.name: scheme
    for scheme in (EARTHLIKE, BARREN, MARS, GAS_GIANT, ICE_GIANT, MOLTEN)
}


def get_scheme(name: str) -> ColoringScheme:
    """
    Get a built-in coloring scheme by name (case-insensitive).

    Raises:
        KeyError: If the scheme name is not found
    """
    key = name.lower().replace("-", "_")
    if key not in SCHEMES:
        available = ", ".join(sorted(SCHEMES))
        raise KeyError(f"Unknown coloring scheme '{name}'. Available: {available}")
    return SCHEMES[key]


def list_schemes() -> list[str]:
    return sorted(SCHEMES)


# =======================
#   PRESET PLANETS
# =======================
# Radii in kilometres (NASA planetary fact sheets); fixed seeds keep the look stable.
PRESET_PLANETS: dict[str, Planet] = {
    "earth": Planet(seed=uuid.UUID(int=42), radius=6_371.0, colors=EARTHLIKE),
    "mars": Planet(seed=uuid.UUID(int=201), radius=3_389.5, colors=MARS),
    "moon": Planet(seed=uuid.UUID(int=301), radius=1_737.4, colors=BARREN),
    "mercury": Planet(seed=uuid.UUID(int=401), radius=2_439.7, colors=BARREN),
    "jupiter": Planet(seed=uuid.UUID(int=501), radius=69_911.0, colors=GAS_GIANT),
    "neptune": Planet(seed=uuid.UUID(int=801), radius=24_764.0, colors=ICE_GIANT),
    "io": Planet(seed=uuid.UUID(int=901), radius=1_821.6, colors=MOLTEN),
}


def get_preset(name: str) -> Planet:
    """
    Get a preset planet by name (case-insensitive).

    Planets are immutable, so the shared preset instance is returned.

    Raises:
        KeyError: If the preset name is not found
    """
    key = name.lower()
    if key not in PRESET_PLANETS:
        available = ", ".join(sorted(PRESET_PLANETS))
        raise KeyError(f"Unknown preset '{name}'. Available: {available}")
    return PRESET_PLANETS[key]


def list_presets() -> list[str]:
    """Return a list of available preset planet names."""
    return sorted(PRESET_PLANETS)


__all__ = [
    "BARREN",
    "GAS_GIANT",
    "ICE_GIANT",
    "MARS",
    "MOLTEN",
    "PRESET_PLANETS",
    "SCHEMES",
    "get_preset",
    "get_scheme",
    "list_presets",
    "list_schemes",
]
