"""Terrain categories and noise-to-category classification."""
from __future__ import annotations

import math
from enum import Enum
from typing import TYPE_CHECKING

from .noise import Point3

if TYPE_CHECKING:  # pragma: no cover
    from .coloring import ColoringScheme


class TerrainKind(Enum):
    """Closed set of surface categories, lowest elevation first."""
    DEEP_WATER = "deep_water"
    SHALLOW_WATER = "shallow_water"
    BEACH = "beach"
    LOWLAND = "lowland"
    HIGHLAND = "highland"
    PEAK = "peak"
    POLAR_ICE = "polar_ice"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()

    @property
    def is_water(self) -> bool:
        return self in (TerrainKind.DEEP_WATER, TerrainKind.SHALLOW_WATER)


# Elevation-ordered kinds, used when a scheme is built without explicit kinds.
ELEVATION_KINDS: tuple[TerrainKind, ...] = (
    TerrainKind.DEEP_WATER,
    TerrainKind.SHALLOW_WATER,
    TerrainKind.BEACH,
    TerrainKind.LOWLAND,
    TerrainKind.HIGHLAND,
    TerrainKind.PEAK,
)


def normalize(value: float) -> float:
    """Map a noise value in [-1, 1] to [0, 1]; non-finite input maps to 0."""
    if not math.isfinite(value):
        return 0.0
    return max(0.0, min(1.0, (value + 1.0) * 0.5))


def classify(value: float, scheme: ColoringScheme) -> TerrainKind:
    """Return the terrain kind of the scheme band holding ``value``."""
    return scheme.bands[scheme.band_index(normalize(value))].kind


def is_polar(value: float, normal: Point3, scheme: ColoringScheme) -> bool:
    if scheme.polar_latitude is None:
        return False
    # Raised terrain pushes the ice further towards the equator.
    cap = scheme.polar_latitude - scheme.polar_jitter * value
    return abs(normal[1]) >= cap


def classify_surface(value: float, normal: Point3, scheme: ColoringScheme) -> TerrainKind:
    """Like :func:`classify`, but honours the scheme's polar caps."""
    if is_polar(value, normal, scheme):
        return TerrainKind.POLAR_ICE
    return classify(value, scheme)


__all__ = [
    "ELEVATION_KINDS",
    "TerrainKind",
    "classify",
    "classify_surface",
    "is_polar",
    "normalize",
]
