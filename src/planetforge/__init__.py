"""Pixel-art procedural planet generator."""

from .core import (
    EARTHLIKE,
    ColorBand,
    ColoringScheme,
    InvalidParameter,
    Light,
    NumericDegenerate,
    Planet,
    PlanetError,
    PlanetImage,
    TerrainKind,
    earthlike,
)

__version__ = "0.1.0"

__all__ = [
    "ColorBand",
    "ColoringScheme",
    "EARTHLIKE",
    "InvalidParameter",
    "Light",
    "NumericDegenerate",
    "Planet",
    "PlanetError",
    "PlanetImage",
    "TerrainKind",
    "earthlike",
]
