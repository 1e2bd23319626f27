"""Generation core: noise, projection, classification, coloring, lighting."""

from .coloring import EARTHLIKE, ColorBand, ColoringScheme, earthlike
from .errors import InvalidParameter, NumericDegenerate, PlanetError
from .lighting import Light, shade
from .model import PlanetImage, SurfaceSample
from .noise import FieldSampler, sample
from .planet import Planet
from .projection import Projection, project
from .terrain import TerrainKind, classify

__all__ = [
    "ColorBand",
    "ColoringScheme",
    "EARTHLIKE",
    "FieldSampler",
    "InvalidParameter",
    "Light",
    "NumericDegenerate",
    "Planet",
    "PlanetError",
    "PlanetImage",
    "Projection",
    "SurfaceSample",
    "TerrainKind",
    "classify",
    "earthlike",
    "project",
    "sample",
    "shade",
]
