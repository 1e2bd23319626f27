"""Pygame helpers for displaying generated planets."""

from .assets import PlanetSpriteCache, scale_pixelated
from .draw import (
    draw_light_marker,
    draw_planet,
    draw_starfield,
    generate_starfield,
    light_marker_position,
)
from .viewer import ViewerState, run_viewer

__all__ = [
    "PlanetSpriteCache",
    "ViewerState",
    "draw_light_marker",
    "draw_planet",
    "draw_starfield",
    "generate_starfield",
    "light_marker_position",
    "run_viewer",
    "scale_pixelated",
]
