from __future__ import annotations

import math
import random
from typing import Iterable

import pygame

from planetforge.core.lighting import Light


def generate_starfield(
    num_stars: int,
    *,
    size: tuple[int, int],
    rng: random.Random | None = None,
) -> list[dict[str, object]]:
    rng = rng or random.Random()
    width, height = size
    stars: list[dict[str, object]] = []
    for _ in range(num_stars):
        x = rng.uniform(0, width)
        y = rng.uniform(0, height)
        radius = rng.choice([1, 1, 1, 2])
        alpha = rng.randint(80, 150)
        base = rng.randint(200, 240)
        color = (
            max(0, base - rng.randint(10, 25)),
            max(0, base - rng.randint(5, 15)),
            base,
        )
        star_surface = pygame.Surface((radius * 2, radius * 2), pygame.SRCALPHA)
        pygame.draw.circle(star_surface, (*color, alpha), (radius, radius), radius)
        stars.append({"pos": (x, y), "surface": star_surface, "radius": radius})
    return stars


def draw_starfield(surface: pygame.Surface, starfield: Iterable[dict[str, object]]) -> None:
    for star in starfield:
        x, y = star["pos"]  # type: ignore[index]
        star_surface = star["surface"]  # type: ignore[index]
        radius = star["radius"]  # type: ignore[index]
        surface.blit(star_surface, (int(x) - radius, int(y) - radius))


def draw_planet(surface: pygame.Surface, sprite: pygame.Surface, center: tuple[int, int]) -> None:
    rect = sprite.get_rect(center=center)
    surface.blit(sprite, rect)


def light_marker_position(
    light: Light,
    center: tuple[int, int],
    distance: float,
) -> tuple[int, int]:
    """Screen position of a marker showing where the light comes from (+Y up on the sphere)."""
    dx, dy, _ = light.direction_to()
    length = math.hypot(dx, dy)
    if length == 0.0:
        return center
    return (
        int(center[0] + dx / length * distance),
        int(center[1] - dy / length * distance),
    )


def draw_light_marker(
    surface: pygame.Surface,
    light: Light,
    center: tuple[int, int],
    distance: float,
    *,
    radius: int = 8,
) -> None:
    position = light_marker_position(light, center, distance)
    glow = pygame.Surface((radius * 4, radius * 4), pygame.SRCALPHA)
    pygame.draw.circle(glow, (*light.color, 70), (radius * 2, radius * 2), radius * 2)
    pygame.draw.circle(glow, (*light.color, 230), (radius * 2, radius * 2), radius)
    surface.blit(glow, glow.get_rect(center=position))


__all__ = [
    "draw_light_marker",
    "draw_planet",
    "draw_starfield",
    "generate_starfield",
    "light_marker_position",
]
