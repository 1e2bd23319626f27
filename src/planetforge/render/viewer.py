"""Interactive pygame viewer for tweaking planets live.

Controls:
    SPACE       new random seed
    LEFT/RIGHT  rotate the light around the planet
    UP/DOWN     light intensity
    TAB         next coloring scheme
    +/-         render resolution
    S           save the current render as PNG
    ESC         quit
"""
from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field, replace
from pathlib import Path

import pygame

from planetforge.core.config import CLI_CFG, RENDER_CFG
from planetforge.core.lighting import Light
from planetforge.core.planet import Planet
from planetforge.data.presets import get_scheme, list_schemes

from .assets import PlanetSpriteCache
from .draw import draw_light_marker, draw_planet, draw_starfield, generate_starfield


logger = logging.getLogger(__name__)

LIGHT_STEP = math.radians(15.0)
INTENSITY_STEP = 0.1
MIN_RESOLUTION = 16
MAX_RESOLUTION = 512


@dataclass
class ViewerState:
    """Mutable viewer state; the planet itself is replaced, never mutated."""

    planet: Planet
    resolution: int = RENDER_CFG.default_size
    light_angle: float = 0.0
    intensity: float = 1.0
    rng: random.Random = field(default_factory=random.Random)
    running: bool = True

    @property
    def light(self) -> Light:
        return Light.from_angle(self.light_angle, elevation=math.radians(20.0), intensity=self.intensity)

    def new_seed(self) -> None:
        self.planet = Planet.random(
            origin=self.planet.origin,
            radius=self.planet.radius,
            colors=self.planet.colors,
            rng=self.rng,
        )

    def rotate_light(self, steps: int) -> None:
        self.light_angle = (self.light_angle + steps * LIGHT_STEP) % math.tau

    def change_intensity(self, steps: int) -> None:
        self.intensity = max(0.0, min(3.0, round(self.intensity + steps * INTENSITY_STEP, 3)))

    def next_scheme(self) -> None:
        names = list_schemes()
        current = self.planet.colors.name
        index = names.index(current) if current in names else -1
        scheme = get_scheme(names[(index + 1) % len(names)])
        self.planet = replace(self.planet, colors=scheme)

    def change_resolution(self, factor: float) -> None:
        self.resolution = max(MIN_RESOLUTION, min(MAX_RESOLUTION, int(self.resolution * factor)))

    def handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            self.new_seed()
        elif key == pygame.K_LEFT:
            self.rotate_light(1)
        elif key == pygame.K_RIGHT:
            self.rotate_light(-1)
        elif key == pygame.K_UP:
            self.change_intensity(1)
        elif key == pygame.K_DOWN:
            self.change_intensity(-1)
        elif key == pygame.K_TAB:
            self.next_scheme()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.change_resolution(2.0)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.change_resolution(0.5)

    def caption(self) -> str:
        return (
            f"planetforge | {self.planet.colors.name} | seed {self.planet.seed} | "
            f"{self.resolution}px | sols {self.intensity:.1f}"
        )


def run_viewer(planet: Planet | None = None, *, output_dir: Path = Path(".")) -> None:
    pygame.init()
    screen = pygame.display.set_mode(CLI_CFG.viewer_window_size)
    clock = pygame.time.Clock()
    width, height = screen.get_size()
    center = (width // 2, height // 2)
    diameter = int(min(width, height) * 0.7)

    state = ViewerState(planet=planet or Planet.random())
    cache = PlanetSpriteCache()
    starfield = generate_starfield(220, size=(width, height), rng=random.Random(7))

    while state.running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                state.running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_s:
                    path = output_dir / f"planet_{state.planet.seed}.png"
                    cache.get_image(state.planet, state.resolution, state.light).save(path)
                    logger.info("Saved %s", path)
                else:
                    state.handle_key(event.key)

        light = state.light
        sprite = cache.get_scaled_sprite(state.planet, state.resolution, light, diameter)
        pygame.display.set_caption(state.caption())

        screen.fill(RENDER_CFG.background_color)
        draw_starfield(screen, starfield)
        draw_planet(screen, sprite, center)
        draw_light_marker(screen, light, center, diameter * 0.62)
        pygame.display.flip()
        clock.tick(30)

    pygame.quit()


__all__ = ["ViewerState", "run_viewer"]
