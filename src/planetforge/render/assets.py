"""Conversion and caching of generated planets as pygame surfaces."""
from __future__ import annotations

from collections import OrderedDict
from typing import Optional

import pygame

from planetforge.core.lighting import Light
from planetforge.core.model import PlanetImage
from planetforge.core.planet import Planet


# Cache sprites by (planet, size, light) to avoid regenerating the same
# sprite when the viewer redraws or rescales.
_CACHE_MAX_SIZE = 32


class PlanetSpriteCache:
    """LRU cache of rendered planets and their surfaces."""

    def __init__(self, max_size: int = _CACHE_MAX_SIZE) -> None:
        self._max_size = max(1, max_size)
        self._images: OrderedDict[tuple[Planet, int, Optional[Light]], PlanetImage] = OrderedDict()
        self._scaled: dict[tuple[int, int], pygame.Surface] = {}

    def __len__(self) -> int:
        return len(self._images)

    def clear(self) -> None:
        self._images.clear()
        self._scaled.clear()

    def get_image(self, planet: Planet, size: int, light: Optional[Light]) -> PlanetImage:
        key = (planet, size, light)
        cached = self._images.get(key)
        if cached is not None:
            self._images.move_to_end(key)
            return cached
        image = planet.generate(size, light)
        self._images[key] = image
        if len(self._images) > self._max_size:
            self._images.popitem(last=False)
            self._scaled.clear()
        return image

    def get_scaled_sprite(
        self,
        planet: Planet,
        size: int,
        light: Optional[Light],
        diameter: int,
    ) -> pygame.Surface:
        """Rendered planet upscaled to ``diameter`` pixels with nearest-neighbour sampling."""
        if diameter <= 0:
            raise ValueError("Sprite diameter must be positive")
        image = self.get_image(planet, size, light)
        cache_key = (id(image), diameter)
        cached = self._scaled.get(cache_key)
        if cached is not None:
            return cached
        scaled = scale_pixelated(image.to_surface(), diameter)
        self._scaled[cache_key] = scaled
        return scaled


def scale_pixelated(surface: pygame.Surface, diameter: int) -> pygame.Surface:
    """Nearest-neighbour scale, keeping hard pixel edges."""
    return pygame.transform.scale(surface, (diameter, diameter))


__all__ = ["PlanetSpriteCache", "scale_pixelated"]
