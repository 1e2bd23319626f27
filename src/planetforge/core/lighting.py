"""Directional lighting: Lambert term, ambient floor and limb darkening."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Sequence

from .config import RENDER_CFG
from .errors import InvalidParameter
from .noise import Point3


def _unit(vector: Sequence[float]) -> Point3:
    length = math.sqrt(sum(c * c for c in vector))
    if not math.isfinite(length) or length == 0.0:
        raise InvalidParameter(f"Cannot normalize vector {tuple(vector)!r}")
    x, y, z = (c / length for c in vector)
    return (x, y, z)


def _check_number(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidParameter(f"{name} must be a number, got {value!r}")


def _vector3(value: Sequence[float], name: str) -> Point3:
    try:
        components = tuple(float(c) for c in value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameter(f"{name} must be a sequence of numbers, got {value!r}") from exc
    if len(components) == 2:
        components = (*components, 0.0)
    if len(components) != 3 or not all(math.isfinite(c) for c in components):
        raise InvalidParameter(f"{name} must have 2 or 3 finite components, got {value!r}")
    return components  # type: ignore[return-value]


@dataclass(frozen=True)
class Light:
    """
    A single light source, passed to every ``generate`` call.

    Attributes:
        direction: Vector pointing from the planet towards the light (+Z faces the viewer)
        position: Light position in world kilometres; overrides ``direction`` when set
        intensity: Multiplier on the diffuse term ("sols")
        color: RGB tint of the light
        ambient: Minimum shading factor, so the night side is never pure black
        limb_darkening: How much the diffuse term fades towards the terminator
    """
    direction: Point3 = (1.0, 0.0, 0.0)
    position: Optional[Point3] = None
    intensity: float = 1.0
    color: tuple[int, int, int] = (255, 255, 255)
    ambient: float = RENDER_CFG.default_ambient
    limb_darkening: float = RENDER_CFG.default_limb_darkening
    _unit_direction: Point3 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "direction", _vector3(self.direction, "direction"))
        object.__setattr__(self, "_unit_direction", _unit(self.direction))
        if self.position is not None:
            object.__setattr__(self, "position", _vector3(self.position, "position"))
        for name in ("intensity", "ambient", "limb_darkening"):
            _check_number(getattr(self, name), name)
        if not math.isfinite(self.intensity) or self.intensity < 0.0:
            raise InvalidParameter(f"Light intensity must be finite and >= 0, got {self.intensity!r}")
        if not 0.0 <= self.ambient <= 1.0:
            raise InvalidParameter(f"Ambient floor must be in [0, 1], got {self.ambient!r}")
        if not 0.0 <= self.limb_darkening <= 1.0:
            raise InvalidParameter(f"Limb darkening must be in [0, 1], got {self.limb_darkening!r}")
        color = tuple(self.color)
        if len(color) != 3 or not all(isinstance(c, int) and 0 <= c <= 255 for c in color):
            raise InvalidParameter(f"Light color must be three ints in 0-255, got {self.color!r}")
        object.__setattr__(self, "color", color)

    @classmethod
    def from_angle(cls, angle: float, *, elevation: float = 0.0, **kwargs) -> "Light":
        """Light coming from ``angle`` radians in the image plane (0 = +X, counter-clockwise)."""
        return cls(
            direction=(
                math.cos(angle) * math.cos(elevation),
                math.sin(angle) * math.cos(elevation),
                math.sin(elevation),
            ),
            **kwargs,
        )

    @classmethod
    def at(cls, position: Sequence[float], **kwargs) -> "Light":
        """Point light (e.g. a sun) at ``position`` in world kilometres."""
        return cls(position=_vector3(position, "position"), **kwargs)

    def direction_to(self, surface_point: Optional[Point3] = None) -> Point3:
        """Unit vector from ``surface_point`` towards the light."""
        if self.position is None or surface_point is None:
            return self._unit_direction
        px, py, pz = self.position
        sx, sy, sz = surface_point
        try:
            return _unit((px - sx, py - sy, pz - sz))
        except InvalidParameter:
            # Surface point coincides with the light: treat as fully lit.
            return (0.0, 0.0, 1.0)


def shade(normal: Point3, light: Light, surface_point: Optional[Point3] = None) -> float:
    """
    Shading factor in [0, 1] for a unit surface ``normal``.

    Lambertian ``n·l`` scaled by intensity and limb darkening, lifted by the
    ambient floor. Points facing away from the light get exactly the floor.
    """
    lx, ly, lz = light.direction_to(surface_point)
    nx, ny, nz = normal
    lambert = nx * lx + ny * ly + nz * lz
    if not math.isfinite(lambert) or lambert <= 0.0:
        return light.ambient
    # Fades towards the terminator; monotone in n·l.
    limb = 1.0 - light.limb_darkening * (1.0 - min(1.0, lambert))
    diffuse = min(1.0, light.intensity * lambert * limb)
    return light.ambient + (1.0 - light.ambient) * diffuse


__all__ = ["Light", "shade"]
