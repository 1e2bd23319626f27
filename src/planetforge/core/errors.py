"""Exceptions raised by the generation core."""
from __future__ import annotations


class PlanetError(Exception):
    """Base class for planet generation failures."""


class InvalidParameter(PlanetError, ValueError):
    """A construction or generation parameter is out of range or malformed."""


class NumericDegenerate(PlanetError, ArithmeticError):
    """Noise or projection math produced a NaN or infinite value."""


__all__ = ["InvalidParameter", "NumericDegenerate", "PlanetError"]
