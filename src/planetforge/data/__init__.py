"""Preset coloring schemes and planets."""
