"""Utility helpers for seeding paths."""

from .shapes import circle_points, polygon_points, line_points

__all__ = ["circle_points", "polygon_points", "line_points"]
