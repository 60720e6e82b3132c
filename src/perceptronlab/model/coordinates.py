"""
Coordinate Mapping
==================
Conversions between the two coordinate systems the application works in.

- Graph space: origin at the canvas center, y grows upward.
- Canvas space: origin at the top-left corner, y grows downward.

All functions take the canvas extent along the mapped axis (`dimension`) as
their first argument. `dimension` must be positive; this is a precondition and
is not checked.
"""
from __future__ import annotations


def to_graph(dimension: int, screen_value: float) -> float:
    """Canvas x -> graph x."""
    return screen_value - dimension / 2


def to_graph_y(dimension: int, screen_value: float) -> float:
    """Canvas y -> graph y (flips the vertical axis)."""
    return -1 * to_graph(dimension, screen_value)


def to_canvas(dimension: int, graph_value: float) -> float:
    """Graph x -> canvas x."""
    return dimension / 2 + graph_value


def to_canvas_y(dimension: int, graph_value: float) -> float:
    """Graph y -> canvas y (flips the vertical axis)."""
    return to_canvas(dimension, -1 * graph_value)
