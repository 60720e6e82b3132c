"""
Scene Geometry
==============
Turns a `Session` into flat drawing primitives in canvas space.

The Qt canvas only paints what this module returns, which keeps all the
coordinate math testable without a display.
"""
from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Optional

from perceptronlab.model import coordinates
from perceptronlab.model.colors import RGB
from perceptronlab.model.state import DataPoint, Session


@dataclass(frozen=True)
class SceneCell:
    """Background square, top-left corner in canvas space."""
    x: float
    y: float
    size: float
    color: RGB


@dataclass(frozen=True)
class SceneLine:
    x0: float
    y0: float
    x1: float
    y1: float


@dataclass(frozen=True)
class SceneDot:
    id: str
    x: float
    y: float
    color: RGB
    labelled: bool


@dataclass
class Scene:
    background: list[SceneCell] = field(default_factory=list)
    gridlines: list[SceneLine] = field(default_factory=list)
    boundary: Optional[SceneLine] = None
    points: list[SceneDot] = field(default_factory=list)


def build_scene(session: Session, cell_size: int) -> Scene:
    return Scene(
        background=background_cells(session, cell_size),
        gridlines=axis_lines(session),
        boundary=boundary_line(session),
        points=point_dots(session),
    )


def background_cells(session: Session, cell_size: int) -> list[SceneCell]:
    """Cover the canvas with squares colored by the network output at their centers."""
    width, height = session.dimensions.width, session.dimensions.height
    half = cell_size / 2
    cells: list[SceneCell] = []
    for top in range(0, height, cell_size):
        for left in range(0, width, cell_size):
            probe = DataPoint(
                id="",
                x1=coordinates.to_graph(width, left + half),
                x2=coordinates.to_graph_y(height, top + half),
            )
            color = session.color_for(session.evaluate(probe))
            cells.append(SceneCell(float(left), float(top), float(cell_size), color))
    return cells


def axis_lines(session: Session) -> list[SceneLine]:
    """The graph x and y axes."""
    width, height = session.dimensions.width, session.dimensions.height
    cx = coordinates.to_canvas(width, 0.0)
    cy = coordinates.to_canvas_y(height, 0.0)
    return [
        SceneLine(0.0, cy, float(width), cy),
        SceneLine(cx, 0.0, cx, float(height)),
    ]


def boundary_line(session: Session) -> Optional[SceneLine]:
    """
    Decision boundary across the full canvas width.

    With w2 == 0 the boundary is the vertical line x = -bias/w1. With w1 and w2
    both zero there is no boundary and None is returned.
    """
    width, height = session.dimensions.width, session.dimensions.height
    left = coordinates.to_graph(width, 0.0)
    right = coordinates.to_graph(width, float(width))
    y_left = session.decision_boundary_y(left)
    y_right = session.decision_boundary_y(right)

    if math.isfinite(y_left) and math.isfinite(y_right):
        return SceneLine(
            0.0, coordinates.to_canvas_y(height, y_left),
            float(width), coordinates.to_canvas_y(height, y_right),
        )

    weights = session.weights
    if weights.x1 == 0:
        return None
    x = coordinates.to_canvas(width, -weights.bias / weights.x1)
    return SceneLine(x, 0.0, x, float(height))


def point_dots(session: Session) -> list[SceneDot]:
    width, height = session.dimensions.width, session.dimensions.height
    dots: list[SceneDot] = []
    for point in session.points:
        labelled = point.expected is not None
        output = point.expected if labelled else session.evaluate(point)
        dots.append(SceneDot(
            id=point.id,
            x=coordinates.to_canvas(width, point.x1),
            y=coordinates.to_canvas_y(height, point.x2),
            color=session.color_for(output),
            labelled=labelled,
        ))
    return dots


def nearest_point(session: Session, px: float, py: float, radius: float) -> Optional[str]:
    """Id of the point closest to canvas position (px, py) within `radius`, if any."""
    best_id: Optional[str] = None
    best_distance = radius
    for dot in point_dots(session):
        distance = math.hypot(dot.x - px, dot.y - py)
        if distance <= best_distance:
            best_id, best_distance = dot.id, distance
    return best_id
