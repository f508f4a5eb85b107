"""Turning graph data into plot coordinates and picking points under the cursor."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable

from nchoputa.response import F32_MAX, GraphData, NaiveDate

_F32 = struct.Struct("<f")
_ZOOM_SPAN = 16.0
_CROSSHAIR_ARM = 10.0

Vertex = tuple[float, float, float]
PlotPoint = tuple[float, float]


def _f32(value: float) -> float:
    """Round a float to single precision, saturating to infinity."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def date_scale(date: NaiveDate) -> float:
    """Position of a date on the x axis: days since 0000-01-01."""
    return _f32(float(date.days_since_year_zero()))


def graph_points(graph_data: GraphData) -> list[PlotPoint]:
    """The graph's points as (x, y) plot coordinates, in the same order."""
    return [(date_scale(date), _f32(value)) for date, value in graph_data.points]


def line_graph_vertices(points: Iterable[PlotPoint]) -> list[Vertex]:
    """Vertices of a line strip through the given points, in the z = 0 plane."""
    return [(x, y, 0.0) for x, y in points]


def crosshair_vertices() -> list[Vertex]:
    """Line-list vertices of the crosshair: a vertical then a horizontal stroke."""
    arm = _CROSSHAIR_ARM
    return [
        (0.0, -arm, 0.0),
        (0.0, arm, 0.0),
        (-arm, 0.0, 0.0),
        (arm, 0.0, 0.0),
    ]


def find_closest_point(
    to: PlotPoint, points: Iterable[PlotPoint]
) -> tuple[int, float, PlotPoint] | None:
    """Find the point nearest to `to`.

    Returns (index, distance, point) for the first point at the smallest
    distance, or None when there are no points closer than the largest
    single-precision value.
    """
    to_x, to_y = to
    smallest = F32_MAX
    best = None
    for index, (x, y) in enumerate(points):
        dx = _f32(to_x - x)
        dy = _f32(to_y - y)
        distance = _f32(math.sqrt(_f32(_f32(dx * dx) + _f32(dy * dy))))
        if distance < smallest:
            smallest = distance
            best = (index, distance, (x, y))
    return best


def zoom_factor(delta_y: float) -> float:
    """Camera scale multiplier for a mouse wheel movement of delta_y."""
    if delta_y >= 0.0:
        return _f32(delta_y / _ZOOM_SPAN)
    return _f32(1.0 / _f32(abs(delta_y) / _ZOOM_SPAN))