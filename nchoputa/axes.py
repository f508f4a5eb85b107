"""Axis scales and tick layout for the graph viewer."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterator
from dataclasses import dataclass, field

_F32 = struct.Struct("<f")
_PADDING_RATIO = 0.08
_TICK_LENGTH = 15.0

Vertex = tuple[float, float, float]


def _f32(value: float) -> float:
    """Round a float to single precision, saturating to infinity."""
    if math.isnan(value) or math.isinf(value):
        return value
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _div(numerator: float, denominator: float) -> float:
    """IEEE division: division by zero gives an infinity or NaN instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _ceil(value: float) -> float:
    if math.isnan(value) or math.isinf(value):
        return value
    return float(math.ceil(value))


def _mul(left: float, right: float) -> float:
    # inf * 0 is NaN under IEEE rules; Python agrees, but keep it explicit.
    return left * right


@dataclass
class Scale:
    """One axis: its label and the data range it covers."""

    label: str
    min: float
    max: float


@dataclass
class Size:
    """Size of the view in pixels."""

    width: float = 0.0
    height: float = 0.0


@dataclass
class Axes:
    """Both axes of the plot and the view they are drawn in."""

    x: Scale = field(default_factory=lambda: Scale("x", 0.0, 100.0))
    y: Scale = field(default_factory=lambda: Scale("y", 0.0, 100.0))
    view_size: Size = field(default_factory=Size)
    max_ticks: int = 10

    def nice_num(self, lst: float, rround: bool) -> float:
        """Round lst to 1, 2 or 5 times a power of ten.

        With rround the nearest such number is taken, otherwise the
        smallest one not below lst.
        """
        if math.isnan(lst) or lst < 0:
            return math.nan
        if lst == 0:
            # log10(0) is -inf, so the power is 0 and the result is 0.
            return 0.0
        if math.isinf(lst):
            return math.inf
        exponent = math.floor(math.log10(lst))
        power = 10.0 ** exponent
        fraction = _f32(lst / power)

        if rround:
            if fraction < 1.5:
                nice_fraction = 1.0
            elif fraction < 3.0:
                nice_fraction = 2.0
            elif fraction < 7.0:
                nice_fraction = 5.0
            else:
                nice_fraction = 10.0
        elif fraction <= 1.0:
            nice_fraction = 1.0
        elif fraction <= 2.0:
            nice_fraction = 2.0
        elif fraction <= 5.0:
            nice_fraction = 5.0
        else:
            nice_fraction = 10.0

        return _f32(nice_fraction * power)

    def range(self) -> float:
        """Nice upper bound of the x span."""
        return self.nice_num(_f32(self.x.max - self.x.min), False)

    def tick_spacing(self) -> float:
        """Distance between neighbouring ticks."""
        if self.max_ticks < 1:
            raise ValueError(f"max_ticks must be at least 1: {self.max_ticks}")
        original = self.nice_num(_f32(_div(self.range(), float(self.max_ticks - 1))), True)
        factor = _f32(_div(_f32(self.x.max - self.x.min), original))
        if _div(factor, float(self.max_ticks)) <= 0.5:
            return _f32(original / 2.0)
        return original

    def _snap(self, value: float) -> float:
        spacing = self.tick_spacing()
        return _f32(_mul(_ceil(_f32(_div(value, spacing))), spacing))

    def scale_x_max(self) -> float:
        return self._snap(self.x.max)

    def scale_x_min(self) -> float:
        return self._snap(self.x.min)

    def scale_y_max(self) -> float:
        return self._snap(self.y.max)

    def scale_y_min(self) -> float:
        return self._snap(self.y.min)

    def _half_extents(self) -> tuple[float, float, float, float]:
        padding = _f32(self.view_size.width * _PADDING_RATIO)
        width = _f32(self.view_size.width - padding)
        height = _f32(self.view_size.height - padding)
        return width, height, _f32(width / 2.0), _f32(height / 2.0)

    def frame_vertices(self) -> list[Vertex]:
        """The bare L-shaped frame: top of the y axis, origin, end of the x axis."""
        _, _, min_x, min_y = self._half_extents()
        return [
            (-min_x, min_y, 0.0),
            (-min_x, -min_y, 0.0),
            (min_x, -min_y, 0.0),
        ]

    def _ticks(self, low: float, high: float) -> Iterator[float]:
        spacing = self.tick_spacing()
        point = low
        while True:
            yield point
            following = _f32(point + spacing)
            if not following <= high or following == point:
                return
            point = following

    def tick_vertices(self) -> list[Vertex]:
        """The frame as a line strip with a tick mark at every tick position."""
        width, height, min_x, min_y = self._half_extents()
        vertices: list[Vertex] = [(-min_x, min_y, 0.0)]

        low, high = self.scale_y_min(), self.scale_y_max()
        span = _f32(high - low)
        for point in self._ticks(low, high):
            ratio = _f32(_div(_f32(point - low), span))
            y = _f32(_f32(ratio * height) - min_y)
            vertices.append((-min_x, -y, 0.0))
            vertices.append((_f32(-min_x - _TICK_LENGTH), -y, 0.0))
            vertices.append((-min_x, -y, 0.0))

        vertices.append((-min_x, -min_y, 0.0))

        low, high = self.scale_x_min(), self.scale_x_max()
        span = _f32(high - low)
        for point in self._ticks(low, high):
            ratio = _f32(_div(_f32(point - low), span))
            x = _f32(_f32(ratio * width) - min_x)
            vertices.append((-x, -min_y, 0.0))
            vertices.append((-x, _f32(-min_y - _TICK_LENGTH), 0.0))
            vertices.append((-x, -min_y, 0.0))

        vertices.append((min_x, -min_y, 0.0))
        return vertices