"""Compact binary encoding of the API responses.

Lengths are unsigned LEB128 varints, strings are length-prefixed UTF-8,
colours are three raw bytes, values are little-endian 32-bit floats and
dates are their ISO text.
"""

from __future__ import annotations

import struct

from nchoputa.response import (
    GraphData,
    GraphList,
    GraphSummary,
    NaiveDate,
    Point,
)

_MAX_VARINT_BYTES = 10
_F32 = struct.Struct("<f")


class DecodeError(ValueError):
    """Raised when bytes do not hold a valid message."""


def _varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varint must not be negative")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _string(text: str) -> bytes:
    raw = text.encode("utf-8")
    return _varint(len(raw)) + raw


def _color(color) -> bytes:
    if len(color) != 3:
        raise ValueError(f"color must have three components: {color!r}")
    return bytes(color)


def _points(points: list[Point]) -> bytes:
    parts = [_varint(len(points))]
    for date, value in points:
        parts.append(_string(date.isoformat()))
        parts.append(_F32.pack(value))
    return b"".join(parts)


def _summary(summary: GraphSummary) -> bytes:
    return b"".join(
        [
            _string(summary.name),
            _string(summary.uri),
            _string(summary.description),
            _color(summary.color),
        ]
    )


def encode_graph_list(graph_list: GraphList) -> bytes:
    """Encode a graph listing."""
    return _varint(len(graph_list.graphs)) + b"".join(
        _summary(summary) for summary in graph_list.graphs
    )


def encode_graph_data(graph_data: GraphData) -> bytes:
    """Encode one graph with its points."""
    return b"".join(
        [_string(graph_data.name), _color(graph_data.color), _points(graph_data.points)]
    )


class _Reader:
    """Cursor over an encoded message."""

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)
        self._pos = 0

    def take(self, count: int) -> bytes:
        end = self._pos + count
        if end > len(self._data):
            raise DecodeError("unexpected end of input")
        chunk = self._data[self._pos:end]
        self._pos = end
        return chunk

    def varint(self) -> int:
        result = 0
        for index in range(_MAX_VARINT_BYTES):
            byte = self.take(1)[0]
            result |= (byte & 0x7F) << (7 * index)
            if not byte & 0x80:
                if result >= 1 << 64:
                    raise DecodeError("varint out of range")
                return result
        raise DecodeError("varint too long")

    def string(self) -> str:
        raw = self.take(self.varint())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError("invalid UTF-8 in string") from exc

    def color(self) -> tuple[int, int, int]:
        red, green, blue = self.take(3)
        return (red, green, blue)

    def f32(self) -> float:
        return _F32.unpack(self.take(4))[0]

    def date(self) -> NaiveDate:
        text = self.string()
        try:
            return NaiveDate.parse(text)
        except ValueError as exc:
            raise DecodeError(f"invalid date {text!r}") from exc

    def points(self) -> list[Point]:
        return [(self.date(), self.f32()) for _ in range(self.varint())]

    def summary(self) -> GraphSummary:
        return GraphSummary(
            name=self.string(),
            uri=self.string(),
            description=self.string(),
            color=self.color(),
        )


def decode_graph_list(data: bytes) -> GraphList:
    """Decode a graph listing; bytes after the message are ignored."""
    reader = _Reader(data)
    return GraphList(graphs=[reader.summary() for _ in range(reader.varint())])


def decode_graph_data(data: bytes) -> GraphData:
    """Decode one graph; bytes after the message are ignored."""
    reader = _Reader(data)
    return GraphData(name=reader.string(), color=reader.color(), points=reader.points())