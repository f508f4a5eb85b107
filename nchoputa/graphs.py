"""Loading the sea level datasets served by the application."""

from __future__ import annotations

import csv
import math
import struct
from collections.abc import Iterable
from pathlib import Path

from nchoputa.response import Graph, NaiveDate, Point

_DATE_COLUMN = "Date"
_VALUE_COLUMN = "Value"
_F32 = struct.Struct("<f")


def _to_f32(value: float) -> float:
    try:
        return _F32.unpack(_F32.pack(value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def points_from_tsv(path: str | Path) -> list[Point]:
    """Read (date, value) points from a tab-separated file with Date and Value columns."""
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle, delimiter="\t")
        header = next(reader, None)
        if header is None:
            return []
        try:
            date_index = header.index(_DATE_COLUMN)
            value_index = header.index(_VALUE_COLUMN)
        except ValueError as exc:
            raise ValueError(f"{path}: missing column in header {header!r}") from exc

        points = []
        for row in reader:
            if not row:
                continue
            if len(row) != len(header):
                raise ValueError(
                    f"{path}:{reader.line_num}: expected {len(header)} fields, got {len(row)}"
                )
            try:
                date = NaiveDate.parse(row[date_index])
                value = float(row[value_index])
            except ValueError as exc:
                raise ValueError(f"{path}:{reader.line_num}: {exc}") from exc
            points.append((date, _to_f32(value)))
        return points


def default_graphs(data_dir: str | Path = "data") -> list[Graph]:
    """Load the built-in sea level datasets from data_dir."""
    base = Path(data_dir) / "sealevel"
    return [
        Graph(
            name="CSIRO",
            description=(
                "Change in sea level in millimeters compared to the 1993-2008 average "
                "from the sea level group of CSIRO (Commonwealth Scientific and "
                "Industrial Research Organisation), Australia's national science "
                "agency. It is based on a 2011 reconstruction of sea-level rise from "
                "the late 19th to the early 21st century."
            ),
            color=(0xB1, 0xF8, 0xF2),
            points=points_from_tsv(base / "csiro.tsv"),
        ),
        Graph(
            name="UHSLC",
            description=(
                "Change in sea level in millimeters compared to the 1993-2008 average "
                "from the University of Hawaii Sea Level Center. It is based on a "
                "weighted average of 373 global tide gauge records collected by the "
                "U.S. National Ocean Service, UHSLC, and partner agencies worldwide."
            ),
            color=(0xBC, 0xD3, 0x9C),
            points=points_from_tsv(base / "uhslc.tsv"),
        ),
    ]


def build_index(graphs: Iterable[Graph]) -> dict[str, Graph]:
    """Map graph names to graphs; a later graph replaces an earlier one of the same name."""
    return {graph.name: graph for graph in graphs}