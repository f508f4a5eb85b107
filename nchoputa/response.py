"""Data types exchanged between the graph server and its viewer."""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field

F32_MAX = 3.4028234663852886e38
F32_MIN = -F32_MAX

_MIN_YEAR = -262143
_MAX_YEAR = 262142
_DATE_RE = re.compile(r"^([+-]?\d{4,})-(\d{2})-(\d{2})$")
# Days from 0000-01-01 to 1970-01-01 in the proleptic Gregorian calendar.
_YEAR_ZERO_TO_EPOCH = 719528

Color = tuple[int, int, int]


def _is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def _days_in_month(year: int, month: int) -> int:
    if month == 2:
        return 29 if _is_leap(year) else 28
    return 30 if month in (4, 6, 9, 11) else 31


def _days_from_epoch(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01; negative for earlier dates."""
    if month <= 2:
        year -= 1
    era = year // 400
    year_of_era = year - era * 400
    shifted_month = (month + 9) % 12
    day_of_year = (153 * shifted_month + 2) // 5 + day - 1
    day_of_era = (
        year_of_era * 365 + year_of_era // 4 - year_of_era // 100 + day_of_year
    )
    return era * 146097 + day_of_era - 719468


@dataclass(frozen=True, order=True)
class NaiveDate:
    """A calendar date without a time zone, year zero included."""

    year: int
    month: int
    day: int

    def __post_init__(self) -> None:
        if not _MIN_YEAR <= self.year <= _MAX_YEAR:
            raise ValueError(f"year out of range: {self.year}")
        if not 1 <= self.month <= 12:
            raise ValueError(f"month out of range: {self.month}")
        if not 1 <= self.day <= _days_in_month(self.year, self.month):
            raise ValueError(f"day out of range: {self.day}")

    @classmethod
    def parse(cls, text: str) -> NaiveDate:
        """Parse a date written as YYYY-MM-DD."""
        match = _DATE_RE.match(text)
        if match is None:
            raise ValueError(f"invalid date: {text!r}")
        year, month, day = (int(part) for part in match.groups())
        return cls(year, month, day)

    def isoformat(self) -> str:
        if 0 <= self.year <= 9999:
            year = f"{self.year:04d}"
        else:
            year = f"{self.year:+05d}"
        return f"{year}-{self.month:02d}-{self.day:02d}"

    def days_since_year_zero(self) -> int:
        """Number of days elapsed since 0000-01-01."""
        return _days_from_epoch(self.year, self.month, self.day) + _YEAR_ZERO_TO_EPOCH

    def __str__(self) -> str:
        return self.isoformat()


DEFAULT_DATE = NaiveDate(1970, 1, 1)

Point = tuple[NaiveDate, float]


@dataclass
class GraphSummary:
    """What the graph listing says about one graph."""

    name: str
    uri: str
    description: str
    color: Color


@dataclass
class GraphList:
    graphs: list[GraphSummary] = field(default_factory=list)


@dataclass
class GraphIndex:
    graphs: dict[str, GraphSummary] = field(default_factory=dict)


@dataclass
class Graph:
    """A dataset held by the server."""

    name: str
    description: str
    color: Color
    points: list[Point] = field(default_factory=list)


@dataclass
class GraphData:
    """A dataset as sent to the viewer."""

    name: str
    color: Color
    points: list[Point] = field(default_factory=list)

    def max_x(self) -> NaiveDate:
        """Date of the last point; points are assumed to be in time order."""
        return self.points[-1][0] if self.points else DEFAULT_DATE

    def min_x(self) -> NaiveDate:
        """Date of the first point; points are assumed to be in time order."""
        return self.points[0][0] if self.points else DEFAULT_DATE

    def max_y(self) -> float:
        return max(self._values(), default=F32_MIN)

    def min_y(self) -> float:
        return min(self._values(), default=F32_MAX)

    def _values(self):
        return (value for _, value in self.points if not math.isnan(value))