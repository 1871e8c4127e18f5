"""Position and bearing estimation from four anchor readings."""

from __future__ import annotations

import enum
import logging
import math
from dataclasses import dataclass

from rssiloc.anchors import Anchor, AnchorTable
from rssiloc.geometry import (
    CirclePosition,
    Point,
    circle_intersections,
    classify_circles,
    rssi_to_distance,
)

logger = logging.getLogger(__name__)

# Anchors 1 and 2 lie on the horizontal baseline; 3 and 4 sit above and below it.
_LEFT, _RIGHT, _UPPER, _LOWER = 1, 2, 3, 4
_REQUIRED_ANCHORS = (_LEFT, _RIGHT, _UPPER, _LOWER)
_COSINE_PRECISION = 1_000_000.0


class Region(enum.IntEnum):
    """Quadrant around the baseline, judged from which anchors are heard louder."""

    FIRST = 1
    SECOND = 2
    THIRD = 3
    FOURTH = 4


@dataclass(frozen=True)
class Estimate:
    """The outcome of one solve: chosen point, region, bearing and supporting data."""

    position: Point | None
    region: Region | None
    angle: float
    intersections: tuple[Point, Point]
    circles: CirclePosition | None
    baseline: float


def _forms_triangle(a: float, b: float, c: float) -> bool:
    return (
        a + b > c
        and abs(a - b) < c
        and a + c > b
        and abs(a - c) < b
        and b + c > a
        and abs(b - c) < a
    )


def _angle_from_cosine(cosine: float) -> float:
    if math.isnan(cosine) or math.isinf(cosine):
        return math.nan
    truncated = int(cosine * _COSINE_PRECISION) / _COSINE_PRECISION
    if not -1.0 <= truncated <= 1.0:
        return math.nan
    return math.degrees(math.acos(truncated))


def compute_angle(
    node1_distance: float,
    node2_distance: float,
    b_rssi: float,
    c_rssi: float,
    d_rssi: float,
    f_rssi: float,
    baseline: float,
    region: Region | None,
) -> float:
    """Return the bearing in degrees of the unknown node around the baseline midpoint.

    ``b_rssi`` and ``c_rssi`` come from the two baseline anchors, ``d_rssi`` and
    ``f_rssi`` from the anchors above and below. The result is NaN when the
    cosine rule yields a value outside the range of acos.
    """
    angle = 0.0
    radius = 0.0
    if d_rssi == f_rssi:
        if c_rssi > b_rssi:
            angle = 0.0
        elif b_rssi > c_rssi:
            angle = 180.0
    else:
        squared = (node1_distance ** 2 + node2_distance ** 2 - (baseline ** 2) / 2.0) / 2.0
        radius = math.sqrt(squared) if squared >= 0 else math.nan
    logger.debug("median length: %f", radius)

    if radius == 0.0:
        return angle

    half = baseline / 2.0
    if region in (Region.FIRST, Region.FOURTH):
        angle = 0.0
        if _forms_triangle(half, node1_distance, radius):
            cosine = (radius * radius + half * half - node2_distance * node2_distance) / (
                2.0 * radius * half
            )
            angle = _angle_from_cosine(cosine)
            if d_rssi > f_rssi:
                angle = 360.0 - angle
        else:
            logger.debug("lengths do not form a triangle")
    elif region in (Region.SECOND, Region.THIRD):
        angle = 0.0
        if _forms_triangle(half, node1_distance, radius):
            cosine = (radius * radius + half * half - node1_distance * node1_distance) / (
                2.0 * radius * half
            )
            angle = _angle_from_cosine(cosine)
            if d_rssi > f_rssi:
                angle = angle + 180.0
            elif f_rssi > d_rssi:
                angle = 180.0 - angle
    logger.debug("angle: %f", angle)
    return angle


class Locator:
    """Collects anchor readings and estimates the unknown node's position."""

    def __init__(self) -> None:
        self._anchors = AnchorTable()
        self._region: Region | None = None
        self._position: Point | None = None

    @property
    def anchors(self) -> AnchorTable:
        """The readings received so far."""
        return self._anchors

    def add_reading(self, node_id: int, x: float, y: float, rssi: float) -> Anchor:
        """Record a reading from an anchor, replacing any earlier one from it."""
        anchor = Anchor(node_id, x, y, rssi, rssi_to_distance(rssi))
        self._anchors.upsert(anchor)
        return anchor

    def solve(self) -> Estimate:
        """Estimate position, region and bearing from the current readings.

        Raises ValueError when a reading from any of anchors 1 to 4 is missing,
        or when the two baseline anchors share an x coordinate.
        """
        missing = [n for n in _REQUIRED_ANCHORS if self._anchors.get(n) is None]
        if missing:
            raise ValueError(
                "missing readings from anchors: " + ", ".join(map(str, missing))
            )
        left = self._anchors.get(_LEFT)
        right = self._anchors.get(_RIGHT)
        upper = self._anchors.get(_UPPER)
        lower = self._anchors.get(_LOWER)
        assert left and right and upper and lower

        b_rssi, c_rssi = left.rssi, right.rssi
        d_rssi, f_rssi = upper.rssi, lower.rssi
        baseline = abs(right.x - left.x)

        try:
            circles: CirclePosition | None = classify_circles(
                baseline, left.distance, right.distance
            )
        except ValueError:
            circles = None

        first, second = circle_intersections(
            left.x, left.y, left.distance, right.x, right.y, right.distance
        )

        if c_rssi > b_rssi and f_rssi > d_rssi:
            self._region, self._position = Region.FIRST, first
        elif b_rssi > c_rssi and f_rssi > d_rssi:
            self._region, self._position = Region.SECOND, first
        elif b_rssi > c_rssi and d_rssi > f_rssi:
            self._region, self._position = Region.THIRD, second
        elif c_rssi > b_rssi and d_rssi > f_rssi:
            self._region, self._position = Region.FOURTH, second

        angle = compute_angle(
            left.distance,
            right.distance,
            b_rssi,
            c_rssi,
            d_rssi,
            f_rssi,
            baseline,
            self._region,
        )
        return Estimate(
            position=self._position,
            region=self._region,
            angle=angle,
            intersections=(first, second),
            circles=circles,
            baseline=baseline,
        )