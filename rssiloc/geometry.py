"""Distance estimation from signal strength and two-circle geometry."""

from __future__ import annotations

import enum
import math

# Fitted path-loss model: distance in metres from received signal strength in dBm.
_RSSI_OFFSET = 86.90876
_RSSI_SCALE = 93.6264
_REFERENCE_DISTANCE = 50.0

Point = tuple[float, float]


class CirclePosition(enum.IntEnum):
    """Relative position of two circles."""

    SEPARATE = 1
    EXTERNALLY_TANGENT = 2
    INTERNALLY_TANGENT = 3
    CONTAINED = 4
    INTERSECTING = 5


def rssi_to_distance(rssi: float) -> float:
    """Estimate the distance to a transmitter from its RSSI in dBm."""
    exponent = -((rssi + _RSSI_OFFSET) / _RSSI_SCALE) + math.log10(_REFERENCE_DISTANCE)
    return 10.0 ** exponent


def classify_circles(center_distance: float, radius1: float, radius2: float) -> CirclePosition:
    """Classify two circles by the distance between their centres and their radii.

    Raises ValueError when no classification applies (for example with NaN input).
    """
    total = radius1 + radius2
    difference = abs(radius1 - radius2)
    if center_distance > total:
        return CirclePosition.SEPARATE
    if center_distance == total:
        return CirclePosition.EXTERNALLY_TANGENT
    if center_distance == difference:
        return CirclePosition.INTERNALLY_TANGENT
    if center_distance < difference:
        return CirclePosition.CONTAINED
    if difference < center_distance < total:
        return CirclePosition.INTERSECTING
    raise ValueError(
        f"cannot classify circles: distance={center_distance!r}, "
        f"radii=({radius1!r}, {radius2!r})"
    )


def circle_intersections(
    x1: float, y1: float, r1: float, x2: float, y2: float, r2: float
) -> tuple[Point, Point]:
    """Return the two intersection points of two circles.

    The baseline between the centres is taken along the x axis, as the anchors
    are laid out on a horizontal line. When the circles do not meet, the chord
    offset is clamped so that the nearest approximate points are returned.
    Raises ValueError when the centres share the same x coordinate.
    """
    baseline = abs(x2 - x1)
    if baseline == 0:
        raise ValueError("circle centres must differ along the x axis")

    along = (r1 ** 2 - r2 ** 2 + baseline ** 2) / (2 * baseline)
    a = min(r1 + r2, max(r1 - r2, along))
    a_squared = r1 ** 2 - a ** 2
    h = math.sqrt(a_squared) if a_squared >= 0 else 0.0

    dx = (x2 - x1) / baseline
    dy = (y2 - y1) / baseline
    mid_x = x1 + a * dx
    mid_y = y1 + a * dy

    first = (mid_x + h * dy, mid_y - h * dx)
    second = (mid_x - h * dy, mid_y + h * dx)
    return first, second