"""Anchor layouts used in the localisation experiments."""

from __future__ import annotations

from dataclasses import dataclass

from rssiloc.geometry import Point


@dataclass(frozen=True)
class Topology:
    """A numbered layout of four anchors, indexed by node id starting at 1.

    Anchors 1 and 2 lie on the horizontal baseline, anchor 3 above it and
    anchor 4 below it. ``reports_energy`` marks the layout whose anchors print
    an energy usage summary after every send.
    """

    number: int
    locations: tuple[Point, ...]
    reports_energy: bool = False

    def location(self, node_id: int) -> Point:
        """Return the position of the anchor with this node id.

        Raises ValueError when the node id has no place in this layout.
        """
        if not 1 <= node_id <= len(self.locations):
            raise ValueError(
                f"node id {node_id} is not an anchor of topology {self.number}; "
                f"expected 1..{len(self.locations)}"
            )
        return self.locations[node_id - 1]


def _layout(half_baseline: float, vertical: float) -> tuple[Point, ...]:
    return (
        (-half_baseline, 0.0),
        (half_baseline, 0.0),
        (0.0, vertical),
        (0.0, -vertical),
    )


_TOPOLOGIES: dict[int, Topology] = {
    1: Topology(1, _layout(2.5, 15.0)),
    2: Topology(2, _layout(5.0, 10.0)),
    3: Topology(3, _layout(7.5, 10.0)),
    4: Topology(4, _layout(10.0, 10.0)),
    5: Topology(5, _layout(12.5, 10.0), reports_energy=True),
    6: Topology(6, _layout(15.0, 10.0)),
    7: Topology(7, _layout(1.0, 10.0)),
    8: Topology(8, _layout(0.5, 10.0)),
}


def get_topology(number: int) -> Topology:
    """Return the anchor layout with this number.

    Raises ValueError for a number that names no known layout.
    """
    try:
        return _TOPOLOGIES[number]
    except KeyError:
        known = ", ".join(str(n) for n in sorted(_TOPOLOGIES))
        raise ValueError(f"unknown topology {number}; known: {known}") from None