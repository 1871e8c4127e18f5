"""Table of anchor readings kept in node-id order."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Anchor:
    """An anchor's position together with its latest signal reading."""

    node_id: int
    x: float
    y: float
    rssi: float
    distance: float

    def __post_init__(self) -> None:
        if not 0 <= self.node_id <= 255:
            raise ValueError(f"node id out of range 0..255: {self.node_id}")


class AnchorTable:
    """Latest reading per anchor, iterated in ascending node-id order."""

    def __init__(self) -> None:
        self._anchors: dict[int, Anchor] = {}

    def upsert(self, anchor: Anchor) -> None:
        """Insert the anchor, or replace the reading held for its node id."""
        self._anchors[anchor.node_id] = anchor

    def get(self, node_id: int) -> Anchor | None:
        """Return the anchor with this node id, or None if it is unknown."""
        return self._anchors.get(node_id)

    def __iter__(self) -> Iterator[Anchor]:
        return (self._anchors[key] for key in sorted(self._anchors))

    def __len__(self) -> int:
        return len(self._anchors)