"""Text datagram that anchors broadcast to announce their position."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Anchors format into a 32-byte buffer, so at most 31 characters go on the wire.
MESSAGE_SIZE = 32
# The receiver copies datagrams into a 100-byte buffer; larger ones are rejected.
RECEIVE_BUFFER_SIZE = 100

_FLOAT = r"[+-]?(?:infinity|inf|nan|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)"
_PATTERN = re.compile(
    rf"Node\s*ID:\s*([+-]?\d+)\s*X:\s*({_FLOAT})\s*Y:\s*({_FLOAT})",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class LocationMessage:
    """An anchor's node id and position as carried in a broadcast."""

    node_id: int
    x: float
    y: float

    def encode(self) -> bytes:
        """Return the datagram payload for this message."""
        return format_message(self.node_id, self.x, self.y).encode("ascii")


def format_message(node_id: int, x: float, y: float) -> str:
    """Format a position announcement, cut to fit the anchor's send buffer."""
    text = f"Node ID:{int(node_id)} X:{float(x):f} Y:{float(y):f}"
    return text[: MESSAGE_SIZE - 1]


def parse_message(data: bytes | str) -> LocationMessage:
    """Parse a received position announcement.

    The text ends at the first NUL byte, and anything after the Y value is
    ignored. Raises ValueError when the datagram is too large for the receive
    buffer or does not hold a node id and both coordinates.
    """
    raw = data.encode("latin-1") if isinstance(data, str) else bytes(data)
    if len(raw) >= RECEIVE_BUFFER_SIZE:
        raise ValueError(
            f"datagram of {len(raw)} bytes exceeds receive buffer of "
            f"{RECEIVE_BUFFER_SIZE} bytes"
        )
    text = raw.split(b"\x00", 1)[0].decode("latin-1")
    match = _PATTERN.match(text)
    if match is None:
        raise ValueError(f"malformed location message: {text!r}")
    node_id, x, y = match.groups()
    return LocationMessage(int(node_id), float(x), float(y))