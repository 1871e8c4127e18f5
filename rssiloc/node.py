"""Anchor and unknown-node roles of the localisation experiment."""

from __future__ import annotations

import argparse
import contextlib
import itertools
import logging
import socket
import sys
import time
from collections.abc import Callable, Iterator
from typing import IO, Optional

from rssiloc.locator import Estimate, Locator
from rssiloc.message import LocationMessage, parse_message
from rssiloc.topology import Topology, get_topology

logger = logging.getLogger(__name__)

ANCHOR_PORT = 8765
UNKNOWN_PORT = 5678
DEFAULT_INTERVAL = 10.0
# Fixed link-local address of the unknown node in the simulated network.
DEFAULT_DESTINATION = "fe80::205:5:5:5"

Reception = tuple[bytes, float, int]


class AnchorNode:
    """An anchor that periodically broadcasts its position from a topology.

    ``send`` delivers one payload; ``is_reachable`` tells whether the network
    is ready to carry it. Sends are skipped while the network is unreachable.
    """

    def __init__(
        self,
        node_id: int,
        topology: Topology,
        send: Callable[[bytes], object],
        *,
        is_reachable: Optional[Callable[[], bool]] = None,
        interval: float = DEFAULT_INTERVAL,
        sleep: Callable[[float], object] = time.sleep,
        out: Optional[IO[str]] = None,
    ) -> None:
        self.node_id = node_id
        self.topology = topology
        self.x, self.y = topology.location(node_id)
        self.message = LocationMessage(node_id, self.x, self.y)
        self.interval = interval
        self.tx_count = 0
        self._send = send
        self._is_reachable = is_reachable or (lambda: True)
        self._sleep = sleep
        self._out = out

    @property
    def is_coordinator(self) -> bool:
        """Whether this anchor acts as the network root."""
        return self.node_id == 1

    def send_once(self) -> bool:
        """Broadcast the position once; return whether it was sent."""
        if not self._is_reachable():
            logger.info("Not reachable yet")
            return False
        print(f"Sending broadcast {self.tx_count}", file=self._out)
        self._send(self.message.encode())
        self.tx_count += 1
        return True

    def run(self, count: Optional[int] = None) -> int:
        """Wait one interval before each send, ``count`` times or forever.

        Returns the number of broadcasts actually sent.
        """
        rounds: Iterator[int] = iter(range(count)) if count is not None else itertools.count()
        sent = 0
        for _ in rounds:
            logger.info("X: %f", self.x)
            self._sleep(self.interval)
            if self.send_once():
                sent += 1
        return sent


class UnknownNode:
    """The node to be located: turns anchor broadcasts into position estimates.

    ``receive`` returns the next ``(payload, rssi, hop_count)`` reception, or
    None when there are no more.
    """

    def __init__(
        self,
        receive: Optional[Callable[[], Optional[Reception]]] = None,
        *,
        locator: Optional[Locator] = None,
        out: Optional[IO[str]] = None,
    ) -> None:
        self.locator = locator if locator is not None else Locator()
        self._receive = receive
        self._out = out

    def handle_datagram(
        self, data: bytes | str, rssi: float, hop_count: int = 0
    ) -> Optional[Estimate]:
        """Process one broadcast; return the new estimate, or None if there is none.

        Only broadcasts heard directly (hop count 0) are used as readings.
        """
        logger.info("packet received")
        try:
            message = parse_message(data)
        except ValueError as exc:
            logger.info("cannot parse datagram: %s", exc)
            return None
        logger.info("Node ID: %d X: %f Y: %f", message.node_id, message.x, message.y)
        if hop_count != 0:
            return None
        try:
            self.locator.add_reading(message.node_id, message.x, message.y, float(rssi))
        except ValueError as exc:
            logger.info("reading rejected: %s", exc)
            return None
        try:
            estimate = self.locator.solve()
        except ValueError as exc:
            logger.info("cannot estimate yet: %s", exc)
            return None
        self._report(estimate)
        return estimate

    def serve(self, count: Optional[int] = None) -> list[Estimate]:
        """Handle up to ``count`` receptions, or all of them; return the estimates made."""
        if self._receive is None:
            raise RuntimeError("no receive function configured")
        rounds: Iterator[int] = iter(range(count)) if count is not None else itertools.count()
        estimates: list[Estimate] = []
        for _ in rounds:
            reception = self._receive()
            if reception is None:
                break
            data, rssi, hop_count = reception
            estimate = self.handle_datagram(data, rssi, hop_count)
            if estimate is not None:
                estimates.append(estimate)
        return estimates

    def _report(self, estimate: Estimate) -> None:
        (x1, y1), (x2, y2) = estimate.intersections
        print("Intersections:", file=self._out)
        print(f"Point 1: ({x1:f}, {y1:f})", file=self._out)
        print(f"Point 2: ({x2:f}, {y2:f})", file=self._out)
        if estimate.region is not None and estimate.position is not None:
            px, py = estimate.position
            print(f"Region: {estimate.region.value}", file=self._out)
            print(f"Position: ({px:f}, {py:f})", file=self._out)
        print(f"Angle: {estimate.angle:f}", file=self._out)


@contextlib.contextmanager
def _udp_sender(
    destination: str, port: int, source_port: int
) -> Iterator[Callable[[bytes], object]]:
    family, _, _, _, address = socket.getaddrinfo(
        destination, port, type=socket.SOCK_DGRAM
    )[0]
    with socket.socket(family, socket.SOCK_DGRAM) as sock:
        sock.bind(("::" if family == socket.AF_INET6 else "0.0.0.0", source_port))
        yield lambda payload: sock.sendto(payload, address)


def anchor_main(argv: Optional[list[str]] = None) -> int:
    """Run an anchor that broadcasts its position over UDP."""
    parser = argparse.ArgumentParser(description="Broadcast an anchor position.")
    parser.add_argument("node_id", type=int, help="anchor node id, 1 to 4")
    parser.add_argument("--topology", type=int, default=1, help="layout number")
    parser.add_argument("--count", type=int, default=None, help="number of rounds")
    parser.add_argument("--interval", type=float, default=DEFAULT_INTERVAL)
    parser.add_argument("--destination", default=DEFAULT_DESTINATION)
    parser.add_argument("--port", type=int, default=UNKNOWN_PORT)
    parser.add_argument("--source-port", type=int, default=ANCHOR_PORT)
    args = parser.parse_args(argv)

    try:
        topology = get_topology(args.topology)
        topology.location(args.node_id)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        with _udp_sender(args.destination, args.port, args.source_port) as send:
            node = AnchorNode(args.node_id, topology, send, interval=args.interval)
            node.run(args.count)
    except OSError as exc:
        print(f"network error: {exc}", file=sys.stderr)
        return 1
    return 0


def _read_receptions(lines: IO[str]) -> Iterator[Reception]:
    for number, line in enumerate(lines, start=1):
        text = line.strip()
        if not text or text.startswith("#"):
            continue
        rssi_text, _, payload = text.partition(" ")
        try:
            rssi = float(rssi_text)
        except ValueError:
            raise ValueError(f"line {number}: invalid RSSI {rssi_text!r}") from None
        yield payload.strip().encode("latin-1"), rssi, 0


def unknown_main(argv: Optional[list[str]] = None) -> int:
    """Estimate the unknown node's position from recorded receptions.

    Each input line holds an RSSI in dBm followed by the received payload.
    """
    parser = argparse.ArgumentParser(description="Locate a node from anchor readings.")
    parser.add_argument("readings", nargs="?", default="-", help="file of readings, - for stdin")
    args = parser.parse_args(argv)

    with contextlib.ExitStack() as stack:
        if args.readings == "-":
            stream: IO[str] = sys.stdin
        else:
            try:
                stream = stack.enter_context(open(args.readings, encoding="utf-8"))
            except OSError as exc:
                print(f"cannot open readings: {exc}", file=sys.stderr)
                return 1
        receptions = _read_receptions(stream)
        node = UnknownNode(lambda: next(receptions, None))
        try:
            node.serve()
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 1
    return 0