import pytest

from rssiloc.message import (
    MESSAGE_SIZE,
    RECEIVE_BUFFER_SIZE,
    LocationMessage,
    format_message,
    parse_message,
)
from rssiloc.topology import get_topology

ALL_ANCHORS = [
    (number, node_id, *get_topology(number).location(node_id))
    for number in range(1, 9)
    for node_id in range(1, 5)
]


def test_format_is_cut_to_send_buffer():
    assert format_message(1, -2.5, 0.0) == "Node ID:1 X:-2.500000 Y:0.00000"


def test_short_message_is_not_cut():
    assert format_message(2, 1.0, 2.0) == "Node ID:2 X:1.000000 Y:2.000000"


@pytest.mark.parametrize("number,node_id,x,y", ALL_ANCHORS)
def test_formatted_message_fits_buffer(number, node_id, x, y):
    assert len(format_message(node_id, x, y)) <= MESSAGE_SIZE - 1


@pytest.mark.parametrize("number,node_id,x,y", ALL_ANCHORS)
def test_round_trip_for_every_anchor(number, node_id, x, y):
    message = LocationMessage(node_id, x, y)
    parsed = parse_message(message.encode())
    assert parsed.node_id == node_id
    assert parsed.x == pytest.approx(x)
    assert parsed.y == pytest.approx(y)


def test_encode_matches_format():
    message = LocationMessage(3, 0.0, 10.0)
    assert message.encode() == format_message(3, 0.0, 10.0).encode("ascii")


def test_parse_accepts_extra_whitespace():
    assert parse_message(b"Node ID: 7 X: 1.5 Y: -2") == LocationMessage(7, 1.5, -2.0)


def test_parse_accepts_missing_whitespace():
    assert parse_message(b"NodeID:4X:1Y:2") == LocationMessage(4, 1.0, 2.0)


def test_parse_accepts_exponent():
    assert parse_message("Node ID:1 X:1e1 Y:-2.5E-1").x == pytest.approx(10.0)
    assert parse_message("Node ID:1 X:1e1 Y:-2.5E-1").y == pytest.approx(-0.25)


def test_parse_stops_at_nul():
    assert parse_message(b"Node ID:2 X:1 Y:2\x00 trailing") == LocationMessage(2, 1.0, 2.0)


def test_parse_ignores_trailing_text():
    assert parse_message(b"Node ID:5 X:3 Y:4 extra") == LocationMessage(5, 3.0, 4.0)


def test_parse_rejects_nul_before_fields():
    with pytest.raises(ValueError):
        parse_message(b"Node ID:2\x00 X:1 Y:2")


@pytest.mark.parametrize(
    "data",
    [b"hello", b"Node ID:1 X:2", b"Node ID:x X:1 Y:2", b"", b" Node ID:1 X:1 Y:1"],
)
def test_parse_rejects_malformed(data):
    with pytest.raises(ValueError):
        parse_message(data)


def test_parse_rejects_oversized_datagram():
    payload = b"Node ID:1 X:1 Y:1 ".ljust(RECEIVE_BUFFER_SIZE, b" ")
    with pytest.raises(ValueError):
        parse_message(payload)


def test_parse_accepts_largest_datagram():
    payload = b"Node ID:1 X:1 Y:1 ".ljust(RECEIVE_BUFFER_SIZE - 1, b" ")
    assert parse_message(payload) == LocationMessage(1, 1.0, 1.0)