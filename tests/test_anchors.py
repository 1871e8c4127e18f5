import pytest

from rssiloc.anchors import Anchor, AnchorTable


def _anchor(node_id, rssi=-60.0):
    return Anchor(node_id=node_id, x=float(node_id), y=0.0, rssi=rssi, distance=1.0)


def test_empty_table():
    table = AnchorTable()
    assert len(table) == 0
    assert list(table) == []
    assert table.get(1) is None


def test_iteration_is_sorted_by_node_id():
    table = AnchorTable()
    for node_id in (3, 1, 4, 2):
        table.upsert(_anchor(node_id))
    assert [a.node_id for a in table] == [1, 2, 3, 4]
    assert len(table) == 4


def test_upsert_replaces_existing_reading():
    table = AnchorTable()
    table.upsert(_anchor(2, rssi=-70.0))
    table.upsert(_anchor(2, rssi=-50.0))
    assert len(table) == 1
    assert table.get(2).rssi == -50.0


def test_get_returns_stored_anchor():
    table = AnchorTable()
    anchor = Anchor(node_id=1, x=-2.5, y=0.0, rssi=-45.0, distance=3.2)
    table.upsert(anchor)
    assert table.get(1) == anchor


def test_replacement_keeps_order():
    table = AnchorTable()
    for node_id in (1, 2, 3):
        table.upsert(_anchor(node_id))
    table.upsert(_anchor(2, rssi=-30.0))
    assert [a.node_id for a in table] == [1, 2, 3]
    assert [a.rssi for a in table] == [-60.0, -30.0, -60.0]


@pytest.mark.parametrize("node_id", [-1, 256])
def test_node_id_out_of_range(node_id):
    with pytest.raises(ValueError):
        _anchor(node_id)


def test_anchor_is_immutable():
    anchor = _anchor(1)
    with pytest.raises(AttributeError):
        anchor.rssi = -10.0
    assert anchor.rssi == -60.0