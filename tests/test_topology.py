import pytest

from rssiloc.topology import Topology, get_topology

ALL_NUMBERS = range(1, 9)


def test_topology_one_locations_match_layout():
    topology = get_topology(1)
    assert topology.location(1) == (-2.5, 0.0)
    assert topology.location(2) == (2.5, 0.0)
    assert topology.location(3) == (0.0, 15.0)
    assert topology.location(4) == (0.0, -15.0)


@pytest.mark.parametrize(
    "number, right_x",
    [(2, 5.0), (3, 7.5), (4, 10.0), (5, 12.5), (6, 15.0), (7, 1.0), (8, 0.5)],
)
def test_baseline_anchor_positions(number, right_x):
    topology = get_topology(number)
    assert topology.location(2) == (right_x, 0.0)
    assert topology.location(3) == (0.0, 10.0)


@pytest.mark.parametrize("number", ALL_NUMBERS)
def test_layout_is_symmetric(number):
    topology = get_topology(number)
    left_x, left_y = topology.location(1)
    right_x, right_y = topology.location(2)
    up_x, up_y = topology.location(3)
    down_x, down_y = topology.location(4)
    assert left_x == -right_x
    assert left_y == right_y == 0.0
    assert up_x == down_x == 0.0
    assert up_y == -down_y
    assert up_y > 0


@pytest.mark.parametrize("number", ALL_NUMBERS)
def test_number_is_kept(number):
    topology = get_topology(number)
    assert topology.number == number
    assert len(topology.locations) == 4


def test_only_topology_five_reports_energy():
    reporting = [n for n in ALL_NUMBERS if get_topology(n).reports_energy]
    assert reporting == [5]


@pytest.mark.parametrize("number", [0, 9, -1])
def test_unknown_topology_raises(number):
    with pytest.raises(ValueError):
        get_topology(number)


@pytest.mark.parametrize("node_id", [0, 5, -1])
def test_unknown_node_raises(node_id):
    with pytest.raises(ValueError):
        get_topology(3).location(node_id)


def test_custom_topology_location():
    topology = Topology(42, ((1.0, 2.0), (3.0, 4.0)))
    assert topology.location(2) == (3.0, 4.0)
    with pytest.raises(ValueError):
        topology.location(3)