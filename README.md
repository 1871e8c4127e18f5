# rssiloc

This package works out where a node is from the signal strength of broadcasts
sent by fixed anchor nodes.

A topology has four anchors. Anchors 1 and 2 lie on the x axis and form the
baseline. Anchor 3 is above the baseline and anchor 4 is below it. Each anchor
announces its position in a short text datagram, for example
`Node ID:1 X:-2.500000 Y:0.000000`. The text is cut to 31 characters.

The unknown node does four things:

1. It converts each RSSI reading to a distance.
2. It intersects the circles around anchors 1 and 2.
3. It compares the RSSI of the four anchors to find a quadrant (`Region`), and
   uses that to pick one of the two intersection points.
4. It computes a bearing angle around the middle of the baseline.

## Install

```
pip install .
```

## Commands

### rssiloc-anchor

Runs one anchor of a topology. It sends the anchor's position over UDP again
and again.

```
rssiloc-anchor NODE_ID [--topology N] [--count N] [--interval SECONDS]
               [--destination ADDRESS] [--port PORT] [--source-port PORT]
```

| Option | Default | Meaning |
| --- | --- | --- |
| `NODE_ID` | required | Anchor node id, 1 to 4. |
| `--topology` | 1 | Anchor layout, 1 to 8. |
| `--count` | run forever | Number of rounds. |
| `--interval` | 10 seconds | Wait before each send. |
| `--destination` | `fe80::205:5:5:5` | Address the datagrams go to. |
| `--port` | 5678 | Destination UDP port. |
| `--source-port` | 8765 | Local UDP port the datagrams are sent from. |

On each round the anchor prints `Sending broadcast N`. If there is a network
error, the command exits with status 1.

### rssiloc-unknown

Works out the position from readings that were recorded earlier. It reads a
file, or standard input when no file is given or the name is `-`.

```
rssiloc-unknown [READINGS]
```

Each line holds an RSSI in dBm, then a space, then the received payload:

```
-60 Node ID:1 X:-2.500000 Y:0.000000
-65 Node ID:2 X:2.500000 Y:0.000000
-70 Node ID:3 X:0.000000 Y:15.000000
-72 Node ID:4 X:0.000000 Y:-15.000000
```

Blank lines and lines that start with `#` are skipped. A line whose RSSI
cannot be read ends the run with exit status 1.

Once readings from all four anchors have come in, each new reading prints:

- the two intersection points
- the region and the chosen position, when a region could be decided
- the angle

## Library use

```python
from rssiloc.locator import Locator
from rssiloc.message import parse_message

locator = Locator()
msg = parse_message(b"Node ID:1 X:-2.500000 Y:0.000000")
locator.add_reading(msg.node_id, msg.x, msg.y, rssi=-60)
# ... readings from anchors 2, 3 and 4 ...
estimate = locator.solve()
print(estimate.region, estimate.position, estimate.angle)
```

`Locator.solve` raises `ValueError` in two cases: when a reading from any of
anchors 1 to 4 is missing, and when anchors 1 and 2 share an x coordinate. The
`Estimate` it returns holds these fields:

- `position`
- `region`
- `angle`
- `intersections`
- `circles` (a `CirclePosition`)
- `baseline`

The angle is NaN when the cosine rule gives a value outside the range of acos.

Modules:

- `rssiloc.geometry`: `rssi_to_distance`, `classify_circles` and
  `circle_intersections`, plus the `CirclePosition` enum.
- `rssiloc.anchors`: `Anchor`, and `AnchorTable`, which keeps the latest
  reading for each node id in ascending id order.
- `rssiloc.locator`: `Locator`, `Estimate`, `Region` and `compute_angle`.
- `rssiloc.topology`: `Topology`, and `get_topology(number)` for layouts 1
  to 8.
- `rssiloc.message`: `LocationMessage`, `format_message` and `parse_message`.
  `parse_message` rejects datagrams of 100 bytes or more, and text that does
  not match.
- `rssiloc.node`: `AnchorNode` and `UnknownNode`. The send, receive and sleep
  functions are passed in, and so is the reachability check.

## What it does not do

- `rssiloc-unknown` does not listen on the network. It only reads readings
  that were recorded earlier. To process live traffic, drive `UnknownNode`
  with your own receive function.
- Nothing measures energy use or prints it. `Topology.reports_energy` is only
  a flag.
- Only readings heard directly (hop count 0) are used.

## Tests

```
pip install .[test]
pytest
```