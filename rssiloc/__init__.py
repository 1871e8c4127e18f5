"""Estimate a node's position and bearing from RSSI readings of anchor broadcasts."""

__version__ = "0.1.0"