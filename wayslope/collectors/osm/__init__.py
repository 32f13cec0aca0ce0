"""
OpenStreetMap input

- Models: OSMNode, OSMWay, OSMNetwork
- Filters: tag conditions and filter string parsing
- Reader: two-pass pyosmium extraction
"""

from .models import OSMNode, OSMWay, OSMNetwork, NetworkObject
from .filters import HasKey, KeyEquals, FilterSpec, DEFAULT_FILTER, matches, parse_filter
from .reader import read_network

__all__ = [
    "OSMNode",
    "OSMWay",
    "OSMNetwork",
    "NetworkObject",
    "HasKey",
    "KeyEquals",
    "FilterSpec",
    "DEFAULT_FILTER",
    "matches",
    "parse_filter",
    "read_network",
]
