"""
OSM data models

Data classes for representing OSM nodes, ways and the network read from a file
"""

from typing import Dict, List, Mapping, Tuple, Union
from dataclasses import dataclass, field


@dataclass(frozen=True)
class OSMNode:
    """Represents an OSM node (point)"""
    id: int
    lat: float
    lon: float


@dataclass(frozen=True)
class OSMWay:
    """Represents an OSM way (ordered node references plus tags)"""
    id: int
    nodes: Tuple[int, ...]
    tags: Mapping[str, str] = field(default_factory=dict)

    def segments(self) -> List[Tuple[int, int]]:
        """Consecutive node id pairs; empty for ways with fewer than two nodes"""
        return list(zip(self.nodes, self.nodes[1:]))


NetworkObject = Union[OSMNode, OSMWay]


@dataclass
class OSMNetwork:
    """Selected ways and every node they reference, kept apart"""
    nodes: Dict[int, OSMNode] = field(default_factory=dict)
    ways: List[OSMWay] = field(default_factory=list)
