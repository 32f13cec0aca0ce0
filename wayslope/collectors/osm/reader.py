"""
OSM file reader

Streams an OSM file (PBF or XML) with pyosmium in two passes:
1. Ways: keep those whose tags satisfy the predicate, collect their node ids
2. Nodes: keep only the collected ids
"""

import os
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Set, Union

import osmium
from loguru import logger

from .models import OSMNode, OSMWay, OSMNetwork
from ...errors import InputOpenError, ParseError

TagPredicate = Callable[[Mapping[str, str]], bool]


class _WayExtractor(osmium.SimpleHandler):
    """First-pass handler: extract matching ways and their node ids"""

    def __init__(self, predicate: TagPredicate):
        super().__init__()
        self.predicate = predicate
        self.ways: List[OSMWay] = []
        self.needed_nodes: Set[int] = set()
        self.scanned = 0

    def way(self, w):
        self.scanned += 1
        tags = {tag.k: tag.v for tag in w.tags}
        if not self.predicate(tags):
            return

        node_refs = tuple(n.ref for n in w.nodes)
        self.ways.append(OSMWay(id=w.id, nodes=node_refs, tags=MappingProxyType(tags)))
        self.needed_nodes.update(node_refs)


class _NodeExtractor(osmium.SimpleHandler):
    """Second-pass handler: extract only needed nodes"""

    def __init__(self, needed_nodes: Set[int]):
        super().__init__()
        self.needed_nodes = needed_nodes
        self.nodes: Dict[int, OSMNode] = {}
        self.invalid_locations = 0

    def node(self, n):
        if n.id not in self.needed_nodes:
            return
        if not n.location.valid():
            self.invalid_locations += 1
            return
        self.nodes[n.id] = OSMNode(id=n.id, lat=n.location.lat, lon=n.location.lon)


def _check_readable(path: Path) -> None:
    if not path.exists():
        raise InputOpenError(f"Unable to open OSM file {path}: no such file")
    if not path.is_file() or not os.access(path, os.R_OK):
        raise InputOpenError(f"Unable to open OSM file {path}: not a readable file")


def _apply(handler: osmium.SimpleHandler, path: Path) -> None:
    try:
        handler.apply_file(str(path))
    except RuntimeError as e:
        raise ParseError(f"Failed to parse OSM file {path}: {e}") from e


def read_network(osm_file: Union[str, Path], predicate: TagPredicate) -> OSMNetwork:
    """
    Read the ways selected by `predicate` and the nodes they reference

    Args:
        osm_file: Path to an OSM file in any format libosmium reads
        predicate: Called with each way's tags; True keeps the way

    Returns:
        OSMNetwork with ways in file order and nodes keyed by id

    Raises:
        InputOpenError: If the file is missing or unreadable
        ParseError: If libosmium cannot decode the file
    """
    path = Path(osm_file)
    _check_readable(path)

    logger.info(f"Pass 1: extracting ways from {path}")
    way_handler = _WayExtractor(predicate)
    _apply(way_handler, path)
    logger.info(
        f"  Found {len(way_handler.ways):,} matching ways out of {way_handler.scanned:,}, "
        f"need {len(way_handler.needed_nodes):,} nodes"
    )

    if not way_handler.ways:
        return OSMNetwork()

    logger.info("Pass 2: extracting referenced nodes")
    node_handler = _NodeExtractor(way_handler.needed_nodes)
    _apply(node_handler, path)
    if node_handler.invalid_locations:
        logger.warning(f"  Skipped {node_handler.invalid_locations:,} nodes without a valid location")
    logger.info(f"  Found {len(node_handler.nodes):,} nodes")

    return OSMNetwork(nodes=node_handler.nodes, ways=way_handler.ways)
