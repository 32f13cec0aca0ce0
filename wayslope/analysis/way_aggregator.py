"""
Way slope aggregation

Walks a way's node sequence segment by segment and folds horizontal
distance, climb and descent into a WayStatistics record.
"""

from typing import Mapping

from loguru import logger

from .geometry_utils import GeometryUtils
from ..collectors.osm.models import OSMNode, OSMWay
from ..config import CLIMB_DISTANCE_MODES
from ..errors import ConfigurationError, MissingElevationError
from ..models import ElevationIndex, WayStatistics


class WayAggregator:
    """
    Accumulate slope statistics along ways

    Each segment (a, b) is a climb when elev(b) > elev(a) and a descent
    otherwise, so flat segments count as descent.

    Modes for climb/descent distance:
        "segment"    - add the segment length; climb_distance +
                       descent_distance == distance
        "cumulative" - add the running way distance at that segment, which
                       reproduces files written by older releases
    """

    def __init__(self, mode: str = "segment"):
        if mode not in CLIMB_DISTANCE_MODES:
            raise ConfigurationError(
                f"Unknown climb distance mode {mode!r}, expected one of {', '.join(CLIMB_DISTANCE_MODES)}"
            )
        self.mode = mode

    def aggregate(
        self,
        way: OSMWay,
        elevations: ElevationIndex,
        nodes: Mapping[int, OSMNode]
    ) -> WayStatistics:
        """
        Compute statistics for one way

        Args:
            way: Way to walk
            elevations: Elevation for every node of the way
            nodes: Coordinates for every node of the way

        Returns:
            WayStatistics; all zeros for ways with fewer than two nodes

        Raises:
            MissingElevationError: If a node of the way was not resolved
        """
        distance = 0.0
        climb_distance = 0.0
        descent_distance = 0.0
        climb = 0.0
        descent = 0.0

        for id_a, id_b in way.segments():
            node_a = self._node(nodes, id_a, way.id)
            node_b = self._node(nodes, id_b, way.id)
            elev_a = elevations[id_a]
            elev_b = elevations[id_b]

            segment = GeometryUtils.haversine_m((node_a.lat, node_a.lon), (node_b.lat, node_b.lon))
            distance += segment
            contribution = distance if self.mode == "cumulative" else segment

            if elev_b > elev_a:
                climb_distance += contribution
                climb += elev_b - elev_a
            else:
                descent_distance += contribution
                descent += elev_a - elev_b

        return WayStatistics(
            way_id=way.id,
            distance=distance,
            climb_distance=climb_distance,
            descent_distance=descent_distance,
            climb=climb,
            descent=descent
        )

    @staticmethod
    def _node(nodes: Mapping[int, OSMNode], node_id: int, way_id: int) -> OSMNode:
        node = nodes.get(node_id)
        if node is None:
            logger.error(f"Way {way_id} reached aggregation with unresolved node {node_id}")
            raise MissingElevationError(f"Node {node_id} of way {way_id} has no coordinates")
        return node
