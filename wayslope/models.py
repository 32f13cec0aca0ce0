"""
Pydantic models for slope statistics and the node elevation index
"""

from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .errors import MissingElevationError


class WayStatistics(BaseModel):
    """Distance and elevation change accumulated along one way (meters)"""
    model_config = ConfigDict(frozen=True)

    way_id: int
    distance: float = Field(default=0.0, ge=0.0)
    climb_distance: float = Field(default=0.0, ge=0.0)
    descent_distance: float = Field(default=0.0, ge=0.0)
    climb: float = Field(default=0.0, ge=0.0)
    descent: float = Field(default=0.0, ge=0.0)

    def to_mapping_entry(self) -> Tuple[str, Dict[str, float]]:
        """Key/value pair for the "mapping" output shape"""
        return str(self.way_id), self.model_dump(exclude={"way_id"})

    def to_record(self) -> Dict[str, float]:
        """Object for the "records" output shape"""
        return self.model_dump()


class ElevationIndex(Mapping):
    """
    Read-only node id -> elevation mapping.

    Built once from (node_id, elevation) pairs and never mutated; lookups of
    ids that were not sampled raise MissingElevationError.
    """

    def __init__(self, pairs: Iterable[Tuple[int, float]] = ()):
        self._elevations = MappingProxyType(dict(pairs))

    def __getitem__(self, node_id: int) -> float:
        try:
            return self._elevations[node_id]
        except KeyError:
            raise MissingElevationError(
                f"Node {node_id} has no sampled elevation; it was not resolved before aggregation"
            ) from None

    def __contains__(self, node_id: object) -> bool:
        return node_id in self._elevations

    def get(self, node_id, default=None):
        return self._elevations.get(node_id, default)

    def __iter__(self) -> Iterator[int]:
        return iter(self._elevations)

    def __len__(self) -> int:
        return len(self._elevations)

    def __repr__(self) -> str:
        return f"ElevationIndex({len(self)} nodes)"


def to_mapping_document(results: List[WayStatistics]) -> Dict[str, Dict[str, float]]:
    """Build the {"<way_id>": {...}} document, keys in ascending way id order"""
    ordered = sorted(results, key=lambda s: s.way_id)
    return dict(s.to_mapping_entry() for s in ordered)


def to_records_document(results: List[WayStatistics]) -> List[Dict[str, float]]:
    """Build the [{"way_id": ..., ...}] document in ascending way id order"""
    return [s.to_record() for s in sorted(results, key=lambda s: s.way_id)]
