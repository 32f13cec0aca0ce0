import math

import pytest

from wayslope.analysis.way_aggregator import WayAggregator
from wayslope.collectors.osm.models import OSMNode, OSMWay
from wayslope.errors import ConfigurationError, MissingElevationError
from wayslope.models import ElevationIndex


def meters_to_lat(meters: float) -> float:
    """Latitude offset covering `meters` along a meridian"""
    return math.degrees(meters / 6371000.0)


@pytest.fixture
def profile_way():
    """Three nodes on a meridian: 200 m then 300 m, elevations 100 / 150 / 120"""
    nodes = {
        1: OSMNode(id=1, lat=0.0, lon=10.0),
        2: OSMNode(id=2, lat=meters_to_lat(200.0), lon=10.0),
        3: OSMNode(id=3, lat=meters_to_lat(500.0), lon=10.0),
    }
    elevations = ElevationIndex([(1, 100.0), (2, 150.0), (3, 120.0)])
    way = OSMWay(id=42, nodes=(1, 2, 3), tags={"highway": "path"})
    return way, elevations, nodes


def test_profile_segment_mode(profile_way):
    stats = WayAggregator().aggregate(*profile_way)

    assert stats.way_id == 42
    assert stats.climb == pytest.approx(50.0)
    assert stats.descent == pytest.approx(30.0)
    assert stats.distance == pytest.approx(500.0, rel=1e-9)
    assert stats.climb_distance == pytest.approx(200.0, rel=1e-9)
    assert stats.descent_distance == pytest.approx(300.0, rel=1e-9)


def test_profile_cumulative_mode(profile_way):
    stats = WayAggregator(mode="cumulative").aggregate(*profile_way)

    assert stats.distance == pytest.approx(500.0, rel=1e-9)
    # running distance after each segment: 200, then 500
    assert stats.climb_distance == pytest.approx(200.0, rel=1e-9)
    assert stats.descent_distance == pytest.approx(500.0, rel=1e-9)
    assert stats.climb == pytest.approx(50.0)
    assert stats.descent == pytest.approx(30.0)


def test_partition_holds_in_segment_mode():
    lats = [0.0, 0.001, 0.003, 0.0035, 0.006, 0.01]
    elevs = [10.0, 12.0, 12.0, 9.5, 30.0, 1.0]
    nodes = {i: OSMNode(id=i, lat=lat, lon=0.002 * i) for i, lat in enumerate(lats)}
    way = OSMWay(id=7, nodes=tuple(nodes), tags={})

    stats = WayAggregator().aggregate(way, ElevationIndex(enumerate(elevs)), nodes)

    assert stats.climb_distance + stats.descent_distance == pytest.approx(stats.distance, rel=1e-9)
    assert stats.climb == pytest.approx(2.0 + 20.5)
    assert stats.descent == pytest.approx(2.5 + 29.0)


def test_flat_segment_counts_as_descent():
    nodes = {1: OSMNode(1, 0.0, 0.0), 2: OSMNode(2, 0.001, 0.0)}
    way = OSMWay(id=1, nodes=(1, 2))

    stats = WayAggregator().aggregate(way, ElevationIndex([(1, 50.0), (2, 50.0)]), nodes)

    assert stats.climb == 0.0
    assert stats.descent == 0.0
    assert stats.climb_distance == 0.0
    assert stats.descent_distance == stats.distance > 0


@pytest.mark.parametrize("refs", [(), (1,)])
def test_short_ways_are_all_zero(refs):
    nodes = {1: OSMNode(1, 0.0, 0.0)}
    stats = WayAggregator().aggregate(OSMWay(id=5, nodes=refs), ElevationIndex([(1, 10.0)]), nodes)

    assert (stats.distance, stats.climb_distance, stats.descent_distance, stats.climb, stats.descent) == (
        0.0, 0.0, 0.0, 0.0, 0.0
    )


def test_repeated_node_adds_no_distance():
    nodes = {1: OSMNode(1, 0.0, 0.0), 2: OSMNode(2, 0.001, 0.0)}
    way = OSMWay(id=3, nodes=(1, 1, 2, 1))

    stats = WayAggregator().aggregate(way, ElevationIndex([(1, 5.0), (2, 8.0)]), nodes)

    segment = stats.distance / 2
    assert stats.climb == pytest.approx(3.0)
    assert stats.descent == pytest.approx(3.0)
    assert stats.climb_distance == pytest.approx(segment)
    assert stats.descent_distance == pytest.approx(segment)


def test_missing_elevation_is_fatal():
    nodes = {1: OSMNode(1, 0.0, 0.0), 2: OSMNode(2, 0.001, 0.0)}
    with pytest.raises(MissingElevationError):
        WayAggregator().aggregate(OSMWay(id=9, nodes=(1, 2)), ElevationIndex([(1, 5.0)]), nodes)


def test_missing_node_is_fatal():
    nodes = {1: OSMNode(1, 0.0, 0.0)}
    with pytest.raises(MissingElevationError):
        WayAggregator().aggregate(OSMWay(id=9, nodes=(1, 2)), ElevationIndex([(1, 5.0), (2, 6.0)]), nodes)


def test_unknown_mode_rejected():
    with pytest.raises(ConfigurationError):
        WayAggregator(mode="per-segment")
