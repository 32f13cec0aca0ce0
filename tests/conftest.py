import sys
from pathlib import Path

import numpy as np
import pytest
import rasterio
from rasterio.transform import from_origin

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from wayslope.collectors.osm.models import OSMNode, OSMWay, OSMNetwork


# 8x8 grid of 0.5 degree cells covering lon 0..4, lat 0..4.
# Pixel (col, row) holds 100 + 10 * col + row, so col = 2 * lon, row = 8 - 2 * lat.
DEM_ORIGIN = (0.0, 4.0)
DEM_CELL = 0.5
DEM_SIZE = 8


def dem_value(col: int, row: int) -> float:
    return 100.0 + 10.0 * col + row


def write_raster(path, data, crs="EPSG:4326", transform=None, nodata=None):
    height, width = data.shape
    profile = {
        "driver": "GTiff",
        "height": height,
        "width": width,
        "count": 1,
        "dtype": data.dtype.name,
    }
    if nodata is not None:
        profile["nodata"] = nodata
    if crs is not None:
        profile["crs"] = crs
    if transform is not None:
        profile["transform"] = transform
    with rasterio.open(path, "w", **profile) as dst:
        dst.write(data, 1)
    return path


@pytest.fixture
def dem_path(tmp_path):
    rows, cols = np.mgrid[0:DEM_SIZE, 0:DEM_SIZE]
    data = (100.0 + 10.0 * cols + rows).astype("float64")
    return write_raster(
        tmp_path / "dem.tif",
        data,
        transform=from_origin(DEM_ORIGIN[0], DEM_ORIGIN[1], DEM_CELL, DEM_CELL)
    )


def osm_xml(nodes, ways):
    """Minimal OSM XML: nodes as (id, lat, lon), ways as (id, [refs], {tags})"""
    lines = ["<?xml version='1.0' encoding='UTF-8'?>", '<osm version="0.6" generator="tests">']
    for node_id, lat, lon in nodes:
        lines.append(f' <node id="{node_id}" version="1" lat="{lat}" lon="{lon}"/>')
    for way_id, refs, tags in ways:
        lines.append(f' <way id="{way_id}" version="1">')
        lines.extend(f'  <nd ref="{ref}"/>' for ref in refs)
        lines.extend(f'  <tag k="{k}" v="{v}"/>' for k, v in tags.items())
        lines.append(" </way>")
    lines.append("</osm>")
    return "\n".join(lines) + "\n"


SAMPLE_NODES = [
    (1, 3.0, 1.0),   # pixel (2, 2) -> 122
    (2, 3.0, 2.0),   # pixel (4, 2) -> 142
    (3, 2.0, 2.0),   # pixel (4, 4) -> 144
    (4, 1.25, 0.75), # pixel (1, 5) -> 115, only used by the building
    (5, 0.5, 3.5),   # pixel (7, 7) -> 177, not referenced
]

SAMPLE_WAYS = [
    (10, [1, 2, 3], {"highway": "path", "surface": "gravel"}),
    (11, [3, 4], {"building": "yes"}),
    (12, [3, 1], {"highway": "track"}),
]


@pytest.fixture
def osm_path(tmp_path):
    path = tmp_path / "sample.osm"
    path.write_text(osm_xml(SAMPLE_NODES, SAMPLE_WAYS), encoding="utf-8")
    return path


@pytest.fixture
def sample_network():
    return OSMNetwork(
        nodes={node_id: OSMNode(id=node_id, lat=lat, lon=lon) for node_id, lat, lon in SAMPLE_NODES},
        ways=[OSMWay(id=way_id, nodes=tuple(refs), tags=tags) for way_id, refs, tags in SAMPLE_WAYS],
    )
