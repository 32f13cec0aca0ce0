"""
Data collectors for wayslope

- OSM: ways and nodes from an OSM file (pyosmium)
- ElevationSampler: single-pixel DEM reads (rasterio)
"""

from .osm import read_network
from .elevation_sampler import ElevationSampler, open_raster

__all__ = [
    "read_network",
    "ElevationSampler",
    "open_raster",
]
