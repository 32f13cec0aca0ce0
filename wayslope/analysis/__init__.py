"""
Analysis modules for wayslope
"""

from .geometry_utils import GeometryUtils
from .way_aggregator import WayAggregator

__all__ = [
    "GeometryUtils",
    "WayAggregator"
]
