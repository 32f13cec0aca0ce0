"""
wayslope - per-way slope statistics from OSM networks and elevation models

Pipeline:
  1. Select ways by tag filter
  2. Resolve the nodes they reference
  3. Sample DEM elevation once per node
  4. Accumulate distance / climb / descent per way
  5. Write JSON
"""

__version__ = "0.3.0"

from .errors import (
    WaySlopeError,
    ConfigurationError,
    FilterSpecError,
    InputOpenError,
    ParseError,
    GeoTransformError,
    SamplingError,
    MissingElevationError,
    SerializationError,
    OutputWriteError,
)
from .models import WayStatistics, ElevationIndex
from .pipeline import SlopePipeline

__all__ = [
    "__version__",
    "WaySlopeError",
    "ConfigurationError",
    "FilterSpecError",
    "InputOpenError",
    "ParseError",
    "GeoTransformError",
    "SamplingError",
    "MissingElevationError",
    "SerializationError",
    "OutputWriteError",
    "WayStatistics",
    "ElevationIndex",
    "SlopePipeline",
]
