"""
Error types for the slope pipeline

Every failure aborts the run. Messages name the failing file, coordinate
or id so the CLI can report them directly.
"""


class WaySlopeError(Exception):
    """Base class for all pipeline errors"""


class ConfigurationError(WaySlopeError, ValueError):
    """Invalid configuration value or command-line option"""


class FilterSpecError(ConfigurationError):
    """Malformed tag filter string"""


class InputOpenError(WaySlopeError):
    """Input file missing or unreadable"""


class ParseError(WaySlopeError):
    """Malformed OSM or raster structure"""


class GeoTransformError(WaySlopeError):
    """Raster has no invertible affine geotransform"""


class SamplingError(WaySlopeError):
    """Coordinate outside the raster, or the pixel read failed"""


class MissingElevationError(WaySlopeError):
    """
    A node needed by a way was never sampled.

    This is an internal invariant violation, not a user error.
    """


class SerializationError(WaySlopeError):
    """Results could not be encoded as JSON"""


class OutputWriteError(WaySlopeError):
    """Output file could not be written"""
