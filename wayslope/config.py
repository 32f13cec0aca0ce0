"""
Configuration settings for wayslope
"""

from dataclasses import dataclass, field
from typing import Optional
import os

from dotenv import load_dotenv

from .errors import ConfigurationError

# Pick up WAYSLOPE_* overrides from a local .env if present
load_dotenv()


RESAMPLING_METHODS = ("nearest", "bilinear")
OUTPUT_SHAPES = ("mapping", "records")
CLIMB_DISTANCE_MODES = ("segment", "cumulative")


@dataclass
class RasterConfig:
    """Elevation raster sampling settings"""
    # 1-based band index, as rasterio counts them
    band: int = 1

    # "nearest" or "bilinear"
    resampling: str = field(default_factory=lambda: os.getenv("WAYSLOPE_RESAMPLING", "nearest"))

    # Reproject lon/lat into the raster CRS when it is not EPSG:4326
    reproject: bool = True


@dataclass
class OutputConfig:
    """JSON output settings"""
    # "mapping": {"<way_id>": {...}}, "records": [{"way_id": ..., ...}]
    shape: str = field(default_factory=lambda: os.getenv("WAYSLOPE_OUTPUT_SHAPE", "mapping"))

    # None writes compact JSON
    indent: Optional[int] = None


@dataclass
class PipelineConfig:
    """Pipeline configuration"""
    # Filter used when none is given on the command line
    default_filter: str = field(default_factory=lambda: os.getenv("WAYSLOPE_DEFAULT_FILTER", "highway"))

    # "segment" adds each segment length to climb/descent distance.
    # "cumulative" adds the running total, as older releases did.
    climb_distance_mode: str = field(
        default_factory=lambda: os.getenv("WAYSLOPE_CLIMB_DISTANCE_MODE", "segment")
    )

    log_level: str = field(default_factory=lambda: os.getenv("WAYSLOPE_LOG_LEVEL", "INFO").upper())

    raster: RasterConfig = field(default_factory=RasterConfig)

    output: OutputConfig = field(default_factory=OutputConfig)


# Global config instance
config = PipelineConfig()


def get_config() -> PipelineConfig:
    """Get global configuration"""
    return config


def validate_config(config: PipelineConfig) -> None:
    """
    Validate that all configuration values are usable.
    Raises ConfigurationError listing every problem found.
    """
    errors = []

    if not config.default_filter:
        errors.append("default_filter is required but not set")

    if config.climb_distance_mode not in CLIMB_DISTANCE_MODES:
        errors.append(
            f"climb_distance_mode must be one of {', '.join(CLIMB_DISTANCE_MODES)}, "
            f"got {config.climb_distance_mode!r}"
        )

    if config.raster is None:
        errors.append("raster configuration is required but not set")
    else:
        if not isinstance(config.raster.band, int) or config.raster.band < 1:
            errors.append(f"raster.band must be a positive integer, got {config.raster.band!r}")
        if config.raster.resampling not in RESAMPLING_METHODS:
            errors.append(
                f"raster.resampling must be one of {', '.join(RESAMPLING_METHODS)}, "
                f"got {config.raster.resampling!r}"
            )

    if config.output is None:
        errors.append("output configuration is required but not set")
    else:
        if config.output.shape not in OUTPUT_SHAPES:
            errors.append(
                f"output.shape must be one of {', '.join(OUTPUT_SHAPES)}, got {config.output.shape!r}"
            )
        if config.output.indent is not None and config.output.indent < 0:
            errors.append(f"output.indent must be non-negative, got {config.output.indent}")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ConfigurationError(error_msg)
