"""
Elevation sampler for DEM rasters

Maps WGS84 lon/lat through the raster's inverted geotransform to a pixel
and reads that single pixel with rasterio.
"""

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import rasterio
from loguru import logger
from pyproj import Transformer
from rasterio.enums import Resampling
from rasterio.errors import RasterioError, RasterioIOError
from rasterio.io import DatasetReader
from rasterio.windows import Window

from ..errors import (
    ConfigurationError, GeoTransformError, InputOpenError, ParseError, SamplingError
)

WGS84_EPSG = 4326

RESAMPLING = {
    "nearest": Resampling.nearest,
    "bilinear": Resampling.bilinear,
}


def open_raster(elevation_file: Union[str, Path]) -> DatasetReader:
    """
    Open a DEM raster for reading

    Raises:
        InputOpenError: If the file does not exist
        ParseError: If rasterio/GDAL cannot read it as a raster
    """
    path = Path(elevation_file)
    if not path.exists():
        raise InputOpenError(f"Unable to open elevation file {path}: no such file")
    try:
        return rasterio.open(path)
    except RasterioIOError as e:
        raise ParseError(f"Unable to read elevation file {path}: {e}") from e


class ElevationSampler:
    """
    Sample one elevation value per coordinate from an open raster

    The inverse geotransform (and, for projected rasters, the WGS84 ->
    raster CRS transformer) is built once here. No caching of values:
    callers sample each node once.
    """

    def __init__(
        self,
        dataset: DatasetReader,
        band: int = 1,
        resampling: str = "nearest",
        reproject: bool = True
    ):
        if resampling not in RESAMPLING:
            raise ConfigurationError(
                f"Unknown resampling {resampling!r}, expected one of {', '.join(RESAMPLING)}"
            )
        if band < 1 or band > dataset.count:
            raise ConfigurationError(
                f"Band {band} out of range for {dataset.name} ({dataset.count} band(s))"
            )

        self.dataset = dataset
        self.band = band
        self.resampling = RESAMPLING[resampling]
        self.inverse_transform = self._invert_transform(dataset)
        self.nodata: Optional[float] = dataset.nodatavals[band - 1]
        self.transformer: Optional[Transformer] = None

        if reproject and dataset.crs is not None and dataset.crs.to_epsg() != WGS84_EPSG:
            logger.info(f"Reprojecting node coordinates from EPSG:{WGS84_EPSG} to {dataset.crs}")
            self.transformer = Transformer.from_crs(
                f"EPSG:{WGS84_EPSG}", dataset.crs, always_xy=True
            )

        logger.debug(
            f"Sampler ready: {dataset.name} band {band}, {dataset.width}x{dataset.height} px, "
            f"resampling={resampling}"
        )

    @staticmethod
    def _invert_transform(dataset: DatasetReader):
        transform = dataset.transform
        if transform.is_identity and dataset.crs is None:
            raise GeoTransformError(f"Elevation file {dataset.name} is not georeferenced")
        if transform.is_degenerate:
            raise GeoTransformError(
                f"Geotransform of {dataset.name} is not invertible: {tuple(transform)[:6]}"
            )
        return ~transform

    def pixel_for(self, lon: float, lat: float) -> Tuple[int, int]:
        """
        Pixel (col, row) containing a WGS84 coordinate

        Fractional pixel coordinates are truncated toward zero, so -0.5
        becomes 0 and a point exactly on a cell edge falls in the cell
        to its right / below.
        """
        x, y = lon, lat
        if self.transformer is not None:
            x, y = self.transformer.transform(lon, lat)
        col_f, row_f = self.inverse_transform @ (x, y)
        if not (np.isfinite(col_f) and np.isfinite(row_f)):
            raise SamplingError(f"Coordinate ({lon}, {lat}) does not map to a pixel in {self.dataset.name}")
        return int(col_f), int(row_f)

    def sample(self, lon: float, lat: float) -> float:
        """
        Elevation at a WGS84 coordinate

        Raises:
            SamplingError: If the pixel lies outside the raster, the read fails,
                or the pixel holds nodata / a non-finite value
        """
        col, row = self.pixel_for(lon, lat)
        if not (0 <= col < self.dataset.width and 0 <= row < self.dataset.height):
            raise SamplingError(
                f"Coordinate (lon={lon}, lat={lat}) maps to pixel ({col}, {row}), outside "
                f"{self.dataset.name} ({self.dataset.width}x{self.dataset.height})"
            )

        try:
            data = self.dataset.read(
                self.band,
                window=Window(col, row, 1, 1),
                out_shape=(1, 1),
                resampling=self.resampling
            )
        except RasterioError as e:
            raise SamplingError(
                f"Failed to read pixel ({col}, {row}) for (lon={lon}, lat={lat}) "
                f"from {self.dataset.name}: {e}"
            ) from e

        value = float(data[0, 0])
        if not np.isfinite(value) or (self.nodata is not None and value == self.nodata):
            raise SamplingError(
                f"No elevation at pixel ({col}, {row}) for (lon={lon}, lat={lat}) in {self.dataset.name}"
            )
        return value
