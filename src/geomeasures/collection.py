"""
collection.py

Normalization of measurement inputs to a `geopandas.GeoSeries`.

Every public measurement accepts one of:
- a single shapely geometry
- a `GeoSeries`
- a `GeoDataFrame` (its active geometry column is used)
- a plain sequence of shapely geometries (no CRS)

and reduces it to a GeoSeries before any measurement logic runs. Inputs are
never modified; setting a CRS returns a new series.

"""
from typing import Tuple
import logging

import numpy as np
import geopandas as gpd
from shapely.geometry.base import BaseGeometry

from geomeasures.crs import as_crs, crs_equal
from geomeasures.errors import CRSMismatchError

logger = logging.getLogger(__name__)


def as_geoseries(x, crs=None) -> gpd.GeoSeries:
    """Return the geometry collection behind `x` as a GeoSeries.

    Parameters:
    - x: shapely geometry, GeoSeries, GeoDataFrame or sequence of geometries
    - crs: optional CRS applied when `x` carries none. If `x` already has a
      different CRS a `CRSMismatchError` is raised.
    """
    if isinstance(x, gpd.GeoDataFrame):
        series = x.geometry
    elif isinstance(x, gpd.GeoSeries):
        series = x
    elif isinstance(x, BaseGeometry):
        series = gpd.GeoSeries([x])
    elif x is None or isinstance(x, (str, bytes)):
        raise TypeError(f'expected a geometry, GeoSeries or GeoDataFrame, got {type(x).__name__}')
    else:
        series = gpd.GeoSeries(list(x))

    if crs is not None:
        crs = as_crs(crs)
        if series.crs is None:
            series = series.set_crs(crs)
        elif not crs_equal(series.crs, crs):
            raise CRSMismatchError(f'input has CRS {series.crs.name!r}, but crs={crs.name!r} was given')
    return series


def geometry_array(series: gpd.GeoSeries) -> np.ndarray:
    """Return the geometries of `series` as a 1-D object array (None for missing)."""
    arr = np.empty(len(series), dtype=object)
    arr[:] = list(series)
    return arr


def empty_mask(geoms: np.ndarray) -> np.ndarray:
    """Boolean mask of missing or empty geometries."""
    return np.array([g is None or g.is_empty for g in geoms], dtype=bool)


def recycle_indices(nx: int, ny: int) -> Tuple[np.ndarray, np.ndarray]:
    """Index pairs for by-element evaluation, recycling the shorter side.

    Returns two int arrays of length max(nx, ny); empty when either side is empty.
    """
    if nx == 0 or ny == 0:
        return np.array([], dtype=int), np.array([], dtype=int)
    n = max(nx, ny)
    if n % nx or n % ny:
        logger.debug('by-element lengths %d and %d are not multiples; recycling anyway', nx, ny)
    idx = np.arange(n)
    return idx % nx, idx % ny
