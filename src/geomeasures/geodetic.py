"""
geodetic.py

Measurements on longitude/latitude coordinates. Results are in metres (or
square metres) whatever the angular unit of the CRS.

`GeodeticEngine` walks shapely geometries down to rings and paths and hands
their coordinates to the backend kernel from `geomeasures.backends`:

- area: |outer ring| - sum |holes| per polygon, summed over parts
- length: sum of segment lengths of the lineal parts; points and polygons are 0
- distance: shortest distance between two geometries, taken over every
  vertex of one against every edge (great-circle arc or geodesic) of the
  other, in both directions, and 0 when they intersect. The intersection
  test runs on longitudes unwrapped around the first geometry, so shapes
  crossing the antimeridian are handled as long as each spans less than
  180 degrees of longitude. A positive `tolerance` stops the search at the
  first distance below it; the true distance may be smaller than the value
  returned. Pass tolerance=0 for the full search.

Empty geometries give NaN. Coordinates a kernel rejects (latitudes beyond
+/-90, or a ValueError / pyproj GeodError from the kernel) are logged with
`safe_log_exception` and give NaN for that element; they are not raised.

"""
from typing import Optional, Tuple
import logging

import numpy as np
import shapely
from pyproj.exceptions import GeodError

from geomeasures.backends import Backend, get_kernel
from geomeasures.collection import empty_mask, recycle_indices
from geomeasures.config import GEODETIC_DEFAULTS
from geomeasures.crs import ellipsoid_params
from geomeasures.utils import as_missing, safe_log_exception

logger = logging.getLogger(__name__)

_KERNEL_ERRORS = (ValueError, GeodError)


def make_kernel(backend: Backend, crs=None, radius: Optional[float] = None):
    """Return the (cached) kernel for `backend`. The ellipsoid is taken from `crs`."""
    if backend is Backend.SPHERICAL:
        return get_kernel(backend, radius=float(radius if radius is not None else GEODETIC_DEFAULTS['sphere_radius']))
    a, f = ellipsoid_params(crs)
    return get_kernel(backend, semi_major=a, flattening=f)


def _check_latitudes(coords: np.ndarray) -> np.ndarray:
    if coords.size and np.nanmax(np.abs(coords[:, 1])) > 90.0:
        raise ValueError('latitude out of range [-90, 90]')
    return coords


def _xy(coords):
    coords = _check_latitudes(np.asarray(coords, dtype=float))
    return coords[:, 0], coords[:, 1]


def _segments(geom) -> Tuple[np.ndarray, np.ndarray]:
    """Edges of `geom` as (start, end) coordinate arrays; isolated points are zero-length edges."""
    starts, ends = [], []

    def walk(g):
        if g.is_empty:
            return
        if g.geom_type == 'Point':
            xy = shapely.get_coordinates(g)
            starts.append(xy)
            ends.append(xy)
        elif g.geom_type in ('LineString', 'LinearRing'):
            xy = shapely.get_coordinates(g)
            if len(xy) == 1:
                starts.append(xy)
                ends.append(xy)
            else:
                starts.append(xy[:-1])
                ends.append(xy[1:])
        elif g.geom_type == 'Polygon':
            walk(g.exterior)
            for ring in g.interiors:
                walk(ring)
        else:
            for part in g.geoms:
                walk(part)

    walk(geom)
    if not starts:
        return np.empty((0, 2)), np.empty((0, 2))
    return np.vstack(starts), np.vstack(ends)


def _unwrapped(geom, lon0: float):
    """`geom` with longitudes made continuous and shifted to lie near `lon0`."""
    def fn(coords):
        lons = np.unwrap(coords[:, 0], period=360.0)
        lons = lons + 360.0 * np.round((lon0 - lons[0]) / 360.0)
        return np.column_stack([lons, coords[:, 1]])

    return shapely.transform(geom, fn)


class GeodeticEngine:
    """Area, length and distance of lon/lat geometries on one backend."""

    def __init__(self, backend: Backend, crs=None, radius: Optional[float] = None):
        self.backend = backend
        self.kernel = make_kernel(backend, crs=crs, radius=radius)

    # area ---------------------------------------------------------------
    def _polygon_area(self, poly) -> float:
        total = self.kernel.ring_area(*_xy(poly.exterior.coords))
        for hole in poly.interiors:
            total -= self.kernel.ring_area(*_xy(hole.coords))
        return total

    def _geometry_area(self, geom) -> float:
        if geom.geom_type == 'Polygon':
            return 0.0 if geom.is_empty else self._polygon_area(geom)
        if hasattr(geom, 'geoms'):
            return sum(self._geometry_area(g) for g in geom.geoms)
        return 0.0

    # length -------------------------------------------------------------
    def _geometry_length(self, geom) -> float:
        if geom.geom_type in ('LineString', 'LinearRing'):
            if geom.is_empty:
                return 0.0
            return self.kernel.line_length(*_xy(geom.coords))
        if geom.geom_type in ('MultiLineString', 'GeometryCollection'):
            return sum(self._geometry_length(g) for g in geom.geoms)
        return 0.0

    def _map(self, fn, geoms, label) -> np.ndarray:
        geoms = np.asarray(geoms, dtype=object)
        missing = empty_mask(geoms)
        out = np.full(len(geoms), np.nan)
        for i, g in enumerate(geoms):
            if missing[i]:
                continue
            try:
                out[i] = fn(g)
            except _KERNEL_ERRORS as e:
                safe_log_exception(f'{label}: {self.backend.value} kernel rejected geometry', e, index=i)
        return as_missing(out)

    def area(self, geoms) -> np.ndarray:
        """Area in square metres of each geometry."""
        logger.debug('area: %d geometries on %s backend', len(geoms), self.backend.value)
        return self._map(self._geometry_area, geoms, 'area')

    def length(self, geoms) -> np.ndarray:
        """Length in metres of the lineal parts of each geometry."""
        logger.debug('length: %d geometries on %s backend', len(geoms), self.backend.value)
        return self._map(self._geometry_length, geoms, 'length')

    # distance -----------------------------------------------------------
    def _intersects(self, gx, gy) -> bool:
        lon0 = float(shapely.get_coordinates(gx)[0, 0])
        return bool(_unwrapped(gx, lon0).intersects(_unwrapped(gy, lon0)))

    def _shortest(self, gx, gy, tolerance: float) -> float:
        vx = _check_latitudes(shapely.get_coordinates(gx))
        vy = _check_latitudes(shapely.get_coordinates(gy))
        ax, bx = _segments(gx)
        ay, by = _segments(gy)
        if self._intersects(gx, gy):
            return 0.0
        best = self.kernel.min_distance(vx, ay, by, tolerance)
        if tolerance > 0.0 and best < tolerance:
            return best
        return min(best, self.kernel.min_distance(vy, ax, bx, tolerance))

    def pair_distance(self, gx, gy, tolerance: float = 0.0) -> float:
        """Distance in metres between two geometries; NaN if either is empty."""
        if gx is None or gy is None or gx.is_empty or gy.is_empty:
            return np.nan
        try:
            return self._shortest(gx, gy, tolerance)
        except _KERNEL_ERRORS as e:
            safe_log_exception(f'distance: {self.backend.value} kernel rejected geometry pair', e)
            return np.nan

    def distance(self, x, y, tolerance: float = 0.0, by_element: bool = False) -> np.ndarray:
        """Distances in metres between the geometries of `x` and `y`.

        by_element=True returns a vector pairing x[i] with y[i] (shorter side
        recycled); otherwise a len(x) by len(y) matrix. With tolerance > 0
        each pair's search may stop early (see module docstring).
        """
        tolerance = float(tolerance)
        if tolerance < 0.0:
            raise ValueError('tolerance must be non-negative')
        x = np.asarray(x, dtype=object)
        y = np.asarray(y, dtype=object)
        if by_element:
            ix, iy = recycle_indices(len(x), len(y))
            out = np.array([self.pair_distance(x[i], y[j], tolerance) for i, j in zip(ix, iy)], dtype=float)
            return as_missing(out)

        out = np.full((len(x), len(y)), np.nan)
        ex = empty_mask(x)
        ey = empty_mask(y)
        logger.debug('distance matrix %d x %d on %s backend', len(x), len(y), self.backend.value)
        for i in range(len(x)):
            if ex[i]:
                continue
            for j in range(len(y)):
                if not ey[j]:
                    out[i, j] = self.pair_distance(x[i], y[j], tolerance)
        return as_missing(out)
