"""
measures.py

Public measurement entry points: `dimension`, `area`, `length`, `distance`.

A `Dispatcher` decides per call which engine is authoritative:

- longitude/latitude CRS -> `geomeasures.geodetic` on the backend chosen at
  construction (spherical or ellipsoidal); results in metres
- projected or absent CRS -> `geomeasures.planar`; results in the CRS's
  linear unit, scaled to metres when the CRS declares a `to_meter` factor,
  and unitless when there is no CRS

The backend flag and sphere radius are read once, when the dispatcher is
built, and the ellipsoidal backend's dependency is checked there as well.
The module-level functions use a dispatcher cached per current
`geomeasures.config` settings, so changing the settings takes effect on the
next call.

Example:
    >>> from shapely.geometry import Point
    >>> import geopandas as gpd
    >>> p = gpd.GeoSeries([Point(0, 0), Point(0, 1), Point(0, 2)])
    >>> distance(p, p, by_element=True).values
    array([0., 0., 0.])

"""
from functools import lru_cache
from typing import Optional
import logging

import pandas as pd

from geomeasures import config, planar
from geomeasures.backends import select_backend, require_backend
from geomeasures.collection import as_geoseries, geometry_array
from geomeasures.config import canonical_metric, GREAT_CIRCLE, EUCLIDEAN
from geomeasures.crs import is_longlat, crs_equal
from geomeasures.errors import CRSMismatchError, DeprecatedParameterError
from geomeasures.geodetic import GeodeticEngine
from geomeasures.units import Measurement, resolve_units, attach_units, as_meters, METRES, SQUARE_METRES

logger = logging.getLogger(__name__)

_TYPE_DIMENSIONS = {
    'Point': 0,
    'MultiPoint': 0,
    'LineString': 1,
    'LinearRing': 1,
    'MultiLineString': 1,
    'Polygon': 2,
    'MultiPolygon': 2,
}


def _geometry_dimension(geom, na_if_empty: bool = True):
    if geom is None:
        return pd.NA
    if geom.geom_type == 'GeometryCollection':
        dims = [d for d in (_geometry_dimension(g, True) for g in geom.geoms) if d is not pd.NA]
        return max(dims) if dims else pd.NA
    if na_if_empty and geom.is_empty:
        return pd.NA
    return _TYPE_DIMENSIONS[geom.geom_type]


def _message_longlat(caller: str) -> None:
    logger.warning('although coordinates are longitude/latitude, %s assumes that they are planar', caller)


class Dispatcher:
    """Routes measurements to the planar or geodetic engine and attaches units.

    Parameters:
    - use_spherical: True for the spherical backend, False for geodesics on
      the ellipsoid; None reads `geomeasures.config.use_spherical()`.
    - radius: sphere radius in metres for the spherical backend; None reads
      `geomeasures.config.sphere_radius()`.

    Raises BackendUnavailableError when the ellipsoidal backend is selected
    and geographiclib is not installed.
    """

    def __init__(self, use_spherical: Optional[bool] = None, radius: Optional[float] = None):
        if use_spherical is None:
            use_spherical = config.use_spherical()
        if radius is None:
            radius = config.sphere_radius()
        self.backend = require_backend(select_backend(use_spherical))
        self.radius = float(radius)

    def __repr__(self):
        return f'Dispatcher(backend={self.backend.value!r}, radius={self.radius!r})'

    def _geodetic(self, crs) -> GeodeticEngine:
        return GeodeticEngine(self.backend, crs=crs, radius=self.radius)

    def dimension(self, x, na_if_empty: bool = True, crs=None):
        """Topological dimension of each geometry as a pandas Int64 array.

        0 for points, 1 for lines, 2 for polygons. Empty geometries give NA
        when `na_if_empty` is True and their type's dimension otherwise; a
        geometry collection gives the largest dimension of its non-empty
        members, or NA when it has none.
        """
        series = as_geoseries(x, crs=crs)
        dims = [_geometry_dimension(g, na_if_empty) for g in series]
        return pd.array(dims, dtype='Int64')

    def area(self, x, crs=None) -> Measurement:
        """Area of each geometry.

        Lon/lat data is measured on the sphere or ellipsoid in m^2; other
        data in squared CRS units. Points and lines have area 0, empty
        geometries NaN.
        """
        series = as_geoseries(x, crs=crs)
        geoms = geometry_array(series)
        if is_longlat(series.crs) is True:
            logger.debug('area: routing %d geometries to %s backend', len(geoms), self.backend.value)
            return Measurement(self._geodetic(series.crs).area(geoms), SQUARE_METRES)
        return attach_units(planar.area(geoms), resolve_units(series.crs), power=2)

    def length(self, x, crs=None) -> Measurement:
        """Length of the lineal parts of each geometry.

        Points and polygons have length 0; empty geometries and degenerate
        results are NaN.
        """
        series = as_geoseries(x, crs=crs)
        geoms = geometry_array(series)
        if is_longlat(series.crs) is True:
            logger.debug('length: routing %d geometries to %s backend', len(geoms), self.backend.value)
            return Measurement(self._geodetic(series.crs).length(geoms), METRES)
        return attach_units(planar.length(geoms), resolve_units(series.crs))

    def distance(self, x, y=None, metric: Optional[str] = None, par: float = 0.0, tolerance=0.0,
                 by_element: bool = False, dist_fun=None, crs=None) -> Measurement:
        """Distances between the geometries of `x` and `y`.

        Parameters:
        - x, y: geometry inputs; `y` defaults to `x`. Both must have the same CRS.
        - metric: 'Great Circle' (default for lon/lat data), or for planar data
          'Euclidean' (default), 'Hausdorff' or 'Frechet'.
        - par: densification fraction in [0, 1] for Hausdorff and Frechet;
          a positive value makes the result an approximation.
        - tolerance: lon/lat data only; in metres (or a Measurement in m/km).
          When positive, the first distance below it is returned for a
          pair and the true distance may be smaller. 0 searches fully.
        - by_element: True returns a vector of length max(len(x), len(y))
          with the shorter side recycled; False the len(x) by len(y) matrix.
        - dist_fun: deprecated, passing it raises DeprecatedParameterError.

        Pairs involving an empty geometry are NaN.
        """
        if dist_fun is not None:
            raise DeprecatedParameterError('dist_fun is deprecated; distances are computed by the selected engine')

        sx = as_geoseries(x, crs=crs)
        if y is None:
            sy = sx
        else:
            sy = as_geoseries(y, crs=crs)
            if not crs_equal(sx.crs, sy.crs):
                raise CRSMismatchError('x and y must have the same coordinate reference system')

        longlat = is_longlat(sx.crs) is True
        if metric is None:
            metric = GREAT_CIRCLE if longlat else EUCLIDEAN
        metric = canonical_metric(metric)
        gx = geometry_array(sx)
        gy = geometry_array(sy)

        if longlat and metric == GREAT_CIRCLE:
            logger.debug('distance: routing %d x %d geometries to %s backend', len(gx), len(gy), self.backend.value)
            d = self._geodetic(sx.crs).distance(gx, gy, tolerance=as_meters(tolerance), by_element=by_element)
            return Measurement(d, METRES)

        if longlat:
            _message_longlat(f'{metric} distance')
        d = planar.distance(gx, gy, metric=metric, par=par, by_element=by_element)
        return attach_units(d, resolve_units(sx.crs))


@lru_cache(maxsize=8)
def _cached_dispatcher(use_spherical: bool, radius: float) -> Dispatcher:
    return Dispatcher(use_spherical=use_spherical, radius=radius)


def _default_dispatcher() -> Dispatcher:
    return _cached_dispatcher(config.use_spherical(), config.sphere_radius())


def dimension(x, na_if_empty: bool = True, crs=None):
    """Topological dimension per geometry; see `Dispatcher.dimension`."""
    return _default_dispatcher().dimension(x, na_if_empty=na_if_empty, crs=crs)


def area(x, crs=None) -> Measurement:
    """Area per geometry with units; see `Dispatcher.area`."""
    return _default_dispatcher().area(x, crs=crs)


def length(x, crs=None) -> Measurement:
    """Length per geometry with units; see `Dispatcher.length`."""
    return _default_dispatcher().length(x, crs=crs)


def distance(x, y=None, metric: Optional[str] = None, par: float = 0.0, tolerance=0.0,
             by_element: bool = False, dist_fun=None, crs=None) -> Measurement:
    """Pairwise or by-element distances with units; see `Dispatcher.distance`."""
    return _default_dispatcher().distance(x, y, metric=metric, par=par, tolerance=tolerance,
                                         by_element=by_element, dist_fun=dist_fun, crs=crs)
