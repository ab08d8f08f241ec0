"""
crs.py

Coordinate reference system helpers built on `pyproj.CRS`.

Public functions:
- `as_crs(crs)` -> pyproj.CRS or None
- `is_longlat(crs)` -> True / False / None (unknown)
- `crs_equal(a, b)` -> bool
- `ellipsoid_params(crs)` -> (semi_major, flattening)

"""
from typing import Optional, Tuple
import logging

from pyproj import CRS

from geomeasures.config import GEODETIC_DEFAULTS

logger = logging.getLogger(__name__)

_ANGULAR_UNITS = {'degree', 'radian', 'grad', 'arc-second', 'arc-minute', 'microradian',
                  'degree minute second', 'degree minute second hemisphere'}
_UNKNOWN_UNITS = {'', 'unknown', 'none'}


def as_crs(crs) -> Optional[CRS]:
    """Coerce anything `pyproj.CRS.from_user_input` accepts; None stays None."""
    if crs is None:
        return None
    if isinstance(crs, CRS):
        return crs
    return CRS.from_user_input(crs)


def horizontal_axes(crs: CRS):
    axes = list(crs.axis_info)
    if not axes and crs.source_crs is not None:
        axes = list(crs.source_crs.axis_info)
    return axes[:2]


def is_longlat(crs) -> Optional[bool]:
    """Return True when `crs` is definitively longitude/latitude.

    Returns False for projected data and for an absent CRS, and None when
    the axis units cannot be determined. Callers treat None like False.
    """
    crs = as_crs(crs)
    if crs is None:
        return False
    if crs.is_geographic:
        return True
    if crs.is_projected:
        return False
    axes = horizontal_axes(crs)
    if not axes:
        return None
    names = {str(a.unit_name).strip().lower() for a in axes}
    if names & _UNKNOWN_UNITS:
        return None
    if names <= _ANGULAR_UNITS:
        return True
    return False


def crs_equal(a, b) -> bool:
    """Compare two CRS values. Two absent CRS are equal."""
    a = as_crs(a)
    b = as_crs(b)
    if a is None or b is None:
        return a is None and b is None
    return a == b


def ellipsoid_params(crs) -> Tuple[float, float]:
    """Return (semi_major_metre, flattening) of the ellipsoid of `crs`.

    Falls back to WGS84 when the CRS is absent or carries no ellipsoid.
    """
    crs = as_crs(crs)
    ellps = crs.ellipsoid if crs is not None else None
    if ellps is None:
        logger.debug('no ellipsoid on CRS; using WGS84 parameters')
        return GEODETIC_DEFAULTS['wgs84_semi_major'], GEODETIC_DEFAULTS['wgs84_flattening']
    a = float(ellps.semi_major_metre)
    inv_f = float(ellps.inverse_flattening)
    if inv_f > 0.0:
        return a, 1.0 / inv_f
    b = float(ellps.semi_minor_metre)
    return a, (a - b) / a
