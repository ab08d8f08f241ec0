# -*- coding: utf-8 -*-

"""
geomeasures/config.py

This module centralizes the configuration used by the measurement routines in
geomeasures. Constants live here so the planar engine, the geodetic engine and
the dispatcher agree on radii, ellipsoid parameters and metric names.

Contents:
---------
1. GEODETIC_DEFAULTS:
   - Sphere radius used by the spherical backend (mean Earth radius, metres).
   - WGS84 ellipsoid parameters used when a geographic CRS carries no ellipsoid.

2. METRICS:
   - Canonical names of the planar metrics (Euclidean, Hausdorff, Frechet) and
     of the geodetic metric (Great Circle), plus the accepted spellings.

3. PROCESS-WIDE SETTINGS:
   - `use_spherical()` selects the spherical backend (default) or the
     ellipsoidal backend for longitude/latitude data.
   - `sphere_radius()` reads or overrides the sphere radius.
   - The initial backend can be set through the environment variable
     GEOMEASURES_USE_SPHERICAL ("0", "false", "no" select the ellipsoid).

Usage:
------
    from geomeasures import config

    previous = config.use_spherical(False)   # switch to geodesics on the ellipsoid
    ...
    config.use_spherical(previous)

Settings are read when a `Dispatcher` is constructed; change them during
initialization, not while measurements are running.

"""
import os

# ───────────────────────────────────────────────────────────────────────────────
# 1) GEODETIC CONSTANTS (metres)
# ───────────────────────────────────────────────────────────────────────────────
GEODETIC_DEFAULTS = {
    'sphere_radius': 6371008.8,                 # IUGG mean Earth radius (m)
    'wgs84_semi_major': 6378137.0,              # WGS84 semi-major axis (m)
    'wgs84_flattening': 1.0 / 298.257223563,    # WGS84 flattening
}

# ───────────────────────────────────────────────────────────────────────────────
# 2) METRIC NAMES
# ───────────────────────────────────────────────────────────────────────────────
EUCLIDEAN = 'Euclidean'
HAUSDORFF = 'Hausdorff'
FRECHET = 'Frechet'
GREAT_CIRCLE = 'Great Circle'

PLANAR_METRICS = (EUCLIDEAN, HAUSDORFF, FRECHET)
GEODETIC_METRICS = (GREAT_CIRCLE,)

_METRIC_ALIASES = {
    'euclidean': EUCLIDEAN,
    'hausdorff': HAUSDORFF,
    'frechet': FRECHET,
    'great circle': GREAT_CIRCLE,
    'greatcircle': GREAT_CIRCLE,
    'geodesic': GREAT_CIRCLE,
}


def canonical_metric(name: str) -> str:
    """Return the canonical metric name for `name` (case and accent insensitive).

    Raises ValueError for metrics that are not supported.
    """
    key = str(name).strip().lower().replace('é', 'e').replace('_', ' ').replace('-', ' ')
    try:
        return _METRIC_ALIASES[key]
    except KeyError:
        valid = ', '.join(PLANAR_METRICS + GEODETIC_METRICS)
        raise ValueError(f"unknown distance metric {name!r}; expected one of: {valid}") from None


# ───────────────────────────────────────────────────────────────────────────────
# 3) PROCESS-WIDE SETTINGS
# ───────────────────────────────────────────────────────────────────────────────
def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == '':
        return default
    return raw.strip().lower() not in ('0', 'false', 'no', 'off')


_SETTINGS = {
    'use_spherical': _env_flag('GEOMEASURES_USE_SPHERICAL', True),
    'sphere_radius': GEODETIC_DEFAULTS['sphere_radius'],
}


def use_spherical(flag=None) -> bool:
    """Query or set the process-wide geodetic backend flag.

    True selects the spherical backend, False the ellipsoidal (geodesic)
    backend. Returns the setting in effect before the call, so a caller can
    restore it afterwards.
    """
    previous = _SETTINGS['use_spherical']
    if flag is not None:
        _SETTINGS['use_spherical'] = bool(flag)
    return previous


def sphere_radius(value=None) -> float:
    """Query or set the sphere radius (metres) used by the spherical backend.

    Returns the radius in effect before the call.
    """
    previous = _SETTINGS['sphere_radius']
    if value is not None:
        value = float(value)
        if not value > 0.0:
            raise ValueError('sphere radius must be positive')
        _SETTINGS['sphere_radius'] = value
    return previous
