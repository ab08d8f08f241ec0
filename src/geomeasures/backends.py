"""
backends.py

Geodetic backends for longitude/latitude data.

Two backends exist and they are not numerically equivalent:

- SPHERICAL: great-circle formulas on a sphere of configurable radius,
  computed with `pyproj.Geod` set up as a sphere (a == b).
- ELLIPSOIDAL: geodesics on the CRS's reference ellipsoid using
  `geographiclib` (Karney, 2013, Algorithms for geodesics, J. Geodesy 87).
  geographiclib is an optional dependency (``pip install geomeasures[geodesic]``).

Selecting the ellipsoidal backend without geographiclib installed is a
configuration error; there is no fallback to the sphere.

Each kernel works on coordinate arrays in degrees (lon, lat) and returns metres:
- `ring_area(lons, lats)` -> unsigned area of a closed ring (m^2)
- `line_length(lons, lats)` -> length of a polyline (m)
- `segment_distances(lon, lat, seg_a, seg_b)` -> distance from one point to
  each segment a[i] -> b[i] (m); a segment with a == b is a point
- `min_distance(points, seg_a, seg_b, tolerance)` -> smallest of those over
  all points, stopping early once below `tolerance` (when positive)

Kernels hold no per-call state and are cached by `get_kernel`.

"""
from enum import Enum
from functools import lru_cache
import importlib
import logging

import numpy as np
from pyproj import Geod

from geomeasures.errors import BackendUnavailableError

logger = logging.getLogger(__name__)

# golden-section search along an ellipsoidal segment stops at this bracket width (m)
_SEARCH_WIDTH = 1e-4
_SEARCH_MAX_ITER = 200
_INV_PHI = (np.sqrt(5.0) - 1.0) / 2.0


class Backend(Enum):
    SPHERICAL = 'spherical'
    ELLIPSOIDAL = 'ellipsoidal'


# backend -> module that must be importable
_REQUIRED_MODULES = {
    Backend.SPHERICAL: 'pyproj',
    Backend.ELLIPSOIDAL: 'geographiclib.geodesic',
}


def select_backend(use_spherical: bool = True) -> Backend:
    """Map the spherical/ellipsoidal flag to a Backend."""
    return Backend.SPHERICAL if use_spherical else Backend.ELLIPSOIDAL


def require_backend(backend: Backend) -> Backend:
    """Check that `backend` can be used; raise BackendUnavailableError otherwise."""
    module = _REQUIRED_MODULES[backend]
    try:
        importlib.import_module(module)
    except ImportError as e:
        raise BackendUnavailableError(
            f'the {backend.value} backend requires {module.split(".")[0]}; '
            f'install it (pip install geomeasures[geodesic]) or use the spherical backend'
        ) from e
    return backend


class _Kernel:
    """Shared search over points for both kernels."""

    def segment_distances(self, lon, lat, seg_a, seg_b, bound=np.inf) -> np.ndarray:
        raise NotImplementedError

    def min_distance(self, points, seg_a, seg_b, tolerance: float = 0.0) -> float:
        """Smallest distance from any of `points` to any segment seg_a[i] -> seg_b[i].

        Points are searched in order; with tolerance > 0 the search stops at
        the first point closer than `tolerance` to some segment, so the true
        minimum may be smaller than the value returned.
        """
        points = np.asarray(points, dtype=float)
        seg_a = np.asarray(seg_a, dtype=float)
        seg_b = np.asarray(seg_b, dtype=float)
        best = np.inf
        if len(seg_a) == 0:
            return best
        for lon, lat in points[:, :2]:
            d = self.segment_distances(lon, lat, seg_a, seg_b, bound=best)
            best = min(best, float(np.min(d)))
            if tolerance > 0.0 and best < tolerance:
                break
        return best


class SphericalKernel(_Kernel):
    """Great-circle kernel on a sphere of radius `radius` metres."""

    backend = Backend.SPHERICAL

    def __init__(self, radius: float):
        self.radius = float(radius)
        self.geod = Geod(a=self.radius, b=self.radius)

    def ring_area(self, lons, lats) -> float:
        area, _ = self.geod.polygon_area_perimeter(lons, lats)
        return abs(float(area))

    def line_length(self, lons, lats) -> float:
        if len(lons) < 2:
            return 0.0
        return float(self.geod.line_length(lons, lats))

    def segment_distances(self, lon, lat, seg_a, seg_b, bound=np.inf) -> np.ndarray:
        """Distance from (lon, lat) to each great-circle arc seg_a[i] -> seg_b[i].

        The cross-track distance is used when the foot of the perpendicular
        falls inside the arc, the nearer endpoint otherwise.
        """
        n = len(seg_a)
        plon = np.full(n, lon)
        plat = np.full(n, lat)
        az12, _, d12 = self.geod.inv(seg_a[:, 0], seg_a[:, 1], seg_b[:, 0], seg_b[:, 1])
        az13, _, d13 = self.geod.inv(seg_a[:, 0], seg_a[:, 1], plon, plat)
        _, _, d23 = self.geod.inv(seg_b[:, 0], seg_b[:, 1], plon, plat)
        d12 = np.asarray(d12)
        d13 = np.asarray(d13)
        s13 = d13 / self.radius
        dtheta = np.radians(np.asarray(az13) - np.asarray(az12))
        xt = np.arcsin(np.clip(np.sin(s13) * np.sin(dtheta), -1.0, 1.0))
        cos_xt = np.cos(xt)
        cos_at = np.clip(np.cos(s13) / np.where(cos_xt == 0.0, 1.0, cos_xt), -1.0, 1.0)
        along = np.arccos(cos_at) * self.radius
        inside = (d12 > 0.0) & (np.cos(dtheta) > 0.0) & (along < d12)
        ends = np.minimum(d13, np.asarray(d23))
        return np.where(inside, np.minimum(np.abs(xt) * self.radius, ends), ends)


class EllipsoidalKernel(_Kernel):
    """Geodesic kernel on the ellipsoid (semi_major metres, flattening)."""

    backend = Backend.ELLIPSOIDAL

    def __init__(self, semi_major: float, flattening: float):
        from geographiclib.geodesic import Geodesic

        self.semi_major = float(semi_major)
        self.flattening = float(flattening)
        self.geod = Geodesic(self.semi_major, self.flattening)
        self._distance_mask = Geodesic.DISTANCE
        self._line_caps = Geodesic.LATITUDE | Geodesic.LONGITUDE | Geodesic.DISTANCE_IN
        self._position_mask = Geodesic.LATITUDE | Geodesic.LONGITUDE

    def _inverse(self, lon1, lat1, lon2, lat2) -> float:
        return float(self.geod.Inverse(lat1, lon1, lat2, lon2, self._distance_mask)['s12'])

    def ring_area(self, lons, lats) -> float:
        poly = self.geod.Polygon()
        for lon, lat in zip(lons, lats):
            poly.AddPoint(float(lat), float(lon))
        _, _, area = poly.Compute(False, True)
        return abs(float(area))

    def line_length(self, lons, lats) -> float:
        total = 0.0
        for i in range(1, len(lons)):
            total += self._inverse(lons[i - 1], lats[i - 1], lons[i], lats[i])
        return total

    def _nearest_on_geodesic(self, lon, lat, a, b, d_a, d_b) -> float:
        line = self.geod.InverseLine(a[1], a[0], b[1], b[0], self._line_caps)

        def dist(s):
            pos = line.Position(s, self._position_mask)
            return self._inverse(lon, lat, pos['lon2'], pos['lat2'])

        # golden-section search over the arc length; distance is unimodal along a segment
        lo, hi = 0.0, line.s13
        c = hi - _INV_PHI * (hi - lo)
        d = lo + _INV_PHI * (hi - lo)
        fc, fd = dist(c), dist(d)
        for _ in range(_SEARCH_MAX_ITER):
            if hi - lo < _SEARCH_WIDTH:
                break
            if fc < fd:
                hi, d, fd = d, c, fc
                c = hi - _INV_PHI * (hi - lo)
                fc = dist(c)
            else:
                lo, c, fc = c, d, fd
                d = lo + _INV_PHI * (hi - lo)
                fd = dist(d)
        return min(fc, fd, d_a, d_b)

    def segment_distances(self, lon, lat, seg_a, seg_b, bound=np.inf) -> np.ndarray:
        """Distance from (lon, lat) to each geodesic segment seg_a[i] -> seg_b[i].

        Segments whose triangle-inequality lower bound (d_a + d_b - d_ab) / 2
        is not below `bound` are only measured at their endpoints.
        """
        out = np.empty(len(seg_a))
        for i, (a, b) in enumerate(zip(seg_a, seg_b)):
            d_a = self._inverse(lon, lat, a[0], a[1])
            d_b = self._inverse(lon, lat, b[0], b[1])
            ends = min(d_a, d_b)
            if np.array_equal(a[:2], b[:2]):
                out[i] = ends
                continue
            d_ab = self._inverse(a[0], a[1], b[0], b[1])
            if (d_a + d_b - d_ab) / 2.0 >= min(bound, ends):
                out[i] = ends
                continue
            out[i] = self._nearest_on_geodesic(lon, lat, a, b, d_a, d_b)
        return out


@lru_cache(maxsize=32)
def get_kernel(backend: Backend, radius: float = None, semi_major: float = None, flattening: float = None):
    """Return a cached kernel for `backend` and its sphere or ellipsoid parameters."""
    require_backend(backend)
    if backend is Backend.SPHERICAL:
        return SphericalKernel(radius)
    return EllipsoidalKernel(semi_major, flattening)
