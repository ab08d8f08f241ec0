"""
planar.py

Measurements on Cartesian coordinates, delegated to shapely (GEOS).

Inputs are 1-D object arrays of shapely geometries (None allowed). Empty or
missing geometries produce NaN; all other degenerate results are normalized
to NaN as well.

Public functions:
- `area(geoms)` -> (N,) float array
- `length(geoms)` -> (N,) float array
- `distance(x, y, metric='Euclidean', par=0.0, by_element=False)`
    -> (N,) or (M, N) float array

"""
import logging

import numpy as np
import shapely

from geomeasures.collection import empty_mask, recycle_indices
from geomeasures.config import canonical_metric, EUCLIDEAN, HAUSDORFF, FRECHET
from geomeasures.utils import as_missing

logger = logging.getLogger(__name__)

_LINEAL_TYPE_IDS = (1, 2, 5)       # LineString, LinearRing, MultiLineString
_COLLECTION_TYPE_ID = 7            # GeometryCollection


def area(geoms) -> np.ndarray:
    """Area of each geometry; holes are subtracted, points and lines are 0."""
    geoms = np.asarray(geoms, dtype=object)
    out = as_missing(shapely.area(geoms))
    out[empty_mask(geoms)] = np.nan
    return out


def _lineal_length(geom) -> float:
    type_id = shapely.get_type_id(geom)
    if type_id in _LINEAL_TYPE_IDS:
        return float(shapely.length(geom))
    if type_id == _COLLECTION_TYPE_ID:
        return sum(_lineal_length(g) for g in geom.geoms)
    return 0.0


def length(geoms) -> np.ndarray:
    """Length of the lineal parts of each geometry.

    LineString and MultiLineString sum their segment lengths; points and
    polygons contribute 0 (polygon perimeters are not lengths here).
    """
    geoms = np.asarray(geoms, dtype=object)
    missing = empty_mask(geoms)
    out = np.zeros(len(geoms), dtype=float)
    for i, g in enumerate(geoms):
        if not missing[i]:
            out[i] = _lineal_length(g)
    out = as_missing(out)
    out[missing] = np.nan
    return out


def _metric_function(metric):
    if metric == EUCLIDEAN:
        return shapely.distance
    if metric == HAUSDORFF:
        return shapely.hausdorff_distance
    if metric == FRECHET:
        return shapely.frechet_distance
    raise ValueError(f'{metric} distances require longitude/latitude coordinates')


def distance(x, y, metric: str = EUCLIDEAN, par: float = 0.0, by_element: bool = False) -> np.ndarray:
    """Planar distances between the geometries in `x` and `y`.

    Parameters:
    - x, y: 1-D object arrays of geometries
    - metric: 'Euclidean', 'Hausdorff' or 'Frechet'
    - par: for Hausdorff and Frechet, a fraction in (0, 1]; each segment is
      densified into equal parts of at most this fraction of its length
      before the discrete algorithm runs. The result then approximates the
      continuous distance and is not exact. 0 disables densification.
    - by_element: if True, pair x[i] with y[i] (the shorter side recycled)
      and return a vector; otherwise return the len(x) by len(y) matrix.
    """
    metric = canonical_metric(metric)
    par = float(par)
    if not 0.0 <= par <= 1.0:
        raise ValueError('par must be between 0 and 1')

    fn = _metric_function(metric)
    kwargs = {}
    if par > 0.0 and metric != EUCLIDEAN:
        kwargs['densify'] = par

    x = np.array(x, dtype=object)
    y = np.array(y, dtype=object)
    ex = empty_mask(x)
    ey = empty_mask(y)
    # GEOS never sees empties; None yields NaN
    x[ex] = None
    y[ey] = None
    if by_element:
        ix, iy = recycle_indices(len(x), len(y))
        if len(ix) == 0:
            return np.array([], dtype=float)
        out = as_missing(fn(x[ix], y[iy], **kwargs))
        out[ex[ix] | ey[iy]] = np.nan
        return out

    if len(x) == 0 or len(y) == 0:
        return np.zeros((len(x), len(y)), dtype=float)
    logger.debug('%s matrix %d x %d', metric, len(x), len(y))
    out = as_missing(fn(x[:, None], y[None, :], **kwargs))
    out[np.logical_or.outer(ex, ey)] = np.nan
    return out
