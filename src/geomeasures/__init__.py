"""geomeasures: dimension, area, length and distance of vector geometries.

Planar data is measured with shapely; longitude/latitude data on a sphere
(pyproj) or on the ellipsoid (geographiclib). Results carry the unit implied
by the coordinate reference system.
"""
from geomeasures.config import use_spherical, sphere_radius
from geomeasures.errors import (GeomeasuresError, BackendUnavailableError, CRSMismatchError,
                                DeprecatedParameterError)
from geomeasures.units import Measurement, UnitInfo, resolve_units
from geomeasures.crs import is_longlat
from geomeasures.backends import Backend
from geomeasures.measures import Dispatcher, dimension, area, length, distance

__version__ = '0.1.0'
