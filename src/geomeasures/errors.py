"""Exception types raised by geomeasures.

Numeric degeneracies (empty geometries, NaN lengths) never raise; they come
back as missing values. Only configuration and usage errors are fatal.
"""


class GeomeasuresError(Exception):
    """Base class for errors raised by geomeasures."""


class BackendUnavailableError(GeomeasuresError, ImportError):
    """The requested geodetic backend needs a package that is not installed."""


class CRSMismatchError(GeomeasuresError, ValueError):
    """Two input collections carry different coordinate reference systems."""


class DeprecatedParameterError(GeomeasuresError, TypeError):
    """A parameter that is no longer supported was passed."""
