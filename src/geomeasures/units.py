"""
units.py

Unit resolution and unit-tagged measurement results.

Raw engine output is a plain float array. `attach_units` turns it into a
`Measurement` carrying the unit implied by the CRS: no unit when the CRS is
absent, the CRS's linear unit (squared for areas) otherwise, multiplied by
the declared scale-to-metres factor when the CRS has one.

Public API:
- `UnitInfo(unit, meter_scale)`
- `resolve_units(crs)` -> UnitInfo
- `area_unit(unit)` -> str
- `attach_units(values, unit_info, power=1)` -> Measurement
- `as_meters(value)` -> float
- `Measurement`

"""
from typing import NamedTuple, Optional
import warnings

import numpy as np
from pyproj.exceptions import CRSError

from geomeasures.crs import as_crs, horizontal_axes

METRES = 'm'
SQUARE_METRES = 'm^2'

_UNIT_SYMBOLS = {
    'metre': 'm',
    'meter': 'm',
    'kilometre': 'km',
    'centimetre': 'cm',
    'millimetre': 'mm',
    'foot': 'ft',
    'us survey foot': 'US_survey_foot',
    'british foot (1936)': 'British_foot',
    'yard': 'yd',
    'degree': 'degree',
    'radian': 'rad',
}

# length units a tolerance may be given in, with their size in metres
_METRE_FACTORS = {'m': 1.0, 'km': 1000.0, 'cm': 0.01, 'mm': 0.001, 'ft': 0.3048}


class UnitInfo(NamedTuple):
    unit: Optional[str]
    meter_scale: Optional[float] = None


def _proj4_params(crs) -> dict:
    # to_dict goes through a PROJ.4 string; that export is lossy and warns
    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore')
            return crs.to_dict() or {}
    except CRSError:
        return {}


def resolve_units(crs) -> UnitInfo:
    """Return the linear unit of `crs` and its scale-to-metres factor, if declared."""
    crs = as_crs(crs)
    if crs is None:
        return UnitInfo(None)

    to_meter = _proj4_params(crs).get('to_meter')
    if to_meter is not None:
        return UnitInfo(METRES, float(to_meter))

    axes = horizontal_axes(crs)
    if not axes:
        return UnitInfo(METRES)
    name = str(axes[0].unit_name).strip()
    factor = float(axes[0].unit_conversion_factor or 1.0)
    if name.lower() in ('', 'unknown', 'none'):
        # unnamed unit: express in metres through its conversion factor
        if factor != 1.0:
            return UnitInfo(METRES, factor)
        return UnitInfo(METRES)
    return UnitInfo(_UNIT_SYMBOLS.get(name.lower(), name.replace(' ', '_')))


def area_unit(unit: Optional[str]) -> Optional[str]:
    if unit is None:
        return None
    return f'{unit}^2'


class Measurement:
    """A float array (scalar, vector or matrix) tagged with a unit label.

    ``unit`` is None for measurements on data without a CRS. Missing values
    are NaN.
    """

    __slots__ = ('_values', '_unit')

    def __init__(self, values, unit: Optional[str] = None):
        self._values = np.array(values, dtype=float)
        self._values.setflags(write=False)
        self._unit = unit

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def unit(self) -> Optional[str]:
        return self._unit

    @property
    def shape(self):
        return self._values.shape

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __getitem__(self, key):
        out = self._values[key]
        if np.ndim(out) == 0:
            return float(out)
        return Measurement(out, self._unit)

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return np.array(self._values)
        return np.array(self._values, dtype=dtype)

    def scaled(self, factor: float, unit: Optional[str] = None) -> 'Measurement':
        """Multiply by a dimensionless factor, optionally relabelling the unit."""
        return Measurement(self._values * float(factor), self._unit if unit is None else unit)

    def __repr__(self):
        return f'Measurement({self._values.tolist()!r}, unit={self._unit!r})'


def attach_units(values, unit_info: UnitInfo, power: int = 1) -> Measurement:
    """Tag raw `values` with the unit from `unit_info` raised to `power`.

    power=2 is used for areas. The meter scale, when present, is applied as
    ``meter_scale ** power``.
    """
    if unit_info.unit is None:
        return Measurement(values)
    if power == 1:
        unit = unit_info.unit
    elif power == 2:
        unit = area_unit(unit_info.unit)
    else:
        unit = f'{unit_info.unit}^{power}'
    m = Measurement(values, unit)
    if unit_info.meter_scale is not None:
        m = m.scaled(unit_info.meter_scale ** power)
    return m


def as_meters(value) -> float:
    """Convert a tolerance given in metres (float) or as a length Measurement to metres."""
    if isinstance(value, Measurement):
        if value.shape not in ((), (1,)):
            raise ValueError('tolerance must be a single value')
        factor = _METRE_FACTORS.get(value.unit or METRES)
        if factor is None:
            raise ValueError(f'tolerance unit {value.unit!r} is not convertible to metres')
        return float(value.values.reshape(-1)[0]) * factor
    return float(value)
