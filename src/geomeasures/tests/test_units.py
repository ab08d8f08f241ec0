import numpy as np
import pytest

from geomeasures.units import (UnitInfo, Measurement, resolve_units, attach_units, area_unit,
                               as_meters)

TMERC_TO_METER_2 = '+proj=tmerc +lat_0=0 +lon_0=0 +k=1 +x_0=0 +y_0=0 +ellps=WGS84 +to_meter=2 +no_defs'


def test_resolve_units_without_crs():
    assert resolve_units(None) == UnitInfo(None, None)


@pytest.mark.parametrize('crs, unit', [
    ('EPSG:3857', 'm'),
    ('EPSG:4326', 'degree'),
    ('EPSG:2227', 'US_survey_foot'),
])
def test_resolve_units_named(crs, unit):
    info = resolve_units(crs)
    assert info.unit == unit
    assert info.meter_scale is None


def test_resolve_units_to_meter():
    info = resolve_units(TMERC_TO_METER_2)
    assert info.unit == 'm'
    assert info.meter_scale == pytest.approx(2.0)


def test_area_unit():
    assert area_unit('m') == 'm^2'
    assert area_unit(None) is None


def test_attach_units_scales_by_power():
    info = UnitInfo('m', 3.0)
    length = attach_units([1.0, 2.0], info)
    area = attach_units([1.0, 2.0], info, power=2)
    np.testing.assert_allclose(length.values, [3.0, 6.0])
    np.testing.assert_allclose(area.values, [9.0, 18.0])
    assert area.unit == 'm^2'


def test_attach_units_no_crs_keeps_bare_numbers():
    m = attach_units([1.0, np.nan], UnitInfo(None))
    assert m.unit is None
    assert np.isnan(m[1])


def test_measurement_behaves_like_array():
    m = Measurement([[0.0, 1.0], [1.0, 0.0]], 'm')
    assert m.shape == (2, 2)
    assert len(m) == 2
    assert m[0, 1] == 1.0
    assert isinstance(m[0], Measurement) and m[0].unit == 'm'
    np.testing.assert_array_equal(np.asarray(m), [[0.0, 1.0], [1.0, 0.0]])
    assert m.scaled(1000.0, 'mm')[0, 1] == 1000.0
    assert 'unit=' in repr(m)


def test_measurement_values_are_read_only():
    m = Measurement([1.0, 2.0], 'm')
    with pytest.raises(ValueError):
        m.values[0] = 5.0


def test_as_meters():
    assert as_meters(10) == 10.0
    assert as_meters(Measurement([2.0], 'km')) == 2000.0
    with pytest.raises(ValueError):
        as_meters(Measurement([2.0], 'degree'))
    with pytest.raises(ValueError):
        as_meters(Measurement([1.0, 2.0], 'm'))
