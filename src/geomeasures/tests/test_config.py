import pytest

from geomeasures import config


@pytest.mark.parametrize('name', ['Euclidean', 'euclidean', ' EUCLIDEAN '])
def test_canonical_euclidean(name):
    assert config.canonical_metric(name) == config.EUCLIDEAN


@pytest.mark.parametrize('name, expected', [
    ('Fréchet', config.FRECHET),
    ('frechet', config.FRECHET),
    ('Hausdorff', config.HAUSDORFF),
    ('Great Circle', config.GREAT_CIRCLE),
    ('great_circle', config.GREAT_CIRCLE),
    ('geodesic', config.GREAT_CIRCLE),
])
def test_canonical_aliases(name, expected):
    assert config.canonical_metric(name) == expected


def test_canonical_unknown():
    with pytest.raises(ValueError):
        config.canonical_metric('taxicab')


def test_use_spherical_returns_previous():
    config.use_spherical(True)
    assert config.use_spherical(False) is True
    assert config.use_spherical() is False


def test_sphere_radius():
    previous = config.sphere_radius(1000.0)
    assert previous == pytest.approx(config.GEODETIC_DEFAULTS['sphere_radius'])
    assert config.sphere_radius() == 1000.0
    with pytest.raises(ValueError):
        config.sphere_radius(0.0)


@pytest.mark.parametrize('raw, expected', [
    (None, True), ('', True), ('1', True), ('true', True),
    ('0', False), ('False', False), ('no', False), ('off', False),
])
def test_env_flag(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv('GEOMEASURES_USE_SPHERICAL', raising=False)
    else:
        monkeypatch.setenv('GEOMEASURES_USE_SPHERICAL', raw)
    assert config._env_flag('GEOMEASURES_USE_SPHERICAL', True) is expected
