import pytest

from geomeasures import config


@pytest.fixture(autouse=True)
def restore_geomeasures_settings():
    """Restore the process-wide backend flag and sphere radius after each test.

    Tests that switch to the ellipsoidal backend or change the radius would
    otherwise leak that choice into every test collected after them.
    """
    spherical = config.use_spherical()
    radius = config.sphere_radius()
    yield
    config.use_spherical(spherical)
    config.sphere_radius(radius)
