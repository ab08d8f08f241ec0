import sys

import numpy as np
import pytest

from geomeasures import Dispatcher
from geomeasures.backends import Backend, select_backend, require_backend, SphericalKernel
from geomeasures.errors import BackendUnavailableError


def test_select_backend():
    assert select_backend(True) is Backend.SPHERICAL
    assert select_backend(False) is Backend.ELLIPSOIDAL


def test_spherical_always_available():
    assert require_backend(Backend.SPHERICAL) is Backend.SPHERICAL


def test_missing_geographiclib_is_fatal(monkeypatch):
    monkeypatch.setitem(sys.modules, 'geographiclib.geodesic', None)
    with pytest.raises(BackendUnavailableError, match='geographiclib'):
        require_backend(Backend.ELLIPSOIDAL)


def test_dispatcher_fails_at_construction(monkeypatch):
    monkeypatch.setitem(sys.modules, 'geographiclib.geodesic', None)
    with pytest.raises(ImportError):
        Dispatcher(use_spherical=False)
    # no silent fallback, but the sphere still works
    assert Dispatcher(use_spherical=True).backend is Backend.SPHERICAL


def test_two_dispatchers_with_different_backends():
    pytest.importorskip('geographiclib')
    a = Dispatcher(use_spherical=True)
    b = Dispatcher(use_spherical=False)
    assert a.backend is Backend.SPHERICAL
    assert b.backend is Backend.ELLIPSOIDAL


def test_spherical_kernel_radius_scales_distances():
    small = SphericalKernel(1.0)
    big = SphericalKernel(2.0)
    d1 = small.min_distance([[0.0, 0.0]], [[90.0, 0.0]])
    d2 = big.min_distance([[0.0, 0.0]], [[90.0, 0.0]])
    assert d1 == pytest.approx(1.5707963267948966)
    assert d2 == pytest.approx(2 * d1)


def test_spherical_kernel_short_line():
    assert SphericalKernel(1.0).line_length([0.0], [0.0]) == 0.0


def test_kernels_are_cached():
    from geomeasures.backends import get_kernel
    assert get_kernel(Backend.SPHERICAL, radius=1.0) is get_kernel(Backend.SPHERICAL, radius=1.0)
    assert get_kernel(Backend.SPHERICAL, radius=1.0) is not get_kernel(Backend.SPHERICAL, radius=2.0)


def test_spherical_segment_distances_cross_track():
    k = SphericalKernel(1.0)
    a = np.array([[-45.0, 0.0], [10.0, 10.0]])
    b = np.array([[45.0, 0.0], [10.0, 10.0]])
    d = k.segment_distances(0.0, 30.0, a, b)
    assert d[0] == pytest.approx(np.radians(30.0))
    assert d[1] == pytest.approx(k.min_distance([[0.0, 30.0]], a[1:], b[1:]))
