import numpy as np
import pytest
from shapely.geometry import (Point, LineString, Polygon, MultiPoint, MultiLineString,
                              GeometryCollection)

from geomeasures import planar
from fixtures.geometries import square_with_holes, multipolygon_with_holes, three_points, OUTER, HOLE1, HOLE2


def test_area_points_and_lines_are_zero():
    out = planar.area([Point(1, 2), MultiPoint([(0, 0), (1, 1)]), LineString([(0, 0), (3, 4)])])
    assert np.all(out == 0.0)


def test_area_square_with_holes():
    out = planar.area([square_with_holes()])
    assert out[0] == pytest.approx(98.0)


def test_area_holes_subtracted_from_outer_ring():
    full = planar.area([Polygon(OUTER), Polygon(HOLE1), Polygon(HOLE2), square_with_holes()])
    assert full[3] == pytest.approx(full[0] - full[1] - full[2])


def test_area_multipolygon_sums_parts():
    out = planar.area([multipolygon_with_holes()])
    assert out[0] == pytest.approx(98.0 + 99.0)


def test_area_empty_and_missing_are_nan():
    out = planar.area([Polygon(), None, Polygon(OUTER)])
    assert np.isnan(out[0]) and np.isnan(out[1])
    assert out[2] == pytest.approx(100.0)


def test_length_lines_only():
    geoms = [
        LineString([(0, 0), (3, 4)]),
        MultiLineString([[(0, 0), (1, 0)], [(0, 0), (0, 2)]]),
        Point(0, 0),
        square_with_holes(),
        GeometryCollection([LineString([(0, 0), (0, 5)]), Polygon(OUTER)]),
    ]
    out = planar.length(geoms)
    np.testing.assert_allclose(out, [5.0, 3.0, 0.0, 0.0, 5.0])


def test_length_empty_is_nan():
    out = planar.length([LineString(), LineString([(0, 0), (1, 0)])])
    assert np.isnan(out[0])
    assert out[1] == 1.0


def test_distance_matrix_three_points():
    p = three_points()
    d = planar.distance(p, p)
    expected = np.array([[0.0, 1.0, 2.0], [1.0, 0.0, 1.0], [2.0, 1.0, 0.0]])
    np.testing.assert_allclose(d, expected)


def test_distance_by_element_recycles_shorter_side():
    d = planar.distance(three_points(), [Point(0, 0)], by_element=True)
    np.testing.assert_allclose(d, [0.0, 1.0, 2.0])


def test_distance_empty_pairs_are_nan():
    d = planar.distance([Point(0, 0), Point()], [Point(3, 4), LineString()])
    assert d[0, 0] == pytest.approx(5.0)
    assert np.isnan(d[0, 1]) and np.isnan(d[1, 0]) and np.isnan(d[1, 1])


def test_distance_matrix_with_empty_side():
    d = planar.distance([], three_points())
    assert d.shape == (0, 3)


def test_hausdorff_and_frechet_parallel_lines():
    a = [LineString([(0, 0), (10, 0)])]
    b = [LineString([(0, 1), (10, 1)])]
    assert planar.distance(a, b, metric='Hausdorff')[0, 0] == pytest.approx(1.0)
    assert planar.distance(a, b, metric='hausdorff', par=0.5)[0, 0] == pytest.approx(1.0)
    assert planar.distance(a, b, metric='Fréchet', by_element=True)[0] == pytest.approx(1.0)


def test_hausdorff_densify_changes_discrete_result():
    a = [LineString([(130, 0), (0, 0), (0, 150)])]
    b = [LineString([(10, 10), (10, 150), (130, 10)])]
    coarse = planar.distance(a, b, metric='Hausdorff')[0, 0]
    fine = planar.distance(a, b, metric='Hausdorff', par=0.5)[0, 0]
    assert coarse == pytest.approx(14.142135623730951)
    assert fine == pytest.approx(70.0)


def test_frechet_densify_tightens_vertex_result():
    a = [LineString([(0, 0), (100, 0)])]
    b = [LineString([(0, 0), (50, 50), (100, 0)])]
    coarse = planar.distance(a, b, metric='Frechet')[0, 0]
    fine = planar.distance(a, b, metric='Frechet', par=0.5)[0, 0]
    assert coarse == pytest.approx(70.71067811865476)
    assert fine == pytest.approx(50.0)


def test_distance_par_out_of_range():
    with pytest.raises(ValueError):
        planar.distance(three_points(), three_points(), metric='Hausdorff', par=1.5)


def test_distance_great_circle_rejected_for_planar_data():
    with pytest.raises(ValueError, match='longitude/latitude'):
        planar.distance(three_points(), three_points(), metric='Great Circle')


def test_distance_unknown_metric():
    with pytest.raises(ValueError, match='unknown distance metric'):
        planar.distance(three_points(), three_points(), metric='Manhattan')
