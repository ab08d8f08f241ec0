from shapely.geometry import (Point, LineString, Polygon, MultiPoint, MultiPolygon,
                              GeometryCollection)

OUTER = [(0, 0), (10, 0), (10, 10), (0, 10), (0, 0)]
HOLE1 = [(1, 1), (1, 2), (2, 2), (2, 1), (1, 1)]
HOLE2 = [(5, 5), (5, 6), (6, 6), (6, 5), (5, 5)]


def shift(ring, d):
    return [(x + d, y + d) for x, y in ring]


def square_with_holes():
    """10 x 10 square with two 1 x 1 holes (area 98)."""
    return Polygon(OUTER, [HOLE1, HOLE2])


def multipolygon_with_holes():
    """The holed square plus a copy shifted by 12 with one hole (area 98 + 99)."""
    return MultiPolygon([
        Polygon(OUTER, [HOLE1, HOLE2]),
        Polygon(shift(OUTER, 12), [shift(HOLE1, 12)]),
    ])


def three_points():
    return [Point(0, 0), Point(0, 1), Point(0, 2)]


def mixed_dimension_geometries():
    """Point, line, polygon, then empty multipoint, empty line, empty collection."""
    return [
        Point(0, 1),
        LineString([(0, 0), (1, 1)]),
        Polygon([(0, 0), (1, 0), (0, 1), (0, 0)]),
        MultiPoint(),
        LineString(),
        GeometryCollection(),
    ]
