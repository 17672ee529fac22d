import math

from dataclasses import dataclass
from functools import cmp_to_key


@dataclass(frozen=True, order=True)
class Point:
    """
    Planar point, also used as a 2D vector.
    Equality is exact and ordering is lexicographic (x, then y).
    """
    x: float
    y: float

    def __add__(self, other):
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Point(self.x - other.x, self.y - other.y)

    def __mul__(self, k: float):
        return Point(self.x * k, self.y * k)

    __rmul__ = __mul__

    def sq_len(self) -> float:
        return self.x * self.x + self.y * self.y

    def __repr__(self):
        return f'Point({self.x:g}, {self.y:g})'


def orientation(p1: Point, p2: Point, p3: Point) -> float:
    """
    Cross product of segments p1p2 and p1p3.
    Positive for a left (counter-clockwise) turn, negative for a right turn,
    zero if the points are collinear.
    """
    return (p2.x - p1.x) * (p3.y - p1.y) - (p2.y - p1.y) * (p3.x - p1.x)


def collinear(p: Point, a: Point, b: Point) -> bool:
    """
    Collinearity check for segments [p, a] and [p, b].
    """
    return orientation(p, a, b) == 0


def squared_distance(a: Point, b: Point) -> float:
    return (a - b).sq_len()


def line_distance(p: Point, a: Point, b: Point) -> float:
    """
    Perpendicular distance from p to the line through a and b.
    """
    length = math.sqrt(squared_distance(a, b))
    if length == 0:
        return math.sqrt(squared_distance(p, a))
    return abs(orientation(a, b, p)) / length


def lexicographic_key(p: Point) -> tuple[float, float]:
    return p.x, p.y


def lowest_point(points: list[Point]) -> Point:
    """
    Lowest point, leftmost among the lowest.
    """
    return min(points, key=lambda p: (p.y, p.x))


def leftmost_point(points: list[Point]) -> Point:
    """
    Leftmost point, lowest among the leftmost.
    """
    return min(points, key=lexicographic_key)


def horizontal_extrema(points: list[Point]) -> tuple[Point, Point]:
    return min(points, key=lexicographic_key), max(points, key=lexicographic_key)


def polar_order_key(pivot: Point):
    """
    Sort key ordering points by polar angle around pivot.

    Assumes pivot is the lowest (then leftmost) point, so all angles lie in [0, pi).
    Points with equal angle are ordered by distance, nearer first.
    """
    def compare(a: Point, b: Point) -> int:
        o = orientation(pivot, a, b)
        if o > 0:
            return -1
        if o < 0:
            return 1
        da, db = squared_distance(pivot, a), squared_distance(pivot, b)
        return (da > db) - (da < db)

    return cmp_to_key(compare)


def wraps_before(origin: Point, current: Point, candidate: Point) -> bool:
    """
    Gift wrapping test: candidate replaces current as the next hull vertex after origin
    if it lies right of origin->current, or on that line and farther away.
    """
    o = orientation(origin, current, candidate)
    if o < 0:
        return True
    return o == 0 and squared_distance(origin, candidate) > squared_distance(origin, current)


def is_collinear_set(points: list[Point]) -> bool:
    """
    Checks if all points lie on a single line.
    """
    if len(points) < 3:
        return True
    a, b = horizontal_extrema(points)
    return all(collinear(a, b, p) for p in points)
