import logging

from geometry import Point, horizontal_extrema, line_distance, orientation
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


def right_of(points: list[Point], p: Point, q: Point) -> list[Point]:
    """
    Points strictly on the right of the directed line p->q.
    """
    return [r for r in points if orientation(p, q, r) < 0]


def farthest_from_line(points: list[Point], p: Point, q: Point) -> Point:
    """
    Point with the largest distance from the line through p and q.
    All points are assumed on the same side of the line, so the magnitude
    of the orientation is proportional to the distance.
    Ties are resolved by lexicographic order, which picks an endpoint
    of a run of points parallel to pq.
    """
    return max(points, key=lambda r: (abs(orientation(p, q, r)), -r.x, -r.y))


class QuickHull:
    name = 'quickhull'

    def __init__(self):
        self.hull: list[Point] = []
        self.triangles: list[tuple[Point, Point, Point]] = []

    @staticmethod
    def remaining(points: list[Point], c: Point, outside: list[Point]) -> list[Point]:
        dropped = set(outside)
        dropped.add(c)
        return [r for r in points if r not in dropped]

    def helper_step(self, p: Point, c: Point, q: Point) -> StepBuilder:
        step = StepBuilder() \
            .mark(PointRole.HULL, self.hull) \
            .polyline(SegmentRole.SUB_HULL, self.hull) \
            .mark(PointRole.HELPER, [p, c, q])
        for triangle in self.triangles:
            step.polyline(SegmentRole.HELPER, triangle, closed=True)
        return step

    def find_hull(self, points: list[Point], p: Point, q: Point, trace: Trace):
        """
        Append hull vertices strictly between p and q (in CCW order)
        for points lying on the right of p->q.
        """
        if not points:
            return
        c = farthest_from_line(points, p, q)
        logger.debug('quickhull: apex %r at distance %g from %r-%r', c, line_distance(c, p, q), p, q)
        self.triangles.append((p, c, q))

        outside = right_of(points, p, c)
        inside = self.remaining(points, c, outside)
        trace.add(self.helper_step(p, c, q))
        trace.add(
            trace.draft()
            .polyline(SegmentRole.CHECKING, [p, c])
            .mark(PointRole.CHECKING, [p, c])
            .mark(PointRole.GROUP_A, inside)
            .mark(PointRole.GROUP_B, outside)
        )
        self.find_hull(outside, p, c, trace)

        self.hull.append(c)

        outside = right_of(points, c, q)
        inside = self.remaining(points, c, outside)
        trace.add(self.helper_step(q, c, p))
        trace.add(
            trace.draft()
            .polyline(SegmentRole.CHECKING, [c, q])
            .mark(PointRole.CHECKING, [c, q])
            .mark(PointRole.GROUP_A, inside)
            .mark(PointRole.GROUP_B, outside)
        )
        self.find_hull(outside, c, q, trace)

        self.triangles.pop()

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Split points by the line through the horizontal extrema and
        recursively discard points inside triangles spanned by the farthest point.

        Time complexity: O(n*log(n)) expected, O(n^2) worst case.
        """
        trace.prefix = 'quickhull_'
        self.hull, self.triangles = [], []

        left, right = horizontal_extrema(points)
        lower = right_of(points, left, right)
        upper = right_of(points, right, left)

        self.hull.append(left)
        self.find_hull(lower, left, right, trace)
        self.hull.append(right)
        self.find_hull(upper, right, left, trace)

        logger.debug('quickhull: %d of %d points on hull', len(self.hull), len(points))
        trace.add(
            StepBuilder()
            .mark(PointRole.HULL, self.hull)
            .polyline(SegmentRole.HULL, self.hull, closed=True),
            label='quickhull_result',
        )
        return list(self.hull)
