import logging

from geometry import Point, orientation
from hull_errors import UnreachableStateError
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


class BruteForceHull:
    name = 'brute_force'

    @staticmethod
    def partition(points: list[Point], p: Point, q: Point) -> tuple[list[Point], list[Point], list[Point]]:
        """
        Split points other than p and q by the line through them
        into left side, right side and points on the line.
        """
        left, right, on_line = [], [], []
        for r in points:
            if r == p or r == q:
                continue
            o = orientation(p, q, r)
            if o > 0:
                left.append(r)
            elif o < 0:
                right.append(r)
            else:
                on_line.append(r)
        return left, right, on_line

    @staticmethod
    def spans(p: Point, q: Point, on_line: list[Point]) -> bool:
        """
        Whether [p, q] covers every collinear point, i.e. p and q are the extreme pair.
        Collinear points are ordered lexicographically along their line.
        """
        lo, hi = min(p, q), max(p, q)
        return all(lo < r < hi for r in on_line)

    @staticmethod
    def chain(edges: dict[Point, Point]) -> list[Point]:
        """
        Link directed hull edges into a CCW polygon starting at the lexicographic minimum.
        """
        start = min(edges)
        hull = [start]
        cur = edges[start]
        while cur != start:
            if cur not in edges or len(hull) >= len(edges):
                raise UnreachableStateError(f'Hull edges do not form a closed chain at {cur}')
            hull.append(cur)
            cur = edges[cur]
        return hull

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Test every pair of points for being a hull edge.
        A pair is an edge if all other points lie on one side of it
        and no collinear point lies beyond its endpoints.

        Time complexity: O(n^3).
        """
        trace.prefix = 'brute_force_'
        edges: dict[Point, Point] = {}
        hull_segments: list[tuple[Point, Point]] = []
        hull_points: dict[Point, None] = {}

        for i, p in enumerate(points):
            for q in points[i + 1:]:
                left, right, on_line = self.partition(points, p, q)

                step = StepBuilder()
                for segment in hull_segments:
                    step.polyline(SegmentRole.SUB_HULL, segment)
                step.mark(PointRole.HULL, hull_points)
                step.polyline(SegmentRole.CHECKING, [p, q]) \
                    .mark(PointRole.CURRENT, [p]) \
                    .mark(PointRole.CHECKING, [q]) \
                    .mark(PointRole.GROUP_A, left) \
                    .mark(PointRole.GROUP_B, right)
                trace.add(step)

                if (left and right) or not self.spans(p, q, on_line):
                    continue
                # orient edges so the remaining points are on their left
                if not right:
                    edges[p] = q
                if not left:
                    edges[q] = p
                hull_segments.append((p, q))
                hull_points[p] = hull_points[q] = None

        hull = self.chain(edges)
        logger.debug('brute force: %d edges out of %d pairs', len(hull_segments), len(trace))

        result = StepBuilder()
        for segment in hull_segments:
            result.polyline(SegmentRole.HULL, segment)
        trace.add(result.mark(PointRole.HULL, hull), label='brute_force_result')
        return hull
