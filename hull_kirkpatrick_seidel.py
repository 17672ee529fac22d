import logging

from geometry import Point, orientation, squared_distance
from hull_errors import UnreachableStateError
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


class KirkpatrickSeidelHull:
    name = 'kirkpatrick_seidel'

    def __init__(self):
        self.sub_hulls: list[list[Point]] = []

    @staticmethod
    def base_hull(points: list[Point]) -> list[Point]:
        """
        Hull of at most three lexicographically sorted points, in CCW order.
        The middle one of three collinear points is dropped.
        """
        if len(points) < 3:
            return list(points)
        a, b, c = points
        o = orientation(a, b, c)
        if o > 0:
            return [a, b, c]
        if o < 0:
            return [a, c, b]
        return [a, c]

    @staticmethod
    def tangent(left: list[Point], right: list[Point], upper: bool) -> tuple[int, int]:
        """
        Find upper (lower) tangent of two CCW convex hulls.
        Assuming every point of the left hull is lexicographically smaller
        than every point of the right hull.

        Starting from the facing extreme points, the left index walks CCW (CW)
        and the right index walks CW (CCW) as long as the next vertex lies outside
        the current bridge. A collinear next vertex is taken if it is farther away,
        so the bridge always ends at extreme points.

        Time complexity: O(n + m), where n and m are the lengths of convex hulls.
        """
        sgn = 1 if upper else -1
        n_left, n_right = len(left), len(right)
        left_idx = max(range(n_left), key=lambda i: left[i])
        right_idx = min(range(n_right), key=lambda i: right[i])

        def outside(a: Point, b: Point, candidate: Point, anchor: Point, current: Point) -> bool:
            o = sgn * orientation(a, b, candidate)
            return o > 0 or o == 0 and squared_distance(anchor, candidate) > squared_distance(anchor, current)

        moves = 0
        update = True
        while update:
            update = False
            while True:
                nxt = (left_idx + sgn) % n_left
                a, b = left[left_idx], right[right_idx]
                if not outside(a, b, left[nxt], b, a):
                    break
                left_idx = nxt
                moves += 1

            while True:
                nxt = (right_idx - sgn) % n_right
                a, b = left[left_idx], right[right_idx]
                if not outside(a, b, right[nxt], a, b):
                    break
                right_idx = nxt
                moves += 1
                update = True

            if moves > n_left + n_right:
                raise UnreachableStateError('Tangent search between sub-hulls does not terminate')
        return left_idx, right_idx

    def sub_hull_step(self) -> StepBuilder:
        step = StepBuilder()
        for hull in self.sub_hulls:
            step.polyline(SegmentRole.SUB_HULL, hull, closed=True)
        return step

    def merge(self, left: list[Point], right: list[Point], trace: Trace) -> list[Point]:
        """
        Merge two CCW hulls separated by their lexicographic order.
        """
        if not left:
            return right
        if not right:
            return left

        upper_left, upper_right = self.tangent(left, right, upper=True)
        lower_left, lower_right = self.tangent(left, right, upper=False)

        if upper_left == lower_left and upper_right == lower_right:
            # both bridges coincide: all points lie on one line
            hull = [min(left), max(right)]
            trace.add(
                self.sub_hull_step()
                .polyline(SegmentRole.CHECKING, hull)
                .mark(PointRole.CHECKING, hull)
            )
            return hull

        bridges = [
            (left[upper_left], right[upper_right]),
            (left[lower_left], right[lower_right]),
        ]
        step = self.sub_hull_step()
        for bridge in bridges:
            step.polyline(SegmentRole.CHECKING, bridge).mark(PointRole.CHECKING, bridge)
        trace.add(step)

        i = upper_left
        hull = [left[i]]
        while i != lower_left:
            i = (i + 1) % len(left)
            hull.append(left[i])

        i = lower_right
        hull.append(right[i])
        while i != upper_right:
            i = (i + 1) % len(right)
            hull.append(right[i])
        return hull

    def get_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Build the hull of lexicographically sorted points recursively:
        split them by index in two halves, build both hulls and merge them.
        """
        if len(points) <= 3:
            hull = self.base_hull(points)
            self.sub_hulls.append(hull)
            return hull

        mid = len(points) // 2
        points_left, points_right = points[:mid], points[mid:]
        trace.add(
            self.sub_hull_step()
            .mark(PointRole.GROUP_A, points_left)
            .mark(PointRole.GROUP_B, points_right)
        )

        hull_left = self.get_hull(points_left, trace)
        hull_right = self.get_hull(points_right, trace)
        hull = self.merge(hull_left, hull_right, trace)

        self.sub_hulls.pop()
        self.sub_hulls.pop()
        self.sub_hulls.append(hull)
        return hull

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Divide and conquer hull over lexicographically sorted points.

        Time complexity: O(n*log(n)).
        """
        trace.prefix = 'kirkpatrick_seidel_'
        self.sub_hulls = []
        points.sort()
        hull = self.get_hull(points, trace)

        logger.debug('kirkpatrick-seidel: %d of %d points on hull', len(hull), len(points))
        trace.add(
            StepBuilder()
            .mark(PointRole.HULL, hull)
            .polyline(SegmentRole.HULL, hull, closed=True),
            label='kirkpatrick_seidel_result',
        )
        return hull
