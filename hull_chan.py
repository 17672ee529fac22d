import logging

from geometry import Point, orientation, squared_distance, wraps_before
from hull_errors import UnreachableStateError
from hull_graham import graham_scan
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


def partition_by_group_size(points: list[Point], group_size: int) -> list[list[Point]]:
    return [points[i:i + group_size] for i in range(0, len(points), group_size)]


def tangent_linear(hull: list[Point], p: Point) -> int:
    """
    Index of the hull vertex v such that every vertex lies on the left
    of p->v or on that line closer to p. Linear scan.
    """
    best = 0
    for i in range(1, len(hull)):
        if wraps_before(p, hull[best], hull[i]):
            best = i
    return best


def tangent_binary(hull: list[Point], p: Point) -> int:
    """
    Same as `tangent_linear` for a strictly convex CCW hull and a point p outside of it,
    in O(log(n)) orientation tests.

    Seen from p, edge i "rises" if hull[i + 1] is strictly left of p->hull[i].
    Rising edges form one cyclic run, the tangent vertex is where it starts.
    Whether the run start lies at or before index i (i > 0) is decided by
    comparing the direction of hull[i] with the direction of hull[0].
    """
    n = len(hull)
    if n < 3:
        return tangent_linear(hull, p)

    def rises(i: int) -> bool:
        return orientation(p, hull[i], hull[(i + 1) % n]) > 0

    first = hull[0]
    rises_first = rises(0)
    if rises_first and not rises(n - 1):
        return 0

    def at_or_after_tangent(i: int) -> bool:
        o = orientation(p, hull[i], first)
        if rises_first:
            # hull[0] is on the rising run, so are the vertices after the tangent
            return rises(i) and o > 0
        farther = o == 0 and squared_distance(p, hull[i]) > squared_distance(p, first)
        return rises(i) or o < 0 or farther

    lo, hi = 1, n - 1
    while lo < hi:
        mid = (lo + hi) // 2
        if at_or_after_tangent(mid):
            hi = mid
        else:
            lo = mid + 1
    return lo


class ChanHull:
    name = 'chan'

    def __init__(self, initial_group_size: int = 4, binary_search: bool = True):
        if initial_group_size < 2:
            raise ValueError(f'Initial group size must be at least 2, got {initial_group_size}')
        self.initial_group_size = initial_group_size
        self.find_tangent = tangent_binary if binary_search else tangent_linear
        self.restarts = 0

    @staticmethod
    def lowest_vertex(hulls: list[list[Point]]) -> tuple[int, int]:
        """
        (hull index, vertex index) of the lowest, then leftmost vertex of all hulls.
        """
        candidates = (
            (h, i) for h, hull in enumerate(hulls) for i in range(len(hull))
        )
        return min(candidates, key=lambda idx: (hulls[idx[0]][idx[1]].y, hulls[idx[0]][idx[1]].x))

    def next_vertex(
        self,
        hulls: list[list[Point]],
        prev: tuple[int, int],
        trace: Trace,
        wrapped: list[Point],
    ) -> tuple[int, int]:
        """
        Gift wrapping step over sub-hulls: the next vertex in the own sub-hull
        is replaced by a tangent point of another sub-hull if that wraps before it.
        Every tangent search is recorded as a step; `wrapped` is the hull so far.
        """
        h_prev, i_prev = prev
        p = hulls[h_prev][i_prev]
        nxt = (h_prev, (i_prev + 1) % len(hulls[h_prev]))
        for h, hull in enumerate(hulls):
            if h == h_prev:
                continue
            tangent_idx = self.find_tangent(hull, p)
            trace.add(
                self.sub_hulls_step(hulls)
                .polyline(SegmentRole.SUB_HULL, wrapped)
                .polyline(SegmentRole.CHECKING, [p, hull[tangent_idx]])
                .mark(PointRole.HULL, wrapped)
                .mark(PointRole.CURRENT, [p])
                .mark(PointRole.CHECKING, [hull[tangent_idx]])
            )
            q = hulls[nxt[0]][nxt[1]]
            if q == p or wraps_before(p, q, hull[tangent_idx]):
                nxt = (h, tangent_idx)
        return nxt

    def sub_hulls_step(self, hulls: list[list[Point]]) -> StepBuilder:
        step = StepBuilder()
        for color, hull in enumerate(hulls):
            step.polyline(SegmentRole.SUB_HULL, hull, closed=True, color=color)
        return step

    def wrap(self, hulls: list[list[Point]], m: int, trace: Trace) -> list[Point] | None:
        """
        Try to wrap the hull in at most m steps. Returns None if m is too small.
        """
        start = self.lowest_vertex(hulls)
        tour = [start]
        hull = [hulls[start[0]][start[1]]]
        for _ in range(m):
            nxt = self.next_vertex(hulls, tour[-1], trace, hull)
            if nxt == start:
                return hull
            tour.append(nxt)
            hull.append(hulls[nxt[0]][nxt[1]])
            trace.add(
                self.sub_hulls_step(hulls)
                .polyline(SegmentRole.SUB_HULL, hull)
                .mark(PointRole.HULL, hull)
                .mark(PointRole.CHECKING, [hull[-1]])
            )
        trace.add(
            self.sub_hulls_step(hulls)
            .polyline(SegmentRole.REMOVED, hull)
            .mark(PointRole.REMOVED, hull)
        )
        return None

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Chan's algorithm. Guess the hull size m, hull groups of m points
        with Graham scan and gift-wrap the sub-hulls for at most m steps.
        On failure the guess is squared.

        Time complexity: O(n*log(h)), where h is the number of hull vertices.
        """
        m = self.initial_group_size
        self.restarts = 0
        while True:
            trace.prefix = f'chan_m{m}_'
            groups = partition_by_group_size(points, m)
            hulls = [graham_scan(group) for group in groups]
            for count in range(1, len(hulls) + 1):
                trace.add(self.sub_hulls_step(hulls[:count]))

            hull = self.wrap(hulls, m, trace)
            if hull is not None:
                break

            if m >= len(points):
                raise UnreachableStateError(f'Wrapping failed with group size {m} >= {len(points)}')
            logger.debug('chan: hull has more than %d vertices, restarting', m)
            m = min(m * m, len(points))
            self.restarts += 1

        logger.debug('chan: %d of %d points on hull after %d restarts', len(hull), len(points), self.restarts)
        trace.add(
            StepBuilder()
            .mark(PointRole.HULL, hull)
            .polyline(SegmentRole.HULL, hull, closed=True),
            label='chan_result',
        )
        return hull
