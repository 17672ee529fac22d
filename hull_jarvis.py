import logging

from geometry import Point, leftmost_point, wraps_before
from hull_errors import UnreachableStateError
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


class JarvisMarchHull:
    name = 'jarvis_march'

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Gift wrapping. Starting at the leftmost point, repeatedly pick the point
        which leaves all other points on the left of the new hull edge.
        Of several collinear candidates the farthest one is taken,
        so points inside hull edges are skipped.

        Time complexity: O(n*h), where h is the number of hull vertices.
        """
        trace.prefix = 'jarvis_march_'
        start = leftmost_point(points)
        hull: list[Point] = []
        nxt = start
        while not hull or nxt != hull[0]:
            if len(hull) >= len(points):
                raise UnreachableStateError('Gift wrapping did not return to the start point')
            hull.append(nxt)
            current = nxt
            for checking in points:
                if checking == current:
                    continue
                if nxt == current or wraps_before(current, nxt, checking):
                    nxt = checking

                step = StepBuilder()
                if len(hull) > 1:
                    step.arc(current, hull[-2], checking)
                step.polyline(SegmentRole.SUB_HULL, hull) \
                    .polyline(SegmentRole.CHECKING, [current, checking]) \
                    .mark(PointRole.HULL, hull) \
                    .mark(PointRole.CURRENT, [current]) \
                    .mark(PointRole.CHECKING, [checking])
                trace.add(step)

        logger.debug('jarvis march: %d of %d points on hull', len(hull), len(points))
        trace.add(
            StepBuilder()
            .mark(PointRole.HULL, hull)
            .polyline(SegmentRole.HULL, hull, closed=True),
            label='jarvis_march_result',
        )
        return hull
