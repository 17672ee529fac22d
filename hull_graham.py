import logging

from geometry import Point, lowest_point, orientation, polar_order_key
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


def polar_sort(points: list[Point]) -> list[Point]:
    """
    Pivot (lowest, then leftmost point) followed by the other points
    sorted by polar angle around it, nearer points first on equal angles.
    """
    pivot = lowest_point(points)
    rest = sorted((p for p in points if p != pivot), key=polar_order_key(pivot))
    return [pivot] + rest


def graham_scan(points: list[Point]) -> list[Point]:
    """
    Graham scan without step recording.
    Returns the hull in CCW order starting at the lowest point.
    """
    stack = []
    for p in polar_sort(points):
        while len(stack) >= 2 and orientation(stack[-2], stack[-1], p) <= 0:
            stack.pop()
        stack.append(p)
    return stack


class GrahamScanHull:
    name = 'graham_scan'

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Sort points by angle around the lowest point and keep a stack of
        vertices that make strict left turns.

        Time complexity: O(n*log(n)).
        """
        trace.prefix = 'graham_scan_'
        stack: list[Point] = []
        for p in polar_sort(points):
            while len(stack) >= 2 and orientation(stack[-2], stack[-1], p) <= 0:
                removed = stack.pop()
                trace.add(
                    StepBuilder()
                    .polyline(SegmentRole.CHECKING, [removed, p])
                    .polyline(SegmentRole.SUB_HULL, stack)
                    .polyline(SegmentRole.REMOVED, [stack[-1], removed])
                    .mark(PointRole.CHECKING, [p])
                    .mark(PointRole.HULL, stack)
                    .mark(PointRole.REMOVED, [removed])
                )

            step = StepBuilder().polyline(SegmentRole.SUB_HULL, stack)
            if stack:
                step.polyline(SegmentRole.CHECKING, [stack[-1], p])
            trace.add(step.mark(PointRole.CHECKING, [p]).mark(PointRole.HULL, stack))

            stack.append(p)
            trace.add(
                StepBuilder()
                .polyline(SegmentRole.SUB_HULL, stack)
                .mark(PointRole.HULL, stack)
            )

        logger.debug('graham scan: %d of %d points on hull', len(stack), len(points))
        trace.add(
            StepBuilder()
            .polyline(SegmentRole.HULL, stack, closed=True)
            .mark(PointRole.HULL, stack),
            label='graham_scan_result',
        )
        return stack
