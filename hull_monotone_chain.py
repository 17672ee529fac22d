import logging

from geometry import Point, orientation
from hull_trace import PointRole, SegmentRole, StepBuilder, Trace

logger = logging.getLogger(__name__)


class MonotoneChainHull:
    name = 'monotone_chain'

    @staticmethod
    def build_chain(
        points: list[Point],
        trace: Trace,
        done: list[Point] | None = None,
    ) -> list[Point]:
        """
        One monotone chain over points in the given order,
        popping vertices which do not make a strict left turn.
        `done` is an already finished chain drawn for context.
        """
        def context() -> StepBuilder:
            step = StepBuilder()
            if done is not None:
                step.mark(PointRole.HULL, done).polyline(SegmentRole.HULL, done)
            return step

        chain: list[Point] = []
        for p in points:
            while len(chain) >= 2 and orientation(chain[-2], chain[-1], p) <= 0:
                removed = chain.pop()
                trace.add(
                    context()
                    .mark(PointRole.REMOVED, [removed])
                    .polyline(SegmentRole.REMOVED, [chain[-1], removed])
                    .mark(PointRole.HULL, chain)
                    .polyline(SegmentRole.SUB_HULL, chain)
                )
            chain.append(p)
            trace.add(
                context()
                .mark(PointRole.HULL, chain)
                .polyline(SegmentRole.SUB_HULL, chain)
            )
        return chain

    def compute_hull(self, points: list[Point], trace: Trace) -> list[Point]:
        """
        Andrew's monotone chain algorithm.
        Lower chain left to right, upper chain right to left;
        both chains share their first and last points.

        Time complexity: O(n*log(n)).
        """
        trace.prefix = 'monotone_chain_'
        points.sort()

        lower = self.build_chain(points, trace)
        upper = self.build_chain(points[::-1], trace, done=lower)

        hull = lower[:-1] + upper[:-1]
        logger.debug('monotone chain: %d of %d points on hull', len(hull), len(points))
        trace.add(
            StepBuilder()
            .mark(PointRole.HULL, hull)
            .polyline(SegmentRole.HULL, hull, closed=True),
            label='monotone_chain_result',
        )
        return hull
