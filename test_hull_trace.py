import pytest

from geometry import Point
from hull_brute_force import BruteForceHull
from hull_graham import GrahamScanHull
from hull_jarvis import JarvisMarchHull
from hull_kirkpatrick_seidel import KirkpatrickSeidelHull
from hull_monotone_chain import MonotoneChainHull
from hull_quickhull import QuickHull
from hull_trace import Arc, PointRole, Polyline, SegmentRole, StepBuilder, Trace


SQUARE = [Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4), Point(2, 2)]


def test_builder_collects_roles():
    a, b, c = Point(0, 0), Point(1, 0), Point(1, 1)
    step = StepBuilder() \
        .mark(PointRole.CURRENT, [a]) \
        .mark(PointRole.HULL, [a, b]) \
        .mark(PointRole.HULL, [c]) \
        .polyline(SegmentRole.CHECKING, [a, c]) \
        .polyline(SegmentRole.HULL, [a, b, c], closed=True) \
        .polyline(SegmentRole.SUB_HULL, [a]) \
        .arc(a, b, c) \
        .build('s')

    assert step.label == 's'
    assert step.points(PointRole.CURRENT) == (a,)
    assert step.points('hull') == (a, b, c)
    assert step.points(PointRole.REMOVED) == ()
    assert step.segments(SegmentRole.CHECKING) == (Polyline((a, c)),)
    assert step.segments(SegmentRole.HULL) == (Polyline((a, b, c), closed=True),)
    # polylines of a single point are not drawn
    assert step.segments(SegmentRole.SUB_HULL) == ()
    assert step.arcs == (Arc(a, b, c),)


def test_step_is_immutable():
    step = StepBuilder().mark(PointRole.CURRENT, [Point(0, 0)]).build('s')
    with pytest.raises(TypeError):
        step.marks[PointRole.CURRENT] = ()
    with pytest.raises(AttributeError):
        step.label = 'other'


def test_trace_labels_and_draft():
    trace = Trace(prefix='demo_')
    trace.add(StepBuilder().mark(PointRole.HULL, [Point(0, 0)]))
    trace.add(trace.draft().mark(PointRole.HULL, [Point(1, 0)]))
    trace.add(StepBuilder(), label='demo_result')

    assert len(trace) == 3
    assert trace.labels == ['demo_1', 'demo_2', 'demo_result']
    assert trace[0].points(PointRole.HULL) == (Point(0, 0),)
    assert trace[1].points(PointRole.HULL) == (Point(0, 0), Point(1, 0))
    assert trace.steps[-1].marks == {}
    assert [step.label for step in trace] == trace.labels
    # drafts copy the last step unless another one is given
    assert trace.draft(trace[0]).build('copy').points(PointRole.HULL) == (Point(0, 0),)
    assert trace.draft().build('copy').marks == {}


def test_brute_force_emits_step_per_pair():
    trace = Trace()
    BruteForceHull().compute_hull(list(SQUARE), trace)
    n = len(SQUARE)
    assert len(trace) == n * (n - 1) // 2 + 1
    assert trace.labels[0] == 'brute_force_1'
    assert trace.labels[-1] == 'brute_force_result'

    first = trace[0]
    assert len(first.points(PointRole.CURRENT)) == 1
    assert len(first.points(PointRole.CHECKING)) == 1
    assert len(first.points(PointRole.GROUP_A)) + len(first.points(PointRole.GROUP_B)) <= n - 2


def test_graham_scan_records_pops():
    trace = Trace()
    hull = GrahamScanHull().compute_hull(list(SQUARE), trace)
    removed = [step for step in trace if step.points(PointRole.REMOVED)]
    assert len(removed) == 1
    assert removed[0].points(PointRole.REMOVED) == (Point(2, 2),)
    # one step before and one after each push, plus pops and the result
    assert len(trace) == 2 * len(SQUARE) + len(removed) + 1
    assert trace[-1].segments(SegmentRole.HULL)[0] == Polyline(tuple(hull), closed=True)


def test_jarvis_march_records_angles():
    trace = Trace()
    JarvisMarchHull().compute_hull(list(SQUARE), trace)
    # every hull vertex checks all other points
    assert len(trace) == 4 * (len(SQUARE) - 1) + 1
    assert not trace[0].arcs
    assert any(step.arcs for step in trace)


def test_monotone_chain_upper_chain_shows_lower():
    trace = Trace()
    hull = MonotoneChainHull().compute_hull(list(SQUARE), trace)
    last = trace[-2]
    assert last.segments(SegmentRole.HULL)
    assert trace[-1].points(PointRole.HULL) == tuple(hull)


def test_quickhull_partitions():
    trace = Trace()
    QuickHull().compute_hull(list(SQUARE), trace)
    assert trace.labels[-1] == 'quickhull_result'
    assert any(step.points(PointRole.HELPER) for step in trace)
    assert any(step.segments(SegmentRole.HELPER) for step in trace)


def test_kirkpatrick_seidel_splits_and_merges():
    trace = Trace()
    KirkpatrickSeidelHull().compute_hull(list(SQUARE), trace)
    splits = [step for step in trace if step.points(PointRole.GROUP_A)]
    merges = [step for step in trace if step.segments(SegmentRole.CHECKING)]
    assert len(splits) == 1
    assert len(merges) == 1
    assert len(merges[0].segments(SegmentRole.CHECKING)) == 2
