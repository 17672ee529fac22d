import pytest
import numpy as np

from geometry import Point
from hull_engine import (
    Algorithm,
    EngineConfig,
    HullResult,
    compute_hull,
    remove_duplicates,
    resolve_algorithm,
    shuffle_points,
)
from hull_errors import (
    DegenerateInputError,
    HullError,
    InsufficientInputError,
    UnknownAlgorithmError,
)


def test_remove_duplicates():
    points = [Point(1, 1), Point(0, 0), Point(1, 1), Point(2, 0), Point(1, 2)]
    unique = remove_duplicates(points)
    assert unique == [Point(0, 0), Point(1, 1), Point(1, 2), Point(2, 0)]
    assert remove_duplicates(unique) == unique


@pytest.mark.parametrize("points", [
    [],
    [Point(0, 0)],
    [Point(0, 0), Point(1, 1), Point(0, 0), Point(1, 1)],
])
def test_insufficient_input(points):
    with pytest.raises(InsufficientInputError):
        remove_duplicates(points)
    with pytest.raises(HullError):
        compute_hull(points, Algorithm.GRAHAM_SCAN)


def test_shuffle_is_reproducible():
    points = [Point(i, i * i) for i in range(20)]
    first = shuffle_points(points, seed=5)
    assert first == shuffle_points(points, seed=5)
    assert sorted(first) == sorted(points)


def test_compute_hull_accepts_tuples_and_names():
    result = compute_hull([(0, 0), (4, 0), (4, 4), (0, 4), (2, 2)], 'monotone_chain', EngineConfig(seed=0))
    assert isinstance(result, HullResult)
    hull, trace = result
    assert set(hull) == {Point(0, 0), Point(4, 0), Point(4, 4), Point(0, 4)}
    assert trace.labels[-1] == 'monotone_chain_result'


@pytest.mark.parametrize("algorithm", list(Algorithm))
def test_same_seed_same_trace(algorithm):
    np.random.seed(11)
    points = [Point(float(x), float(y)) for x, y in np.random.randint(0, 50, size=(25, 2))]

    hull_a, trace_a = compute_hull(points, algorithm, EngineConfig(seed=3))
    hull_b, trace_b = compute_hull(points, algorithm, EngineConfig(seed=3))
    assert hull_a == hull_b
    assert trace_a.labels == trace_b.labels
    assert [dict(step.marks) for step in trace_a] == [dict(step.marks) for step in trace_b]


def test_input_is_not_modified():
    points = [Point(3, 1), Point(0, 0), Point(2, 5), Point(0, 0), Point(1, 1)]
    original = list(points)
    compute_hull(points, Algorithm.KIRKPATRICK_SEIDEL)
    assert points == original


def test_without_shuffle_order_is_sorted():
    points = [Point(3, 1), Point(0, 0), Point(2, 5)]
    _, trace = compute_hull(points, Algorithm.BRUTE_FORCE, EngineConfig(shuffle=False))
    assert trace[0].points('current') == (Point(0, 0),)
    assert trace[0].points('checking') == (Point(2, 5),)


def test_reject_collinear():
    points = [Point(0, 0), Point(1, 1), Point(2, 2)]
    with pytest.raises(DegenerateInputError):
        compute_hull(points, Algorithm.QUICKHULL, EngineConfig(reject_collinear=True))
    hull, _ = compute_hull(points, Algorithm.QUICKHULL)
    assert hull == [Point(0, 0), Point(2, 2)]


def test_unknown_algorithm():
    with pytest.raises(UnknownAlgorithmError):
        compute_hull([Point(0, 0), Point(1, 0), Point(0, 1)], 'bogo_hull')
    assert resolve_algorithm('chan') is Algorithm.CHAN
    assert resolve_algorithm(Algorithm.CHAN) is Algorithm.CHAN


def test_chan_config_is_forwarded():
    points = [Point(np.cos(a), np.sin(a)) for a in np.linspace(0, 2 * np.pi, 12, endpoint=False)]
    _, trace = compute_hull(points, Algorithm.CHAN, EngineConfig(seed=0, chan_initial_group_size=16))
    assert all(not label.startswith('chan_m4_') for label in trace.labels)
    assert trace.labels[0].startswith('chan_m16_')
