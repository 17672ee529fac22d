"""
Entry point of the hull engine.

`compute_hull` deduplicates the input, shuffles it and runs one of the
hull algorithms, returning the hull together with the recorded trace.
"""
import logging

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

import numpy as np

from geometry import Point, is_collinear_set
from hull_brute_force import BruteForceHull
from hull_chan import ChanHull
from hull_errors import DegenerateInputError, InsufficientInputError, UnknownAlgorithmError
from hull_graham import GrahamScanHull
from hull_jarvis import JarvisMarchHull
from hull_kirkpatrick_seidel import KirkpatrickSeidelHull
from hull_monotone_chain import MonotoneChainHull
from hull_quickhull import QuickHull
from hull_trace import Trace

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    BRUTE_FORCE = 'brute_force'
    GRAHAM_SCAN = 'graham_scan'
    JARVIS_MARCH = 'jarvis_march'
    QUICKHULL = 'quickhull'
    MONOTONE_CHAIN = 'monotone_chain'
    KIRKPATRICK_SEIDEL = 'kirkpatrick_seidel'
    CHAN = 'chan'


ALGORITHMS = {
    Algorithm.BRUTE_FORCE: BruteForceHull,
    Algorithm.GRAHAM_SCAN: GrahamScanHull,
    Algorithm.JARVIS_MARCH: JarvisMarchHull,
    Algorithm.QUICKHULL: QuickHull,
    Algorithm.MONOTONE_CHAIN: MonotoneChainHull,
    Algorithm.KIRKPATRICK_SEIDEL: KirkpatrickSeidelHull,
    Algorithm.CHAN: ChanHull,
}


@dataclass
class EngineConfig:
    # None draws a fresh permutation on every call
    seed: int | None = None
    shuffle: bool = True
    reject_collinear: bool = False
    chan_initial_group_size: int = 4
    chan_binary_search: bool = True


class HullResult(NamedTuple):
    hull: list[Point]
    trace: Trace


def to_point(p) -> Point:
    if isinstance(p, Point):
        return p
    x, y = p
    return Point(float(x), float(y))


def remove_duplicates(points) -> list[Point]:
    """
    Sort unique points lexicographically.
    Raises InsufficientInputError if fewer than three remain.
    """
    unique = sorted(set(points))
    if len(unique) < 3:
        raise InsufficientInputError(len(unique))
    return unique


def shuffle_points(points: list[Point], seed: int | None = None) -> list[Point]:
    """
    Random permutation of points, reproducible for a fixed seed.
    Input order only affects how traces look, never the hull.
    """
    rng = np.random.default_rng(seed)
    return [points[i] for i in rng.permutation(len(points))]


def resolve_algorithm(algorithm: Algorithm | str) -> Algorithm:
    try:
        return Algorithm(algorithm)
    except ValueError:
        raise UnknownAlgorithmError(algorithm) from None


def create_builder(algorithm: Algorithm, config: EngineConfig):
    if algorithm is Algorithm.CHAN:
        return ChanHull(
            initial_group_size=config.chan_initial_group_size,
            binary_search=config.chan_binary_search,
        )
    return ALGORITHMS[algorithm]()


def compute_hull(points, algorithm: Algorithm | str, config: EngineConfig | None = None) -> HullResult:
    """
    Compute the CCW convex hull of points with the selected algorithm.
    The caller's sequence is never modified.
    """
    config = config or EngineConfig()
    algorithm = resolve_algorithm(algorithm)

    prepared = remove_duplicates(to_point(p) for p in points)
    if config.reject_collinear and is_collinear_set(prepared):
        raise DegenerateInputError(len(prepared))
    if config.shuffle:
        prepared = shuffle_points(prepared, config.seed)

    logger.debug('running %s on %d points', algorithm.value, len(prepared))
    trace = Trace(prefix=f'{algorithm.value}_')
    hull = create_builder(algorithm, config).compute_hull(prepared, trace)
    logger.debug('%s: hull of %d vertices, %d steps', algorithm.value, len(hull), len(trace))
    return HullResult(hull, trace)
