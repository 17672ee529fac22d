import argparse
import logging
import os
import sys
import time

import numpy as np

from geometry import Point
from hull_engine import Algorithm, EngineConfig, compute_hull
from hull_errors import (
    DegenerateInputError,
    HullError,
    InsufficientInputError,
    UnknownAlgorithmError,
    UnreachableStateError,
)
from visualization import save_trace

logger = logging.getLogger('program')

_LOGGER_CONFIGURED = False

DISTRIBUTIONS = ('uniform', 'circle', 'gaussian', 'clusters')

ERROR_MESSAGES = {
    InsufficientInputError: 'Please provide at least three distinct points',
    DegenerateInputError: 'All points lie on a single line',
    UnknownAlgorithmError: 'Unknown algorithm',
    UnreachableStateError: 'Internal error, the algorithm reached an invalid state',
}


def setup_logging(level: int = logging.INFO) -> None:
    """
    Console logging for the command line program. Only the first call has an effect.
    """
    global _LOGGER_CONFIGURED
    if _LOGGER_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s %(levelname)s %(name)s: %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
    ))
    root = logging.getLogger()
    root.setLevel(level)
    root.addHandler(handler)
    _LOGGER_CONFIGURED = True


def load_points(filename: str) -> list[Point]:
    """
    Read points from a text file: the number of points on the first line,
    followed by one "x y" pair per line. Blank lines are skipped.
    Raises ValueError if the file holds fewer than n points.
    """
    points = []
    with open(filename, 'r', encoding='utf-8') as f:
        n = int(f.readline().strip())
        for line in f:
            if len(points) == n:
                break
            line = line.strip()
            if line:
                x, y = map(float, line.split())
                points.append(Point(x, y))
    if len(points) < n:
        raise ValueError(f'Expected {n} points, found {len(points)}')
    return points


def save_points(filename: str, points: list[Point]):
    with open(filename, 'w', encoding='utf-8') as f:
        f.write(f'{len(points)}\n')
        for p in points:
            f.write(f'{p.x!r} {p.y!r}\n')


def generate_random_points(n: int, distribution: str, seed: int | None = 42) -> list[Point]:
    rng = np.random.default_rng(seed)

    if distribution == 'uniform':
        xs, ys = rng.uniform(0, 1000, n), rng.uniform(0, 1000, n)
    elif distribution == 'circle':
        angles = rng.uniform(0, 2 * np.pi, n)
        r = rng.uniform(0, 500, n) ** 0.5
        xs, ys = 500 + r * np.cos(angles), 500 + r * np.sin(angles)
    elif distribution == 'gaussian':
        xs, ys = rng.normal(500, 150, n), rng.normal(500, 150, n)
    elif distribution == 'clusters':
        n_clusters = 5
        centers = rng.uniform(100, 900, size=(n_clusters, 2))
        labels = np.arange(n) % n_clusters
        xs = rng.normal(centers[labels, 0], 50)
        ys = rng.normal(centers[labels, 1], 50)
    else:
        raise ValueError(f'Unknown distribution: {distribution}')

    return [Point(float(x), float(y)) for x, y in zip(xs, ys)]


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='Convex hull with step traces')
    parser.add_argument('algorithm', choices=[a.value for a in Algorithm])
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument('--input', help='points file: count, then "x y" per line')
    source.add_argument('--generate', type=int, metavar='N', help='generate N random points')
    parser.add_argument('--distribution', choices=DISTRIBUTIONS, default='uniform')
    parser.add_argument('--seed', type=int, default=None, help='seed for generation and shuffling')
    parser.add_argument('--frames', metavar='DIR', help='write one PNG per trace step into DIR')
    parser.add_argument('--save-points', metavar='FILE', help='write the input points to FILE')
    parser.add_argument('--linear-tangents', action='store_true',
                        help="linear tangent search in Chan's algorithm")
    parser.add_argument('--log-level', default='INFO', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    setup_logging(getattr(logging, args.log_level))

    if args.input:
        try:
            points = load_points(args.input)
        except (OSError, ValueError) as e:
            logger.error('Failed to load %s: %s', args.input, e)
            return 1
        logger.info('Loaded %d points from %s', len(points), os.path.basename(args.input))
    else:
        points = generate_random_points(args.generate, args.distribution, args.seed)
        logger.info('Generated %d points (%s)', len(points), args.distribution)

    if args.save_points:
        save_points(args.save_points, points)

    config = EngineConfig(seed=args.seed, chan_binary_search=not args.linear_tangents)
    start_time = time.time()
    try:
        hull, trace = compute_hull(points, args.algorithm, config)
    except HullError as e:
        logger.error('%s: %s', ERROR_MESSAGES.get(type(e), 'Hull computation failed'), e)
        return 2
    execution_time = time.time() - start_time

    logger.info('%s: %d hull vertices, %d steps in %.4f s', args.algorithm, len(hull), len(trace), execution_time)
    for p in hull:
        logger.info('  %r %r', p.x, p.y)

    if args.frames:
        filenames = save_trace(trace, args.frames, points=points)
        logger.info('Wrote %d frames to %s', len(filenames), args.frames)
    return 0


if __name__ == '__main__':
    sys.exit(main())
