import os

import matplotlib
matplotlib.use('Agg')

import pytest

from geometry import Point
from program import DISTRIBUTIONS, generate_random_points, load_points, main, save_points


def test_save_and_load_points(tmp_path):
    points = [Point(0.5, 1.0), Point(-3.25, 2.0), Point(1e-7, 123456.789)]
    filename = str(tmp_path / 'points.txt')
    save_points(filename, points)
    assert load_points(filename) == points


def test_load_points_format(tmp_path):
    filename = tmp_path / 'points.txt'
    filename.write_text('3\n0 0\n1 0\n0.5 2\n')
    assert load_points(str(filename)) == [Point(0, 0), Point(1, 0), Point(0.5, 2)]


def test_load_points_skips_blank_lines(tmp_path):
    filename = tmp_path / 'points.txt'
    filename.write_text('3\n0 0\n\n1 0\n   \n0.5 2\n')
    assert load_points(str(filename)) == [Point(0, 0), Point(1, 0), Point(0.5, 2)]


def test_load_points_too_few(tmp_path):
    filename = tmp_path / 'points.txt'
    filename.write_text('4\n0 0\n1 0\n0.5 2\n')
    with pytest.raises(ValueError):
        load_points(str(filename))
    assert main(['graham_scan', '--input', str(filename), '--log-level', 'ERROR']) == 1


@pytest.mark.parametrize("distribution", DISTRIBUTIONS)
def test_generate_random_points(distribution):
    points = generate_random_points(50, distribution, seed=7)
    assert len(points) == 50
    assert points == generate_random_points(50, distribution, seed=7)
    assert all(isinstance(p.x, float) and isinstance(p.y, float) for p in points)


def test_generate_unknown_distribution():
    with pytest.raises(ValueError):
        generate_random_points(10, 'spiral')


def test_main_generated_points():
    assert main(['graham_scan', '--generate', '20', '--seed', '1', '--log-level', 'ERROR']) == 0


def test_main_insufficient_points(tmp_path):
    filename = tmp_path / 'points.txt'
    filename.write_text('2\n0 0\n1 1\n')
    assert main(['quickhull', '--input', str(filename), '--log-level', 'ERROR']) == 2


def test_main_missing_file(tmp_path):
    assert main(['chan', '--input', str(tmp_path / 'missing.txt'), '--log-level', 'ERROR']) == 1


def test_main_writes_frames_and_points(tmp_path):
    frames = tmp_path / 'frames'
    saved = tmp_path / 'saved.txt'
    code = main([
        'monotone_chain', '--generate', '6', '--seed', '3', '--distribution', 'circle',
        '--frames', str(frames), '--save-points', str(saved), '--log-level', 'ERROR',
    ])
    assert code == 0
    assert len(load_points(str(saved))) == 6
    names = sorted(os.listdir(frames))
    assert names
    assert names[-1].endswith('_monotone_chain_result.png')


def test_main_rejects_unknown_algorithm():
    with pytest.raises(SystemExit):
        main(['bogo_hull', '--generate', '10'])
