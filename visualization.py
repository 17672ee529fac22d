import math
import os

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.patches import Wedge

from geometry import Point
from hull_trace import Arc, PointRole, SegmentRole, Step, Trace

COLOR_PALETTE = [
    '#e41a1c', '#377eb8', '#4daf4a', '#984ea3',
    '#ff7f00', '#a65628', '#f781bf', '#999999',
]

MARK_STYLE = {
    PointRole.CURRENT: dict(s=50, marker='o', color=COLOR_PALETTE[5]),
    PointRole.CHECKING: dict(s=35, marker='o', color=COLOR_PALETTE[4]),
    PointRole.HULL: dict(s=50, marker='o', color=COLOR_PALETTE[2]),
    PointRole.REMOVED: dict(s=70, marker='x', color=COLOR_PALETTE[0]),
    PointRole.HELPER: dict(s=20, marker='o', color=COLOR_PALETTE[7]),
    PointRole.GROUP_A: dict(s=70, marker='s', facecolors='none', edgecolors=COLOR_PALETTE[1]),
    PointRole.GROUP_B: dict(s=70, marker='o', facecolors='none', edgecolors=COLOR_PALETTE[6]),
}

SEGMENT_STYLE = {
    SegmentRole.CHECKING: dict(linewidth=1.5, color=COLOR_PALETTE[4]),
    SegmentRole.HULL: dict(linewidth=2.0, color=COLOR_PALETTE[2]),
    SegmentRole.SUB_HULL: dict(linewidth=1.0, color=COLOR_PALETTE[2]),
    SegmentRole.REMOVED: dict(linewidth=2.0, color=COLOR_PALETTE[0]),
    SegmentRole.HELPER: dict(linewidth=0.5, color=COLOR_PALETTE[7]),
}

ARC_STYLE = dict(color=COLOR_PALETTE[4], alpha=0.5)

# drawing order of marks, later roles on top
MARK_ORDER = [
    PointRole.GROUP_A, PointRole.GROUP_B, PointRole.HELPER, PointRole.HULL,
    PointRole.CHECKING, PointRole.CURRENT, PointRole.REMOVED,
]


def plot_points(points: list[Point], ax: Axes | None = None, **kwargs):
    x = [p.x for p in points]
    y = [p.y for p in points]
    kwargs.setdefault('c', 'k')
    kwargs.setdefault('s', 4)
    if ax is None:
        plt.scatter(x, y, **kwargs)
    else:
        ax.scatter(x, y, **kwargs)


def step_extent(step: Step) -> float:
    points = [p for pts in step.marks.values() for p in pts]
    points += [p for lines in step.polylines.values() for line in lines for p in line.vertices]
    if not points:
        return 1.0
    xs = [p.x for p in points]
    ys = [p.y for p in points]
    return max(max(xs) - min(xs), max(ys) - min(ys)) or 1.0


def plot_arc(arc: Arc, radius: float, ax: Axes):
    """
    Filled wedge for the smaller angle at arc.apex between its two directions.
    """
    a = math.degrees(math.atan2(arc.start.y - arc.apex.y, arc.start.x - arc.apex.x))
    b = math.degrees(math.atan2(arc.end.y - arc.apex.y, arc.end.x - arc.apex.x))
    if (b - a) % 360 > 180:
        a, b = b, a
    ax.add_patch(Wedge((arc.apex.x, arc.apex.y), radius, a, b, **ARC_STYLE))


def plot_step(step: Step, ax: Axes, arc_radius: float | None = None):
    """
    Draw one trace step: polylines first, then point marks by role, then arcs.
    """
    if arc_radius is None:
        arc_radius = 0.05 * step_extent(step)

    for role, lines in step.polylines.items():
        style = SEGMENT_STYLE[role]
        for line in lines:
            vertices = list(line.vertices)
            if line.closed:
                vertices.append(vertices[0])
            color = style['color'] if line.color is None else COLOR_PALETTE[line.color % len(COLOR_PALETTE)]
            ax.plot([p.x for p in vertices], [p.y for p in vertices], linewidth=style['linewidth'], color=color)

    for role in MARK_ORDER:
        points = step.points(role)
        if points:
            ax.scatter([p.x for p in points], [p.y for p in points], **MARK_STYLE[role])

    for arc in step.arcs:
        plot_arc(arc, arc_radius, ax)

    ax.set_title(step.label)
    ax.set_aspect('equal', adjustable='datalim')


def save_trace(trace: Trace, directory: str, points: list[Point] | None = None, dpi: int = 100) -> list[str]:
    """
    Render every step of a trace to `{directory}/{number}_{label}.png`.
    Input points, if given, are drawn underneath each step.
    """
    os.makedirs(directory, exist_ok=True)
    filenames = []
    for i, step in enumerate(trace):
        fig = Figure(figsize=(6, 6))
        ax = fig.add_subplot()
        if points:
            plot_points(points, ax)
        plot_step(step, ax)
        filename = os.path.join(directory, f'{i:05d}_{step.label}.png')
        fig.savefig(filename, dpi=dpi)
        filenames.append(filename)
    return filenames
