"""
Step traces of hull algorithms.

A trace is an ordered list of immutable steps. Each step is a snapshot of
one decision of an algorithm: points grouped by the role they play at that
moment, polylines grouped the same way and the angles being compared.
Presentation code replays the steps in order, one frame per step.
"""
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from geometry import Point


class PointRole(str, Enum):
    CURRENT = 'current'
    CHECKING = 'checking'
    HULL = 'hull'
    REMOVED = 'removed'
    GROUP_A = 'group_a'
    GROUP_B = 'group_b'
    HELPER = 'helper'


class SegmentRole(str, Enum):
    CHECKING = 'checking'
    HULL = 'hull'
    SUB_HULL = 'sub_hull'
    REMOVED = 'removed'
    HELPER = 'helper'


@dataclass(frozen=True)
class Polyline:
    vertices: tuple[Point, ...]
    closed: bool = False
    # palette index overriding the role color
    color: int | None = None


@dataclass(frozen=True)
class Arc:
    """
    Angle at apex, swept from the direction of start to the direction of end.
    """
    apex: Point
    start: Point
    end: Point


@dataclass(frozen=True)
class Step:
    label: str
    marks: Mapping[PointRole, tuple[Point, ...]] = field(default_factory=lambda: MappingProxyType({}))
    polylines: Mapping[SegmentRole, tuple[Polyline, ...]] = field(default_factory=lambda: MappingProxyType({}))
    arcs: tuple[Arc, ...] = ()

    def points(self, role: PointRole | str) -> tuple[Point, ...]:
        return self.marks.get(PointRole(role), ())

    def segments(self, role: SegmentRole | str) -> tuple[Polyline, ...]:
        return self.polylines.get(SegmentRole(role), ())


class StepBuilder:
    """
    Mutable draft of a step. Methods return the builder so calls can be chained.
    """
    def __init__(self):
        self._marks: dict[PointRole, list[Point]] = {}
        self._polylines: dict[SegmentRole, list[Polyline]] = {}
        self._arcs: list[Arc] = []

    @classmethod
    def from_step(cls, step: Step | None) -> 'StepBuilder':
        builder = cls()
        if step is None:
            return builder
        for role, points in step.marks.items():
            builder._marks[role] = list(points)
        for role, lines in step.polylines.items():
            builder._polylines[role] = list(lines)
        builder._arcs = list(step.arcs)
        return builder

    def mark(self, role: PointRole, points: Iterable[Point]) -> 'StepBuilder':
        self._marks.setdefault(role, []).extend(points)
        return self

    def polyline(
        self,
        role: SegmentRole,
        points: Iterable[Point],
        closed: bool = False,
        color: int | None = None,
    ) -> 'StepBuilder':
        """
        Add a polyline through points. Fewer than two points draw nothing.
        """
        vertices = tuple(points)
        if len(vertices) > 1:
            self._polylines.setdefault(role, []).append(Polyline(vertices, closed, color))
        return self

    def arc(self, apex: Point, start: Point, end: Point) -> 'StepBuilder':
        self._arcs.append(Arc(apex, start, end))
        return self

    def build(self, label: str) -> Step:
        return Step(
            label=label,
            marks=MappingProxyType({role: tuple(pts) for role, pts in self._marks.items()}),
            polylines=MappingProxyType({role: tuple(lines) for role, lines in self._polylines.items()}),
            arcs=tuple(self._arcs),
        )


class Trace:
    """
    Append-only sequence of steps produced by a single hull computation.

    Steps are labelled `{prefix}{number}` unless an explicit label is given.
    The prefix may change while recording (Chan's algorithm tags each pass).
    """
    def __init__(self, prefix: str = 'step_'):
        self.prefix = prefix
        self._steps: list[Step] = []

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __getitem__(self, index: int) -> Step:
        return self._steps[index]

    @property
    def steps(self) -> tuple[Step, ...]:
        return tuple(self._steps)

    @property
    def labels(self) -> list[str]:
        return [step.label for step in self._steps]

    def add(self, builder: StepBuilder, label: str | None = None) -> Step:
        if label is None:
            label = f'{self.prefix}{len(self._steps) + 1}'
        step = builder.build(label)
        self._steps.append(step)
        return step

    def draft(self, step: Step | None = None) -> StepBuilder:
        """
        Start a new step as a copy of `step` (the last recorded step by default).
        """
        if step is None and self._steps:
            step = self._steps[-1]
        return StepBuilder.from_step(step)
