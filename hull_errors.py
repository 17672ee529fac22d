class HullError(Exception):
    """Base error of the hull engine."""


class InsufficientInputError(HullError, ValueError):
    """Fewer than three distinct points are left after deduplication."""

    def __init__(self, count: int):
        super().__init__(f'At least three distinct points are required, got {count}')
        self.count = count


class DegenerateInputError(HullError, ValueError):
    """All input points lie on a single line."""

    def __init__(self, count: int):
        super().__init__(f'All {count} points are collinear')
        self.count = count


class UnreachableStateError(HullError, RuntimeError):
    """An algorithm invariant was violated. Indicates a bug."""


class UnknownAlgorithmError(HullError, KeyError):
    """The algorithm selector is not registered."""

    def __init__(self, name):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f'Unknown algorithm: {self.name}'
