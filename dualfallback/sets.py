"""
Sets and cones constraint functions are required to lie in.

Scalar sets pair with scalar functions, vector sets with vector functions of
the same dimension. Every vector set reports a :class:`ConeKind` that tells
:mod:`dualfallback.scalar_product` which inner product its elements use.
"""

from enum import Enum


class ConeKind(Enum):
    """Geometry of a vector set as seen by the scalar product"""
    GENERIC = 'generic'
    TRIANGLE = 'triangle'
    PSD_TRIANGLE = 'psd_triangle'
    ROOT_DET_TRIANGLE = 'root_det_triangle'
    LOG_DET_TRIANGLE = 'log_det_triangle'


class AbstractSet:
    """Base class of all sets"""

    def __eq__(self, other):
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self):
        return hash((type(self).__name__,) + tuple(sorted(vars(self).items())))

    def __repr__(self):
        args = ', '.join(f"{k}={v}" for k, v in vars(self).items())
        return f"{type(self).__name__}({args})"


class AbstractScalarSet(AbstractSet):
    """Set of real numbers"""


class GreaterThan(AbstractScalarSet):
    """``[lower, inf)``"""

    def __init__(self, lower: float):
        self.lower = float(lower)


class LessThan(AbstractScalarSet):
    """``(-inf, upper]``"""

    def __init__(self, upper: float):
        self.upper = float(upper)


class EqualTo(AbstractScalarSet):
    """``{value}``"""

    def __init__(self, value: float):
        self.value = float(value)


class Interval(AbstractScalarSet):
    """``[lower, upper]``"""

    def __init__(self, lower: float, upper: float):
        if lower > upper:
            raise ValueError(f"Lower bound ({lower}) must be <= upper bound ({upper})")
        self.lower = float(lower)
        self.upper = float(upper)


class AbstractVectorSet(AbstractSet):
    """
    Subset of R^dimension.

    Subclasses whose elements are not paired with the standard dot product
    override :attr:`cone_kind`.
    """

    cone_kind = ConeKind.GENERIC

    def __init__(self, dimension: int):
        if dimension < 0:
            raise ValueError(f"Dimension must be nonnegative, got {dimension}")
        self.dimension = int(dimension)


class Reals(AbstractVectorSet):
    """R^dimension"""


class Zeros(AbstractVectorSet):
    """``{0}^dimension``"""


class Nonnegatives(AbstractVectorSet):
    """Nonnegative orthant"""


class Nonpositives(AbstractVectorSet):
    """Nonpositive orthant"""


class SecondOrderCone(AbstractVectorSet):
    """``{(t, x) : t >= ||x||_2}``"""


class AbstractTriangleCone(AbstractVectorSet):
    """
    Cone over a symmetric matrix stored as its packed lower triangle.

    The packed triangle of a ``side_dimension`` x ``side_dimension`` matrix
    lists ``X[i, j]`` for ``i >= j`` row by row, and is preceded by
    ``offset`` scalar coordinates. Each off-diagonal packed entry stands for
    both ``X[i, j]`` and ``X[j, i]``.
    """

    cone_kind = ConeKind.TRIANGLE
    offset = 0

    def __init__(self, side_dimension: int):
        if side_dimension < 0:
            raise ValueError(f"Side dimension must be nonnegative, got {side_dimension}")
        self.side_dimension = int(side_dimension)

    @property
    def dimension(self) -> int:
        return self.offset + self.side_dimension * (self.side_dimension + 1) // 2


class PositiveSemidefiniteConeTriangle(AbstractTriangleCone):
    """Packed lower triangle of a positive semidefinite matrix"""

    cone_kind = ConeKind.PSD_TRIANGLE
    offset = 0


class RootDetConeTriangle(AbstractTriangleCone):
    """``(t, X)`` with ``t <= det(X)^(1/n)``, ``X`` packed"""

    cone_kind = ConeKind.ROOT_DET_TRIANGLE
    offset = 1


class LogDetConeTriangle(AbstractTriangleCone):
    """``(t, u, X)`` with ``t <= u log(det(X/u))``, ``X`` packed"""

    cone_kind = ConeKind.LOG_DET_TRIANGLE
    offset = 2
