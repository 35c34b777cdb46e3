"""
Scalar products of vector sets.

Dual values of a vector constraint are paired with elements of its set by
:func:`set_dot`, which is the standard dot product of R^n for most sets. The
packed triangle cones store each off-diagonal entry of a symmetric matrix
once, so their scalar product (the trace inner product of the matrices)
counts those entries twice. :func:`dot_coefficients` maps a vector of
standard-basis coefficients to the vector that reproduces them under
:func:`set_dot`, i.e. for every ``x`` of the set::

    set_dot(dot_coefficients(a, set), x, set) == np.dot(a, x)

Packed triangle cones, including new subclasses of
:class:`~dualfallback.sets.AbstractTriangleCone`, are located by their
``offset``. Any other vector set whose scalar product is not the standard
one needs its own :class:`~dualfallback.sets.ConeKind` and a branch in
:func:`_triangle_offset`.
"""
from typing import Optional

import numpy as np

from .sets import AbstractVectorSet, ConeKind


def triangle_dot(x: np.ndarray, y: np.ndarray, side_dimension: int, offset: int) -> float:
    """
    Trace inner product of two packed symmetric matrices.

    The packed triangles start at position ``offset`` of ``x`` and ``y``.
    """
    result = 0.0
    k = offset
    for i in range(side_dimension):
        for j in range(i + 1):
            if i == j:
                result += x[k] * y[k]
            else:
                result += 2 * x[k] * y[k]
            k += 1
    return float(result)


def triangle_coefficients(b: np.ndarray, side_dimension: int, offset: int):
    """Halve, in place, the off-diagonal entries of the packed triangle of ``b``"""
    k = offset
    for i in range(side_dimension):
        for j in range(i + 1):
            if i != j:
                b[k] /= 2
            k += 1


def _as_vector(x, cone: AbstractVectorSet) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64).reshape(-1)
    if len(x) != cone.dimension:
        raise ValueError(f"Vector of length {len(x)} does not match {cone!r} of dimension {cone.dimension}")
    return x


def _triangle_offset(cone: AbstractVectorSet) -> Optional[int]:
    """Position of the packed triangle, None for the standard dot product"""
    kind = getattr(cone, 'cone_kind', None)
    if kind == ConeKind.GENERIC:
        return None
    elif kind in (ConeKind.TRIANGLE, ConeKind.PSD_TRIANGLE,
                  ConeKind.ROOT_DET_TRIANGLE, ConeKind.LOG_DET_TRIANGLE):
        return cone.offset
    raise TypeError(f"No scalar product is defined for {cone!r}")


def set_dot(x, y, cone: AbstractVectorSet) -> float:
    """
    Scalar product between a vector ``x`` of ``cone`` and a vector ``y`` of its dual.

    Parameters
    ----------
    x, y : array_like
        Vectors of length ``cone.dimension``
    cone : AbstractVectorSet
        The set both vectors are expressed in

    Returns
    -------
    float

    Raises
    ------
    TypeError
        If ``cone`` is not a vector set
    ValueError
        If a vector does not have the dimension of ``cone``

    Examples
    --------
    >>> cone = PositiveSemidefiniteConeTriangle(2)
    >>> set_dot([0, 1, 0], [0, 1, 0], cone)
    2.0
    """
    offset = _triangle_offset(cone)
    x = _as_vector(x, cone)
    y = _as_vector(y, cone)
    if offset is None:
        return float(np.dot(x, y))
    return float(np.dot(x[:offset], y[:offset])) + triangle_dot(x, y, cone.side_dimension, offset)


def dot_coefficients(a, cone: AbstractVectorSet) -> np.ndarray:
    """
    Return the vector ``b`` such that ``set_dot(b, x, cone) == np.dot(a, x)`` for all ``x``.

    ``a`` is left untouched; the result is always a new array.
    """
    offset = _triangle_offset(cone)
    b = _as_vector(a, cone).copy()
    if offset is not None:
        triangle_coefficients(b, cone.side_dimension, offset)
    return b
