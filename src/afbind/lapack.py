"""
Dense linear algebra (LAPACK).

Availability depends on how the native library was built; calls on a build
without LAPACK raise ``AFError`` with ``ErrorType.NOT_CONFIGURED``.
"""

from __future__ import annotations

import ctypes
from typing import Iterable, Union

from .array import Array, _as_scalar, _call, _call_for_array, _call_for_pair, _lib_of
from .enums import MatProp, NormType

__all__ = [
    'inverse',
    'det',
    'solve',
    'rank',
    'norm',
]

MatProps = Union[MatProp, Iterable[MatProp]]


def inverse(arr: Array, options: MatProps = MatProp.NONE) -> Array:
    """Inverse of a square matrix."""
    return _call_for_array(arr._lib, "af_inverse", arr._raw(), MatProp.combine(options))


def det(arr: Array) -> Union[float, complex]:
    """Determinant of a square matrix."""
    return _as_scalar(_call_for_pair(arr._lib, "af_det", arr._raw()), arr.dtype.is_complex)


def solve(a: Array, b: Array, options: MatProps = MatProp.NONE) -> Array:
    """
    Solve ``a @ x = b``.

    Args:
        a: Coefficient matrix
        b: Right-hand side(s)
        options: ``MatProp.UPPER``/``LOWER`` for triangular systems
    """
    return _call_for_array(_lib_of(a), "af_solve", a._raw(), b._raw(), MatProp.combine(options))


def rank(arr: Array, tol: float = 1e-5) -> int:
    """Numerical rank."""
    out = ctypes.c_uint()
    _call(arr._lib, "af_rank", ctypes.byref(out), arr._raw(), float(tol))
    return out.value


def norm(arr: Array, norm_type: NormType = NormType.EUCLID, p: float = 1.0, q: float = 1.0) -> float:
    """
    Vector or matrix norm.

    ``p`` is used by ``VECTOR_P`` and ``MATRIX_L_PQ``; ``q`` only by the latter.
    """
    out = ctypes.c_double()
    _call(arr._lib, "af_norm", ctypes.byref(out), arr._raw(), norm_type.to_native(), float(p), float(q))
    return out.value
