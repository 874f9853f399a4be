"""
Basic Linear Algebra Subprograms (BLAS).

Matrix multiply, dot products and transposition.
"""

from __future__ import annotations

from typing import Union

from .array import Array, _as_scalar, _call, _call_for_array, _call_for_pair, _lib_of
from .enums import MatProp

__all__ = [
    'matmul',
    'dot',
    'dot_all',
    'transpose',
    'transpose_inplace',
]

_DOT_OPTIONS = (MatProp.NONE, MatProp.CONJ)


def matmul(
    lhs: Array,
    rhs: Array,
    lhs_opts: MatProp = MatProp.NONE,
    rhs_opts: MatProp = MatProp.NONE,
) -> Array:
    """
    Matrix multiply.

    One sparse input is allowed: it must be the left-hand side, stored as
    CSR, and the result is always dense. With a sparse lhs, ``lhs_opts`` may
    only be NONE, TRANS or CTRANS and ``rhs_opts`` only NONE.

    Args:
        lhs: Left-hand 2D matrix
        rhs: Right-hand 2D matrix
        lhs_opts: Transpose/conjugate option for lhs
        rhs_opts: Transpose/conjugate option for rhs

    Returns:
        The product

    Raises:
        AFError: ``ErrorType.SIZE`` when the inner dimensions differ

    Example:
        >>> a = afbind.constant(1.0, (3, 3))
        >>> b = afbind.constant(1.0, (2, 2))
        >>> afbind.matmul(a, b)
        Traceback (most recent call last):
        ...
        afbind.error.AFError: ArrayFire Error 203 (SIZE): ...
    """
    return _call_for_array(
        _lib_of(lhs), "af_matmul",
        lhs._raw(), rhs._raw(), lhs_opts.to_native(), rhs_opts.to_native(),
        context="matmul",
    )


def _check_dot_options(lhs_opts: MatProp, rhs_opts: MatProp) -> None:
    for opt in (lhs_opts, rhs_opts):
        if opt not in _DOT_OPTIONS:
            raise ValueError(f"dot supports only MatProp.NONE and MatProp.CONJ, got {opt}")


def dot(
    lhs: Array,
    rhs: Array,
    lhs_opts: MatProp = MatProp.NONE,
    rhs_opts: MatProp = MatProp.NONE,
) -> Array:
    """Inner product of two vectors, as a one-element Array."""
    _check_dot_options(lhs_opts, rhs_opts)
    return _call_for_array(
        _lib_of(lhs), "af_dot",
        lhs._raw(), rhs._raw(), lhs_opts.to_native(), rhs_opts.to_native(),
        context="dot",
    )


def dot_all(
    lhs: Array,
    rhs: Array,
    lhs_opts: MatProp = MatProp.NONE,
    rhs_opts: MatProp = MatProp.NONE,
) -> Union[float, complex]:
    """Inner product of two vectors, returned as a host scalar."""
    _check_dot_options(lhs_opts, rhs_opts)
    pair = _call_for_pair(
        _lib_of(lhs), "af_dot_all",
        lhs._raw(), rhs._raw(), lhs_opts.to_native(), rhs_opts.to_native(),
        context="dot_all",
    )
    return _as_scalar(pair, lhs.dtype.is_complex)


def transpose(arr: Array, conjugate: bool = False) -> Array:
    """
    Transpose a matrix.

    Args:
        arr: Input matrix
        conjugate: Also conjugate the values (Hermitian transpose)
    """
    return _call_for_array(arr._lib, "af_transpose", arr._raw(), bool(conjugate), context="transpose")


def transpose_inplace(arr: Array, conjugate: bool = False) -> None:
    """
    Transpose a square matrix in place.

    Warning:
        Mutates the native data; every owner obtained via ``retain()``
        observes the change.
    """
    _call(arr._lib, "af_transpose_inplace", arr._raw(), bool(conjugate), context="transpose_inplace")
