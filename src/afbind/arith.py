"""
Elementwise arithmetic, comparison and math functions.

Binary functions accept an Array and a Python scalar in either order; the
scalar becomes a native constant with the Array's dims.
"""

from __future__ import annotations

import numbers
from typing import Any

from .array import Array, _call_for_array
from .data import _constant_on
from .dtypes import Dtype, DtypeLike, as_dtype

__all__ = [
    'binary_op', 'unary_op', 'cast',
    # Binary
    'add', 'sub', 'mul', 'div', 'rem', 'mod', 'pow',
    'lt', 'gt', 'le', 'ge', 'eq', 'neq',
    'logical_and', 'logical_or', 'minof', 'maxof', 'atan2',
    # Unary
    'abs', 'sign', 'round', 'floor', 'ceil', 'sqrt', 'exp', 'log',
    'sin', 'cos', 'tan', 'tanh', 'sigmoid', 'logical_not',
    'conjg', 'real', 'imag', 'isnan',
]


def _scalar_dtype(value: Any, like: Dtype) -> Dtype:
    """Element type for a scalar combined with an array of type ``like``."""
    if isinstance(value, complex):
        if like.is_complex:
            return like
        return Dtype.C64 if like == Dtype.F64 else Dtype.C32
    if isinstance(value, float) and not like.is_floating:
        return Dtype.F32
    if like == Dtype.B8 and not isinstance(value, bool):
        return Dtype.S32
    return like


def _broadcast(value: Any, like: Array) -> Array:
    if isinstance(value, Array):
        return value
    if isinstance(value, (numbers.Number, bool)):
        return _constant_on(like._lib, value, like.dims, _scalar_dtype(value, like.dtype))
    raise TypeError(f"Unsupported operand type for Array arithmetic: {type(value).__name__}")


def binary_op(name: str, lhs: Any, rhs: Any, batch: bool = False) -> Array:
    """
    Apply a native binary elementwise function.

    Args:
        name: Native function (``'af_add'``, ``'af_lt'``, ...)
        lhs: Array or scalar
        rhs: Array or scalar (at least one side must be an Array)
        batch: Let the native library broadcast along batched dims

    Raises:
        TypeError: If neither side is an Array
        AFError: On size or type mismatch reported by the native library
    """
    if isinstance(lhs, Array):
        rhs = _broadcast(rhs, lhs)
    elif isinstance(rhs, Array):
        lhs = _broadcast(lhs, rhs)
    else:
        raise TypeError("At least one operand must be an Array")
    return _call_for_array(lhs._lib, name, lhs._raw(), rhs._raw(), batch)


def unary_op(name: str, arr: Array) -> Array:
    """Apply a native unary elementwise function."""
    return _call_for_array(arr._lib, name, arr._raw())


def cast(arr: Array, dtype: DtypeLike) -> Array:
    """Convert element type (``af_cast``)."""
    return _call_for_array(arr._lib, "af_cast", arr._raw(), as_dtype(dtype).to_native())


# =============================================================================
# Binary Functions
# =============================================================================

def add(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_add", lhs, rhs, batch)


def sub(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_sub", lhs, rhs, batch)


def mul(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_mul", lhs, rhs, batch)


def div(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_div", lhs, rhs, batch)


def rem(lhs, rhs, batch: bool = False) -> Array:
    """Remainder with the sign of the dividend."""
    return binary_op("af_rem", lhs, rhs, batch)


def mod(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_mod", lhs, rhs, batch)


def pow(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_pow", lhs, rhs, batch)


def lt(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_lt", lhs, rhs, batch)


def gt(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_gt", lhs, rhs, batch)


def le(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_le", lhs, rhs, batch)


def ge(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_ge", lhs, rhs, batch)


def eq(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_eq", lhs, rhs, batch)


def neq(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_neq", lhs, rhs, batch)


def logical_and(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_and", lhs, rhs, batch)


def logical_or(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_or", lhs, rhs, batch)


def minof(lhs, rhs, batch: bool = False) -> Array:
    """Elementwise minimum."""
    return binary_op("af_minof", lhs, rhs, batch)


def maxof(lhs, rhs, batch: bool = False) -> Array:
    """Elementwise maximum."""
    return binary_op("af_maxof", lhs, rhs, batch)


def atan2(lhs, rhs, batch: bool = False) -> Array:
    return binary_op("af_atan2", lhs, rhs, batch)


# =============================================================================
# Unary Functions
# =============================================================================

def abs(arr: Array) -> Array:
    return unary_op("af_abs", arr)


def sign(arr: Array) -> Array:
    """1 where negative, 0 elsewhere (native convention)."""
    return unary_op("af_sign", arr)


def round(arr: Array) -> Array:
    return unary_op("af_round", arr)


def floor(arr: Array) -> Array:
    return unary_op("af_floor", arr)


def ceil(arr: Array) -> Array:
    return unary_op("af_ceil", arr)


def sqrt(arr: Array) -> Array:
    return unary_op("af_sqrt", arr)


def exp(arr: Array) -> Array:
    return unary_op("af_exp", arr)


def log(arr: Array) -> Array:
    return unary_op("af_log", arr)


def sin(arr: Array) -> Array:
    return unary_op("af_sin", arr)


def cos(arr: Array) -> Array:
    return unary_op("af_cos", arr)


def tan(arr: Array) -> Array:
    return unary_op("af_tan", arr)


def tanh(arr: Array) -> Array:
    return unary_op("af_tanh", arr)


def sigmoid(arr: Array) -> Array:
    return unary_op("af_sigmoid", arr)


def logical_not(arr: Array) -> Array:
    return unary_op("af_not", arr)


def conjg(arr: Array) -> Array:
    """Complex conjugate."""
    return unary_op("af_conjg", arr)


def real(arr: Array) -> Array:
    return unary_op("af_real", arr)


def imag(arr: Array) -> Array:
    return unary_op("af_imag", arr)


def isnan(arr: Array) -> Array:
    return unary_op("af_isnan", arr)
