"""
Reductions, scans, sorting and search.

Reductions take an optional ``dim``: with a dimension the result is an
Array reduced along it; without one the whole array is reduced to a host
scalar (complex for complex input).
"""

from __future__ import annotations

from typing import Optional, Union

from .array import Array, _as_scalar, _call_for_array, _call_for_pair

__all__ = [
    'sum',
    'product',
    'min',
    'max',
    'all_true',
    'any_true',
    'count',
    'accum',
    'sort',
    'where',
]

Scalar = Union[float, complex]


def _reduce(name: str, arr: Array, dim: Optional[int]) -> Union[Array, Scalar]:
    if dim is None:
        pair = _call_for_pair(arr._lib, f"{name}_all", arr._raw())
        return _as_scalar(pair, arr.dtype.is_complex)
    return _call_for_array(arr._lib, name, arr._raw(), dim)


def sum(arr: Array, dim: Optional[int] = None) -> Union[Array, Scalar]:
    """Sum along ``dim``, or of all elements."""
    return _reduce("af_sum", arr, dim)


def product(arr: Array, dim: Optional[int] = None) -> Union[Array, Scalar]:
    """Product along ``dim``, or of all elements."""
    return _reduce("af_product", arr, dim)


def min(arr: Array, dim: Optional[int] = None) -> Union[Array, Scalar]:
    """Minimum along ``dim``, or of all elements."""
    return _reduce("af_min", arr, dim)


def max(arr: Array, dim: Optional[int] = None) -> Union[Array, Scalar]:
    """Maximum along ``dim``, or of all elements."""
    return _reduce("af_max", arr, dim)


def all_true(arr: Array, dim: Optional[int] = None) -> Union[Array, bool]:
    """Whether every element is non-zero."""
    result = _reduce("af_all_true", arr, dim)
    return result if isinstance(result, Array) else bool(result)


def any_true(arr: Array, dim: Optional[int] = None) -> Union[Array, bool]:
    """Whether any element is non-zero."""
    result = _reduce("af_any_true", arr, dim)
    return result if isinstance(result, Array) else bool(result)


def count(arr: Array, dim: Optional[int] = None) -> Union[Array, int]:
    """Number of non-zero elements."""
    result = _reduce("af_count", arr, dim)
    return result if isinstance(result, Array) else int(result)


def accum(arr: Array, dim: int = 0) -> Array:
    """Inclusive cumulative sum along ``dim``."""
    return _call_for_array(arr._lib, "af_accum", arr._raw(), dim)


def sort(arr: Array, dim: int = 0, ascending: bool = True) -> Array:
    """Sorted values along ``dim``."""
    return _call_for_array(arr._lib, "af_sort", arr._raw(), dim, bool(ascending))


def where(arr: Array) -> Array:
    """Linear (column-major) positions of non-zero elements."""
    return _call_for_array(arr._lib, "af_where", arr._raw())
