"""
Descriptive statistics.

As with reductions, ``dim=None`` reduces the whole array to a host scalar.
"""

from __future__ import annotations

from typing import Optional, Union

from .array import Array, _as_scalar, _call_for_array, _call_for_pair, _lib_of

__all__ = [
    'mean',
    'var',
    'stdev',
    'median',
    'cov',
    'corrcoef',
]

Scalar = Union[float, complex]


def mean(arr: Array, dim: Optional[int] = None) -> Union[Array, Scalar]:
    """Arithmetic mean along ``dim``, or of all elements."""
    if dim is None:
        return _as_scalar(_call_for_pair(arr._lib, "af_mean_all", arr._raw()), arr.dtype.is_complex)
    return _call_for_array(arr._lib, "af_mean", arr._raw(), dim)


def var(arr: Array, dim: Optional[int] = None, biased: bool = False) -> Union[Array, Scalar]:
    """
    Variance.

    Args:
        arr: Input array
        dim: Dimension to reduce; None for all elements
        biased: Divide by N (population) instead of N-1 (sample)
    """
    if dim is None:
        pair = _call_for_pair(arr._lib, "af_var_all", arr._raw(), bool(biased))
        return _as_scalar(pair, arr.dtype.is_complex)
    return _call_for_array(arr._lib, "af_var", arr._raw(), bool(biased), dim)


def stdev(arr: Array, dim: Optional[int] = None) -> Union[Array, Scalar]:
    """Standard deviation."""
    if dim is None:
        return _as_scalar(_call_for_pair(arr._lib, "af_stdev_all", arr._raw()), arr.dtype.is_complex)
    return _call_for_array(arr._lib, "af_stdev", arr._raw(), dim)


def median(arr: Array, dim: Optional[int] = None) -> Union[Array, float]:
    """Median."""
    if dim is None:
        return _call_for_pair(arr._lib, "af_median_all", arr._raw())[0]
    return _call_for_array(arr._lib, "af_median", arr._raw(), dim)


def cov(x: Array, y: Array, biased: bool = False) -> Array:
    """Covariance of two vectors."""
    return _call_for_array(_lib_of(x), "af_cov", x._raw(), y._raw(), bool(biased))


def corrcoef(x: Array, y: Array) -> float:
    """Pearson correlation coefficient of two vectors."""
    return _call_for_pair(_lib_of(x), "af_corrcoef", x._raw(), y._raw())[0]
