"""Random number generation on the device."""

from __future__ import annotations

import ctypes
from typing import Any

from .array import Array, _call, _call_for_array
from .config import get_library
from .data import _checked_shape
from .dtypes import Dtype, DtypeLike, as_dtype
from ._kernel.types import dims_array

__all__ = [
    'randu',
    'randn',
    'set_seed',
    'get_seed',
]


def randu(shape: Any, dtype: DtypeLike = Dtype.F32) -> Array:
    """Uniformly distributed values in ``[0, 1)``."""
    shape = _checked_shape(shape)
    lib = get_library()
    return _call_for_array(lib, "af_randu", len(shape), dims_array(shape), as_dtype(dtype).to_native())


def randn(shape: Any, dtype: DtypeLike = Dtype.F32) -> Array:
    """Standard normal values; floating types only."""
    dtype = as_dtype(dtype)
    if not dtype.is_floating:
        raise TypeError(f"randn needs a floating dtype, got {dtype.value}")
    shape = _checked_shape(shape)
    lib = get_library()
    return _call_for_array(lib, "af_randn", len(shape), dims_array(shape), dtype.to_native())


def set_seed(seed: int) -> None:
    if seed < 0:
        raise ValueError(f"Seed must be non-negative, got {seed}")
    _call(get_library(), "af_set_seed", seed)


def get_seed() -> int:
    out = ctypes.c_ulonglong()
    _call(get_library(), "af_get_seed", ctypes.byref(out))
    return out.value
