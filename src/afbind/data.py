"""
Data creation and reshaping.

Device-side constructors (constants, ranges, identity) and functions that
rearrange an array without computing on its values.
"""

from __future__ import annotations

import numbers
from typing import Any, Optional, Sequence

from .array import Array, _call_for_array, _lib_of
from .config import get_library
from .dtypes import Dtype, DtypeLike, as_dtype, infer_dtype
from ._kernel.types import MAX_DIMS, dim4, dims_array

__all__ = [
    'constant',
    'range',
    'iota',
    'identity',
    'moddims',
    'flat',
    'join',
    'tile',
    'reorder',
    'diag',
]

_builtin_range = range


def _checked_shape(shape: Any) -> tuple:
    if isinstance(shape, numbers.Integral):
        shape = (shape,)
    shape = tuple(int(d) for d in shape)
    dim4(shape)  # validates count and sign
    return shape


def _constant_on(lib: Any, value: Any, shape: Sequence[int], dtype: Dtype) -> Array:
    shape = _checked_shape(shape)
    if dtype.is_complex or isinstance(value, complex):
        value = complex(value)
        if not dtype.is_complex:
            dtype = Dtype.C64 if dtype == Dtype.F64 else Dtype.C32
        return _call_for_array(
            lib, "af_constant_complex",
            value.real, value.imag, len(shape), dims_array(shape), dtype.to_native(),
            context="constant",
        )
    if dtype in (Dtype.S64, Dtype.U64):
        # 64-bit integers bypass the double-valued entry point to stay exact
        name = "af_constant_long" if dtype == Dtype.S64 else "af_constant_ulong"
        return _call_for_array(
            lib, name,
            int(value), len(shape), dims_array(shape),
            context="constant",
        )
    return _call_for_array(
        lib, "af_constant",
        float(value), len(shape), dims_array(shape), dtype.to_native(),
        context="constant",
    )


def constant(value: Any, shape: Any, dtype: Optional[DtypeLike] = None) -> Array:
    """
    Array filled with one value.

    Args:
        value: Fill value (real or complex)
        shape: Up to four extents (an int means a vector)
        dtype: Element type; inferred from ``value`` when omitted

    Example:
        >>> afbind.constant(10, (1, 1, 1, 1)).scalar()
        10
    """
    dtype = as_dtype(dtype) if dtype is not None else infer_dtype(value)
    return _constant_on(get_library(), value, shape, dtype)


def range(shape: Any, seq_dim: int = 0, dtype: DtypeLike = Dtype.F32) -> Array:
    """Values ``0, 1, 2, ...`` increasing along ``seq_dim``."""
    shape = _checked_shape(shape)
    lib = get_library()
    return _call_for_array(
        lib, "af_range",
        len(shape), dims_array(shape), seq_dim, as_dtype(dtype).to_native(),
    )


def iota(shape: Any, tile_dims: Any = (1,), dtype: DtypeLike = Dtype.F32) -> Array:
    """Sequence ``0 .. prod(shape)-1`` laid out in ``shape``, then tiled."""
    shape = _checked_shape(shape)
    tile_dims = _checked_shape(tile_dims)
    lib = get_library()
    return _call_for_array(
        lib, "af_iota",
        len(shape), dims_array(shape), len(tile_dims), dims_array(tile_dims),
        as_dtype(dtype).to_native(),
    )


def identity(shape: Any, dtype: DtypeLike = Dtype.F32) -> Array:
    """Identity matrix (batched along dims 2 and 3)."""
    shape = _checked_shape(shape)
    lib = get_library()
    return _call_for_array(
        lib, "af_identity",
        len(shape), dims_array(shape), as_dtype(dtype).to_native(),
    )


def moddims(arr: Array, shape: Any) -> Array:
    """Same data, new extents (element count must match)."""
    shape = _checked_shape(shape)
    return _call_for_array(arr._lib, "af_moddims", arr._raw(), len(shape), dims_array(shape))


def flat(arr: Array) -> Array:
    """Column-major flattening into a vector."""
    return _call_for_array(arr._lib, "af_flat", arr._raw())


def join(dim: int, first: Array, second: Array) -> Array:
    """Concatenate two arrays along ``dim``."""
    return _call_for_array(_lib_of(first), "af_join", dim, first._raw(), second._raw())


def tile(arr: Array, x: int = 1, y: int = 1, z: int = 1, w: int = 1) -> Array:
    """Repeat an array along each dimension."""
    return _call_for_array(arr._lib, "af_tile", arr._raw(), x, y, z, w)


def reorder(arr: Array, x: int = 0, y: int = 1, z: int = 2, w: int = 3) -> Array:
    """Permute dimensions; the output's dim ``i`` is the input's dim ``order[i]``."""
    order = (x, y, z, w)
    if sorted(order) != list(_builtin_range(MAX_DIMS)):
        raise ValueError(f"reorder needs a permutation of 0..3, got {order}")
    return _call_for_array(arr._lib, "af_reorder", arr._raw(), x, y, z, w)


def diag(arr: Array, num: int = 0, extract: bool = True) -> Array:
    """
    Extract a diagonal from a matrix, or build a diagonal matrix from a vector.

    Args:
        arr: Input matrix (extract) or vector (create)
        num: Diagonal offset; positive is above the main diagonal
        extract: True to extract, False to create
    """
    name = "af_diag_extract" if extract else "af_diag_create"
    return _call_for_array(arr._lib, name, arr._raw(), num)
