"""
Sparse arrays.

Sparse arrays are ordinary ``Array`` owners whose native storage is CSR,
CSC or COO. Use ``to_dense`` before host conversion.
"""

from __future__ import annotations

import ctypes

from .array import Array, _call, _call_for_array
from .enums import Storage
from ._kernel.types import c_af_enum, c_dim_t

__all__ = [
    'from_dense',
    'to_dense',
    'nnz',
    'storage',
    'convert_to',
]


def from_dense(dense: Array, storage_type: Storage = Storage.CSR) -> Array:
    """Compress a dense matrix."""
    if storage_type == Storage.DENSE:
        raise ValueError("from_dense needs a sparse storage type")
    return _call_for_array(dense._lib, "af_create_sparse_array_from_dense", dense._raw(), storage_type.to_native())


def to_dense(sparse: Array) -> Array:
    return _call_for_array(sparse._lib, "af_sparse_to_dense", sparse._raw())


def nnz(sparse: Array) -> int:
    """Number of stored values."""
    out = c_dim_t()
    _call(sparse._lib, "af_sparse_get_nnz", ctypes.byref(out), sparse._raw())
    return out.value


def storage(sparse: Array) -> Storage:
    out = c_af_enum()
    _call(sparse._lib, "af_sparse_get_storage", ctypes.byref(out), sparse._raw())
    return Storage.from_native(out.value)


def convert_to(sparse: Array, storage_type: Storage) -> Array:
    """Re-encode in another storage format (DENSE is allowed)."""
    return _call_for_array(sparse._lib, "af_sparse_convert_to", sparse._raw(), storage_type.to_native())
