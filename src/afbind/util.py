"""
Persistence and printing.

Arrays are saved in the native library's own file format. A file holds any
number of ``(key, array)`` entries addressed by key or by insertion index.
"""

from __future__ import annotations

import ctypes
import os
from typing import Optional, Union

from .array import Array, _call, _call_for_array
from .config import get_library

__all__ = [
    'save_array',
    'read_array',
    'read_array_key_check',
    'array_to_string',
    'print_array',
]

PathLike = Union[str, os.PathLike]


def _encode(text: Union[str, os.PathLike]) -> bytes:
    return os.fsencode(text) if isinstance(text, os.PathLike) else text.encode('utf-8')


def save_array(key: str, arr: Array, filename: PathLike, append: bool = False) -> int:
    """
    Save ``arr`` under ``key``.

    Args:
        key: Name of the entry
        arr: Array to save
        filename: Target file
        append: Add to an existing file instead of overwriting it

    Returns:
        Index of the entry within the file
    """
    if not key:
        raise ValueError("Array key must be a non-empty string")
    out = ctypes.c_int()
    _call(arr._lib, "af_save_array", ctypes.byref(out), _encode(key), arr._raw(), _encode(filename),
          bool(append), context=f"save {key!r}")
    return out.value


def read_array(filename: PathLike, key: Optional[str] = None, index: Optional[int] = None) -> Array:
    """
    Read one entry back, by ``key`` or by ``index`` (exactly one).

    Raises:
        AFError: If the file or entry does not exist
    """
    if (key is None) == (index is None):
        raise ValueError("Pass exactly one of key or index")
    lib = get_library()
    if key is not None:
        return _call_for_array(lib, "af_read_array_key", _encode(filename), _encode(key),
                               context=f"read {key!r}")
    if index < 0:
        raise IndexError(f"Entry index must be non-negative, got {index}")
    return _call_for_array(lib, "af_read_array_index", _encode(filename), index,
                           context=f"read entry {index}")


def read_array_key_check(filename: PathLike, key: str) -> int:
    """Index of ``key`` in ``filename``, or -1 when it is absent."""
    out = ctypes.c_int()
    _call(get_library(), "af_read_array_key_check", ctypes.byref(out), _encode(filename), _encode(key))
    return out.value


def array_to_string(arr: Array, name: str = "", precision: int = 4, transpose: bool = True) -> str:
    """Native text rendering of an array."""
    lib = arr._lib
    text_ptr = ctypes.c_void_p()
    _call(lib, "af_array_to_string", ctypes.byref(text_ptr), _encode(name), arr._raw(), precision,
          bool(transpose))
    try:
        text = ctypes.string_at(text_ptr.value) if text_ptr.value else b""
    finally:
        if text_ptr.value:
            lib.af_free_host(text_ptr)
    return text.decode('utf-8', errors='replace')


def print_array(arr: Array, name: str = "", precision: int = 4) -> None:
    """Print through the native library (writes to the process stdout)."""
    _call(arr._lib, "af_print_array_gen", _encode(name), arr._raw(), precision)
