"""
Device and backend management.

Device selection is per native library and per thread, exactly as in the C
API. ``on_device`` scopes a switch and restores the previous device.
"""

from __future__ import annotations

import contextlib
import ctypes
import logging
from typing import Iterator, List, Tuple, Union

from .array import _call
from .config import Backend, get_config, get_library
from ._kernel.types import c_af_enum

__all__ = [
    'info',
    'info_string',
    'get_device_count',
    'set_device',
    'get_device',
    'on_device',
    'sync',
    'device_gc',
    'dbl_support',
    'get_version',
    'set_backend',
    'get_active_backend',
    'available_backends',
]

logger = logging.getLogger("afbind.device")


def info() -> None:
    """Print device information to stdout (native formatting)."""
    _call(get_library(), "af_info")


def info_string(verbose: bool = False) -> str:
    """Device information as a string."""
    lib = get_library()
    text_ptr = ctypes.c_void_p()
    _call(lib, "af_info_string", ctypes.byref(text_ptr), bool(verbose))
    try:
        text = ctypes.string_at(text_ptr.value) if text_ptr.value else b""
    finally:
        if text_ptr.value:
            lib.af_free_host(text_ptr)
    return text.decode('utf-8', errors='replace')


def get_device_count() -> int:
    out = ctypes.c_int()
    _call(get_library(), "af_get_device_count", ctypes.byref(out))
    return out.value


def set_device(device: int) -> None:
    """Make ``device`` active for subsequent calls on this thread."""
    if device < 0:
        raise ValueError(f"Device id must be non-negative, got {device}")
    _call(get_library(), "af_set_device", device, context=f"set device {device}")
    logger.info("Active device set to %d", device)


def get_device() -> int:
    out = ctypes.c_int()
    _call(get_library(), "af_get_device", ctypes.byref(out))
    return out.value


@contextlib.contextmanager
def on_device(device: int) -> Iterator[int]:
    """
    Run a block with ``device`` active.

    Example:
        >>> with afbind.device.on_device(1):
        ...     b = afbind.randu((4, 4))
    """
    previous = get_device()
    set_device(device)
    try:
        yield device
    finally:
        set_device(previous)


def sync(device: int = -1) -> None:
    """Block until queued work on ``device`` finishes (-1 = active device)."""
    _call(get_library(), "af_sync", device)


def device_gc() -> None:
    """Return cached device memory to the driver."""
    _call(get_library(), "af_device_gc")


def dbl_support(device: int = -1) -> bool:
    """Whether ``device`` supports double precision."""
    if device < 0:
        device = get_device()
    out = ctypes.c_bool()
    _call(get_library(), "af_get_dbl_support", ctypes.byref(out), device)
    return bool(out.value)


def get_version() -> Tuple[int, int, int]:
    """Native library version as ``(major, minor, patch)``."""
    major, minor, patch = ctypes.c_int(), ctypes.c_int(), ctypes.c_int()
    _call(get_library(), "af_get_version", ctypes.byref(major), ctypes.byref(minor), ctypes.byref(patch))
    return major.value, minor.value, patch.value


def set_backend(backend: Union[Backend, str]) -> None:
    """
    Switch the compute backend.

    With the unified library (``Backend.DEFAULT`` configured) the switch is
    forwarded to ``af_set_backend`` and applies to the calling thread.
    Otherwise the configured backend changes and new arrays are created by
    that backend's library; existing arrays stay bound to their own.
    """
    if isinstance(backend, str):
        backend = Backend(backend.lower())
    config = get_config()
    if config.backend == Backend.DEFAULT:
        _call(get_library(), "af_set_backend", backend.to_native(), context=f"set backend {backend.value}")
        logger.info("Unified library switched to %s backend", backend.value)
    else:
        config.backend = backend


def get_active_backend() -> Backend:
    out = c_af_enum()
    _call(get_library(), "af_get_active_backend", ctypes.byref(out))
    return Backend.from_native(out.value)


def available_backends() -> List[Backend]:
    """Backends the native installation can serve."""
    out = ctypes.c_int()
    _call(get_library(), "af_get_available_backends", ctypes.byref(out))
    return [b for b in Backend if b != Backend.DEFAULT and out.value & b.to_native()]
