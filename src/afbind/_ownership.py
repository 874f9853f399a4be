"""Native Handle Ownership.

This module owns the lifetime of every ``af_array`` handed out by the
native library.

Key Concepts:
    - One owner per handle: each ``NativeHandle`` holds exactly one
      reference obtained from a creating call.
    - Exactly-once release: release runs through a ``weakref.finalize``
      callback, which executes at most once whether it is triggered
      explicitly, by garbage collection, or at interpreter exit.
    - Library affinity: a handle is released by the library that created
      it, even if the configured backend changed in between.

Safety Model:
    1. Explicit release: status is checked and ``AFError`` raised.
    2. Collector release: status cannot propagate out of a finalizer, so a
       failure is logged instead.
    3. Use after release raises ``ValueError`` before any native call.

Thread safety:
    Handles are not synchronized. Callers must serialize concurrent use of
    a single handle.
"""

import ctypes
import logging
import weakref
from typing import Any

from .error import AF_SUCCESS, check_error
from ._kernel.types import c_af_array

__all__ = [
    'NativeHandle',
]

logger = logging.getLogger("afbind.ownership")


def _release_from_finalizer(lib: Any, value: int) -> None:
    """Release callback used when the owner is collected."""
    status = lib.af_release_array(c_af_array(value))
    if status != AF_SUCCESS:
        logger.warning("af_release_array(0x%x) failed during collection with status %d", value, status)


class NativeHandle:
    """Owning wrapper around one ``af_array``.

    Attributes:
        _value: Raw pointer value (int).
        _lib: Library that issued the handle.
        _finalizer: Release callback, alive until the handle is released.

    Example:
        >>> handle = NativeHandle(raw, lib)
        >>> handle.value          # c_void_p for the next native call
        >>> handle.release()      # af_release_array, exactly once
        >>> handle.released
        True
    """

    __slots__ = ("_value", "_lib", "_finalizer", "__weakref__")

    def __init__(self, value: int, lib: Any):
        """Take ownership of a handle returned by a successful native call.

        Args:
            value: Raw ``af_array`` pointer value.
            lib: Library that produced it.

        Raises:
            ValueError: If ``value`` is a null handle.
        """
        if not value:
            raise ValueError("Cannot take ownership of a null af_array")
        self._value = value
        self._lib = lib
        self._finalizer = weakref.finalize(self, _release_from_finalizer, lib, value)

    @property
    def lib(self) -> Any:
        return self._lib

    @property
    def released(self) -> bool:
        """Whether the handle has been given back to the native library."""
        return not self._finalizer.alive

    @property
    def value(self) -> ctypes.c_void_p:
        """Handle to pass to the next native call.

        Raises:
            ValueError: If the handle was already released.
        """
        if not self._finalizer.alive:
            raise ValueError("Array has been released")
        return c_af_array(self._value)

    @property
    def address(self) -> int:
        return self._value

    def release(self) -> None:
        """Release the handle now.

        Idempotent: a second call is a no-op.

        Raises:
            AFError: If the native release reports a failure.
        """
        if self._finalizer.detach() is None:
            return
        status = self._lib.af_release_array(c_af_array(self._value))
        check_error(self._lib, status, "release array")

    def __repr__(self) -> str:
        state = "released" if self.released else "owned"
        return f"NativeHandle(0x{self._value:x}, {state})"
