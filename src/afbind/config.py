"""
Global configuration for afbind.

Provides:
- Backend selection (unified loader, CPU, CUDA, OpenCL)
- Default device selection
- Lazy library loading
- Library injection for tests and embedding

Initialization order:
    1. ``AFBIND_BACKEND`` and ``AFBIND_DEVICE`` are read when this module
       is imported.
    2. ``set_default_backend()`` / ``set_default_device()`` override them.
    3. The native library is loaded on the first native call.
    4. The configured device (if any) is activated right after loading.

Arrays remember the library that created them, so switching backends does
not affect how existing arrays are released.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from typing import Any, Dict, Optional, Union

from .error import check_error

logger = logging.getLogger("afbind.config")


# =============================================================================
# Backend Types
# =============================================================================

class Backend(Enum):
    """Native compute backend (``af_backend``)."""
    DEFAULT = "default"
    CPU = "cpu"
    CUDA = "cuda"
    OPENCL = "opencl"

    def to_native(self) -> int:
        return _BACKEND_INFO[self]["code"]

    @classmethod
    def from_native(cls, code: int) -> "Backend":
        for backend, info in _BACKEND_INFO.items():
            if info["code"] == code:
                return backend
        raise ValueError(f"Unknown af_backend code: {code}")

    @property
    def library_name(self) -> str:
        """Base name of the shared library serving this backend."""
        return _BACKEND_INFO[self]["library"]


_BACKEND_INFO: Dict[Backend, Dict[str, Any]] = {
    Backend.DEFAULT: {"code": 0, "library": "af"},
    Backend.CPU: {"code": 1, "library": "afcpu"},
    Backend.CUDA: {"code": 2, "library": "afcuda"},
    Backend.OPENCL: {"code": 4, "library": "afopencl"},
}


def _backend_from_env() -> Backend:
    value = os.environ.get("AFBIND_BACKEND", "default").strip().lower()
    try:
        return Backend(value)
    except ValueError:
        raise ValueError(
            f"AFBIND_BACKEND must be one of {[b.value for b in Backend]}, got {value!r}"
        ) from None


def _device_from_env() -> Optional[int]:
    value = os.environ.get("AFBIND_DEVICE")
    if value is None or value.strip() == "":
        return None
    return int(value)


# =============================================================================
# Global Configuration State
# =============================================================================

class _Config:
    """
    Global configuration singleton.

    Manages backend/device selection and lazy library loading.
    """

    def __init__(self):
        self._backend = _backend_from_env()
        self._device = _device_from_env()

        # Libraries loaded so far, keyed by backend
        self._libraries: Dict[Backend, Any] = {}

        # Injected library, takes precedence over loading
        self._override: Optional[Any] = None

    @property
    def backend(self) -> Backend:
        """Get the backend used for new arrays."""
        return self._backend

    @backend.setter
    def backend(self, value: Union[Backend, str]):
        if isinstance(value, str):
            value = Backend(value.lower())
        if value != self._backend:
            logger.info("Switching backend %s -> %s", self._backend.value, value.value)
        self._backend = value

    @property
    def device(self) -> Optional[int]:
        """Device activated when a library is first loaded (None = native default)."""
        return self._device

    @device.setter
    def device(self, value: Optional[int]):
        if value is not None and value < 0:
            raise ValueError(f"Device id must be non-negative, got {value}")
        self._device = value

    def get_library(self, backend: Optional[Backend] = None) -> Any:
        """
        Get library instance (lazy loaded).

        Args:
            backend: Specific backend. If None, uses the configured one.

        Returns:
            Loaded library (or the injected one)
        """
        if self._override is not None:
            return self._override

        if backend is None:
            backend = self._backend

        if backend not in self._libraries:
            self._libraries[backend] = self._load_library(backend)

        return self._libraries[backend]

    def _load_library(self, backend: Backend) -> Any:
        """Load the library for a backend and apply the default device."""
        from ._kernel.lib_loader import load_library

        lib = load_library(backend.library_name)
        if self._device is not None:
            check_error(lib, lib.af_set_device(self._device), f"set device {self._device}")
            logger.info("Activated device %d on %s backend", self._device, backend.value)
        return lib

    def set_library(self, lib: Optional[Any]) -> None:
        """Inject a library object; ``None`` restores lazy loading."""
        self._override = lib

    def reset(self) -> None:
        """Forget loaded libraries and re-read the environment."""
        self._backend = _backend_from_env()
        self._device = _device_from_env()
        self._libraries.clear()
        self._override = None


# Global config instance
_config = _Config()


# =============================================================================
# Public API
# =============================================================================

def get_config() -> _Config:
    """Get global configuration instance."""
    return _config


def get_library(backend: Optional[Backend] = None) -> Any:
    """
    Get the library serving the configured backend.

    This is lazy-loaded on first call.
    """
    return _config.get_library(backend)


def set_library(lib: Optional[Any]) -> None:
    """
    Route every new native call through ``lib``.

    Args:
        lib: An object exposing the ``af_*`` C functions (for example a
            ``ctypes.CDLL`` prepared by the loader), or None to go back to
            loading the configured backend lazily.
    """
    _config.set_library(lib)


def set_default_backend(backend: Union[Backend, str]) -> None:
    """
    Choose which native library serves arrays created from now on.

    Example:
        >>> afbind.set_default_backend('cpu')
        >>> a = afbind.constant(1.0, (2, 2))  # created by libafcpu
    """
    _config.backend = backend


def get_default_backend() -> Backend:
    """Get the configured backend."""
    return _config.backend


def set_default_device(device: Optional[int]) -> None:
    """Device to activate when a library is first loaded."""
    _config.device = device
