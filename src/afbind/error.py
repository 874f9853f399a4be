"""
Error handling for afbind.

Error codes are aligned with the native ``af_err`` enum (af/defines.h).
"""

from __future__ import annotations

import ctypes
from enum import Enum
from typing import Optional

from ._kernel.types import c_dim_t


# =============================================================================
# Error Codes (Aligned with C API)
# =============================================================================

# Success
AF_SUCCESS = 0

# Environment errors (100-199)
AF_ERR_NO_MEM = 101
AF_ERR_DRIVER = 102
AF_ERR_RUNTIME = 103

# Input errors (200-299)
AF_ERR_INVALID_ARRAY = 201
AF_ERR_ARG = 202
AF_ERR_SIZE = 203
AF_ERR_TYPE = 204
AF_ERR_DIFF_TYPE = 205
AF_ERR_BATCH = 207
AF_ERR_DEVICE = 208

# Missing support (300-399)
AF_ERR_NOT_SUPPORTED = 301
AF_ERR_NOT_CONFIGURED = 302
AF_ERR_NONFREE = 303

# Missing hardware support (400-499)
AF_ERR_NO_DBL = 401
AF_ERR_NO_GFX = 402
AF_ERR_NO_HALF = 403

# Unified backend (500-599)
AF_ERR_LOAD_LIB = 501
AF_ERR_LOAD_SYM = 502
AF_ERR_ARR_BKND_MISMATCH = 503

# Internal
AF_ERR_INTERNAL = 998
AF_ERR_UNKNOWN = 999


class ErrorType(Enum):
    """Category of a native failure."""
    SUCCESS = "success"
    NO_MEMORY = "no_memory"
    DRIVER = "driver"
    RUNTIME = "runtime"
    INVALID_ARRAY = "invalid_array"
    ARGUMENT = "argument"
    SIZE = "size"
    TYPE = "type"
    DIFF_TYPE = "diff_type"
    BATCH = "batch"
    DEVICE = "device"
    NOT_SUPPORTED = "not_supported"
    NOT_CONFIGURED = "not_configured"
    NON_FREE = "non_free"
    NO_DOUBLE = "no_double"
    NO_GRAPHICS = "no_graphics"
    NO_HALF = "no_half"
    LOAD_LIBRARY = "load_library"
    LOAD_SYMBOL = "load_symbol"
    BACKEND_MISMATCH = "backend_mismatch"
    INTERNAL = "internal"
    UNKNOWN = "unknown"

    def to_native(self) -> int:
        return _TYPE_TO_CODE[self]

    @classmethod
    def from_native(cls, code: int) -> "ErrorType":
        """Category for a status code; unrecognized codes are UNKNOWN."""
        return _CODE_TO_TYPE.get(code, cls.UNKNOWN)


_CODE_TO_TYPE = {
    AF_SUCCESS: ErrorType.SUCCESS,
    AF_ERR_NO_MEM: ErrorType.NO_MEMORY,
    AF_ERR_DRIVER: ErrorType.DRIVER,
    AF_ERR_RUNTIME: ErrorType.RUNTIME,
    AF_ERR_INVALID_ARRAY: ErrorType.INVALID_ARRAY,
    AF_ERR_ARG: ErrorType.ARGUMENT,
    AF_ERR_SIZE: ErrorType.SIZE,
    AF_ERR_TYPE: ErrorType.TYPE,
    AF_ERR_DIFF_TYPE: ErrorType.DIFF_TYPE,
    AF_ERR_BATCH: ErrorType.BATCH,
    AF_ERR_DEVICE: ErrorType.DEVICE,
    AF_ERR_NOT_SUPPORTED: ErrorType.NOT_SUPPORTED,
    AF_ERR_NOT_CONFIGURED: ErrorType.NOT_CONFIGURED,
    AF_ERR_NONFREE: ErrorType.NON_FREE,
    AF_ERR_NO_DBL: ErrorType.NO_DOUBLE,
    AF_ERR_NO_GFX: ErrorType.NO_GRAPHICS,
    AF_ERR_NO_HALF: ErrorType.NO_HALF,
    AF_ERR_LOAD_LIB: ErrorType.LOAD_LIBRARY,
    AF_ERR_LOAD_SYM: ErrorType.LOAD_SYMBOL,
    AF_ERR_ARR_BKND_MISMATCH: ErrorType.BACKEND_MISMATCH,
    AF_ERR_INTERNAL: ErrorType.INTERNAL,
    AF_ERR_UNKNOWN: ErrorType.UNKNOWN,
}

_TYPE_TO_CODE = {error_type: code for code, error_type in _CODE_TO_TYPE.items()}


# Error code to message mapping (used when the library has no message)
_ERROR_MESSAGES = {
    AF_SUCCESS: "Success",
    AF_ERR_NO_MEM: "Device out of memory",
    AF_ERR_DRIVER: "Driver not available or incompatible",
    AF_ERR_RUNTIME: "Runtime error",
    AF_ERR_INVALID_ARRAY: "Invalid array",
    AF_ERR_ARG: "Invalid input argument",
    AF_ERR_SIZE: "Invalid input size",
    AF_ERR_TYPE: "Function does not support this data type",
    AF_ERR_DIFF_TYPE: "Input types are not the same",
    AF_ERR_BATCH: "Invalid batch configuration",
    AF_ERR_DEVICE: "Input does not belong to the current device",
    AF_ERR_NOT_SUPPORTED: "Function not supported",
    AF_ERR_NOT_CONFIGURED: "Function not configured to build",
    AF_ERR_NONFREE: "Function unavailable: non-free algorithms not enabled",
    AF_ERR_NO_DBL: "Double precision not supported for this device",
    AF_ERR_NO_GFX: "Graphics functionality unavailable",
    AF_ERR_NO_HALF: "Half precision not supported for this device",
    AF_ERR_LOAD_LIB: "Failed to load dynamic library",
    AF_ERR_LOAD_SYM: "Failed to load symbol",
    AF_ERR_ARR_BKND_MISMATCH: "There was a mismatch between an array and the current backend",
    AF_ERR_INTERNAL: "Internal error",
    AF_ERR_UNKNOWN: "Unknown error",
}


# =============================================================================
# Exception Class
# =============================================================================

class AFError(Exception):
    """
    Structured failure raised for every non-success native status.

    Attributes:
        code: Native ``af_err`` value
        error_type: Category of the failure
        message: Detailed message (from the native library when available)
    """

    def __init__(self, code: int, message: Optional[str] = None):
        self.code = code
        self.error_type = ErrorType.from_native(code)
        if message is None:
            message = _ERROR_MESSAGES.get(code, f"Unknown error (code={code})")
        self.message = message
        super().__init__(f"ArrayFire Error {code} ({self.error_type.name}): {message}")

    def __repr__(self) -> str:
        return f"AFError(code={self.code}, error_type={self.error_type.name}, message={self.message!r})"

    @classmethod
    def from_code(cls, code: int, context: str = "") -> "AFError":
        """Create exception from error code with optional context."""
        base_msg = _ERROR_MESSAGES.get(code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(code, msg)


# =============================================================================
# Error Checking Functions
# =============================================================================

def _decode(raw) -> str:
    if isinstance(raw, bytes):
        return raw.decode('utf-8', errors='replace')
    return raw or ""


def get_last_error(lib) -> str:
    """
    Get the last error message recorded by the native library.

    The native string is copied and then released with ``af_free_host``.

    Args:
        lib: Library that produced the failing status

    Returns:
        Message text, empty if the library recorded none
    """
    msg_ptr = ctypes.c_void_p()
    length = c_dim_t()
    lib.af_get_last_error(ctypes.byref(msg_ptr), ctypes.byref(length))

    if not msg_ptr.value:
        return ""
    try:
        text = ctypes.string_at(msg_ptr.value, length.value) if length.value > 0 else b""
    finally:
        lib.af_free_host(msg_ptr)
    return _decode(text).strip()


def error_string(lib, code: int) -> str:
    """Native short description of a status code (``af_err_to_string``)."""
    return _decode(lib.af_err_to_string(code))


def check_error(lib, code: int, context: str = "") -> None:
    """
    Check a native status and raise if it is not success.

    Message precedence: the library's last-error text, then
    ``af_err_to_string``, then the static message table.

    Args:
        lib: Library the status came from
        code: Status returned by the native call
        context: Optional operation name for better error reporting

    Raises:
        AFError: If code indicates an error
    """
    if code == AF_SUCCESS:
        return

    msg = get_last_error(lib) or error_string(lib, code) or _ERROR_MESSAGES.get(code, "")
    if context:
        msg = f"{context}: {msg}" if msg else context
    raise AFError(code, msg or None)
