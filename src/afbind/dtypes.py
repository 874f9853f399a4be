"""
afbind DTypes - Element Type Definitions

Maps ArrayFire's ``af_dtype`` codes onto NumPy dtypes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Union

import numpy as np


# =============================================================================
# Data Type Enumeration
# =============================================================================

class Dtype(Enum):
    """
    Element types supported by the native library.

    Values are the short names the native library prints; the native integer
    code lives in the info table and is reached through ``to_native()``.
    """
    F32 = "f32"     # 32-bit float
    C32 = "c32"     # complex of two 32-bit floats
    F64 = "f64"     # 64-bit float
    C64 = "c64"     # complex of two 64-bit floats
    B8 = "b8"       # 8-bit boolean
    S32 = "s32"
    U32 = "u32"
    U8 = "u8"
    S64 = "s64"
    U64 = "u64"
    S16 = "s16"
    U16 = "u16"
    F16 = "f16"     # half precision

    @property
    def numpy_dtype(self) -> np.dtype:
        return np.dtype(_DTYPE_INFO[self]["numpy"])

    @property
    def itemsize(self) -> int:
        return self.numpy_dtype.itemsize

    @property
    def is_complex(self) -> bool:
        return self in (Dtype.C32, Dtype.C64)

    @property
    def is_floating(self) -> bool:
        return self in (Dtype.F16, Dtype.F32, Dtype.F64, Dtype.C32, Dtype.C64)

    def to_native(self) -> int:
        """Native ``af_dtype`` code."""
        return _DTYPE_INFO[self]["code"]

    @classmethod
    def from_native(cls, code: int) -> "Dtype":
        try:
            return _CODE_TO_DTYPE[code]
        except KeyError:
            raise ValueError(f"Unknown af_dtype code: {code}") from None

    @classmethod
    def from_numpy(cls, dtype: Any) -> "Dtype":
        """Get Dtype from a NumPy dtype (or anything np.dtype accepts)."""
        dtype = np.dtype(dtype)
        for candidate, info in _DTYPE_INFO.items():
            if np.dtype(info["numpy"]) == dtype:
                return candidate
        raise TypeError(f"NumPy dtype {dtype} has no ArrayFire equivalent")


# Type information table
_DTYPE_INFO: Dict[Dtype, Dict[str, Any]] = {
    Dtype.F32: {"code": 0, "numpy": np.float32},
    Dtype.C32: {"code": 1, "numpy": np.complex64},
    Dtype.F64: {"code": 2, "numpy": np.float64},
    Dtype.C64: {"code": 3, "numpy": np.complex128},
    Dtype.B8: {"code": 4, "numpy": np.bool_},
    Dtype.S32: {"code": 5, "numpy": np.int32},
    Dtype.U32: {"code": 6, "numpy": np.uint32},
    Dtype.U8: {"code": 7, "numpy": np.uint8},
    Dtype.S64: {"code": 8, "numpy": np.int64},
    Dtype.U64: {"code": 9, "numpy": np.uint64},
    Dtype.S16: {"code": 10, "numpy": np.int16},
    Dtype.U16: {"code": 11, "numpy": np.uint16},
    Dtype.F16: {"code": 12, "numpy": np.float16},
}

_CODE_TO_DTYPE: Dict[int, Dtype] = {info["code"]: dtype for dtype, info in _DTYPE_INFO.items()}


# =============================================================================
# Type Constants
# =============================================================================

float16 = Dtype.F16
float32 = Dtype.F32
float64 = Dtype.F64
complex64 = Dtype.C32
complex128 = Dtype.C64
bool8 = Dtype.B8
int16 = Dtype.S16
int32 = Dtype.S32
int64 = Dtype.S64
uint8 = Dtype.U8
uint16 = Dtype.U16
uint32 = Dtype.U32
uint64 = Dtype.U64

DtypeLike = Union[Dtype, str, type, np.dtype]


def as_dtype(value: DtypeLike) -> Dtype:
    """
    Normalize a dtype argument.

    Accepts a ``Dtype``, a native short name (``'f32'``), or anything
    ``np.dtype`` understands (``'float32'``, ``np.int64``, ``float``).
    """
    if isinstance(value, Dtype):
        return value
    if isinstance(value, str):
        try:
            return Dtype(value)
        except ValueError:
            pass
    return Dtype.from_numpy(value)


def infer_dtype(value: Any) -> Dtype:
    """Native element type for a Python scalar."""
    if isinstance(value, (bool, np.bool_)):
        return Dtype.B8
    if isinstance(value, complex):
        return Dtype.C64
    if isinstance(value, int):
        return Dtype.S64
    if isinstance(value, float):
        return Dtype.F64
    return Dtype.from_numpy(np.asarray(value).dtype)
