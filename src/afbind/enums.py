"""
Option enumerations.

Each enum is a closed set of symbolic options with an explicit table onto
the native integer codes (af/defines.h). Values never pass through an
implicit numeric cast: ``to_native()`` and ``from_native()`` are the only
crossings.
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterable, Union

__all__ = [
    'MatProp',
    'Storage',
    'NormType',
    'ConvMode',
    'ConvDomain',
]


class _NativeEnum(Enum):
    """Enum backed by a ``_native_codes`` table defined after the class body."""

    def to_native(self) -> int:
        return type(self)._native_codes()[self]

    @classmethod
    def from_native(cls, code: int):
        for member, native in cls._native_codes().items():
            if native == code:
                return member
        raise ValueError(f"Unknown {cls.__name__} code: {code}")

    @classmethod
    def _native_codes(cls) -> Dict:
        return _CODES[cls.__name__]


class MatProp(_NativeEnum):
    """Matrix properties (``af_mat_prop``) passed to BLAS and LAPACK calls."""
    NONE = "none"
    TRANS = "trans"
    CTRANS = "ctrans"
    CONJ = "conj"
    UPPER = "upper"
    LOWER = "lower"
    DIAG_UNIT = "diag_unit"
    SYM = "sym"
    POSDEF = "posdef"
    ORTHOG = "orthog"
    TRI_DIAGONAL = "tri_diagonal"
    BLOCK_DIAGONAL = "block_diagonal"

    @classmethod
    def combine(cls, props: Union["MatProp", Iterable["MatProp"]]) -> int:
        """OR several properties into one native bitmask."""
        if isinstance(props, MatProp):
            return props.to_native()
        code = 0
        for prop in props:
            code |= prop.to_native()
        return code


class Storage(_NativeEnum):
    """Sparse storage formats (``af_storage``)."""
    DENSE = "dense"
    CSR = "csr"
    CSC = "csc"
    COO = "coo"


class NormType(_NativeEnum):
    """Norm kinds (``af_norm_type``)."""
    VECTOR_1 = "vector_1"
    VECTOR_INF = "vector_inf"
    VECTOR_2 = "vector_2"
    VECTOR_P = "vector_p"
    MATRIX_1 = "matrix_1"
    MATRIX_INF = "matrix_inf"
    MATRIX_2 = "matrix_2"
    MATRIX_L_PQ = "matrix_l_pq"

    EUCLID = VECTOR_2


class ConvMode(_NativeEnum):
    """Output size of a convolution (``af_conv_mode``)."""
    DEFAULT = "default"
    EXPAND = "expand"


class ConvDomain(_NativeEnum):
    """Where a convolution is computed (``af_conv_domain``)."""
    AUTO = "auto"
    SPATIAL = "spatial"
    FREQ = "freq"


_CODES = {
    'MatProp': {
        MatProp.NONE: 0,
        MatProp.TRANS: 1,
        MatProp.CTRANS: 2,
        MatProp.CONJ: 4,
        MatProp.UPPER: 32,
        MatProp.LOWER: 64,
        MatProp.DIAG_UNIT: 128,
        MatProp.SYM: 512,
        MatProp.POSDEF: 1024,
        MatProp.ORTHOG: 2048,
        MatProp.TRI_DIAGONAL: 4096,
        MatProp.BLOCK_DIAGONAL: 8192,
    },
    'Storage': {
        Storage.DENSE: 0,
        Storage.CSR: 1,
        Storage.CSC: 2,
        Storage.COO: 3,
    },
    'NormType': {
        NormType.VECTOR_1: 0,
        NormType.VECTOR_INF: 1,
        NormType.VECTOR_2: 2,
        NormType.VECTOR_P: 3,
        NormType.MATRIX_1: 4,
        NormType.MATRIX_INF: 5,
        NormType.MATRIX_2: 6,
        NormType.MATRIX_L_PQ: 7,
    },
    'ConvMode': {
        ConvMode.DEFAULT: 0,
        ConvMode.EXPAND: 1,
    },
    'ConvDomain': {
        ConvDomain.AUTO: 0,
        ConvDomain.SPATIAL: 1,
        ConvDomain.FREQ: 2,
    },
}
