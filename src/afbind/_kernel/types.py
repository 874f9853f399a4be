"""
C Type Definitions and Layouts

Maps the ArrayFire C ABI onto ctypes. Struct layouts here must match
``af/seq.h`` and ``af/index.h`` byte-for-byte.
"""

import ctypes
from typing import Sequence, Tuple

__all__ = [
    'c_dim_t', 'c_af_array', 'c_af_err', 'c_af_enum',
    'AFSeq', 'AFIndex', 'MAX_DIMS',
    'dim4', 'dims_array', 'seq_array', 'index_array',
]

# =============================================================================
# C Type Aliases
# =============================================================================

c_dim_t = ctypes.c_longlong     # dim_t is 64-bit on every supported platform
c_af_array = ctypes.c_void_p    # af_array is an opaque pointer
c_af_err = ctypes.c_int         # af_err
c_af_enum = ctypes.c_int        # af_dtype, af_mat_prop, af_storage, ...

MAX_DIMS = 4


# =============================================================================
# Structs
# =============================================================================

class AFSeq(ctypes.Structure):
    """
    Native ``af_seq``: ``{double begin; double end; double step;}``.

    ``end`` is inclusive; negative values count from the end of the
    dimension. ``(1, 1, 0)`` is the native ``af_span`` sentinel.
    """
    _fields_ = [
        ('begin', ctypes.c_double),
        ('end', ctypes.c_double),
        ('step', ctypes.c_double),
    ]

    def as_tuple(self) -> Tuple[float, float, float]:
        return (self.begin, self.end, self.step)


class _AFIndexUnion(ctypes.Union):
    _fields_ = [
        ('arr', c_af_array),
        ('seq', AFSeq),
    ]


class AFIndex(ctypes.Structure):
    """Native ``af_index_t``: a sequence or an index array, per dimension."""
    _fields_ = [
        ('idx', _AFIndexUnion),
        ('isSeq', ctypes.c_bool),
        ('isBatch', ctypes.c_bool),
    ]


# =============================================================================
# Marshaling Helpers
# =============================================================================

def dim4(shape: Sequence[int]) -> Tuple[int, int, int, int]:
    """
    Pad a shape to the native 4-dimensional form.

    Args:
        shape: Up to four non-negative extents

    Returns:
        Four extents, trailing dimensions filled with 1

    Raises:
        ValueError: If more than four dimensions or a negative extent is given
    """
    shape = tuple(int(d) for d in shape)
    if len(shape) > MAX_DIMS:
        raise ValueError(f"ArrayFire supports at most {MAX_DIMS} dimensions, got {len(shape)}")
    if any(d < 0 for d in shape):
        raise ValueError(f"Dimensions must be non-negative, got {shape}")
    return shape + (1,) * (MAX_DIMS - len(shape))


def dims_array(shape: Sequence[int]):
    """Build a transient ``dim_t[n]`` buffer for a call."""
    shape = tuple(int(d) for d in shape)
    return (c_dim_t * len(shape))(*shape)


def seq_array(seqs: Sequence[AFSeq]):
    """Build a transient ``af_seq[n]`` buffer for a call."""
    return (AFSeq * len(seqs))(*seqs)


def index_array(indices: Sequence[AFIndex]):
    """Build a transient ``af_index_t[n]`` buffer for a call."""
    return (AFIndex * len(indices))(*indices)
