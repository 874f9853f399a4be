"""
Indexing and assignment.

Sequence Semantics:
    ``Seq(begin, end, step)`` follows the native ``af_seq``: ``end`` is
    inclusive and negative positions count from the end of the dimension
    (``-1`` is the last element). ``Seq.span()`` selects a whole dimension.

    A ``Seq`` is marshaled field-for-field; nothing is clamped and the sign
    of ``step`` is never changed. Python slices go through
    ``Seq.from_slice``, which turns the exclusive ``stop`` into an
    inclusive ``end``.

Operations:
    index       af_index       -- sub-array selected by sequences
    lookup      af_lookup      -- gather along one dimension by an index array
    assign_seq  af_assign_seq  -- copy with a sequence-selected region replaced
    index_gen   af_index_gen   -- sequences and index arrays mixed per dimension
    assign_gen  af_assign_gen  -- generalized assignment
"""

from __future__ import annotations

import numbers
from dataclasses import dataclass
from typing import Any, List, Sequence, Union

from .array import Array, _call_for_array, _lib_of
from ._kernel.types import AFIndex, AFSeq, MAX_DIMS, index_array, seq_array

__all__ = [
    'Seq',
    'Index',
    'span',
    'index',
    'lookup',
    'assign_seq',
    'index_gen',
    'assign_gen',
]


# =============================================================================
# Sequence Descriptor
# =============================================================================

@dataclass(frozen=True)
class Seq:
    """
    Slice descriptor ``(begin, end, step)``.

    Attributes:
        begin: First position (negative counts from the end)
        end: Last position, inclusive (negative counts from the end)
        step: Stride; may be negative. ``0`` only appears in the span sentinel.
    """
    begin: float
    end: float
    step: float = 1

    @classmethod
    def span(cls) -> "Seq":
        """The whole dimension (native ``af_span``)."""
        return cls(1, 1, 0)

    @property
    def is_span(self) -> bool:
        return (self.begin, self.end, self.step) == (1, 1, 0)

    @classmethod
    def from_slice(cls, s: slice) -> "Seq":
        """
        Translate a Python slice.

        Raises:
            ValueError: If the slice step is zero
            IndexError: If the slice selects nothing (``[:0]``, ``[3:1]``)
        """
        step = 1 if s.step is None else s.step
        if step == 0:
            raise ValueError("slice step cannot be zero")
        if s.start is None and s.stop is None and step == 1:
            return cls.span()

        if s.start is not None:
            begin = s.start
        else:
            begin = 0 if step > 0 else -1

        if s.stop is None:
            end = -1 if step > 0 else 0
        elif step > 0:
            if s.stop == 0:
                raise IndexError("empty slice cannot be expressed as a native sequence")
            end = s.stop - 1
        else:
            if s.stop == -1:
                raise IndexError("empty slice cannot be expressed as a native sequence")
            end = s.stop + 1

        if begin >= 0 and end >= 0 and (begin > end if step > 0 else begin < end):
            raise IndexError("empty slice cannot be expressed as a native sequence")
        return cls(begin, end, step)

    def to_native(self) -> AFSeq:
        return AFSeq(self.begin, self.end, self.step)

    @classmethod
    def from_native(cls, seq: AFSeq) -> "Seq":
        return cls(seq.begin, seq.end, seq.step)


span = Seq.span


def _to_seq(item: Any) -> Seq:
    if isinstance(item, Seq):
        return item
    if isinstance(item, slice):
        return Seq.from_slice(item)
    if isinstance(item, numbers.Integral) and not isinstance(item, bool):
        return Seq(int(item), int(item), 1)
    raise IndexError(f"Unsupported index type: {type(item).__name__}")


# =============================================================================
# Generalized Index
# =============================================================================

class Index:
    """
    One dimension of a generalized index: a ``Seq`` or an Array of positions.

    Example:
        >>> idx = [Index(afbind.array([0, 2])), Index(slice(None))]
        >>> afbind.index_gen(a, idx)
    """

    __slots__ = ("_seq", "_array", "is_batch")

    def __init__(self, item: Any, is_batch: bool = False):
        if isinstance(item, Array):
            self._seq = None
            self._array = item
        else:
            self._seq = _to_seq(item)
            self._array = None
        self.is_batch = is_batch

    @property
    def is_seq(self) -> bool:
        return self._seq is not None

    @property
    def seq(self) -> Seq:
        return self._seq

    @property
    def array(self) -> Array:
        return self._array

    def to_native(self) -> AFIndex:
        native = AFIndex()
        if self.is_seq:
            native.idx.seq = self._seq.to_native()
            native.isSeq = True
        else:
            native.idx.arr = self._array._raw().value
            native.isSeq = False
        native.isBatch = self.is_batch
        return native

    def __repr__(self) -> str:
        target = self._seq if self.is_seq else "Array"
        return f"Index({target}, is_batch={self.is_batch})"


def _as_indices(indices: Sequence[Any]) -> List[Index]:
    result = [i if isinstance(i, Index) else Index(i) for i in indices]
    if not result or len(result) > MAX_DIMS:
        raise IndexError(f"Expected 1 to {MAX_DIMS} indices, got {len(result)}")
    return result


def _as_seqs(seqs: Sequence[Any]) -> List[Seq]:
    result = [_to_seq(s) for s in seqs]
    if not result or len(result) > MAX_DIMS:
        raise IndexError(f"Expected 1 to {MAX_DIMS} sequences, got {len(result)}")
    return result


# =============================================================================
# Operations
# =============================================================================

def index(arr: Array, *seqs: Union[Seq, slice, int]) -> Array:
    """
    Select a sub-array with one sequence per leading dimension.

    Example:
        >>> index(a, Seq(0, 1), span())   # first two rows
    """
    seqs = _as_seqs(seqs)
    return _call_for_array(
        arr._lib, "af_index",
        arr._raw(), len(seqs), seq_array([s.to_native() for s in seqs]),
        context="index",
    )


def lookup(arr: Array, indices: Array, dim: int = 0) -> Array:
    """Gather positions ``indices`` along dimension ``dim``."""
    return _call_for_array(arr._lib, "af_lookup", arr._raw(), indices._raw(), dim, context="lookup")


def assign_seq(lhs: Array, seqs: Sequence[Union[Seq, slice, int]], rhs: Array) -> Array:
    """
    Copy of ``lhs`` with the region selected by ``seqs`` replaced by ``rhs``.

    ``lhs`` itself is unchanged; ``lhs[key] = rhs`` is the in-place form.
    """
    seqs = _as_seqs(seqs)
    return _call_for_array(
        _lib_of(lhs), "af_assign_seq",
        lhs._raw(), len(seqs), seq_array([s.to_native() for s in seqs]), rhs._raw(),
        context="assign_seq",
    )


def index_gen(arr: Array, indices: Sequence[Any]) -> Array:
    """Select with a mix of sequences and index arrays, one per dimension."""
    indices = _as_indices(indices)
    return _call_for_array(
        arr._lib, "af_index_gen",
        arr._raw(), len(indices), index_array([i.to_native() for i in indices]),
        context="index_gen",
    )


def assign_gen(lhs: Array, indices: Sequence[Any], rhs: Array) -> Array:
    """Copy of ``lhs`` with the region selected by ``indices`` replaced by ``rhs``."""
    indices = _as_indices(indices)
    return _call_for_array(
        _lib_of(lhs), "af_assign_gen",
        lhs._raw(), len(indices), index_array([i.to_native() for i in indices]), rhs._raw(),
        context="assign_gen",
    )


# =============================================================================
# Subscript Support (Array.__getitem__ / __setitem__)
# =============================================================================

def _key_items(key: Any) -> tuple:
    items = key if isinstance(key, tuple) else (key,)
    if any(item is Ellipsis for item in items):
        raise IndexError("Ellipsis indexing is not supported")
    return items


def index_by_key(arr: Array, key: Any) -> Array:
    items = _key_items(key)
    if any(isinstance(item, Array) for item in items):
        return index_gen(arr, items)
    return index(arr, *items)


def assign_by_key(arr: Array, key: Any, value: Any) -> Array:
    """Assignment result for ``arr[key] = value`` (a new Array)."""
    items = _key_items(key)
    if not isinstance(value, Array):
        from .arith import _scalar_dtype
        from .data import _constant_on

        target_dims = index_by_key(arr, key).dims
        value = _constant_on(arr._lib, value, target_dims, _scalar_dtype(value, arr.dtype))

    if any(isinstance(item, Array) for item in items):
        return assign_gen(arr, items, value)
    return assign_seq(arr, items, value)
