"""
Array - Owned ArrayFire array value.

Every native array reaches Python through ``Array``. The raw ``af_array``
stays inside a ``NativeHandle`` and is never exposed to callers.

Layout:
    Data is column-major, as in the native library. ``Array.from_numpy``
    and ``Array.to_numpy`` convert to and from NumPy's shape semantics.
    ``shape`` follows the native dims, so trailing singleton dimensions are
    dropped: a ``(3, 1)`` host array comes back as ``(3,)``.

Lifecycle:
    - Released automatically when unreachable
    - ``release()`` or a ``with`` block releases deterministically
    - ``retain()`` returns a second owner of the same native data

Usage:
    >>> import numpy as np
    >>> import afbind as af
    >>> a = af.array(np.arange(6.0).reshape(2, 3))
    >>> a.shape
    (2, 3)
    >>> with af.array([1.0, 2.0]) as b:
    ...     total = af.sum(b)
"""

from __future__ import annotations

import ctypes
import functools
import itertools
import operator
from typing import Any, Optional, Sequence, Tuple, Union

import numpy as np

from .config import Backend, get_library
from .dtypes import Dtype, DtypeLike, as_dtype
from .error import check_error
from ._kernel.types import MAX_DIMS, c_af_array, c_af_enum, c_dim_t, dims_array
from ._ownership import NativeHandle

__all__ = [
    'Array',
    'array',
    'mk_array',
    'scalar',
    'vector',
    'matrix',
    'cube',
    'tensor',
]


# =============================================================================
# Call Helpers (call -> check -> wrap)
# =============================================================================

def _call_for_array(lib: Any, name: str, *args, context: Optional[str] = None) -> "Array":
    """
    Call a native function that produces a new array.

    The out slot is read only after the status check succeeds, so a failing
    call never yields a wrapper.
    """
    out = c_af_array()
    status = getattr(lib, name)(ctypes.byref(out), *args)
    check_error(lib, status, context or name)
    return Array._from_handle(out.value, lib)


def _call_for_pair(lib: Any, name: str, *args, context: Optional[str] = None) -> Tuple[float, float]:
    """Call a native function returning ``(double real, double imag)`` out values."""
    real = ctypes.c_double()
    imag = ctypes.c_double()
    status = getattr(lib, name)(ctypes.byref(real), ctypes.byref(imag), *args)
    check_error(lib, status, context or name)
    return real.value, imag.value


def _call(lib: Any, name: str, *args, context: Optional[str] = None) -> None:
    """Call a native function with no array result."""
    check_error(lib, getattr(lib, name)(*args), context or name)


def _as_scalar(pair: Tuple[float, float], is_complex: bool) -> Union[float, complex]:
    real, imag = pair
    return complex(real, imag) if is_complex else real


def _lib_of(*arrays: Any) -> Any:
    """Library owning the first Array among the arguments (configured one otherwise)."""
    for arr in arrays:
        if isinstance(arr, Array):
            return arr._lib
    return get_library()


def _flatten(values: Any) -> list:
    if isinstance(values, (list, tuple)):
        return list(itertools.chain.from_iterable(_flatten(v) for v in values))
    return [values]


# =============================================================================
# Array Class
# =============================================================================

class Array:
    """
    Owned handle to a native ArrayFire array.

    Attributes:
        dims (tuple): Four native extents
        shape (tuple): Extents trimmed to ``ndim``
        dtype (Dtype): Element type
        elements (int): Number of elements

    Arithmetic, comparison and logical operators map onto the native
    elementwise functions; ``@`` is the native matrix multiply. Python
    scalars on either side are broadcast to a constant of matching dims.

    Thread safety:
        Not synchronized; serialize concurrent use of a single Array.
    """

    __slots__ = ("_handle", "_lib", "__weakref__")

    # Make NumPy defer to our reflected operators
    __array_priority__ = 30

    def __init__(self, data: Any = None, dtype: Optional[DtypeLike] = None):
        """
        Upload host data.

        Args:
            data: Anything ``np.asarray`` accepts (up to 4 dimensions)
            dtype: Element type; inferred from the data when omitted
        """
        if data is None:
            raise TypeError("Array() needs host data; use afbind.constant() or afbind.randu() for device-side creation")
        source = Array.from_numpy(data, dtype=dtype)
        # Adopt the freshly created handle
        self._handle = source._handle
        self._lib = source._lib

    @classmethod
    def _from_handle(cls, value: int, lib: Any) -> "Array":
        """Internal constructor: take ownership of a raw handle."""
        arr = cls.__new__(cls)
        arr._handle = NativeHandle(value, lib)
        arr._lib = lib
        return arr

    @classmethod
    def from_numpy(cls, data: Any, dtype: Optional[DtypeLike] = None) -> "Array":
        """
        Copy host data to the device.

        Args:
            data: NumPy array or array-like
            dtype: Element type; inferred from the data when omitted

        Returns:
            New Array with the same shape and values

        Raises:
            TypeError: If the dtype has no native equivalent
            ValueError: If the data has more than 4 dimensions
        """
        host = np.asarray(data)
        if dtype is not None:
            host = host.astype(as_dtype(dtype).numpy_dtype, copy=False)
        af_dtype = Dtype.from_numpy(host.dtype)

        if host.ndim > MAX_DIMS:
            raise ValueError(f"ArrayFire supports at most {MAX_DIMS} dimensions, got {host.ndim}")
        shape = host.shape if host.ndim > 0 else (1,)
        host = np.asfortranarray(host.reshape(shape))

        lib = get_library()
        if host.size == 0:
            return _call_for_array(
                lib, "af_create_handle",
                len(shape), dims_array(shape), af_dtype.to_native(),
                context="create empty array",
            )
        return _call_for_array(
            lib, "af_create_array",
            host.ctypes.data_as(ctypes.c_void_p),
            len(shape),
            dims_array(shape),
            af_dtype.to_native(),
            context="create array",
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _raw(self) -> ctypes.c_void_p:
        """Handle for a native call. Raises ValueError once released."""
        return self._handle.value

    def _adopt(self, other: "Array") -> None:
        """Replace our handle with ``other``'s; the old handle is released once."""
        old = self._handle
        self._handle = other._handle
        self._lib = other._lib
        old.release()

    def release(self) -> None:
        """
        Release the native handle now.

        Safe to call more than once. Other owners created with ``retain()``
        keep the data alive.
        """
        self._handle.release()

    @property
    def is_released(self) -> bool:
        return self._handle.released

    def __enter__(self) -> "Array":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

    def retain(self) -> "Array":
        """Second owner of the same native data (``af_retain_array``)."""
        return _call_for_array(self._lib, "af_retain_array", self._raw(), context="retain array")

    def copy(self) -> "Array":
        """Deep copy (``af_copy_array``)."""
        return _call_for_array(self._lib, "af_copy_array", self._raw(), context="copy array")

    def eval(self) -> "Array":
        """Force evaluation of pending native work for this array."""
        _call(self._lib, "af_eval", self._raw())
        return self

    @property
    def ref_count(self) -> int:
        """Number of native owners of the underlying data."""
        out = ctypes.c_int()
        _call(self._lib, "af_get_data_ref_count", ctypes.byref(out), self._raw())
        return out.value

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def dims(self) -> Tuple[int, int, int, int]:
        """All four native extents."""
        d = [c_dim_t() for _ in range(MAX_DIMS)]
        _call(self._lib, "af_get_dims", *(ctypes.byref(x) for x in d), self._raw())
        return tuple(x.value for x in d)

    @property
    def ndim(self) -> int:
        out = ctypes.c_uint()
        _call(self._lib, "af_get_numdims", ctypes.byref(out), self._raw())
        return out.value

    @property
    def shape(self) -> Tuple[int, ...]:
        """Extents trimmed to ``ndim``."""
        dims = self.dims
        ndim = self.ndim
        if ndim == 0:
            # Native ndims is 0 for empty arrays; keep extents up to the last non-unit one
            ndim = max((i + 1 for i, d in enumerate(dims) if d != 1), default=1)
        return dims[:ndim]

    @property
    def elements(self) -> int:
        out = c_dim_t()
        _call(self._lib, "af_get_elements", ctypes.byref(out), self._raw())
        return out.value

    @property
    def dtype(self) -> Dtype:
        out = c_af_enum()
        _call(self._lib, "af_get_type", ctypes.byref(out), self._raw())
        return Dtype.from_native(out.value)

    @property
    def backend(self) -> Backend:
        """Backend that owns this array."""
        out = c_af_enum()
        _call(self._lib, "af_get_backend_id", ctypes.byref(out), self._raw())
        return Backend.from_native(out.value)

    def _predicate(self, name: str) -> bool:
        out = ctypes.c_bool()
        _call(self._lib, name, ctypes.byref(out), self._raw())
        return bool(out.value)

    @property
    def is_empty(self) -> bool:
        return self._predicate("af_is_empty")

    @property
    def is_scalar(self) -> bool:
        return self._predicate("af_is_scalar")

    @property
    def is_vector(self) -> bool:
        return self._predicate("af_is_vector")

    @property
    def is_complex(self) -> bool:
        return self._predicate("af_is_complex")

    @property
    def is_sparse(self) -> bool:
        return self._predicate("af_is_sparse")

    # =========================================================================
    # Host Conversion
    # =========================================================================

    def to_numpy(self) -> np.ndarray:
        """
        Copy the data back to the host.

        Returns:
            NumPy array of shape ``self.shape`` (Fortran-ordered)
        """
        dtype = self.dtype
        count = self.elements
        host = np.empty(count, dtype=dtype.numpy_dtype)
        if count:
            _call(self._lib, "af_get_data_ptr", host.ctypes.data_as(ctypes.c_void_p), self._raw(),
                  context="copy to host")
        return host.reshape(self.shape, order='F')

    def to_list(self) -> list:
        return self.to_numpy().tolist()

    def scalar(self) -> Any:
        """First element as a Python scalar."""
        return self.to_numpy().flat[0].item()

    def __array__(self, dtype=None, copy=None) -> np.ndarray:
        host = self.to_numpy()
        return host if dtype is None else host.astype(dtype)

    # =========================================================================
    # Operators
    # =========================================================================

    def _binary(self, name: str, other: Any, reflected: bool = False) -> "Array":
        from .arith import binary_op
        return binary_op(name, other, self) if reflected else binary_op(name, self, other)

    def _unary(self, name: str) -> "Array":
        from .arith import unary_op
        return unary_op(name, self)

    __add__ = functools.partialmethod(_binary, "af_add")
    __radd__ = functools.partialmethod(_binary, "af_add", reflected=True)
    __sub__ = functools.partialmethod(_binary, "af_sub")
    __rsub__ = functools.partialmethod(_binary, "af_sub", reflected=True)
    __mul__ = functools.partialmethod(_binary, "af_mul")
    __rmul__ = functools.partialmethod(_binary, "af_mul", reflected=True)
    __truediv__ = functools.partialmethod(_binary, "af_div")
    __rtruediv__ = functools.partialmethod(_binary, "af_div", reflected=True)
    __mod__ = functools.partialmethod(_binary, "af_mod")
    __rmod__ = functools.partialmethod(_binary, "af_mod", reflected=True)
    __pow__ = functools.partialmethod(_binary, "af_pow")
    __rpow__ = functools.partialmethod(_binary, "af_pow", reflected=True)
    __and__ = functools.partialmethod(_binary, "af_and")
    __rand__ = functools.partialmethod(_binary, "af_and", reflected=True)
    __or__ = functools.partialmethod(_binary, "af_or")
    __ror__ = functools.partialmethod(_binary, "af_or", reflected=True)

    __lt__ = functools.partialmethod(_binary, "af_lt")
    __le__ = functools.partialmethod(_binary, "af_le")
    __gt__ = functools.partialmethod(_binary, "af_gt")
    __ge__ = functools.partialmethod(_binary, "af_ge")
    __eq__ = functools.partialmethod(_binary, "af_eq")
    __ne__ = functools.partialmethod(_binary, "af_neq")

    __hash__ = None
    __iter__ = None

    def __neg__(self) -> "Array":
        return self._binary("af_sub", 0, reflected=True)

    def __pos__(self) -> "Array":
        return self

    def __abs__(self) -> "Array":
        return self._unary("af_abs")

    def __invert__(self) -> "Array":
        return self._unary("af_not")

    def __matmul__(self, other: "Array") -> "Array":
        from .blas import matmul
        return matmul(self, other)

    def __rmatmul__(self, other: "Array") -> "Array":
        from .blas import matmul
        return matmul(other, self)

    @property
    def T(self) -> "Array":
        from .blas import transpose
        return transpose(self)

    @property
    def H(self) -> "Array":
        from .blas import transpose
        return transpose(self, conjugate=True)

    def astype(self, dtype: DtypeLike) -> "Array":
        from .arith import cast
        return cast(self, dtype)

    # =========================================================================
    # Indexing
    # =========================================================================

    def __getitem__(self, key: Any) -> "Array":
        from .index import index_by_key
        return index_by_key(self, key)

    def __setitem__(self, key: Any, value: Any) -> None:
        from .index import assign_by_key
        self._adopt(assign_by_key(self, key, value))

    # =========================================================================
    # Magic Methods
    # =========================================================================

    def __bool__(self) -> bool:
        if self.elements != 1:
            raise ValueError(
                "The truth value of an Array with more than one element is ambiguous. "
                "Use afbind.all_true() or afbind.any_true()."
            )
        return bool(self.scalar())

    def __len__(self) -> int:
        return self.dims[0]

    def __repr__(self) -> str:
        if self.is_released:
            return "<afbind.Array [released]>"
        from .util import array_to_string
        return array_to_string(self)


# =============================================================================
# Construction Helpers
# =============================================================================

def array(data: Any, dtype: Optional[DtypeLike] = None) -> Array:
    """Copy host data (anything ``np.asarray`` accepts) to a new Array."""
    return Array.from_numpy(data, dtype=dtype)


def mk_array(shape: Sequence[int], values: Sequence[Any], dtype: Optional[DtypeLike] = None) -> Array:
    """
    Build an array from column-major values.

    The first ``prod(shape)`` values are used, filling dimension 0 first.

    Example:
        >>> mk_array((2, 2), [1, 2, 3, 4]).to_list()
        [[1, 3], [2, 4]]
    """
    shape = tuple(int(d) for d in shape)
    count = functools.reduce(operator.mul, shape, 1)
    values = list(itertools.islice(values, count))
    if len(values) < count:
        raise ValueError(f"Need {count} values for shape {shape}, got {len(values)}")
    host = np.asarray(values).reshape(shape, order='F')
    return Array.from_numpy(host, dtype=dtype)


def scalar(value: Any, dtype: Optional[DtypeLike] = None) -> Array:
    """Single-element array."""
    return mk_array((1,), [value], dtype=dtype)


def vector(length: int, values: Sequence[Any], dtype: Optional[DtypeLike] = None) -> Array:
    """One-dimensional array of the first ``length`` values."""
    return mk_array((length,), values, dtype=dtype)


def matrix(shape: Tuple[int, int], columns: Sequence[Sequence[Any]],
           dtype: Optional[DtypeLike] = None) -> Array:
    """
    Two-dimensional array given as a list of columns.

    Example:
        >>> matrix((3, 2), [[1, 2, 3], [4, 5, 6]]).to_list()
        [[1, 4], [2, 5], [3, 6]]
    """
    return mk_array(shape, _flatten(columns), dtype=dtype)


def cube(shape: Tuple[int, int, int], slices: Sequence[Any], dtype: Optional[DtypeLike] = None) -> Array:
    """Three-dimensional array given as nested column-major lists."""
    return mk_array(shape, _flatten(slices), dtype=dtype)


def tensor(shape: Tuple[int, int, int, int], volumes: Sequence[Any],
           dtype: Optional[DtypeLike] = None) -> Array:
    """Four-dimensional array given as nested column-major lists."""
    return mk_array(shape, _flatten(volumes), dtype=dtype)
