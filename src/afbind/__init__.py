"""
afbind - ArrayFire bindings

Python access to the ArrayFire parallel array library (CPU, CUDA and OpenCL
backends) through its C API.

Arrays:
    Array: Owned native array; released exactly once (scope exit, explicit
        ``release()`` or garbage collection)
    array, scalar, vector, matrix, cube, tensor: Construction helpers

Function Modules:
    arith, data, random, blas, index, algorithm, statistics, lapack,
    signal, sparse, device, util

Errors:
    AFError carries the native status code, its ErrorType and the message
    recorded by the library. Every native call is checked immediately.

Backend Selection:
    Library is loaded lazily on the first native call. Use
    set_default_backend() / AFBIND_BACKEND to choose which build serves new
    arrays.

Usage:
    >>> import numpy as np
    >>> import afbind as af
    >>> a = af.array(np.eye(3, dtype=np.float32))
    >>> b = a @ a.T
    >>> af.sum(b)
    3.0
    >>> with af.randu((2, 3)) as r:
    ...     r.T.shape
    (3, 2)
"""

__version__ = "0.1.0"

from . import (
    algorithm,
    arith,
    blas,
    data,
    device,
    index,
    lapack,
    random,
    signal,
    sparse,
    statistics,
    util,
)
from .array import Array, array, cube, matrix, mk_array, scalar, tensor, vector
from .config import (
    Backend,
    get_default_backend,
    get_library,
    set_default_backend,
    set_default_device,
    set_library,
)
from .dtypes import (
    Dtype,
    bool8, complex64, complex128, float16, float32, float64,
    int16, int32, int64, uint8, uint16, uint32, uint64,
)
from .enums import ConvDomain, ConvMode, MatProp, NormType, Storage
from .error import AFError, ErrorType, check_error, get_last_error
from .index import Index, Seq, span
from ._kernel.lib_loader import LibraryNotFoundError

# Common functions at package level
from .algorithm import accum, all_true, any_true, count, max, min, product, sort, sum, where
from .blas import dot, matmul, transpose
from .data import constant, flat, identity, iota, join, moddims, range, reorder, tile
from .random import randn, randu
from .statistics import mean, median, stdev, var

__all__ = [
    # Version
    "__version__",
    # Arrays
    "Array",
    "array",
    "mk_array",
    "scalar",
    "vector",
    "matrix",
    "cube",
    "tensor",
    # Types and options
    "Dtype",
    "bool8", "complex64", "complex128", "float16", "float32", "float64",
    "int16", "int32", "int64", "uint8", "uint16", "uint32", "uint64",
    "MatProp",
    "Storage",
    "NormType",
    "ConvMode",
    "ConvDomain",
    "Seq",
    "Index",
    "span",
    # Error handling
    "AFError",
    "ErrorType",
    "LibraryNotFoundError",
    "check_error",
    "get_last_error",
    # Configuration
    "Backend",
    "set_default_backend",
    "get_default_backend",
    "set_default_device",
    "set_library",
    "get_library",
    # Modules
    "algorithm",
    "arith",
    "blas",
    "data",
    "device",
    "index",
    "lapack",
    "random",
    "signal",
    "sparse",
    "statistics",
    "util",
    # Functions
    "sum", "product", "min", "max", "all_true", "any_true", "count",
    "accum", "sort", "where",
    "matmul", "dot", "transpose",
    "constant", "range", "iota", "identity", "moddims", "flat", "join",
    "tile", "reorder",
    "randu", "randn",
    "mean", "var", "stdev", "median",
]
