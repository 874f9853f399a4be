"""
Function Signatures

``argtypes``/``restype`` declarations for every ArrayFire C symbol the
binding calls. Applied once per loaded library by ``setup_functions``.
"""

import ctypes
import logging
from ctypes import (
    POINTER, c_bool, c_char_p, c_double, c_int, c_longlong, c_uint, c_ulonglong,
    c_size_t, c_void_p,
)

from .types import AFIndex, AFSeq, c_af_array, c_af_enum, c_af_err, c_dim_t

__all__ = ['SIGNATURES', 'setup_functions']

logger = logging.getLogger("afbind.signatures")

_OUT = POINTER(c_af_array)
_ARR = c_af_array
_DIMS = POINTER(c_dim_t)

# Unary elementwise functions: af_err fn(af_array *out, const af_array in)
_UNARY = [
    'af_abs', 'af_sign', 'af_round', 'af_floor', 'af_ceil', 'af_sqrt',
    'af_exp', 'af_log', 'af_sin', 'af_cos', 'af_tan', 'af_tanh',
    'af_sigmoid', 'af_not', 'af_conjg', 'af_real', 'af_imag', 'af_isnan',
]

# Binary elementwise functions:
# af_err fn(af_array *out, const af_array lhs, const af_array rhs, const bool batch)
_BINARY = [
    'af_add', 'af_sub', 'af_mul', 'af_div', 'af_rem', 'af_mod', 'af_pow',
    'af_lt', 'af_gt', 'af_le', 'af_ge', 'af_eq', 'af_neq', 'af_and', 'af_or',
    'af_minof', 'af_maxof', 'af_atan2',
]

# Reductions along a dimension: af_err fn(af_array *out, const af_array in, const int dim)
_REDUCE = [
    'af_sum', 'af_product', 'af_min', 'af_max',
    'af_all_true', 'af_any_true', 'af_count', 'af_accum',
]

# Whole-array reductions: af_err fn(double *real, double *imag, const af_array in)
_REDUCE_ALL = [
    'af_sum_all', 'af_product_all', 'af_min_all', 'af_max_all',
    'af_all_true_all', 'af_any_true_all', 'af_count_all',
    'af_mean_all', 'af_stdev_all', 'af_median_all', 'af_det',
]

# Array predicates: af_err fn(bool *result, const af_array arr)
_PREDICATES = [
    'af_is_empty', 'af_is_scalar', 'af_is_vector', 'af_is_complex',
    'af_is_sparse',
]

SIGNATURES = {
    # --- Errors ---
    'af_get_last_error': ([POINTER(c_void_p), POINTER(c_dim_t)], None),
    'af_err_to_string': ([c_af_err], c_char_p),
    'af_free_host': ([c_void_p], c_af_err),

    # --- Array lifecycle ---
    'af_create_array': ([_OUT, c_void_p, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_create_handle': ([_OUT, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_copy_array': ([_OUT, _ARR], c_af_err),
    'af_get_data_ptr': ([c_void_p, _ARR], c_af_err),
    'af_release_array': ([_ARR], c_af_err),
    'af_retain_array': ([_OUT, _ARR], c_af_err),
    'af_get_data_ref_count': ([POINTER(c_int), _ARR], c_af_err),
    'af_eval': ([_ARR], c_af_err),

    # --- Array properties ---
    'af_get_elements': ([POINTER(c_dim_t), _ARR], c_af_err),
    'af_get_type': ([POINTER(c_af_enum), _ARR], c_af_err),
    'af_get_dims': ([_DIMS, _DIMS, _DIMS, _DIMS, _ARR], c_af_err),
    'af_get_numdims': ([POINTER(c_uint), _ARR], c_af_err),

    # --- Arithmetic ---
    'af_cast': ([_OUT, _ARR, c_af_enum], c_af_err),

    # --- Data ---
    'af_constant': ([_OUT, c_double, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_constant_complex': ([_OUT, c_double, c_double, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_constant_long': ([_OUT, c_longlong, c_uint, _DIMS], c_af_err),
    'af_constant_ulong': ([_OUT, c_ulonglong, c_uint, _DIMS], c_af_err),
    'af_range': ([_OUT, c_uint, _DIMS, c_int, c_af_enum], c_af_err),
    'af_iota': ([_OUT, c_uint, _DIMS, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_identity': ([_OUT, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_moddims': ([_OUT, _ARR, c_uint, _DIMS], c_af_err),
    'af_flat': ([_OUT, _ARR], c_af_err),
    'af_join': ([_OUT, c_int, _ARR, _ARR], c_af_err),
    'af_tile': ([_OUT, _ARR, c_uint, c_uint, c_uint, c_uint], c_af_err),
    'af_reorder': ([_OUT, _ARR, c_uint, c_uint, c_uint, c_uint], c_af_err),
    'af_diag_create': ([_OUT, _ARR, c_int], c_af_err),
    'af_diag_extract': ([_OUT, _ARR, c_int], c_af_err),

    # --- Random ---
    'af_randu': ([_OUT, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_randn': ([_OUT, c_uint, _DIMS, c_af_enum], c_af_err),
    'af_set_seed': ([c_ulonglong], c_af_err),
    'af_get_seed': ([POINTER(c_ulonglong)], c_af_err),

    # --- BLAS ---
    'af_matmul': ([_OUT, _ARR, _ARR, c_af_enum, c_af_enum], c_af_err),
    'af_dot': ([_OUT, _ARR, _ARR, c_af_enum, c_af_enum], c_af_err),
    'af_dot_all': ([POINTER(c_double), POINTER(c_double), _ARR, _ARR, c_af_enum, c_af_enum], c_af_err),
    'af_transpose': ([_OUT, _ARR, c_bool], c_af_err),
    'af_transpose_inplace': ([_ARR, c_bool], c_af_err),

    # --- Index ---
    'af_index': ([_OUT, _ARR, c_uint, POINTER(AFSeq)], c_af_err),
    'af_lookup': ([_OUT, _ARR, _ARR, c_uint], c_af_err),
    'af_assign_seq': ([_OUT, _ARR, c_uint, POINTER(AFSeq), _ARR], c_af_err),
    'af_index_gen': ([_OUT, _ARR, c_dim_t, POINTER(AFIndex)], c_af_err),
    'af_assign_gen': ([_OUT, _ARR, c_dim_t, POINTER(AFIndex), _ARR], c_af_err),

    # --- Algorithm ---
    'af_sort': ([_OUT, _ARR, c_uint, c_bool], c_af_err),
    'af_where': ([_OUT, _ARR], c_af_err),

    # --- Statistics ---
    'af_mean': ([_OUT, _ARR, c_dim_t], c_af_err),
    'af_var': ([_OUT, _ARR, c_bool, c_dim_t], c_af_err),
    'af_var_all': ([POINTER(c_double), POINTER(c_double), _ARR, c_bool], c_af_err),
    'af_stdev': ([_OUT, _ARR, c_dim_t], c_af_err),
    'af_median': ([_OUT, _ARR, c_dim_t], c_af_err),
    'af_cov': ([_OUT, _ARR, _ARR, c_bool], c_af_err),
    'af_corrcoef': ([POINTER(c_double), POINTER(c_double), _ARR, _ARR], c_af_err),

    # --- LAPACK ---
    'af_inverse': ([_OUT, _ARR, c_af_enum], c_af_err),
    'af_solve': ([_OUT, _ARR, _ARR, c_af_enum], c_af_err),
    'af_rank': ([POINTER(c_uint), _ARR, c_double], c_af_err),
    'af_norm': ([POINTER(c_double), _ARR, c_af_enum, c_double, c_double], c_af_err),

    # --- Signal ---
    'af_fft': ([_OUT, _ARR, c_double, c_dim_t], c_af_err),
    'af_ifft': ([_OUT, _ARR, c_double, c_dim_t], c_af_err),
    'af_convolve1': ([_OUT, _ARR, _ARR, c_af_enum, c_af_enum], c_af_err),

    # --- Sparse ---
    'af_create_sparse_array_from_dense': ([_OUT, _ARR, c_af_enum], c_af_err),
    'af_sparse_to_dense': ([_OUT, _ARR], c_af_err),
    'af_sparse_get_nnz': ([POINTER(c_dim_t), _ARR], c_af_err),
    'af_sparse_get_storage': ([POINTER(c_af_enum), _ARR], c_af_err),
    'af_sparse_convert_to': ([_OUT, _ARR, c_af_enum], c_af_err),

    # --- Device ---
    'af_info': ([], c_af_err),
    'af_info_string': ([POINTER(c_void_p), c_bool], c_af_err),
    'af_get_device_count': ([POINTER(c_int)], c_af_err),
    'af_set_device': ([c_int], c_af_err),
    'af_get_device': ([POINTER(c_int)], c_af_err),
    'af_sync': ([c_int], c_af_err),
    'af_device_gc': ([], c_af_err),
    'af_get_dbl_support': ([POINTER(c_bool), c_int], c_af_err),
    'af_get_version': ([POINTER(c_int), POINTER(c_int), POINTER(c_int)], c_af_err),

    # --- Backend ---
    'af_set_backend': ([c_af_enum], c_af_err),
    'af_get_active_backend': ([POINTER(c_af_enum)], c_af_err),
    'af_get_available_backends': ([POINTER(c_int)], c_af_err),
    'af_get_backend_id': ([POINTER(c_af_enum), _ARR], c_af_err),

    # --- Util / serialization ---
    'af_save_array': ([POINTER(c_int), c_char_p, _ARR, c_char_p, c_bool], c_af_err),
    'af_read_array_index': ([_OUT, c_char_p, c_uint], c_af_err),
    'af_read_array_key': ([_OUT, c_char_p, c_char_p], c_af_err),
    'af_read_array_key_check': ([POINTER(c_int), c_char_p, c_char_p], c_af_err),
    'af_array_to_string': ([POINTER(c_void_p), c_char_p, _ARR, c_int, c_bool], c_af_err),
    'af_print_array_gen': ([c_char_p, _ARR, c_int], c_af_err),
}

SIGNATURES.update({name: ([_OUT, _ARR], c_af_err) for name in _UNARY})
SIGNATURES.update({name: ([_OUT, _ARR, _ARR, c_bool], c_af_err) for name in _BINARY})
SIGNATURES.update({name: ([_OUT, _ARR, c_int], c_af_err) for name in _REDUCE})
SIGNATURES.update({
    name: ([POINTER(c_double), POINTER(c_double), _ARR], c_af_err) for name in _REDUCE_ALL
})
SIGNATURES.update({name: ([POINTER(c_bool), _ARR], c_af_err) for name in _PREDICATES})


def setup_functions(lib: ctypes.CDLL) -> ctypes.CDLL:
    """
    Declare argument and return types on a freshly loaded library.

    Symbols missing from older native releases are skipped; calling one of
    them later raises ``AttributeError`` from ctypes.

    Args:
        lib: Library returned by ``ctypes.CDLL``

    Returns:
        The same library, with signatures applied
    """
    missing = []
    for name, (argtypes, restype) in SIGNATURES.items():
        try:
            func = getattr(lib, name)
        except AttributeError:
            missing.append(name)
            continue
        func.argtypes = argtypes
        func.restype = restype

    if missing:
        logger.debug("Native library lacks %d symbols: %s", len(missing), ", ".join(sorted(missing)))
    return lib
