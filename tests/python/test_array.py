"""
Tests for the Array value type.
"""

import numpy as np
import pytest

import afbind
from afbind import AFError, Array, Dtype

from conftest import assert_array_equal


class TestConstruction:
    """Test host-to-device construction."""

    def test_from_numpy_round_trip(self, host_matrix):
        a = Array.from_numpy(host_matrix)
        assert a.shape == (2, 3)
        assert a.dims == (2, 3, 1, 1)
        assert a.ndim == 2
        assert a.elements == 6
        assert a.dtype is Dtype.F32
        np.testing.assert_array_equal(a.to_numpy(), host_matrix)

    def test_constructor_accepts_lists(self):
        a = Array([[1, 2], [3, 4]])
        assert a.dtype is Dtype.S64
        assert a.to_list() == [[1, 2], [3, 4]]

    def test_explicit_dtype(self):
        a = afbind.array([1, 2, 3], dtype='f32')
        assert a.dtype is Dtype.F32

    def test_zero_dim_becomes_one_element(self):
        a = afbind.array(np.float64(2.5))
        assert a.shape == (1,)
        assert a.scalar() == 2.5

    def test_empty_array_uses_create_handle(self, fake_af):
        a = afbind.array(np.zeros((0,), dtype=np.float32))
        assert fake_af.calls["af_create_handle"] == 1
        assert a.elements == 0
        assert a.is_empty

    @pytest.mark.parametrize("shape", [(0,), (0, 3), (2, 0), (2, 0, 4)])
    def test_empty_array_keeps_shape(self, shape):
        host = np.zeros(shape, dtype=np.float32)
        a = afbind.array(host)
        assert a.ndim == 0
        assert a.shape == shape
        assert a.to_numpy().shape == shape

    def test_trailing_singleton_dims_dropped(self):
        a = afbind.array(np.zeros((3, 1), dtype=np.float32))
        assert a.dims == (3, 1, 1, 1)
        assert a.shape == (3,)

    def test_too_many_dims_rejected_before_native_call(self, fake_af):
        with pytest.raises(ValueError):
            afbind.array(np.zeros((1, 1, 1, 1, 2)))
        assert fake_af.calls["af_create_array"] == 0

    def test_unsupported_dtype(self, fake_af):
        with pytest.raises(TypeError):
            afbind.array(np.array(["a", "b"]))
        assert fake_af.created == 0

    def test_no_data_rejected(self):
        with pytest.raises(TypeError):
            Array()


class TestColumnMajorHelpers:
    """Test helpers that take column-major values."""

    def test_mk_array(self):
        a = afbind.mk_array((2, 2), [1, 2, 3, 4])
        assert a.to_list() == [[1, 3], [2, 4]]

    def test_mk_array_needs_enough_values(self):
        with pytest.raises(ValueError):
            afbind.mk_array((2, 2), [1, 2, 3])

    def test_matrix_from_columns(self):
        m = afbind.matrix((3, 2), [[1, 2, 3], [4, 5, 6]])
        assert m.to_list() == [[1, 4], [2, 5], [3, 6]]

    def test_vector_and_scalar(self):
        v = afbind.vector(3, [7, 8, 9, 10])
        assert v.to_list() == [7, 8, 9]
        assert afbind.scalar(5.0).scalar() == 5.0

    def test_cube_and_tensor(self):
        c = afbind.cube((2, 1, 2), [[1, 2], [3, 4]])
        assert c.dims == (2, 1, 2, 1)
        assert c.to_numpy()[:, 0, 1].tolist() == [3, 4]
        t = afbind.tensor((1, 1, 1, 2), [1, 2])
        assert t.dims == (1, 1, 1, 2)


class TestProperties:
    """Test property queries."""

    def test_predicates(self):
        v = afbind.array([1.0, 2.0, 3.0])
        assert v.is_vector
        assert not v.is_scalar
        assert not v.is_complex
        assert not v.is_sparse
        assert afbind.scalar(1.0).is_scalar
        assert afbind.array([1 + 2j]).is_complex

    def test_len(self, host_matrix):
        assert len(afbind.array(host_matrix)) == 2

    def test_backend(self):
        assert afbind.array([1.0]).backend is afbind.Backend.CPU

    def test_eval_returns_self(self):
        a = afbind.array([1.0])
        assert a.eval() is a

    def test_repr_uses_native_rendering(self, fake_af):
        text = repr(afbind.array([1.0, 2.0]))
        assert "[2 1 1 1]" in text
        assert fake_af._host_allocs == {}


class TestOperators:
    """Test operator overloads."""

    def test_arithmetic_with_arrays(self):
        a = afbind.array([1.0, 2.0, 3.0])
        b = afbind.array([4.0, 5.0, 6.0])
        assert_array_equal(a + b, [5.0, 7.0, 9.0])
        assert_array_equal(b - a, [3.0, 3.0, 3.0])
        assert_array_equal(a * b, [4.0, 10.0, 18.0])
        assert_array_equal(b / a, [4.0, 2.5, 2.0])
        assert_array_equal(a ** 2, [1.0, 4.0, 9.0])
        assert_array_equal(b % 4, [0.0, 1.0, 2.0])

    def test_reflected_scalars(self):
        a = afbind.array([1.0, 2.0])
        assert_array_equal(10 - a, [9.0, 8.0])
        assert_array_equal(2 * a, [2.0, 4.0])
        assert_array_equal(1 / a, [1.0, 0.5])

    def test_scalar_keeps_array_dtype(self):
        a = afbind.array(np.array([1.0, 2.0], dtype=np.float32))
        assert (a + 1).dtype is Dtype.F32

    def test_unary(self):
        a = afbind.array([-1.0, 2.0])
        assert_array_equal(-a, [1.0, -2.0])
        assert_array_equal(abs(a), [1.0, 2.0])
        assert (+a) is a

    def test_comparisons_are_elementwise(self):
        a = afbind.array([1.0, 2.0, 3.0])
        result = a > 1.5
        assert result.dtype is Dtype.B8
        assert result.to_list() == [False, True, True]
        assert (a == 2.0).to_list() == [False, True, False]
        assert (a != 2.0).to_list() == [True, False, True]
        assert (a <= 2.0).to_list() == [True, True, False]

    def test_logical(self):
        a = afbind.array([True, False, True])
        b = afbind.array([True, True, False])
        assert (a & b).to_list() == [True, False, False]
        assert (a | b).to_list() == [True, True, True]
        assert (~a).to_list() == [False, True, False]

    def test_size_mismatch(self):
        a = afbind.array([1.0, 2.0])
        b = afbind.array([1.0, 2.0, 3.0])
        with pytest.raises(AFError) as exc_info:
            a + b
        assert exc_info.value.code == 203

    def test_unsupported_operand(self):
        with pytest.raises(TypeError):
            afbind.array([1.0]) + "x"

    def test_bool_single_element(self):
        assert bool(afbind.array([1.0]))
        assert not bool(afbind.array([0.0]))

    def test_bool_ambiguous(self):
        with pytest.raises(ValueError, match="ambiguous"):
            bool(afbind.array([1.0, 2.0]))

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(afbind.array([1.0]))

    def test_astype(self):
        a = afbind.array([1.7, 2.2]).astype(afbind.int32)
        assert a.dtype is Dtype.S32
        assert a.to_list() == [1, 2]

    def test_numpy_conversion(self, host_matrix):
        a = afbind.array(host_matrix)
        np.testing.assert_array_equal(np.asarray(a), host_matrix)
