"""
Tests for matrix multiply, dot products and transposition.
"""

import numpy as np
import pytest

import afbind
from afbind import AFError, ErrorType, MatProp, blas

from conftest import assert_array_equal


class TestMatmul:
    """Test matrix multiplication."""

    def test_matmul_values(self, host_matrix):
        a = afbind.array(host_matrix)
        b = afbind.array(host_matrix.T.copy())
        assert_array_equal(a @ b, host_matrix @ host_matrix.T)

    def test_matmul_options(self, host_matrix):
        a = afbind.array(host_matrix)
        result = afbind.matmul(a, a, MatProp.NONE, MatProp.TRANS)
        assert_array_equal(result, host_matrix @ host_matrix.T)

    def test_size_mismatch_raises(self):
        a = afbind.constant(1.0, (3, 3))
        b = afbind.constant(1.0, (2, 2))
        with pytest.raises(AFError) as exc_info:
            a @ b
        assert exc_info.value.code == 203
        assert exc_info.value.error_type is ErrorType.SIZE
        assert "matmul" in exc_info.value.message


class TestDot:
    """Test inner products."""

    def test_dot(self):
        a = afbind.array([1.0, 2.0, 3.0])
        b = afbind.array([4.0, 5.0, 6.0])
        assert blas.dot(a, b).scalar() == 32.0
        assert blas.dot_all(a, b) == 32.0

    def test_dot_conjugate(self):
        a = afbind.array([1j, 2.0])
        b = afbind.array([1j, 1.0])
        assert blas.dot_all(a, b) == pytest.approx(1.0 + 0j)
        assert blas.dot_all(a, b, MatProp.CONJ) == pytest.approx(3.0 + 0j)

    def test_dot_rejects_transpose_options(self, fake_af):
        a = afbind.array([1.0])
        with pytest.raises(ValueError):
            blas.dot(a, a, MatProp.TRANS)
        assert fake_af.calls["af_dot"] == 0


class TestTranspose:
    """Test transposition."""

    def test_transpose_shape(self):
        a = afbind.constant(1.0, (2, 3))
        t = afbind.transpose(a)
        assert t.shape == (3, 2)
        assert a.T.shape == (3, 2)

    def test_conjugation_only_with_flag(self):
        host = np.array([[1 + 1j, 2 - 1j, 3j], [4, 5 + 2j, 6]])
        a = afbind.array(host)
        np.testing.assert_array_equal(afbind.transpose(a).to_numpy(), host.T)
        np.testing.assert_array_equal(afbind.transpose(a, conjugate=True).to_numpy(), host.conj().T)
        np.testing.assert_array_equal(a.H.to_numpy(), host.conj().T)

    def test_transpose_inplace_visible_to_retained_owner(self):
        a = afbind.array(np.array([[1.0, 2.0], [3.0, 4.0]]))
        b = a.retain()
        blas.transpose_inplace(a)
        assert b.to_list() == [[1.0, 3.0], [2.0, 4.0]]

    def test_transpose_inplace_needs_square(self):
        with pytest.raises(AFError):
            blas.transpose_inplace(afbind.constant(1.0, (2, 3)))
