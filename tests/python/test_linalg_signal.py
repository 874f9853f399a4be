"""
Tests for LAPACK, signal processing and sparse storage.
"""

import numpy as np
import pytest

import afbind
from afbind import AFError, ConvMode, MatProp, NormType, Storage, lapack, signal, sparse

from conftest import assert_array_equal


class TestLapack:
    """Test dense linear algebra."""

    def test_inverse(self, square_matrix):
        inv = lapack.inverse(afbind.array(square_matrix))
        assert_array_equal(inv, np.linalg.inv(square_matrix))

    def test_inverse_needs_square(self):
        with pytest.raises(AFError) as exc_info:
            lapack.inverse(afbind.constant(1.0, (2, 3)))
        assert exc_info.value.code == 203

    def test_det(self, square_matrix):
        assert lapack.det(afbind.array(square_matrix)) == pytest.approx(10.0)

    def test_solve(self, square_matrix):
        b = np.array([[1.0], [2.0]])
        x = lapack.solve(afbind.array(square_matrix), afbind.array(b))
        assert x.shape == (2,)
        assert_array_equal(x, np.linalg.solve(square_matrix, b).ravel())

    def test_solve_triangular(self):
        upper = np.array([[2.0, 1.0], [0.0, 4.0]])
        b = np.array([[3.0], [4.0]])
        x = lapack.solve(afbind.array(upper), afbind.array(b), MatProp.UPPER)
        assert_array_equal(x, [1.0, 1.0])

    def test_rank(self):
        singular = np.array([[1.0, 2.0], [2.0, 4.0]])
        assert lapack.rank(afbind.array(singular)) == 1

    def test_norms(self, square_matrix):
        v = afbind.array([3.0, -4.0])
        assert lapack.norm(v) == pytest.approx(5.0)
        assert lapack.norm(v, NormType.VECTOR_1) == pytest.approx(7.0)
        assert lapack.norm(v, NormType.VECTOR_INF) == pytest.approx(4.0)
        m = afbind.array(square_matrix)
        assert lapack.norm(m, NormType.MATRIX_1) == pytest.approx(13.0)


class TestSignal:
    """Test FFT and convolution."""

    def test_fft_matches_numpy(self):
        host = np.array([1.0, 2.0, 0.0, -1.0])
        result = signal.fft(afbind.array(host))
        assert result.is_complex
        np.testing.assert_allclose(result.to_numpy(), np.fft.fft(host))

    def test_ifft_round_trip(self):
        host = np.array([1.0, 2.0, 0.0, -1.0])
        back = signal.ifft(signal.fft(afbind.array(host)))
        np.testing.assert_allclose(back.to_numpy().real, host, atol=1e-12)

    def test_fft_padding(self):
        result = signal.fft(afbind.array([1.0, 1.0]), pad=4)
        assert result.shape == (4,)

    def test_convolve_modes(self):
        s = afbind.array([1.0, 2.0, 3.0, 4.0])
        k = afbind.array([1.0, 1.0, 1.0])
        assert signal.convolve1(s, k).shape == (4,)
        full = signal.convolve1(s, k, ConvMode.EXPAND)
        assert full.to_list() == [1.0, 3.0, 6.0, 9.0, 7.0, 4.0]


class TestSparse:
    """Test sparse conversion."""

    def test_round_trip(self):
        dense = np.array([[1.0, 0.0], [0.0, 2.0]], dtype=np.float32)
        sp = sparse.from_dense(afbind.array(dense))
        assert sp.is_sparse
        assert sparse.storage(sp) is Storage.CSR
        assert sparse.nnz(sp) == 2
        back = sparse.to_dense(sp)
        assert not back.is_sparse
        np.testing.assert_array_equal(back.to_numpy(), dense)

    def test_convert(self):
        sp = sparse.from_dense(afbind.identity((3, 3)), Storage.COO)
        csc = sparse.convert_to(sp, Storage.CSC)
        assert sparse.storage(csc) is Storage.CSC

    def test_dense_storage_rejected(self, fake_af):
        with pytest.raises(ValueError):
            sparse.from_dense(afbind.identity((2, 2)), Storage.DENSE)
        assert fake_af.calls["af_create_sparse_array_from_dense"] == 0

    def test_sparse_query_on_dense(self):
        with pytest.raises(AFError):
            sparse.nnz(afbind.identity((2, 2)))

    def test_sparse_matmul(self):
        sp = sparse.from_dense(afbind.identity((2, 2)))
        rhs = afbind.array(np.array([[1.0], [2.0]], dtype=np.float32))
        assert_array_equal(sp @ rhs, [1.0, 2.0])
