"""
Smoke tests against an installed ArrayFire library.

Skipped automatically when no native library can be loaded.
"""

import numpy as np
import pytest

import afbind
from afbind import AFError, ErrorType, util

from conftest import assert_array_equal


class TestNative:
    """Exercise the real C API end to end."""

    def test_round_trip(self, native_af, host_matrix):
        a = afbind.array(host_matrix)
        assert a.shape == (2, 3)
        np.testing.assert_array_equal(a.to_numpy(), host_matrix)

    def test_matmul(self, native_af, square_matrix):
        a = afbind.array(square_matrix)
        assert_array_equal(afbind.matmul(a, a), square_matrix @ square_matrix)

    def test_matmul_size_mismatch(self, native_af):
        a = afbind.constant(1.0, (2, 3))
        with pytest.raises(AFError) as exc_info:
            afbind.matmul(a, a)
        assert exc_info.value.error_type is ErrorType.SIZE
        assert exc_info.value.code == 203

    def test_transpose(self, native_af, host_matrix):
        t = afbind.transpose(afbind.array(host_matrix))
        assert t.shape == (3, 2)
        np.testing.assert_array_equal(t.to_numpy(), host_matrix.T)

    def test_reduction(self, native_af, host_matrix):
        assert afbind.sum(afbind.array(host_matrix)) == pytest.approx(21.0)

    def test_save_and_read(self, native_af, tmp_path, host_matrix):
        path = tmp_path / "native.af"
        util.save_array("m", afbind.array(host_matrix), path)
        back = util.read_array(path, key="m")
        np.testing.assert_array_equal(back.to_numpy(), host_matrix)
