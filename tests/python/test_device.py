"""
Tests for device and backend management.
"""

import pytest

import afbind
from afbind import AFError, Backend, ErrorType, device


class TestDevices:
    """Test device queries and selection."""

    def test_count_and_current(self):
        assert device.get_device_count() == 2
        assert device.get_device() == 0

    def test_set_device(self, fake_af):
        device.set_device(1)
        assert device.get_device() == 1
        assert fake_af.device_history == [1]

    def test_set_invalid_device(self):
        with pytest.raises(AFError) as exc_info:
            device.set_device(7)
        assert exc_info.value.error_type is ErrorType.ARGUMENT
        assert "set device 7" in exc_info.value.message

    def test_negative_device_rejected_before_native_call(self, fake_af):
        with pytest.raises(ValueError):
            device.set_device(-1)
        assert fake_af.calls["af_set_device"] == 0

    def test_on_device_restores(self, fake_af):
        with device.on_device(1) as active:
            assert active == 1
            assert device.get_device() == 1
        assert device.get_device() == 0
        assert fake_af.device_history == [1, 0]

    def test_on_device_restores_after_error(self):
        with pytest.raises(RuntimeError):
            with device.on_device(1):
                raise RuntimeError("inside")
        assert device.get_device() == 0

    def test_dbl_support_and_version(self):
        assert device.dbl_support() is True
        assert device.get_version() == (3, 9, 0)

    def test_sync_and_gc(self, fake_af):
        device.sync()
        device.device_gc()
        assert fake_af.calls["af_sync"] == 1
        assert fake_af.calls["af_device_gc"] == 1

    def test_info_string_is_freed(self, fake_af):
        text = device.info_string()
        assert "Fake ArrayFire" in text
        assert fake_af._host_allocs == {}

    def test_info_prints(self, capsys):
        device.info()
        assert "Fake ArrayFire" in capsys.readouterr().out


class TestBackends:
    """Test backend queries and switching."""

    def test_available_backends(self):
        assert device.available_backends() == [Backend.CPU, Backend.OPENCL]

    def test_active_backend(self):
        assert device.get_active_backend() is Backend.CPU

    def test_unified_switch_is_forwarded(self, fake_af):
        device.set_backend("opencl")
        assert fake_af.active_backend == 4
        assert device.get_active_backend() is Backend.OPENCL
        assert afbind.get_default_backend() is Backend.DEFAULT

    def test_unavailable_backend(self):
        with pytest.raises(AFError) as exc_info:
            device.set_backend(Backend.CUDA)
        assert exc_info.value.error_type is ErrorType.LOAD_LIBRARY

    def test_specific_backend_switches_configuration(self, fake_af):
        afbind.set_default_backend(Backend.CPU)
        device.set_backend(Backend.OPENCL)
        assert afbind.get_default_backend() is Backend.OPENCL
        assert fake_af.calls["af_set_backend"] == 0

    def test_backend_codes(self):
        assert [b.to_native() for b in Backend] == [0, 1, 2, 4]
        for b in Backend:
            assert Backend.from_native(b.to_native()) is b
        with pytest.raises(ValueError):
            Backend.from_native(3)
