"""
Tests for native library discovery and signature setup.
"""

import ctypes

import pytest

from afbind._kernel import lib_loader, signatures
from afbind._kernel.lib_loader import LibraryNotFoundError


@pytest.fixture(autouse=True)
def clean_cache(monkeypatch):
    """Isolate the loader cache and search environment."""
    monkeypatch.setattr(lib_loader, "_lib_cache", {})
    monkeypatch.delenv("AFBIND_LIBRARY_PATH", raising=False)
    monkeypatch.delenv("AF_PATH", raising=False)


class TestFilenames:
    """Test platform-specific library names."""

    @pytest.mark.parametrize("platform, expected", [
        ("linux", ["libafcpu.so.3", "libafcpu.so"]),
        ("darwin", ["libafcpu.3.dylib", "libafcpu.dylib"]),
        ("win32", ["afcpu.dll"]),
    ])
    def test_library_filenames(self, monkeypatch, platform, expected):
        monkeypatch.setattr(lib_loader.sys, "platform", platform)
        assert lib_loader.library_filenames("afcpu") == expected


class TestFindLibrary:
    """Test the search order."""

    def test_env_directory(self, monkeypatch, tmp_path):
        monkeypatch.setattr(lib_loader.sys, "platform", "linux")
        target = tmp_path / "libafcpu.so.3"
        target.write_bytes(b"")
        monkeypatch.setenv("AFBIND_LIBRARY_PATH", str(tmp_path))
        assert lib_loader.find_library("afcpu") == str(target)

    def test_env_file_uses_its_directory(self, monkeypatch, tmp_path):
        monkeypatch.setattr(lib_loader.sys, "platform", "linux")
        target = tmp_path / "libaf.so"
        target.write_bytes(b"")
        monkeypatch.setenv("AFBIND_LIBRARY_PATH", str(target))
        assert lib_loader.find_library("af") == str(target)

    def test_af_path(self, monkeypatch, tmp_path):
        monkeypatch.setattr(lib_loader.sys, "platform", "linux")
        (tmp_path / "lib").mkdir()
        target = tmp_path / "lib" / "libafopencl.so.3"
        target.write_bytes(b"")
        monkeypatch.setenv("AF_PATH", str(tmp_path))
        assert lib_loader.find_library("afopencl") == str(target)

    def test_falls_back_to_system_loader(self, monkeypatch, tmp_path):
        monkeypatch.setattr(lib_loader, "_search_paths", lambda: [tmp_path])
        monkeypatch.setattr(lib_loader.ctypes.util, "find_library", lambda name: f"lib{name}.so.3")
        assert lib_loader.find_library("afcuda") == "libafcuda.so.3"


class TestLoadLibrary:
    """Test loading failures."""

    def test_not_found(self, monkeypatch, tmp_path):
        monkeypatch.setattr(lib_loader, "_search_paths", lambda: [tmp_path])
        monkeypatch.setattr(lib_loader.ctypes.util, "find_library", lambda name: None)
        with pytest.raises(LibraryNotFoundError, match="afcuda"):
            lib_loader.load_library("afcuda")

    def test_invalid_file(self, monkeypatch, tmp_path):
        bogus = tmp_path / "libaf.so.3"
        bogus.write_bytes(b"not a shared object")
        monkeypatch.setattr(lib_loader, "find_library", lambda name: str(bogus))
        with pytest.raises(LibraryNotFoundError, match="Failed to load"):
            lib_loader.load_library("af")

    def test_is_an_os_error(self):
        assert issubclass(LibraryNotFoundError, OSError)

    def test_cached(self, monkeypatch):
        sentinel = object()
        lib_loader._lib_cache["af"] = sentinel
        monkeypatch.setattr(lib_loader, "find_library", lambda name: pytest.fail("searched again"))
        assert lib_loader.load_library("af") is sentinel


class _Symbol:
    argtypes = None
    restype = None


class TestSetupFunctions:
    """Test signature application."""

    def test_applies_declared_types(self):
        class Library:
            af_matmul = _Symbol()
            af_release_array = _Symbol()

        lib = signatures.setup_functions(Library())
        argtypes, restype = signatures.SIGNATURES["af_matmul"]
        assert lib.af_matmul.argtypes == argtypes
        assert lib.af_matmul.restype is restype

    def test_missing_symbols_skipped(self):
        class Library:
            af_get_version = _Symbol()

        lib = signatures.setup_functions(Library())
        assert lib.af_get_version.argtypes is not None
        assert not hasattr(lib, "af_matmul")

    def test_every_entry_returns_status(self):
        exempt = {"af_get_last_error", "af_err_to_string"}
        for name, (argtypes, restype) in signatures.SIGNATURES.items():
            assert name.startswith("af_")
            assert isinstance(argtypes, list)
            if name not in exempt:
                assert restype is ctypes.c_int, name
