"""Dynamic library loader for the ArrayFire C API.

Handles platform-specific library discovery with lazy, per-backend caching.
"""

import ctypes
import ctypes.util
import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

from .signatures import setup_functions

__all__ = ['load_library', 'find_library', 'library_filenames', 'LibraryNotFoundError']

logger = logging.getLogger("afbind.lib_loader")


class LibraryNotFoundError(OSError):
    """Raised when an ArrayFire library cannot be found or loaded."""
    pass


# Global library cache, keyed by library base name ('af', 'afcpu', ...)
_lib_cache = {}


def library_filenames(base_name: str) -> List[str]:
    """Get candidate filenames for a library base name on this platform.

    Args:
        base_name: Library name without prefix or suffix, e.g. ``'afcuda'``.

    Returns:
        Filenames in preference order.
    """
    if sys.platform == 'win32':
        return [f'{base_name}.dll']
    elif sys.platform == 'darwin':
        return [f'lib{base_name}.3.dylib', f'lib{base_name}.dylib']
    else:  # Linux
        return [f'lib{base_name}.so.3', f'lib{base_name}.so']


def _search_paths() -> List[Path]:
    """Directories to search, in order.

    Search order:
        1. Environment variable: AFBIND_LIBRARY_PATH
        2. ArrayFire installer variable: AF_PATH (lib64/, lib/)
        3. Default install prefixes
    """
    paths = []

    env_path = os.environ.get('AFBIND_LIBRARY_PATH')
    if env_path:
        env_path = Path(env_path)
        paths.append(env_path if env_path.is_dir() else env_path.parent)

    af_path = os.environ.get('AF_PATH')
    if af_path:
        paths.extend([Path(af_path) / 'lib64', Path(af_path) / 'lib'])

    if sys.platform == 'win32':
        program_files = os.environ.get('ProgramFiles', r'C:\Program Files')
        paths.append(Path(program_files) / 'ArrayFire' / 'v3' / 'lib')
    else:
        paths.extend([
            Path('/opt/arrayfire/lib64'),
            Path('/opt/arrayfire/lib'),
            Path('/usr/local/lib'),
        ])

    return paths


def find_library(base_name: str) -> Optional[str]:
    """Search for an ArrayFire shared library.

    Falls back to the system loader's search (``ctypes.util.find_library``)
    when no candidate exists in the known directories.

    Args:
        base_name: Library name without prefix or suffix.

    Returns:
        Path (or loader name) of the library, or None if not found.
    """
    for directory in _search_paths():
        for filename in library_filenames(base_name):
            candidate = directory / filename
            if candidate.exists():
                return str(candidate)

    return ctypes.util.find_library(base_name)


def load_library(base_name: str) -> ctypes.CDLL:
    """Get an ArrayFire library handle with lazy initialization.

    This function handles:
        - Library discovery
        - Loading and caching
        - Applying the function signature table

    Args:
        base_name: ``'af'`` (unified), ``'afcpu'``, ``'afcuda'`` or ``'afopencl'``.

    Returns:
        ctypes.CDLL library handle.

    Raises:
        LibraryNotFoundError: If library cannot be found or loaded.
    """
    if base_name in _lib_cache:
        return _lib_cache[base_name]

    lib_path = find_library(base_name)
    if lib_path is None:
        raise LibraryNotFoundError(
            f"Cannot find ArrayFire library '{base_name}'. "
            f"Install ArrayFire or set AF_PATH / AFBIND_LIBRARY_PATH."
        )

    try:
        lib = ctypes.CDLL(lib_path)
    except OSError as e:
        raise LibraryNotFoundError(f"Failed to load library from {lib_path}: {e}") from e

    logger.info("Loaded ArrayFire library %s", lib_path)
    _lib_cache[base_name] = setup_functions(lib)
    return _lib_cache[base_name]
