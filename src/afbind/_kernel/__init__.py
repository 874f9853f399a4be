"""afbind Private Kernel Package (_kernel).

Low-level plumbing shared by every public module.

Architecture:
    - Direct ctypes bindings to libaf / libafcpu / libafcuda / libafopencl
    - C struct layouts and transient marshaling buffers
    - One signature table for every bound symbol

Modules:
    - lib_loader: Dynamic library discovery and loading
    - signatures: argtypes/restype declarations
    - types: C type aliases, af_seq and af_index_t layouts
"""

from . import lib_loader
from . import signatures
from . import types

__all__ = [
    'lib_loader',
    'signatures',
    'types',
]
