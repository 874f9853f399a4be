"""Signal processing: Fourier transforms and 1D convolution."""

from __future__ import annotations

from .array import Array, _call_for_array, _lib_of
from .enums import ConvDomain, ConvMode

__all__ = [
    'fft',
    'ifft',
    'convolve1',
]


def fft(arr: Array, norm_factor: float = 1.0, pad: int = 0) -> Array:
    """
    One-dimensional fast Fourier transform along dim 0.

    Args:
        arr: Input signal (real or complex)
        norm_factor: Scale applied to the output
        pad: Output length; 0 keeps the input length
    """
    return _call_for_array(arr._lib, "af_fft", arr._raw(), float(norm_factor), pad)


def ifft(arr: Array, norm_factor: float = None, pad: int = 0) -> Array:
    """Inverse FFT; scales by ``1/n`` unless ``norm_factor`` is given."""
    if norm_factor is None:
        length = pad if pad > 0 else arr.dims[0]
        norm_factor = 1.0 / length
    return _call_for_array(arr._lib, "af_ifft", arr._raw(), float(norm_factor), pad)


def convolve1(
    signal: Array,
    kernel: Array,
    mode: ConvMode = ConvMode.DEFAULT,
    domain: ConvDomain = ConvDomain.AUTO,
) -> Array:
    """
    One-dimensional convolution.

    ``ConvMode.DEFAULT`` keeps the signal length; ``EXPAND`` returns the
    full ``len(signal) + len(kernel) - 1`` result.
    """
    return _call_for_array(
        _lib_of(signal), "af_convolve1",
        signal._raw(), kernel._raw(), mode.to_native(), domain.to_native(),
    )
