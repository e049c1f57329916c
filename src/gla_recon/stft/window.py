# src/gla_recon/stft/window.py
from functools import lru_cache

import numpy as np
from scipy import signal

from ..errors import ConfigurationError


@lru_cache(maxsize=16)
def _hann(length: int) -> np.ndarray:
    w = signal.get_window("hann", length, fftbins=False)
    # get_window's linspace grid is symmetric only to within rounding
    w = 0.5 * (w + w[::-1])
    w.setflags(write=False)
    return w


def hann_window(length: int) -> np.ndarray:
    """
    Symmetric Hann window w[i] = 0.5 * (1 - cos(2*pi*i / (length - 1))).

    The same array must be used for analysis and synthesis at a given FFT size.

    Args:
        length (int): Number of coefficients (the FFT size).

    Returns:
        np.ndarray: Read-only window coefficients, exactly symmetric.

    Raises:
        ConfigurationError: If length < 2.
    """
    if int(length) != length or length < 2:
        raise ConfigurationError(f"Window length must be an integer >= 2, got {length}")
    return _hann(int(length))
