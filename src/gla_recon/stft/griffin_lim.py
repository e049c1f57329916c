"""
Griffin-Lim phase reconstruction.

Alternates STFT and ISTFT for a fixed number of iterations, keeping the
target magnitude and taking only the phase from each new estimate.
"""

import logging
from typing import Callable, Optional

import numpy as np

from ..config import validate_stft_params
from ..errors import ConfigurationError, InputLengthError
from .stft_transform import check_spectrogram, compute_stft, istft_length, reconstruct_audio
from .window import hann_window

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]


def griffin_lim(
    magnitude: np.ndarray,
    n_fft: int,
    hop_length: int,
    n_iter: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    progress: Optional[ProgressCallback] = None,
) -> np.ndarray:
    """
    Estimate a signal whose STFT magnitude approximates `magnitude`.

    The initial estimate is uniform noise in [0, 1) of length
    n_frames * hop_length + n_fft drawn from `rng` (or a generator seeded
    with `seed`), so equal inputs and seed give bit-identical output.
    NaN or Inf values are not checked and propagate through the loop.

    Args:
        magnitude (np.ndarray): Target magnitudes, shape (n_frames, n_fft // 2 + 1).
            Not modified.
        n_fft (int): FFT size.
        hop_length (int): Hop length.
        n_iter (int): Number of iterations; no early exit.
        rng (np.random.Generator, optional): Source for the initial estimate.
        seed (int, optional): Seed for a fresh generator. Mutually exclusive with rng.
        progress (callable, optional): Called as progress(i, n_iter) after
            iteration i (1-based). Its return value is ignored.

    Returns:
        np.ndarray: Reconstructed signal, not rescaled or clipped.

    Raises:
        ConfigurationError: If n_fft, hop_length or n_iter are invalid, or
            both rng and seed are given.
        DimensionMismatchError: If the magnitude rows do not match n_fft.
        InputLengthError: If the magnitude spectrogram has no frames.
    """
    validate_stft_params(n_fft, hop_length)
    if rng is not None and seed is not None:
        raise ConfigurationError("Pass either rng or seed, not both")
    if int(n_iter) != n_iter or n_iter < 0:
        raise ConfigurationError(f"n_iter must be a non-negative integer, got {n_iter}")
    magnitude = np.asarray(magnitude, dtype=np.float64)
    check_spectrogram(magnitude, n_fft)
    n_frames = magnitude.shape[0]
    if n_frames == 0:
        raise InputLengthError("Magnitude spectrogram has no frames")

    if rng is None:
        rng = np.random.default_rng(seed)
    window = hann_window(n_fft)
    x = rng.random(istft_length(n_frames, n_fft, hop_length))
    logger.debug("Griffin-Lim: %d frames, n_fft=%d, hop=%d, %d iterations",
                 n_frames, n_fft, hop_length, n_iter)

    for i in range(n_iter):
        # x holds one more frame than the target; the extra one is ignored
        estimate = compute_stft(x, n_fft, hop_length, window)[:n_frames]
        angle = np.arctan2(estimate.imag, estimate.real)
        proposal = magnitude * (np.cos(angle) + 1j * np.sin(angle))
        x = reconstruct_audio(proposal, n_fft, hop_length, window)
        if progress is not None:
            progress(i + 1, n_iter)
    return x
