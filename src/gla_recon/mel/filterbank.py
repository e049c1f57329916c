# src/gla_recon/mel/filterbank.py
from typing import Tuple

import numpy as np
import librosa

from ..config import validate_mel_params
from ..errors import DimensionMismatchError


def hz_to_mel(f_hz):
    """HTK mel scale: 2595 * log10(1 + f / 700)."""
    return librosa.hz_to_mel(f_hz, htk=True)


def mel_to_hz(m_mel):
    """Inverse of hz_to_mel."""
    return librosa.mel_to_hz(m_mel, htk=True)


def fft_bin_to_hz(n_bin, sample_rate: int, linear_bin_count: int):
    return n_bin * sample_rate / (2.0 * linear_bin_count)


def hz_to_fft_bin(f_hz, sample_rate: int, linear_bin_count: int):
    """
    Linear bin index of a frequency, round(f * 2 * linear_bin_count / sample_rate).

    Halves round up, so 2.5 -> 3.
    """
    idx = np.floor(np.asarray(f_hz, dtype=np.float64) * 2.0 * linear_bin_count / sample_rate + 0.5)
    idx = idx.astype(np.int64)
    return int(idx) if idx.ndim == 0 else idx


def mel_band_edges(
    min_freq_hz: float,
    max_freq_hz: float,
    mel_bin_count: int,
    linear_bin_count: int,
    sample_rate: int,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Linear-bin (left, center, right) indices of each triangular mel filter.

    The first filter starts at an extrapolated bin one mel spacing below
    min_freq_hz and the last ends one spacing above max_freq_hz. Center
    indices past the last linear bin are clamped to it.

    Returns:
        Tuple of three int arrays of length mel_bin_count.
    """
    validate_mel_params(min_freq_hz, max_freq_hz, mel_bin_count, linear_bin_count, sample_rate)
    min_mels = hz_to_mel(min_freq_hz)
    max_mels = hz_to_mel(max_freq_hz)
    centers_hz = mel_to_hz(np.linspace(min_mels, max_mels, mel_bin_count))
    mels_per_bin = (max_mels - min_mels) / (mel_bin_count - 1)

    bin_start = hz_to_fft_bin(mel_to_hz(min_mels - mels_per_bin), sample_rate, linear_bin_count)
    bin_stop = hz_to_fft_bin(mel_to_hz(max_mels + mels_per_bin), sample_rate, linear_bin_count)
    centers = np.clip(hz_to_fft_bin(centers_hz, sample_rate, linear_bin_count), 0, linear_bin_count - 1)

    left = np.empty_like(centers)
    right = np.empty_like(centers)
    left[0] = max(0, bin_start)
    left[1:] = centers[:-1]
    right[-1] = min(linear_bin_count - 1, bin_stop)
    right[:-1] = centers[1:]
    return left, centers, right


def make_mel_filterbank(
    min_freq_hz: float,
    max_freq_hz: float,
    mel_bin_count: int,
    linear_bin_count: int,
    sample_rate: int,
) -> np.ndarray:
    """
    Build a (mel_bin_count, linear_bin_count) matrix of triangular filters.

    Each row rises linearly from the previous filter's center to 1.0 at its
    own center and falls to the next filter's center. The rising side is
    left out when the center bin is <= 1, the falling side when it is
    >= linear_bin_count - 2. The center is always exactly 1.0.

    Args:
        min_freq_hz (float): Lowest center frequency.
        max_freq_hz (float): Highest center frequency, at most sample_rate / 2.
        mel_bin_count (int): Number of mel bins (>= 2).
        linear_bin_count (int): Number of linear bins, n_fft // 2 + 1.
        sample_rate (int): Sample rate in Hz.

    Returns:
        np.ndarray: Filterbank matrix.

    Raises:
        ConfigurationError: If the parameters are invalid.
    """
    left, centers, right = mel_band_edges(
        min_freq_hz, max_freq_hz, mel_bin_count, linear_bin_count, sample_rate
    )
    filterbank = np.zeros((mel_bin_count, linear_bin_count), dtype=np.float64)
    for mel_bin in range(mel_bin_count):
        lo, center, hi = int(left[mel_bin]), int(centers[mel_bin]), int(right[mel_bin])
        if center > 1 and center > lo:
            f_bins = np.arange(lo, center + 1)
            filterbank[mel_bin, f_bins] = (f_bins - lo) / (center - lo)
        if center < linear_bin_count - 2 and hi > center:
            f_bins = np.arange(center, hi + 1)
            filterbank[mel_bin, f_bins] = (hi - f_bins) / (hi - center)
        filterbank[mel_bin, center] = 1.0
    return filterbank


def linear_to_mel(magnitude: np.ndarray, filterbank: np.ndarray) -> np.ndarray:
    """Project a (frames, linear_bins) spectrogram onto mel bins -> (frames, mel_bins)."""
    magnitude = np.asarray(magnitude)
    if magnitude.ndim != 2 or magnitude.shape[1] != filterbank.shape[1]:
        raise DimensionMismatchError(
            f"Spectrogram shape {magnitude.shape} does not fit filterbank {filterbank.shape}"
        )
    return (filterbank @ magnitude.T).T


def mel_to_linear(mel_spectrogram: np.ndarray, filterbank: np.ndarray) -> np.ndarray:
    """
    Re-expand a (frames, mel_bins) spectrogram with the filterbank transpose.

    Lossy: the filterbank is not orthogonal, so this only approximates the
    original linear spectrogram.
    """
    mel_spectrogram = np.asarray(mel_spectrogram)
    if mel_spectrogram.ndim != 2 or mel_spectrogram.shape[1] != filterbank.shape[0]:
        raise DimensionMismatchError(
            f"Mel spectrogram shape {mel_spectrogram.shape} does not fit filterbank {filterbank.shape}"
        )
    return (filterbank.T @ mel_spectrogram.T).T
