# src/gla_recon/utils/spectrogram.py
from typing import Tuple

import numpy as np
from scipy import fft as sp_fft

from ..errors import InputLengthError

C0_HZ = 16.35  # lowest piano note
SEMITONE_RATIO = 2.0 ** (1.0 / 12.0)
MAX_FREQUENCY_HZ = 22000.0


def magnitude(S: np.ndarray) -> np.ndarray:
    """Magnitude spectrogram |S|. Phase is discarded."""
    return np.abs(S)


def power(S: np.ndarray) -> np.ndarray:
    """Power spectrogram |S|**2."""
    return np.abs(S) ** 2


def normalize_spectrogram(M: np.ndarray) -> Tuple[np.ndarray, float]:
    """
    Scale a non-negative spectrogram into [0, 1].

    Returns:
        Tuple[np.ndarray, float]: Scaled copy and the scale factor applied (1 / max).

    Raises:
        ValueError: If the spectrogram is empty or all zero.
    """
    M = np.asarray(M, dtype=np.float64)
    if M.size == 0:
        raise ValueError("Cannot normalize an empty spectrogram")
    max_val = float(np.max(M))
    if max_val <= 0:
        raise ValueError("Cannot normalize a spectrogram with no positive values")
    scale = 1.0 / max_val
    return M * scale, scale


def denormalize_spectrogram(M: np.ndarray, scale: float) -> np.ndarray:
    return np.asarray(M, dtype=np.float64) / scale


def cutoff_bin(cutoff_hz: float, sample_rate: int, n_fft: int) -> int:
    return int(np.floor(cutoff_hz * n_fft / sample_rate + 0.5))


def apply_lowpass(M: np.ndarray, cutoff_hz: float, sample_rate: int, n_fft: int) -> np.ndarray:
    """Zero every bin at or above the cutoff frequency. Returns a new array."""
    out = np.array(M, dtype=np.float64, copy=True)
    out[:, cutoff_bin(cutoff_hz, sample_rate, n_fft):] = 0.0
    return out


def semitone_frequencies(max_freq_hz: float = MAX_FREQUENCY_HZ) -> np.ndarray:
    """Semitone grid from C0 upward, up to max_freq_hz."""
    n_notes = int(np.floor(np.log(max_freq_hz / C0_HZ) / np.log(SEMITONE_RATIO))) + 1
    freqs = C0_HZ * SEMITONE_RATIO ** np.arange(n_notes)
    return freqs[freqs <= max_freq_hz]


def semitone_spectrogram(
    samples: np.ndarray,
    sample_rate: int,
    frame_size: int = 512,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Spectrum of consecutive non-overlapping frames, sampled on a semitone grid.

    Each frame's FFT magnitudes (positive frequencies) are linearly
    interpolated at the semitone frequencies; values past the last FFT bin
    hold the edge magnitude. No window is applied.

    Args:
        samples (np.ndarray): Audio signal.
        sample_rate (int): Sample rate in Hz.
        frame_size (int): Samples per frame.

    Returns:
        Tuple[np.ndarray, np.ndarray]: Semitone frequencies (n_notes,) and
        spectrogram (n_frames, n_notes).

    Raises:
        InputLengthError: If the signal is shorter than one frame.
    """
    samples = np.asarray(samples, dtype=np.float64)
    n_frames = len(samples) // frame_size
    if n_frames == 0:
        raise InputLengthError(f"Signal has {len(samples)} samples, need at least {frame_size}")
    frames = samples[:n_frames * frame_size].reshape(n_frames, frame_size)
    half = frame_size // 2
    mags = np.abs(sp_fft.fft(frames, axis=-1))[:, :half]
    fft_freqs = np.arange(half) * sample_rate / frame_size
    notes = semitone_frequencies()
    spec = np.stack([np.interp(notes, fft_freqs, row) for row in mags])
    return notes, spec
