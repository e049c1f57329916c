# src/gla_recon/stft/stft_transform.py
import numpy as np
import librosa
from scipy import fft as sp_fft

from ..config import num_bins, validate_stft_params
from ..errors import ConfigurationError, DimensionMismatchError, InputLengthError
from .window import hann_window


def _resolve_window(window, n_fft: int) -> np.ndarray:
    if window is None:
        return hann_window(n_fft)
    window = np.asarray(window, dtype=np.float64)
    if window.shape != (n_fft,):
        raise ConfigurationError(f"Window length {window.shape} does not match n_fft={n_fft}")
    return window


def check_spectrogram(S: np.ndarray, n_fft: int) -> None:
    """
    Check that S is a time-major (n_frames, n_fft // 2 + 1) array.

    Raises:
        DimensionMismatchError: If S is not 2-D or its row width is wrong.
    """
    if S.ndim != 2:
        raise DimensionMismatchError(f"Spectrogram must be 2-D (frames, bins), got {S.ndim}-D")
    if S.shape[1] != num_bins(n_fft):
        raise DimensionMismatchError(
            f"Spectrogram rows have {S.shape[1]} bins, expected {num_bins(n_fft)} for n_fft={n_fft}"
        )


def num_frames(length: int, n_fft: int, hop_length: int) -> int:
    """Number of complete frames in a signal of the given length (trailing samples dropped)."""
    if length < n_fft:
        return 0
    return (length - n_fft) // hop_length + 1


def istft_length(n_frames: int, n_fft: int, hop_length: int) -> int:
    """Length of the overlap-add output for n_frames frames."""
    return n_frames * hop_length + n_fft


def compute_stft(audio: np.ndarray, n_fft: int, hop_length: int, window=None) -> np.ndarray:
    """
    Compute STFT with a symmetric Hann window and no padding.

    Frames start at 0, hop, 2*hop, ... while a full frame fits; trailing
    samples that do not fill a frame are dropped.

    Args:
        audio (np.ndarray): Audio signal.
        n_fft (int): FFT size.
        hop_length (int): Hop length.
        window (np.ndarray, optional): Analysis window, defaults to hann_window(n_fft).

    Returns:
        np.ndarray: Complex STFT, shape (n_frames, n_fft // 2 + 1).

    Raises:
        ConfigurationError: If n_fft/hop_length are invalid.
        InputLengthError: If the signal is shorter than n_fft.
    """
    validate_stft_params(n_fft, hop_length)
    audio = np.asarray(audio, dtype=np.float64)
    if audio.ndim != 1:
        raise ValueError("Input audio must be 1-D (mono)")
    if len(audio) < n_fft:
        raise InputLengthError(f"Signal has {len(audio)} samples, need at least n_fft={n_fft}")
    window = _resolve_window(window, n_fft)
    frames = librosa.util.frame(np.ascontiguousarray(audio), frame_length=n_fft, hop_length=hop_length, axis=0)
    return sp_fft.rfft(frames * window, n=n_fft, axis=-1)


def reconstruct_audio(S_mod: np.ndarray, n_fft: int, hop_length: int, window=None) -> np.ndarray:
    """
    Inverse transform and windowed overlap-add.

    Output length is n_frames * hop_length + n_fft. Frames are summed without
    dividing by the window's squared overlap, so amplitude carries a constant
    gain (1.5 for Hann at 75% overlap) and ripples near the edges.

    Args:
        S_mod (np.ndarray): Complex STFT, shape (n_frames, n_fft // 2 + 1).
        n_fft (int): FFT size.
        hop_length (int): Hop length.
        window (np.ndarray, optional): Synthesis window, defaults to hann_window(n_fft).

    Returns:
        np.ndarray: Reconstructed audio signal.

    Raises:
        ConfigurationError: If n_fft/hop_length are invalid.
        DimensionMismatchError: If S_mod's shape does not match n_fft.
    """
    validate_stft_params(n_fft, hop_length)
    S_mod = np.asarray(S_mod)
    check_spectrogram(S_mod, n_fft)
    window = _resolve_window(window, n_fft)
    n_frames = S_mod.shape[0]
    out = np.zeros(istft_length(n_frames, n_fft, hop_length), dtype=np.float64)
    if n_frames == 0:
        return out
    frames = sp_fft.irfft(S_mod, n=n_fft, axis=-1) * window
    # Frames overlap, so accumulation into the shared buffer stays sequential.
    for n in range(n_frames):
        start = n * hop_length
        out[start:start + n_fft] += frames[n]
    return out
