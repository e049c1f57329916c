"""
Magnitude-only round trip: analyse a signal, optionally reshape its
spectrogram (mel compression, low-pass), and rebuild audio with Griffin-Lim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import numpy as np

from .audioio.audio_io import load_signal, peak_normalize, save_signal
from .config import ReconstructionParams
from .mel.filterbank import linear_to_mel, make_mel_filterbank, mel_to_linear
from .stft.griffin_lim import ProgressCallback, griffin_lim
from .stft.stft_transform import compute_stft
from .types import Signal
from .utils.spectrogram import apply_lowpass, denormalize_spectrogram, normalize_spectrogram, power

logger = logging.getLogger(__name__)


@dataclass
class ReconstructionResult:
    signal: Signal
    # magnitude handed to Griffin-Lim, (frames, bins)
    magnitude: np.ndarray
    # power spectrogram of the input scaled to [0, 1]
    scaled_power: np.ndarray
    source: Optional[Signal] = None
    filterbank: Optional[np.ndarray] = None
    mel_spectrogram: Optional[np.ndarray] = None
    # mel spectrogram re-expanded to linear bins, before any low-pass
    linear_from_mel: Optional[np.ndarray] = None


def reconstruct_signal(
    signal: Signal,
    params: ReconstructionParams,
    progress: Optional[ProgressCallback] = None,
    rng: Optional[np.random.Generator] = None,
) -> ReconstructionResult:
    """
    Rebuild `signal` from its magnitude spectrogram alone.

    The power spectrogram is scaled to [0, 1], optionally passed through the
    mel filterbank and back and/or low-passed, rescaled, square-rooted and
    handed to Griffin-Lim. The output is divided by its peak only when the
    peak exceeds 1.0.
    """
    params.validate()
    n_fft, hop = params.n_fft, params.hop
    if signal.sample_rate != params.sample_rate:
        logger.warning("Signal sample rate %d differs from configured %d",
                       signal.sample_rate, params.sample_rate)

    S = compute_stft(signal.samples, n_fft, hop)
    scaled, scale = normalize_spectrogram(power(S))
    logger.info("Maximum value in the power spectrogram: %g", 1.0 / scale)

    modified = scaled
    filterbank = None
    mel_spec = None
    linear_from_mel = None
    if params.enable_mel_scale:
        mc = params.mel_config
        filterbank = make_mel_filterbank(
            mc.min_freq_hz, mc.max_freq_hz, mc.mel_bin_count, mc.linear_bin_count, mc.sample_rate
        )
        mel_spec = linear_to_mel(scaled, filterbank)
        linear_from_mel = mel_to_linear(mel_spec, filterbank)
        modified = linear_from_mel
    if params.enable_filter:
        modified = apply_lowpass(modified, params.cutoff_hz, params.sample_rate, n_fft)

    target = np.sqrt(denormalize_spectrogram(modified, scale))
    x = griffin_lim(target, n_fft, hop, params.iterations, rng=rng,
                    seed=params.seed if rng is None else None, progress=progress)
    x = peak_normalize(x)
    return ReconstructionResult(
        signal=Signal(x, params.sample_rate),
        magnitude=target,
        scaled_power=scaled,
        source=signal,
        filterbank=filterbank,
        mel_spectrogram=mel_spec,
        linear_from_mel=linear_from_mel,
    )


def reconstruct_file(
    in_path: Union[str, Path],
    out_path: Union[str, Path],
    params: ReconstructionParams,
    progress: Optional[ProgressCallback] = None,
    resample: bool = False,
) -> ReconstructionResult:
    """Load a WAV file, reconstruct it and write the result as 16-bit PCM."""
    signal = load_signal(in_path, expected_sample_rate=params.sample_rate, resample=resample)
    result = reconstruct_signal(signal, params, progress=progress)
    save_signal(result.signal, out_path)
    return result
