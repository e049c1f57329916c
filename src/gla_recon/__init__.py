# gla_recon: Griffin-Lim reconstruction from magnitude spectrograms

from .errors import GlaError, ConfigurationError, InputLengthError, DimensionMismatchError, AudioFormatError
from .types import Signal, SampleFormat
from .config import StftConfig, MelConfig, ReconstructionParams
from .stft import hann_window, compute_stft, reconstruct_audio, griffin_lim
from .mel import hz_to_mel, mel_to_hz, make_mel_filterbank, linear_to_mel, mel_to_linear
from .pipeline import reconstruct_signal, reconstruct_file

__all__ = [
    "GlaError",
    "ConfigurationError",
    "InputLengthError",
    "DimensionMismatchError",
    "AudioFormatError",
    "Signal",
    "SampleFormat",
    "StftConfig",
    "MelConfig",
    "ReconstructionParams",
    "hann_window",
    "compute_stft",
    "reconstruct_audio",
    "griffin_lim",
    "hz_to_mel",
    "mel_to_hz",
    "make_mel_filterbank",
    "linear_to_mel",
    "mel_to_linear",
    "reconstruct_signal",
    "reconstruct_file",
]
