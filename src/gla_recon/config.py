"""Transform, filterbank and reconstruction parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError


def num_bins(n_fft: int) -> int:
    """Width of a spectrogram row for the given FFT size (non-negative frequencies only)."""
    return n_fft // 2 + 1


def validate_stft_params(n_fft: int, hop_length: int) -> None:
    """
    Check an (n_fft, hop_length) pair.

    Raises:
        ConfigurationError: If n_fft is not a positive even integer or
            hop_length is not in (0, n_fft).
    """
    if int(n_fft) != n_fft or n_fft <= 0:
        raise ConfigurationError(f"n_fft must be a positive integer, got {n_fft}")
    if n_fft % 2:
        raise ConfigurationError(f"n_fft must be even, got {n_fft}")
    if int(hop_length) != hop_length or hop_length <= 0 or hop_length >= n_fft:
        raise ConfigurationError(
            f"hop_length must satisfy 0 < hop_length < n_fft ({n_fft}), got {hop_length}"
        )


def validate_mel_params(
    min_freq_hz: float,
    max_freq_hz: float,
    mel_bin_count: int,
    linear_bin_count: int,
    sample_rate: int,
) -> None:
    """
    Check filterbank parameters.

    Raises:
        ConfigurationError: On fewer than two mel bins, an empty or inverted
            band, or frequencies outside [0, sample_rate / 2].
    """
    if sample_rate <= 0:
        raise ConfigurationError(f"sample_rate must be positive, got {sample_rate}")
    if mel_bin_count < 2:
        raise ConfigurationError(f"mel_bin_count must be >= 2, got {mel_bin_count}")
    if linear_bin_count < 2:
        raise ConfigurationError(f"linear_bin_count must be >= 2, got {linear_bin_count}")
    if min_freq_hz >= max_freq_hz:
        raise ConfigurationError(
            f"min_freq_hz ({min_freq_hz}) must be below max_freq_hz ({max_freq_hz})"
        )
    nyquist = sample_rate / 2.0
    if min_freq_hz < 0 or max_freq_hz > nyquist:
        raise ConfigurationError(
            f"Frequencies must lie in [0, {nyquist}] Hz, got [{min_freq_hz}, {max_freq_hz}]"
        )


def check_linear_bin_count(n_fft: int, linear_bin_count: int) -> None:
    if linear_bin_count != num_bins(n_fft):
        raise ConfigurationError(
            f"linear_bin_count ({linear_bin_count}) must equal n_fft // 2 + 1 "
            f"({num_bins(n_fft)}) for n_fft {n_fft}"
        )


@dataclass(frozen=True)
class StftConfig:
    n_fft: int = 2048
    hop_length: int = 256

    @property
    def n_bins(self) -> int:
        return num_bins(self.n_fft)

    def validate(self) -> None:
        validate_stft_params(self.n_fft, self.hop_length)


@dataclass(frozen=True)
class MelConfig:
    """Perceptual band used for mel compression. Defaults match the reference demo."""

    min_freq_hz: float = 70.0
    max_freq_hz: float = 8000.0
    mel_bin_count: int = 200
    linear_bin_count: int = 1025
    sample_rate: int = 44100

    @classmethod
    def for_fft(cls, n_fft: int, sample_rate: int, **kwargs) -> "MelConfig":
        """Build a config whose linear_bin_count matches n_fft."""
        return cls(linear_bin_count=num_bins(n_fft), sample_rate=sample_rate, **kwargs)

    def validate(self) -> None:
        validate_mel_params(
            self.min_freq_hz,
            self.max_freq_hz,
            self.mel_bin_count,
            self.linear_bin_count,
            self.sample_rate,
        )


@dataclass
class ReconstructionParams:
    """Parameters for the spectrogram round-trip pipeline."""

    sample_rate: int = 44100
    n_fft: int = 2048
    # None -> n_fft // 8
    hop_length: Optional[int] = None
    iterations: int = 300
    seed: Optional[int] = None
    enable_mel_scale: bool = False
    min_freq_hz: float = 70.0
    max_freq_hz: float = 8000.0
    mel_bin_count: int = 200
    enable_filter: bool = False
    cutoff_hz: float = 1000.0

    @property
    def hop(self) -> int:
        return self.hop_length if self.hop_length is not None else self.n_fft // 8

    @property
    def stft_config(self) -> StftConfig:
        return StftConfig(n_fft=self.n_fft, hop_length=self.hop)

    @property
    def mel_config(self) -> MelConfig:
        return MelConfig.for_fft(
            self.n_fft,
            self.sample_rate,
            min_freq_hz=self.min_freq_hz,
            max_freq_hz=self.max_freq_hz,
            mel_bin_count=self.mel_bin_count,
        )

    def validate(self) -> None:
        self.stft_config.validate()
        if int(self.iterations) != self.iterations or self.iterations < 0:
            raise ConfigurationError(f"iterations must be a non-negative integer, got {self.iterations}")
        if self.enable_mel_scale:
            mc = self.mel_config
            mc.validate()
            check_linear_bin_count(self.n_fft, mc.linear_bin_count)
        if self.enable_filter and not 0 < self.cutoff_hz <= self.sample_rate / 2.0:
            raise ConfigurationError(
                f"cutoff_hz must lie in (0, {self.sample_rate / 2.0}], got {self.cutoff_hz}"
            )
