"""Data types exchanged between the audio I/O layer and the transforms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np


class SampleFormat(Enum):
    """Sample encodings accepted from WAV files."""

    INT16_PCM = "PCM_16"
    INT32_PCM = "PCM_32"
    FLOAT64_PCM = "DOUBLE"

    @classmethod
    def from_subtype(cls, subtype: str) -> "SampleFormat":
        for fmt in cls:
            if fmt.value == subtype:
                return fmt
        raise ValueError(f"Unsupported sample format: {subtype}")


@dataclass
class Signal:
    """Mono float samples (nominally in [-1, 1]) with their sample rate in Hz."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        self.samples = np.asarray(self.samples, dtype=np.float64)
        if self.samples.ndim != 1:
            raise ValueError("Signal samples must be 1-D (mono)")

    def __len__(self) -> int:
        return len(self.samples)

    @property
    def duration(self) -> float:
        return len(self.samples) / float(self.sample_rate)
