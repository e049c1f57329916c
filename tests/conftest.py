"""Shared fixtures for gla_recon tests."""

import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def make_tone():
    """Factory for a sum of sines: make_tone(freqs, sr, seconds, amp)."""
    def _make(freqs, sr=22050, seconds=0.25, amp=0.4):
        t = np.arange(int(sr * seconds)) / sr
        return amp * sum(np.sin(2 * np.pi * f * t) for f in freqs)
    return _make
