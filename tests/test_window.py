import numpy as np
import pytest
from gla_recon.errors import ConfigurationError
from gla_recon.stft.window import hann_window


@pytest.mark.parametrize("n", [2, 3, 8, 511, 1024, 2048])
def test_window_is_symmetric(n):
    w = hann_window(n)
    assert len(w) == n
    for i in range(n):
        assert w[i] == w[n - 1 - i]


def test_window_matches_formula():
    n = 16
    i = np.arange(n)
    expected = 0.5 * (1 - np.cos(2 * np.pi * i / (n - 1)))
    assert np.allclose(hann_window(n), expected, atol=1e-12)
    # Zero at both edges
    assert abs(hann_window(n)[0]) < 1e-12


@pytest.mark.parametrize("n", [0, 1, -4])
def test_window_too_short(n):
    with pytest.raises(ConfigurationError):
        hann_window(n)


def test_window_is_read_only():
    w = hann_window(32)
    with pytest.raises(ValueError):
        w[0] = 1.0
