import numpy as np
import pytest
from scipy import fft as sp_fft
from gla_recon.errors import ConfigurationError, DimensionMismatchError, InputLengthError
from gla_recon.stft.stft_transform import compute_stft, istft_length, num_frames, reconstruct_audio
from gla_recon.stft.window import hann_window

N_FFT = 1024
HOP = 256


@pytest.mark.parametrize("length", [1024, 1025, 1279, 1280, 5000, 44100])
def test_stft_frame_count(length, rng):
    audio = rng.standard_normal(length)
    S = compute_stft(audio, N_FFT, HOP)
    assert S.shape == ((length - N_FFT) // HOP + 1, N_FFT // 2 + 1)
    assert S.shape[0] == num_frames(length, N_FFT, HOP)
    assert np.iscomplexobj(S)


def test_stft_short_signal():
    with pytest.raises(InputLengthError):
        compute_stft(np.zeros(N_FFT - 1), N_FFT, HOP)
    assert num_frames(N_FFT - 1, N_FFT, HOP) == 0


@pytest.mark.parametrize("n_fft, hop", [(0, 1), (1023, 256), (1024, 0), (1024, 1024), (1024, -5)])
def test_stft_invalid_config(n_fft, hop):
    with pytest.raises(ConfigurationError):
        compute_stft(np.zeros(4096), n_fft, hop)


def test_stft_frames_are_windowed_ffts(rng):
    audio = rng.standard_normal(3000)
    S = compute_stft(audio, N_FFT, HOP)
    w = hann_window(N_FFT)
    assert np.allclose(S[0], sp_fft.rfft(audio[:N_FFT] * w))
    assert np.allclose(S[2], sp_fft.rfft(audio[2 * HOP:2 * HOP + N_FFT] * w))


def test_stft_drops_trailing_samples(rng):
    audio = rng.standard_normal(2000)
    covered = (num_frames(2000, N_FFT, HOP) - 1) * HOP + N_FFT
    assert np.array_equal(compute_stft(audio, N_FFT, HOP), compute_stft(audio[:covered], N_FFT, HOP))


def test_istft_output_length(rng):
    S = rng.standard_normal((7, N_FFT // 2 + 1)) + 1j * rng.standard_normal((7, N_FFT // 2 + 1))
    out = reconstruct_audio(S, N_FFT, HOP)
    assert len(out) == 7 * HOP + N_FFT == istft_length(7, N_FFT, HOP)
    # Nothing past the last frame
    assert np.all(out[6 * HOP + N_FFT:] == 0.0)


def test_istft_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        reconstruct_audio(np.zeros((4, N_FFT), dtype=complex), N_FFT, HOP)
    with pytest.raises(DimensionMismatchError):
        reconstruct_audio(np.zeros(N_FFT // 2 + 1, dtype=complex), N_FFT, HOP)


def test_istft_no_frames():
    out = reconstruct_audio(np.zeros((0, N_FFT // 2 + 1), dtype=complex), N_FFT, HOP)
    assert np.array_equal(out, np.zeros(N_FFT))


def _ola_gain(n_frames):
    w = hann_window(N_FFT)
    gain = np.zeros(istft_length(n_frames, N_FFT, HOP))
    for n in range(n_frames):
        gain[n * HOP:n * HOP + N_FFT] += w ** 2
    return gain


def test_round_trip_constant_scale(rng):
    scales = []
    for _ in range(2):
        audio = rng.standard_normal(20000)
        S = compute_stft(audio, N_FFT, HOP)
        n_frames = S.shape[0]
        out = reconstruct_audio(S, N_FFT, HOP)
        # Interior: every sample covered by N_FFT / HOP frames
        interior = slice(N_FFT, (n_frames - 1) * HOP)
        gain = _ola_gain(n_frames)
        assert np.allclose(out[interior], gain[interior] * audio[interior], atol=1e-9)
        assert np.allclose(gain[interior], 1.5, atol=1e-2)
        x, y = audio[interior], out[interior]
        scales.append(np.dot(x, y) / np.dot(x, x))
    assert abs(scales[0] - scales[1]) < 1e-3
    assert abs(scales[0] - 1.5) < 1e-2
