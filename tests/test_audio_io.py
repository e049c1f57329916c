import numpy as np
import pytest
import soundfile as sf
from gla_recon.audioio.audio_io import load_signal, peak_normalize, sample_format, save_signal
from gla_recon.errors import AudioFormatError
from gla_recon.types import SampleFormat, Signal

SR = 22050


@pytest.mark.parametrize("subtype, fmt, tol", [
    ("PCM_16", SampleFormat.INT16_PCM, 1.0 / 32768),
    ("PCM_32", SampleFormat.INT32_PCM, 1e-8),
    ("DOUBLE", SampleFormat.FLOAT64_PCM, 1e-12),
])
def test_load_signal_formats(tmp_path, make_tone, subtype, fmt, tol):
    audio = make_tone([440.0], sr=SR, seconds=0.1)
    path = tmp_path / f"tone_{subtype}.wav"
    sf.write(str(path), audio, SR, subtype=subtype)
    assert sample_format(path) == fmt
    signal = load_signal(path, expected_sample_rate=SR)
    assert signal.sample_rate == SR
    assert signal.samples.dtype == np.float64
    assert np.allclose(signal.samples, audio, atol=tol)


def test_load_signal_rejects_float32(tmp_path):
    path = tmp_path / "f32.wav"
    sf.write(str(path), np.zeros(100), SR, subtype="FLOAT")
    with pytest.raises(AudioFormatError):
        load_signal(path)


def test_load_signal_stereo_to_mono(tmp_path):
    left = np.full(200, 0.5)
    right = np.full(200, -0.25)
    path = tmp_path / "stereo.wav"
    sf.write(str(path), np.stack([left, right], axis=1), SR, subtype="DOUBLE")
    signal = load_signal(path)
    assert signal.samples.ndim == 1
    assert np.allclose(signal.samples, 0.125)


def test_load_signal_sample_rate_mismatch(tmp_path, make_tone):
    path = tmp_path / "tone.wav"
    sf.write(str(path), make_tone([440.0], sr=SR, seconds=0.5), SR, subtype="PCM_16")
    with pytest.raises(AudioFormatError):
        load_signal(path, expected_sample_rate=44100)
    signal = load_signal(path, expected_sample_rate=44100, resample=True)
    assert signal.sample_rate == 44100
    assert abs(len(signal) - 2 * int(SR * 0.5)) <= 2


def test_load_signal_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_signal(tmp_path / "nope.wav")


def test_peak_normalize():
    assert np.allclose(peak_normalize(np.array([0.5, 2.0, -4.0])), [0.125, 0.5, -1.0])
    quiet = np.array([0.1, -0.9])
    assert np.array_equal(peak_normalize(quiet), quiet)


def test_save_signal_16bit(tmp_path):
    path = tmp_path / "out" / "loud.wav"
    save_signal(Signal(np.array([0.0, 1.5, -3.0]), SR), path)
    data, sr = sf.read(str(path), dtype="int16")
    assert sr == SR
    assert sf.info(str(path)).subtype == "PCM_16"
    assert data.tolist() == [0, 16384, -32767]

    path = tmp_path / "quiet.wav"
    save_signal(Signal(np.array([0.0, 0.5, -0.5]), SR), path)
    data, _ = sf.read(str(path), dtype="int16")
    assert data.tolist() == [0, 16384, -16384]


def test_signal_rejects_multichannel():
    with pytest.raises(ValueError):
        Signal(np.zeros((10, 2)), SR)


def test_load_signal_undecodable(tmp_path):
    path = tmp_path / "notaudio.wav"
    path.write_bytes(b"this is not a wav file at all")
    with pytest.raises(AudioFormatError):
        sample_format(path)
    with pytest.raises(AudioFormatError):
        load_signal(path)
