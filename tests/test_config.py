import pytest
from gla_recon.config import (
    MelConfig, ReconstructionParams, StftConfig, check_linear_bin_count, num_bins,
)
from gla_recon.errors import ConfigurationError


def test_num_bins():
    assert num_bins(1024) == 513
    assert StftConfig(n_fft=2048, hop_length=256).n_bins == 1025


def test_stft_config_validate():
    StftConfig(n_fft=1024, hop_length=256).validate()
    with pytest.raises(ConfigurationError):
        StftConfig(n_fft=1024, hop_length=1024).validate()
    with pytest.raises(ConfigurationError):
        StftConfig(n_fft=1000.5, hop_length=10).validate()


def test_mel_config_for_fft():
    mc = MelConfig.for_fft(1024, 22050, mel_bin_count=64)
    assert mc.linear_bin_count == 513
    assert mc.mel_bin_count == 64
    mc.validate()
    with pytest.raises(ConfigurationError):
        MelConfig(min_freq_hz=100, max_freq_hz=100, mel_bin_count=2).validate()


def test_check_linear_bin_count():
    check_linear_bin_count(2048, 1025)
    with pytest.raises(ConfigurationError):
        check_linear_bin_count(2048, 2048)


def test_reconstruction_params_defaults():
    params = ReconstructionParams()
    assert params.hop == 2048 // 8
    assert ReconstructionParams(hop_length=100).hop == 100
    params.validate()


@pytest.mark.parametrize("kwargs", [
    dict(iterations=-1),
    dict(n_fft=1023),
    dict(enable_mel_scale=True, sample_rate=8000),  # 8 kHz band above Nyquist
    dict(enable_filter=True, cutoff_hz=0.0),
    dict(enable_filter=True, cutoff_hz=30000.0),
])
def test_reconstruction_params_invalid(kwargs):
    with pytest.raises(ConfigurationError):
        ReconstructionParams(**kwargs).validate()
