# Mel module
from .filterbank import (
    hz_to_mel, mel_to_hz, fft_bin_to_hz, hz_to_fft_bin,
    mel_band_edges, make_mel_filterbank, linear_to_mel, mel_to_linear,
)
