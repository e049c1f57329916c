# Audio I/O module
from .audio_io import load_signal, save_signal, peak_normalize, sample_format
