# STFT module
from .window import hann_window
from .stft_transform import compute_stft, reconstruct_audio, check_spectrogram, num_frames, istft_length
from .griffin_lim import griffin_lim
