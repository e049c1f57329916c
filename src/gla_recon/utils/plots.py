# src/gla_recon/utils/plots.py
from pathlib import Path

import numpy as np
import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

DISPLAY_EXPONENT = 0.125


def _save_image(data: np.ndarray, out_path, title: str, xlabel: str, ylabel: str) -> Path:
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig = plt.figure(figsize=(10, 4))
    plt.imshow(data, origin="lower", cmap="hot", aspect="auto", interpolation="nearest")
    plt.colorbar()
    plt.title(title)
    plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    plt.tight_layout()
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def plot_spectrogram(M: np.ndarray, out_path, title: str = "Spectrogram") -> Path:
    """Save a (frames, bins) magnitude spectrogram as an image, frequency on the y axis."""
    M = np.asarray(M, dtype=np.float64)
    return _save_image(np.clip(M, 0.0, None).T ** DISPLAY_EXPONENT, out_path, title,
                       "time index", "frequency bin index")


def plot_filterbank(filterbank: np.ndarray, out_path, title: str = "Mel scale filter bank") -> Path:
    return _save_image(np.asarray(filterbank), out_path, title,
                       "linear frequency index", "mel frequency index")


def plot_semitone_spectrogram(notes: np.ndarray, spec: np.ndarray, out_path,
                              title: str = "Semitone spectrogram") -> Path:
    """Save a (frames, notes) semitone spectrogram, C0 at the bottom row."""
    return _save_image(np.clip(np.asarray(spec, dtype=np.float64), 0.0, None).T ** DISPLAY_EXPONENT,
                       out_path, f"{title} ({notes[0]:.2f}-{notes[-1]:.0f} Hz)",
                       "time index", "semitone index above C0")
