# src/gla_recon/utils/metrics.py
import numpy as np

from ..stft.stft_transform import compute_stft


def _trim(a: np.ndarray, b: np.ndarray):
    if len(a) != len(b):
        min_len = min(len(a), len(b))
        a = a[:min_len]
        b = b[:min_len]
    return a, b


def compute_snr(original: np.ndarray, reconstructed: np.ndarray) -> float:
    """Compute SNR in dB. Longer input is trimmed to the shorter one."""
    original, reconstructed = _trim(np.asarray(original), np.asarray(reconstructed))
    noise = original - reconstructed
    return float(10 * np.log10(np.sum(original ** 2) / (np.sum(noise ** 2) + 1e-10)))


def compute_sisnr(original: np.ndarray, reconstructed: np.ndarray) -> float:
    """Compute Scale-invariant Signal-to-Noise Ratio (SiSNR) in dB.

    Useful for Griffin-Lim output, whose overall gain differs from the source.

    Args:
        original: Original audio signal
        reconstructed: Reconstructed audio signal

    Returns:
        SiSNR value in dB, clamped to [-100, 120]
    """
    original, reconstructed = _trim(np.asarray(original), np.asarray(reconstructed))

    # Center the signals
    original_centered = original - np.mean(original)
    reconstructed_centered = reconstructed - np.mean(reconstructed)

    # Compute the optimal scaling factor
    numerator = np.sum(original_centered * reconstructed_centered)
    denominator = np.sum(reconstructed_centered ** 2)

    if denominator == 0:
        return float('inf')

    alpha = numerator / denominator
    reconstructed_scaled = alpha * reconstructed_centered

    signal_power = np.sum(original_centered ** 2)
    noise_power = np.sum((original_centered - reconstructed_scaled) ** 2)

    if noise_power < 1e-12:
        return 120.0

    sisnr = 10 * np.log10(signal_power / noise_power)
    return float(max(-100.0, min(120.0, sisnr)))


def spectral_convergence(target_mag: np.ndarray, estimate: np.ndarray, n_fft: int, hop_length: int) -> float:
    """
    ||target - g * |STFT(estimate)||| / ||target||, over the target's frames.

    g is the least-squares gain between the two magnitudes, so overall level
    differences (overlap-add gain, peak normalization) do not count.
    Lower is better; 0 means the magnitudes match up to scale.
    """
    target_mag = np.asarray(target_mag, dtype=np.float64)
    est_mag = np.abs(compute_stft(estimate, n_fft, hop_length))[:target_mag.shape[0]]
    target_mag = target_mag[:est_mag.shape[0]]
    denom = np.linalg.norm(target_mag)
    if denom == 0:
        return float('inf')
    energy = np.sum(est_mag ** 2)
    if energy > 0:
        est_mag = est_mag * (np.sum(target_mag * est_mag) / energy)
    return float(np.linalg.norm(target_mag - est_mag) / denom)


def dominant_frequency(samples: np.ndarray, sample_rate: int, n_fft: int, hop_length: int) -> float:
    """Frequency in Hz of the bin with the largest time-averaged STFT magnitude."""
    mean_mag = np.mean(np.abs(compute_stft(samples, n_fft, hop_length)), axis=0)
    return float(np.argmax(mean_mag) * sample_rate / n_fft)
