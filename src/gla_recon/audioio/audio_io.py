# src/gla_recon/audioio/audio_io.py
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import soundfile as sf
import librosa

from ..errors import AudioFormatError
from ..types import SampleFormat, Signal

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def sample_format(path: PathLike) -> SampleFormat:
    """
    Resolve the sample encoding of an audio file from its header.

    Raises:
        AudioFormatError: If the file cannot be decoded, or the encoding is
            not 16/32-bit PCM or 64-bit float.
    """
    try:
        subtype = sf.info(str(path)).subtype
    except sf.LibsndfileError as e:
        raise AudioFormatError(f"{path}: {e}") from e
    try:
        return SampleFormat.from_subtype(subtype)
    except ValueError as e:
        raise AudioFormatError(f"{path}: {e}") from e


def load_signal(path: PathLike, expected_sample_rate: Optional[int] = None, resample: bool = False) -> Signal:
    """
    Read a WAV file as mono float64 samples in [-1, 1].

    Args:
        path (str | Path): File path to audio file.
        expected_sample_rate (int, optional): Required sample rate.
        resample (bool): Resample on mismatch instead of failing.

    Returns:
        Signal: Decoded signal.

    Raises:
        FileNotFoundError: If file does not exist.
        AudioFormatError: On an undecodable file, an unsupported encoding, or a sample rate
            mismatch when resample is False.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Audio file not found: {path}")
    fmt = sample_format(path)
    try:
        audio, file_sr = sf.read(str(path), dtype="float64")
    except sf.LibsndfileError as e:
        raise AudioFormatError(f"{path}: {e}") from e
    if audio.ndim > 1:
        audio = np.mean(audio, axis=1)
    logger.debug("Loaded %s: %s, %d Hz, %d samples", path, fmt.name, file_sr, len(audio))
    if expected_sample_rate is not None and file_sr != expected_sample_rate:
        if not resample:
            raise AudioFormatError(
                f"Invalid sample rate {file_sr} Hz in {path}, expected {expected_sample_rate} Hz"
            )
        audio = librosa.resample(audio, orig_sr=file_sr, target_sr=expected_sample_rate)
        file_sr = expected_sample_rate
    return Signal(audio, int(file_sr))


def peak_normalize(audio: np.ndarray) -> np.ndarray:
    """
    Divide by the peak absolute value if it exceeds 1.0, else return unchanged.
    """
    audio = np.asarray(audio, dtype=np.float64)
    if audio.size == 0:
        return audio
    max_val = np.max(np.abs(audio))
    if max_val > 1.0:
        audio = audio / max_val
    return audio


def save_signal(signal: Signal, out_path: PathLike) -> None:
    """
    Export a signal as 16-bit PCM WAV.

    Samples are peak-normalized (only when above 1.0) and scaled by 32767.

    Raises:
        IOError: If file cannot be written.
    """
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    audio = peak_normalize(signal.samples)
    pcm = np.round(audio * 32767.0).astype(np.int16)
    sf.write(str(out_path), pcm, signal.sample_rate, subtype="PCM_16")
    logger.info("Audio saved to %s", out_path)
