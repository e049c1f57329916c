# src/gla_recon/errors.py


class GlaError(ValueError):
    """Base class for invalid parameters or inputs."""


class ConfigurationError(GlaError):
    """Transform or filterbank parameters are inconsistent."""


class InputLengthError(GlaError):
    """Signal too short to produce a single frame."""


class DimensionMismatchError(GlaError):
    """Spectrogram width does not match the declared FFT size."""


class AudioFormatError(GlaError):
    """Audio file has an unsupported sample format or sample rate."""
