"""
Custom exceptions for the ECG strip chart
"""


class ECGStripError(Exception):
    """Base exception for ECG strip chart errors"""
    pass


class MalformedWaveformError(ECGStripError):
    """Raised when a waveform buffer does not line up with its channel list"""
    pass


class InvalidZoomFactorError(ECGStripError):
    """Raised for a toolbar zoom factor that is not a number >= 1"""
    pass


class WaveformParseError(ECGStripError):
    """Raised when a recording file cannot be read"""
    pass
