class GradingError(Exception):
    """Base class for everything the grading engine can fail with."""

class InvalidBuffer(GradingError, ValueError):
    """Pixel data has the wrong length, channel count or sample range."""

class EmptyImage(GradingError, ValueError):
    """Image has no pixels, so its distribution is undefined."""

class InvalidLutSize(GradingError, ValueError):
    """LUT grid resolution is below 2."""

class InvalidIntensity(GradingError, ValueError):
    """Blend intensity is outside [0, 1]."""

class DecodeFailure(GradingError):
    """The image loader could not produce a pixel buffer."""
