from collections import namedtuple

import numpy as np
from skimage import exposure

from color_errors import EmptyImage, InvalidBuffer

CHANNELS = ("r", "g", "b")

Histogram = namedtuple("Histogram", ["r", "g", "b", "total"])
Cdf = namedtuple("Cdf", ["r", "g", "b"])

# ============== Pixel buffers ==============

def as_pixel_buffer(pixels):
    """
    Validate a flat RGBA buffer and view it as uint8.

    Args:
        pixels: bytes-like object, numpy array or integer sequence,
            4 samples per pixel

    Returns:
        1D numpy array of uint8 (no copy when the input already is one)
    """
    if isinstance(pixels, (bytes, bytearray, memoryview)):
        buf = np.frombuffer(pixels, dtype=np.uint8)
    else:
        buf = np.asarray(pixels)
        if buf.dtype != np.uint8:
            if buf.size and not np.issubdtype(buf.dtype, np.integer):
                raise InvalidBuffer(f"pixel samples must be integers, got {buf.dtype}")
            if buf.size and (buf.min() < 0 or buf.max() > 255):
                raise InvalidBuffer("pixel samples must be in [0, 255]")
            buf = buf.astype(np.uint8)
        buf = buf.ravel()

    if buf.size % 4 != 0:
        raise InvalidBuffer(f"buffer length {buf.size} is not a multiple of 4 (RGBA)")
    return buf

def as_rgba(pixels):
    """Validated buffer reshaped to (pixel_count, 4)."""
    return as_pixel_buffer(pixels).reshape(-1, 4)

RgbaImage = namedtuple("RgbaImage", ["width", "height", "pixels"])

def rgba_image(width, height, pixels):
    """RgbaImage whose buffer length agrees with its dimensions."""
    if width < 0 or height < 0:
        raise InvalidBuffer(f"invalid dimensions {width}x{height}")
    buf = as_pixel_buffer(pixels)
    if buf.size != width * height * 4:
        raise InvalidBuffer(
            f"buffer holds {buf.size // 4} pixels, expected {width}x{height}={width * height}"
        )
    return RgbaImage(width, height, buf)

# ============== Histogram Builder ==============

def channel_histogram(samples):
    # source_range="dtype" gives one bucket per uint8 level, 0..255
    counts, _ = exposure.histogram(samples, source_range="dtype")
    return counts.astype(np.int64)

def build_histogram(pixels):
    """Count R, G and B levels of a flat RGBA buffer. Alpha is ignored."""
    rgba = as_rgba(pixels)
    counts = [channel_histogram(rgba[:, i]) for i in range(3)]
    return Histogram(*counts, total=rgba.shape[0])

# ============== Distribution Normalizer ==============

def compute_cdf(counts, total_pixels):
    """
    Running sum of counts (level 0 -> 255) divided by the pixel count.

    Raises EmptyImage when there are no pixels, instead of producing NaN.
    """
    if total_pixels <= 0:
        raise EmptyImage("cannot build a distribution from an image with no pixels")
    counts = np.asarray(counts, dtype=np.float64)
    if counts.shape != (256,):
        raise ValueError(f"expected 256 histogram buckets, got shape {counts.shape}")
    return np.cumsum(counts) / float(total_pixels)

def histogram_cdfs(histogram):
    return Cdf(*(compute_cdf(getattr(histogram, ch), histogram.total) for ch in CHANNELS))

def image_statistics(pixels):
    """Histogram and CDF of one image."""
    histogram = build_histogram(pixels)
    return histogram, histogram_cdfs(histogram)
