import cv2
import numpy as np

from color_errors import InvalidIntensity
from color_histogram import as_pixel_buffer, rgba_image

def check_intensity(intensity):
    if isinstance(intensity, bool):
        raise InvalidIntensity(f"intensity must be a number, got {intensity!r}")
    try:
        value = float(intensity)
    except (TypeError, ValueError):
        raise InvalidIntensity(f"intensity must be a number, got {intensity!r}") from None
    # NaN fails both comparisons
    if not 0.0 <= value <= 1.0:
        raise InvalidIntensity(f"intensity must be in [0, 1], got {intensity!r}")
    return value

def intensity_from_percent(percent):
    """Slider percentage (0-100) to a blend factor."""
    if not 0 <= percent <= 100:
        raise InvalidIntensity(f"intensity percentage must be in [0, 100], got {percent!r}")
    return percent / 100.0

def blend_curve(mapping, intensity):
    """
    Blend a channel mapping with the identity.

    Returns float levels: source + (mapped - source) * intensity
    """
    levels = np.arange(256, dtype=np.float64)
    mapped = np.asarray(mapping, dtype=np.float64)
    return levels + (mapped - levels) * intensity

def blend_table(mappings, intensity):
    """
    256x4 uint8 lookup table: blended R, G, B curves and a constant opaque alpha.

    Rounds half to even, then clamps to [0, 255].
    """
    table = np.full((256, 4), 255, dtype=np.uint8)
    for i, mapping in enumerate(mappings):
        curve = np.rint(blend_curve(mapping, intensity))
        table[:, i] = np.clip(curve, 0, 255).astype(np.uint8)
    return table

# ============== Grading Applicator ==============

def apply_grading(pixels, mappings, intensity):
    """
    Apply three channel mappings to a flat RGBA buffer.

    Args:
        pixels: flat RGBA buffer (see color_histogram.as_pixel_buffer)
        mappings: ChannelMappings (or any r, g, b triple of 256-entry arrays)
        intensity: blend factor in [0, 1]

    Returns:
        new flat uint8 buffer of the same length, alpha forced to 255
    """
    intensity = check_intensity(intensity)
    buf = as_pixel_buffer(pixels)
    for mapping in mappings:
        if np.shape(mapping) != (256,):
            raise ValueError(f"channel mapping must have 256 entries, got shape {np.shape(mapping)}")
    if buf.size == 0:
        return buf.copy()

    # Each output sample depends only on its own channel's input level
    table = blend_table(mappings, intensity).reshape(1, 256, 4)
    graded = cv2.LUT(buf.reshape(1, -1, 4), table)
    return graded.reshape(-1)

def grade_image(image, mappings, intensity):
    """Grade an RgbaImage, keeping its dimensions."""
    return rgba_image(image.width, image.height, apply_grading(image.pixels, mappings, intensity))
