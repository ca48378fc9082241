from collections import namedtuple

import numba
import numpy as np

from color_histogram import CHANNELS, image_statistics

ChannelMappings = namedtuple("ChannelMappings", ["r", "g", "b"])

# ============== Channel Mapper ==============

@numba.jit(nopython=True)
def _monotone_sweep(source_cdf, reference_cdf):
    """
    Two-pointer sweep over both CDFs.

    The reference cursor only ever moves forward, so the mapping is
    non-decreasing. On a plateau it stops at the smallest reference level
    whose cumulative fraction reaches the source's.
    """
    mapping = np.zeros(256, dtype=np.uint8)
    ref_idx = 0
    for src_idx in range(256):
        while ref_idx < 255 and reference_cdf[ref_idx] < source_cdf[src_idx]:
            ref_idx += 1
        mapping[src_idx] = ref_idx
    return mapping

def _as_cdf(cdf, name):
    cdf = np.ascontiguousarray(cdf, dtype=np.float64)
    if cdf.shape != (256,):
        raise ValueError(f"{name} CDF must have 256 entries, got shape {cdf.shape}")
    return cdf

def create_mapping(source_cdf, reference_cdf):
    """
    Map each source level to the reference level with the same cumulative fraction.

    Args:
        source_cdf: 256 non-decreasing floats in [0, 1]
        reference_cdf: 256 non-decreasing floats in [0, 1]

    Returns:
        256-entry uint8 array, non-decreasing in the source level
    """
    return _monotone_sweep(_as_cdf(source_cdf, "source"), _as_cdf(reference_cdf, "reference"))

def match_channels(source_cdfs, reference_cdfs):
    return ChannelMappings(*(
        create_mapping(getattr(source_cdfs, ch), getattr(reference_cdfs, ch))
        for ch in CHANNELS
    ))

def derive_mappings(source_pixels, reference_pixels):
    """Full statistics chain: both images' CDFs, then one mapping per channel."""
    # Each image's statistics stand alone; order does not matter
    _, reference_cdfs = image_statistics(reference_pixels)
    _, source_cdfs = image_statistics(source_pixels)
    return match_channels(source_cdfs, reference_cdfs)

def identity_mappings():
    level = np.arange(256, dtype=np.uint8)
    return ChannelMappings(level.copy(), level.copy(), level.copy())
