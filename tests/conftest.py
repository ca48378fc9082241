import numpy as np
import pytest


@pytest.fixture
def solid_pixels():
    """Factory: flat RGBA buffer of `count` identical pixels."""
    def make(rgb, count, alpha=255):
        return np.tile(np.array([*rgb, alpha], dtype=np.uint8), count)
    return make


@pytest.fixture
def random_pixels():
    """Factory: flat RGBA buffer of random samples, alpha included."""
    def make(count, seed=0, low=0, high=256):
        rng = np.random.default_rng(seed)
        return rng.integers(low, high, size=count * 4, dtype=np.uint8)
    return make


@pytest.fixture
def full_range_pixels():
    """256 pixels whose R, G and B each take every level exactly once."""
    levels = np.arange(256, dtype=np.uint8)
    rgba = np.stack([levels, levels[::-1], np.roll(levels, 7), np.full(256, 255, np.uint8)], axis=1)
    return rgba.reshape(-1)
