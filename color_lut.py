import io
import time
from pathlib import Path

import numpy as np

from color_errors import InvalidLutSize
from color_grading import check_intensity

LUT_SIZE = 33  # 33x33x33 is the usual grading-software resolution
DEFAULT_TITLE = "LuminaLUT Grade"

def check_lut_size(size):
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 2:
        raise InvalidLutSize(f"LUT size must be an integer >= 2, got {size!r}")
    return int(size)

def sample_curve(mapping, intensity, size):
    """
    Evaluate one channel mapping on `size` evenly spaced points of [0, 1].

    The mapping's 256 samples are joined linearly, so an identity mapping
    returns the grid coordinates themselves.
    """
    axis = np.arange(size, dtype=np.float64) / (size - 1)
    levels = np.arange(256, dtype=np.float64)
    mapped = np.interp(axis * 255.0, levels, np.asarray(mapping, dtype=np.float64)) / 255.0
    return np.clip(axis + (mapped - axis) * intensity, 0.0, 1.0)

# ============== LUT Synthesizer ==============

def build_lut_grid(mappings, intensity, size=LUT_SIZE):
    """
    Sample three channel mappings on a size^3 grid.

    Returns:
        (size**3, 3) float array of output (r, g, b), blue outermost,
        red innermost (.cube order)
    """
    size = check_lut_size(size)
    intensity = check_intensity(intensity)
    r_curve, g_curve, b_curve = (sample_curve(m, intensity, size) for m in mappings)

    b_idx, g_idx, r_idx = np.meshgrid(
        np.arange(size), np.arange(size), np.arange(size), indexing="ij"
    )
    return np.column_stack([
        r_curve[r_idx.ravel()],
        g_curve[g_idx.ravel()],
        b_curve[b_idx.ravel()],
    ])

def generate_lut(mappings, intensity, size=LUT_SIZE, title=DEFAULT_TITLE):
    """Serialize the graded grid as a .cube document."""
    grid = build_lut_grid(mappings, intensity, size)
    # Double quotes would end the TITLE string early
    title = str(title).replace('"', "'")
    out = io.StringIO()
    out.write(f'TITLE "{title}"\n')
    out.write(f"LUT_3D_SIZE {int(size)}\n\n")
    np.savetxt(out, grid, fmt="%.6f", delimiter=" ")
    return out.getvalue()

def default_lut_filename():
    return f"lumina_grade_{int(time.time() * 1000)}.cube"

def write_cube(path, cube_text):
    path = Path(path)
    path.write_text(cube_text, encoding="utf-8")
    return path
