import argparse
import sys

from color_errors import GradingError
from color_grading import grade_image, intensity_from_percent
from color_io import load_pair, save_image
from color_lut import (
    DEFAULT_TITLE, LUT_SIZE, check_lut_size, default_lut_filename, generate_lut, write_cube,
)
from color_mapping import derive_mappings
from color_mood import describe_mood

# ============== Main Processing ==============

def main(input_path, ref_path, output_path, lut_path=None, intensity=1.0,
         lut_size=LUT_SIZE, title=DEFAULT_TITLE, describe=False, verbose=False):
    # Set up logging
    log = print if verbose else lambda *args, **kwargs: None

    if lut_path is not None:
        check_lut_size(lut_size)

    # Load images
    log("Loading images...")
    source, reference = load_pair(input_path, ref_path)
    log(f"  Source {source.width}x{source.height}, reference {reference.width}x{reference.height}")

    # Match histograms
    log("Matching histograms...")
    mappings = derive_mappings(source.pixels, reference.pixels)

    # Preview
    log(f"Grading at {intensity * 100:.0f}% intensity...")
    graded = grade_image(source, mappings, intensity)
    save_image(graded, output_path)
    print(f"Saved result to {output_path}")

    # Export the same mappings as a 3D LUT
    if lut_path is not None:
        lut_path = lut_path or default_lut_filename()
        log(f"Sampling {lut_size}^3 LUT...")
        cube = generate_lut(mappings, intensity, size=lut_size, title=title)
        write_cube(lut_path, cube)
        print(f"Saved LUT to {lut_path}")

    if describe:
        log("Describing reference mood...")
        print(f"Reference mood: {describe_mood(reference)}")

    return graded, mappings

def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Grade an image to match a reference with RGB histogram matching, "
                    "and export the grade as a .cube LUT.")
    parser.add_argument("--input", required=True, help="Input image path or URL")
    parser.add_argument("--ref", required=True, help="Reference image path or URL")
    parser.add_argument("--output", required=True, help="Graded preview output path")
    parser.add_argument("--lut", nargs="?", const="", default=None,
                        help="Also export a .cube LUT (optional path, "
                             "defaults to lumina_grade_<timestamp>.cube)")
    parser.add_argument("--intensity", type=int, default=100,
                        help="Grade strength in percent, 0-100 (default 100)")
    parser.add_argument("--lut-size", type=int, default=LUT_SIZE,
                        help=f"LUT grid resolution (default {LUT_SIZE})")
    parser.add_argument("--title", default=DEFAULT_TITLE, help="LUT title")
    parser.add_argument("--describe", action="store_true",
                        help="Print a one-sentence mood description of the reference")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show detailed progress logging")
    return parser.parse_args(argv)

def cli(argv=None):
    args = parse_args(argv)
    try:
        main(args.input, args.ref, args.output,
             lut_path=args.lut,
             intensity=intensity_from_percent(args.intensity),
             lut_size=args.lut_size,
             title=args.title,
             describe=args.describe,
             verbose=args.verbose)
    except GradingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(cli())
