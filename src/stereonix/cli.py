"""
Stereonix command line interface - convert a 2D image into a cross-eye stereogram.
"""

import argparse
import os
import sys

from .core.constants import (
    DEFAULT_MODEL,
    DEFAULT_SETTINGS,
    MODEL_CONFIGS,
    MODEL_INPUT_SIZE,
    SIDE_HEIGHT,
    SIDE_WIDTH,
)
from .core.exceptions import StereonixError
from .core.settings import RenderSettings
from .models.depth_estimator import create_depth_estimator
from .processing.pipeline import StereogramGenerator
from .utils import console
from .utils.file_operations import validate_image_file
from .utils.path_utils import generate_depth_filename, generate_output_filename


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stereonix",
        description="Convert a 2D image into a side-by-side cross-eye stereogram using depth estimation",
    )
    parser.add_argument("input_image", help="Input image file path")
    parser.add_argument("-o", "--output", default=None,
                        help="Output image path (default: stereonix_<date>.png)")
    parser.add_argument("-m", "--model", default=DEFAULT_MODEL,
                        help=f"Depth model: {', '.join(MODEL_CONFIGS)} or a Hugging Face model ID "
                             f"(default: {DEFAULT_MODEL})")
    parser.add_argument("--device", choices=["auto", "cpu", "cuda", "mps"], default="auto",
                        help="Device to use for inference (default: auto)")
    parser.add_argument("--zoom", type=float, default=DEFAULT_SETTINGS["zoom"],
                        help="Zoom in percent (default: 100)")
    parser.add_argument("--pan-x", type=float, default=DEFAULT_SETTINGS["pan_x"],
                        help="Horizontal pan, 5 pixels per unit (default: 0)")
    parser.add_argument("--pan-y", type=float, default=DEFAULT_SETTINGS["pan_y"],
                        help="Vertical pan, 5 pixels per unit (default: 0)")
    parser.add_argument("--depth-intensity", type=float, default=DEFAULT_SETTINGS["depth_intensity"],
                        help="Parallax strength in percent, 100 = 50px max shift (default: 25)")
    parser.add_argument("--depth-gamma", type=float, default=DEFAULT_SETTINGS["depth_gamma"],
                        help="Gamma applied to normalized depth (default: 1.0)")
    parser.add_argument("--invert-depth", action="store_true",
                        help="Swap near and far")
    parser.add_argument("--side-width", type=int, default=SIDE_WIDTH,
                        help=f"Width of each eye view (default: {SIDE_WIDTH})")
    parser.add_argument("--side-height", type=int, default=SIDE_HEIGHT,
                        help=f"Height of each eye view (default: {SIDE_HEIGHT})")
    parser.add_argument("--input-size", type=int, default=MODEL_INPUT_SIZE,
                        help=f"Square model input size (default: {MODEL_INPUT_SIZE})")
    parser.add_argument("--save-depth", action="store_true",
                        help="Also save the depth map next to the output as <output>_depth.png")
    parser.add_argument("--depth-output", metavar="PATH", default=None,
                        help="Save the depth map to PATH (implies --save-depth)")
    parser.add_argument("--depth-map", metavar="PATH", default=None,
                        help="Use a precomputed grayscale depth map (white = near) and skip the model")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Print progress messages")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    console.configure_console(args.verbose)

    if not validate_image_file(args.input_image):
        console.error(f"Input image not found or unsupported: {args.input_image}")
        sys.exit(1)

    if args.depth_map and not os.path.exists(args.depth_map):
        console.error(f"Depth map not found: {args.depth_map}")
        sys.exit(1)

    output_path = args.output or generate_output_filename()
    depth_output_path = args.depth_output
    if depth_output_path is None and args.save_depth:
        depth_output_path = generate_depth_filename(output_path)

    try:
        settings = RenderSettings(
            zoom=args.zoom,
            pan_x=args.pan_x,
            pan_y=args.pan_y,
            depth_intensity=args.depth_intensity,
            depth_gamma=args.depth_gamma,
            invert_depth=args.invert_depth,
        ).validate()

        depth_model = None
        if args.depth_map is None:
            depth_model = create_depth_estimator(args.model, args.device, args.verbose)
            if not depth_model.load_model():
                sys.exit(1)

        generator = StereogramGenerator(
            depth_model,
            target_size=args.input_size,
            side_width=args.side_width,
            side_height=args.side_height,
            verbose=args.verbose,
        )
        generator.process_file(
            args.input_image,
            output_path,
            settings,
            depth_output_path=depth_output_path,
            depth_map_path=args.depth_map,
        )
    except (StereonixError, OSError, RuntimeError) as e:
        console.error(str(e))
        sys.exit(1)

    print(output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
