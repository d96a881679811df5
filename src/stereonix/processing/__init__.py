"""Stereogram synthesis stages."""

from .depth_decoder import crop_model_output, resize_depth_to_image
from .depth_normalizer import find_percentiles_histogram, normalize_depth
from .depth_transform import process_depth
from .hole_filler import fill_holes
from .letterbox import LetterboxResult, compute_letterbox_geometry, letterbox_image
from .pipeline import (
    StereogramGenerator,
    StereoSession,
    depth_map_from_raw,
    predict_depth,
    predict_depth_async,
)
from .renderer import compose_side_by_side, generate_stereogram, render_stereo_views
from .tensor import decode_input_tensor, encode_input_tensor, make_model_input

__all__ = [
    "LetterboxResult",
    "compute_letterbox_geometry",
    "letterbox_image",
    "encode_input_tensor",
    "make_model_input",
    "decode_input_tensor",
    "crop_model_output",
    "resize_depth_to_image",
    "find_percentiles_histogram",
    "normalize_depth",
    "process_depth",
    "render_stereo_views",
    "compose_side_by_side",
    "generate_stereogram",
    "fill_holes",
    "predict_depth",
    "predict_depth_async",
    "depth_map_from_raw",
    "StereogramGenerator",
    "StereoSession",
]
