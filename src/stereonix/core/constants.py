"""
Constants and configuration values for Stereonix.

This module contains all the configuration constants, default values,
and mappings used throughout the application.
"""

# Depth model input
MODEL_INPUT_SIZE = 518
MODEL_INPUT_NAME = "pixel_values"

# ImageNet normalization statistics expected by Depth Anything V2
IMAGENET_MEAN = (0.485, 0.456, 0.406)
IMAGENET_STD = (0.229, 0.224, 0.225)

# Depth normalization
HISTOGRAM_BUCKETS = 1024
PERCENTILE_LOW = 0.02
PERCENTILE_HIGH = 0.98

# Stereogram geometry (16:9 output, each eye 8:9)
SIDE_WIDTH = 960
SIDE_HEIGHT = 1080
PAN_PIXELS_PER_UNIT = 5
MAX_SHIFT_PIXELS = 50

# Default render settings
DEFAULT_SETTINGS = {
    "zoom": 100.0,
    "pan_x": 0.0,
    "pan_y": 0.0,
    "depth_intensity": 25.0,
    "depth_gamma": 1.0,
    "invert_depth": False,
}

# Model configurations (Hugging Face checkpoints)
MODEL_CONFIGS = {
    "small": "depth-anything/Depth-Anything-V2-Small-hf",
    "base": "depth-anything/Depth-Anything-V2-Base-hf",
    "large": "depth-anything/Depth-Anything-V2-Large-hf",
}
DEFAULT_MODEL = "small"

# File formats
SUPPORTED_IMAGE_FORMATS = [".jpg", ".jpeg", ".png", ".bmp", ".tiff", ".tif", ".webp"]
OUTPUT_IMAGE_FORMAT = "png"
OUTPUT_FILENAME_PREFIX = "stereonix"

# Error messages
ERROR_MESSAGES = {
    "empty_image": "Image has no pixels ({width}x{height})",
    "invalid_target_size": "Target size must be positive, got {value}",
    "invalid_gamma": "Depth gamma must be positive, got {value}",
    "invalid_zoom": "Zoom must be positive, got {value}",
    "invalid_side_size": "Side dimensions must be positive, got {width}x{height}",
    "invalid_percentiles": "Percentiles must satisfy 0 <= low <= high <= 1, got {low} and {high}",
    "model_output_too_small": (
        "Model output {width}x{height} does not cover letterbox content "
        "({needed_width}x{needed_height}); the model is incompatible"
    ),
    "model_output_shape": "Model output must have two spatial dimensions, got shape {shape}",
    "depth_mismatch": "Depth map {depth_shape} is not aligned with image {image_shape}",
    "model_not_loaded": "Model not loaded. Call load_model() first.",
    "image_not_found": "Could not read image: {path}",
    "unsupported_format": "Unsupported image format: {path}",
}
