"""
Stereonix - Turn a single photo into a cross-eye side-by-side stereogram.

This package estimates depth with Depth-Anything-V2 and renders two
parallax-shifted views from one image.
"""

__version__ = "1.0.0"
__author__ = "Stereonix Team"
__description__ = "Convert a 2D image into a cross-eye stereogram using AI depth estimation"

from .core.constants import DEFAULT_SETTINGS, MODEL_CONFIGS
from .core.exceptions import (
    EmptyImage,
    IncompatibleModelOutput,
    InvalidConfiguration,
    StereonixError,
)
from .core.settings import RenderSettings
from .processing.pipeline import StereogramGenerator, StereoSession

__all__ = [
    "StereogramGenerator",
    "StereoSession",
    "RenderSettings",
    "StereonixError",
    "EmptyImage",
    "InvalidConfiguration",
    "IncompatibleModelOutput",
    "DEFAULT_SETTINGS",
    "MODEL_CONFIGS",
]
