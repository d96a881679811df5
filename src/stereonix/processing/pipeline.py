"""
Image to stereogram pipeline.

Stage order: letterbox -> encode -> depth model -> crop -> normalize ->
resize to image -> gamma/invert -> render -> fill holes -> compose.
Every stage is a pure function; StereogramGenerator only bundles the
configuration, and StereoSession is a convenience for interactive hosts.
"""

from __future__ import annotations

from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Optional, Union

import numpy as np

from ..core.constants import MODEL_INPUT_SIZE, SIDE_HEIGHT, SIDE_WIDTH
from ..core.settings import RenderSettings
from ..models.depth_estimator import DepthModel
from ..utils import console
from ..utils.file_operations import (
    load_depth_map,
    load_image_rgba,
    save_depth_map,
    save_image_rgba,
)
from .depth_decoder import crop_model_output, resize_depth_to_image
from .depth_normalizer import normalize_depth
from .letterbox import letterbox_image
from .renderer import generate_stereogram
from .tensor import make_model_input


def predict_depth(image: np.ndarray, model: DepthModel, target_size: int = MODEL_INPUT_SIZE) -> np.ndarray:
    """
    Run the depth model on an image and crop its output to the content area.

    Args:
        image: Source image (H x W x 4, RGBA, uint8)
        model: Object with ``run(input_tensor) -> depth``
        target_size: Square model input size

    Returns:
        Raw float32 depth of shape (content_height, content_width)
    """
    letterbox = letterbox_image(image, target_size)
    output = model.run(make_model_input(letterbox.square_image))
    return crop_model_output(output, letterbox)


def predict_depth_async(
    executor: Executor,
    image: np.ndarray,
    model: DepthModel,
    target_size: int = MODEL_INPUT_SIZE,
) -> Future:
    """Submit predict_depth to an executor; the caller decides when to wait."""
    return executor.submit(predict_depth, image, model, target_size)


def depth_map_from_raw(raw_depth: np.ndarray, width: int, height: int) -> np.ndarray:
    """Normalize cropped model depth and stretch it to the image size."""
    return resize_depth_to_image(normalize_depth(raw_depth), width, height)


class StereogramGenerator:
    """Produces depth maps and stereograms with a fixed model and geometry."""

    def __init__(
        self,
        depth_model: Optional[DepthModel] = None,
        target_size: int = MODEL_INPUT_SIZE,
        side_width: int = SIDE_WIDTH,
        side_height: int = SIDE_HEIGHT,
        verbose: bool = False,
    ):
        self.depth_model = depth_model
        self.target_size = target_size
        self.side_width = side_width
        self.side_height = side_height
        self.verbose = verbose

    def generate_depth_map(self, image: np.ndarray) -> np.ndarray:
        """
        Estimate an 8-bit depth map aligned with the image.

        Args:
            image: Source image (H x W x 4, RGBA, uint8)

        Returns:
            H x W uint8 depth map, 255 = nearest
        """
        if self.depth_model is None:
            raise RuntimeError("No depth model configured; pass a precomputed depth map instead")

        height, width = image.shape[:2]
        if self.verbose:
            console.info(f"Analyzing depth for {width}x{height} image...")

        raw_depth = predict_depth(image, self.depth_model, self.target_size)
        return depth_map_from_raw(raw_depth, width, height)

    def render(self, image: np.ndarray, depth_map: np.ndarray, settings: RenderSettings) -> np.ndarray:
        """Render the side-by-side stereogram for the given settings."""
        if self.verbose:
            console.info(
                f"Rendering {self.side_width * 2}x{self.side_height} stereogram "
                f"(zoom {settings.zoom:g}%, depth {settings.depth_intensity:g})"
            )
        return generate_stereogram(image, depth_map, settings, self.side_width, self.side_height)

    def process_file(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
        settings: Optional[RenderSettings] = None,
        depth_output_path: Optional[Union[str, Path]] = None,
        depth_map_path: Optional[Union[str, Path]] = None,
    ) -> Path:
        """
        Convert an image file into a stereogram file.

        Args:
            input_path: Source image path
            output_path: Stereogram output path
            settings: Render settings (defaults if None)
            depth_output_path: Also save the estimated depth map here
            depth_map_path: Use this precomputed depth map instead of the model

        Returns:
            Path of the written stereogram
        """
        settings = (settings or RenderSettings()).validate()
        image = load_image_rgba(input_path)
        height, width = image.shape[:2]

        if depth_map_path is not None:
            depth_map = resize_depth_to_image(load_depth_map(depth_map_path), width, height)
        else:
            depth_map = self.generate_depth_map(image)

        if depth_output_path is not None:
            save_depth_map(depth_map, depth_output_path)
            if self.verbose:
                console.info(f"Depth map saved: {depth_output_path}")

        stereogram = self.render(image, depth_map, settings)
        written = save_image_rgba(stereogram, output_path)
        if self.verbose:
            console.success(f"Stereogram saved: {written}")
        return written


class StereoSession:
    """Latest image, depth map and settings for an interactive host."""

    def __init__(self, generator: StereogramGenerator, settings: Optional[RenderSettings] = None):
        self.generator = generator
        self.settings = settings or RenderSettings()
        self.image: Optional[np.ndarray] = None
        self.depth_map: Optional[np.ndarray] = None

    def load_image(self, image: np.ndarray, depth_map: Optional[np.ndarray] = None) -> np.ndarray:
        """Set the current image and compute (or accept) its depth map."""
        if depth_map is None:
            depth_map = self.generator.generate_depth_map(image)
        self.image = image
        self.depth_map = depth_map
        return depth_map

    def update_settings(self, **changes) -> RenderSettings:
        self.settings = self.settings.replace(**changes).validate()
        return self.settings

    def render(self) -> Optional[np.ndarray]:
        """Render with the current state, or None if no image is loaded."""
        if self.image is None or self.depth_map is None:
            return None
        return self.generator.render(self.image, self.depth_map, self.settings)
