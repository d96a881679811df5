"""
Depth estimation model management.

This module wraps a Depth-Anything-V2 checkpoint from Hugging Face behind a
single ``run`` call that takes the planar (1, 3, N, N) input tensor and
returns the raw depth output as a numpy array. Anything exposing the same
``run`` method can be used by the pipeline in its place.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

import numpy as np
import torch

from ..core.constants import DEFAULT_MODEL, ERROR_MESSAGES, MODEL_CONFIGS, MODEL_INPUT_NAME
from ..utils import console


class DepthModel(Protocol):
    """Black-box depth model contract used by the pipeline."""

    def run(self, input_tensor: np.ndarray) -> np.ndarray:
        ...


class DepthEstimator:
    """Handles depth inference using Depth-Anything-V2 via transformers."""

    def __init__(self, model_name: str = DEFAULT_MODEL, device: str = "auto", verbose: bool = False):
        self.model_name = model_name
        self.model_id = MODEL_CONFIGS.get(model_name, model_name)
        self.device = self._determine_device(device)
        self.verbose = verbose
        self.model = None

    def _determine_device(self, device: str) -> str:
        """Determine the best device to use for inference."""
        if device == "auto":
            if torch.cuda.is_available():
                return "cuda"
            elif hasattr(torch.backends, "mps") and torch.backends.mps.is_available():
                return "mps"
            else:
                return "cpu"
        return device

    def load_model(self) -> bool:
        """
        Load the depth estimation model.

        Returns:
            True if model loaded successfully
        """
        try:
            from transformers import AutoModelForDepthEstimation

            if self.verbose:
                console.info(f"Loading depth model: {self.model_id}")

            self.model = AutoModelForDepthEstimation.from_pretrained(self.model_id)
            self.model.to(self.device)
            self.model.eval()

            if self.verbose:
                console.success(f"Loaded {self.model_id} on {self.device}")
            return True

        except ImportError as e:
            console.error(f"transformers is not installed: {e}")
            return False
        except (OSError, ValueError) as e:
            console.error(f"Error loading model {self.model_id}: {e}")
            return False

    def run(self, input_tensor: np.ndarray) -> np.ndarray:
        """
        Run one forward pass.

        Args:
            input_tensor: float32 array of shape (1, 3, N, N)

        Returns:
            Raw depth array, typically (1, N, N)
        """
        if self.model is None:
            raise RuntimeError(ERROR_MESSAGES["model_not_loaded"])

        try:
            pixel_values = torch.from_numpy(np.ascontiguousarray(input_tensor, dtype=np.float32))
            with torch.no_grad():
                outputs = self.model(**{MODEL_INPUT_NAME: pixel_values.to(self.device)})
            return outputs.predicted_depth.detach().cpu().numpy()
        except (RuntimeError, ValueError, TypeError) as e:
            raise RuntimeError(f"Depth estimation failed: {e}") from e

    def get_model_info(self) -> Dict[str, Any]:
        """Get information about the model."""
        return {
            "model_name": self.model_name,
            "model_id": self.model_id,
            "input_name": MODEL_INPUT_NAME,
            "device": self.device,
            "loaded": self.model is not None,
        }

    def unload_model(self) -> None:
        """Unload the model to free memory."""
        if self.model is not None:
            del self.model
            self.model = None

            if self.device == "cuda" and torch.cuda.is_available():
                torch.cuda.empty_cache()


def create_depth_estimator(
    model_name: Optional[str] = None, device: str = "auto", verbose: bool = False
) -> DepthEstimator:
    """
    Factory function to create a depth estimator.

    Args:
        model_name: Model size key (small, base, large) or a Hugging Face model ID
        device: Device to use for inference
        verbose: Report loading progress

    Returns:
        Configured DepthEstimator instance (not yet loaded)
    """
    if model_name is None:
        model_name = DEFAULT_MODEL

    return DepthEstimator(model_name, device, verbose)
