"""Depth model wrappers."""

from .depth_estimator import DepthEstimator, DepthModel, create_depth_estimator

__all__ = ["DepthEstimator", "DepthModel", "create_depth_estimator"]
