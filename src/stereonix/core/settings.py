"""
Render settings for stereogram generation.

The host application owns a RenderSettings value and passes it explicitly
to every render call; nothing in the pipeline keeps ambient state.
"""

from __future__ import annotations

import math
import dataclasses
from dataclasses import asdict, dataclass, fields
from typing import Any

from .constants import DEFAULT_SETTINGS, ERROR_MESSAGES
from .exceptions import InvalidConfiguration


@dataclass(frozen=True)
class RenderSettings:
    """User-adjustable parameters for one stereogram render.

    Attributes:
        zoom: Zoom in percent (100 = source pixels map 1:1 to output pixels)
        pan_x: Horizontal pan in pan units (5 output pixels per unit)
        pan_y: Vertical pan in pan units
        depth_intensity: Parallax strength in percent (100 = 50px max shift)
        depth_gamma: Exponent applied to normalized depth
        invert_depth: Swap near and far before rendering
    """

    zoom: float = DEFAULT_SETTINGS["zoom"]
    pan_x: float = DEFAULT_SETTINGS["pan_x"]
    pan_y: float = DEFAULT_SETTINGS["pan_y"]
    depth_intensity: float = DEFAULT_SETTINGS["depth_intensity"]
    depth_gamma: float = DEFAULT_SETTINGS["depth_gamma"]
    invert_depth: bool = DEFAULT_SETTINGS["invert_depth"]

    def validate(self) -> RenderSettings:
        """
        Check the settings the core cannot evaluate safely.

        Pan and depth intensity have no enforced range; zoom and gamma must
        be strictly positive.

        Returns:
            The same settings instance, for chaining

        Raises:
            InvalidConfiguration: If zoom or gamma is not a positive number
        """
        if not math.isfinite(self.zoom) or self.zoom <= 0:
            raise InvalidConfiguration(ERROR_MESSAGES["invalid_zoom"].format(value=self.zoom))
        if not math.isfinite(self.depth_gamma) or self.depth_gamma <= 0:
            raise InvalidConfiguration(
                ERROR_MESSAGES["invalid_gamma"].format(value=self.depth_gamma)
            )
        return self

    @property
    def zoom_factor(self) -> float:
        return self.zoom / 100.0

    @classmethod
    def from_dict(cls, values: dict[str, Any]) -> RenderSettings:
        """Build settings from a dict, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        kwargs = {key: value for key, value in values.items() if key in known}
        if "invert_depth" in kwargs:
            kwargs["invert_depth"] = bool(kwargs["invert_depth"])
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def replace(self, **changes: Any) -> RenderSettings:
        return dataclasses.replace(self, **changes)
