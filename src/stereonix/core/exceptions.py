"""Error types raised by the stereogram pipeline."""


class StereonixError(Exception):
    """Base class for all pipeline errors."""


class EmptyImage(StereonixError, ValueError):
    """Input image or depth grid has zero width or height."""


class InvalidConfiguration(StereonixError, ValueError):
    """A setting or parameter is outside its valid domain."""


class IncompatibleModelOutput(StereonixError, RuntimeError):
    """Depth model output cannot be cropped back onto the letterbox content."""
