"""
Exceptions raised by the seam carving engine and its command-line wrapper.

Core failures derive from SeamResizeError. Problems with paths, formats and
flags are ConfigError, which is kept separate so callers can tell a bad
invocation from an engine failure.
"""


class SeamResizeError(ValueError):
    """Base class for errors raised by the carving engine."""


class EmptyImageError(SeamResizeError):
    """The image (or grid) has zero width or zero height."""


class DimensionExhaustedError(SeamResizeError):
    """A resize would shrink a dimension below one pixel."""


class GridTooSmallError(SeamResizeError):
    """A seam was requested from a grid with no rows or no columns."""


class InvalidSeamError(SeamResizeError):
    """A seam path is out of bounds, the wrong length, or not connected."""


class ConfigError(ValueError):
    """Invalid input/output paths, file formats or command-line flags."""
