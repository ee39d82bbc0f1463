"""
Exception hierarchy for the renderer.

Rendering itself has no recoverable runtime errors. Everything here is
raised either while a scene/camera/settings object is being built or when
a numerically degenerate value would otherwise leak NaN into the image.
"""


class PathforgeError(Exception):
    """Base class for all pathforge errors."""
    pass


class ConfigError(PathforgeError, ValueError):
    """Invalid render or camera configuration."""
    pass


class CameraConfigError(ConfigError):
    """Camera parameters that cannot produce a valid orthonormal basis."""
    pass


class DegenerateVectorError(PathforgeError, ArithmeticError):
    """A zero-length or non-finite vector was normalized."""
    pass


class SceneParseError(PathforgeError):
    """Error during scene parsing."""
    pass


class RenderCancelled(PathforgeError):
    """The render was cancelled before all tiles finished."""
    pass
