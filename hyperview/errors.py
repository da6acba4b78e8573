"""Exceptions raised when configuration is rejected at the boundary."""


class ConfigurationError(ValueError):
    """Invalid frame configuration (bad speed, scale or shape)."""


class UnknownShapeError(ConfigurationError, KeyError):
    """No polytope is registered under the requested identifier."""

    def __init__(self, shape_id, known=()):
        self.shape_id = shape_id
        self.known = tuple(known)
        message = f"Unknown polytope: {shape_id!r}"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)

    def __str__(self):
        return self.args[0]
