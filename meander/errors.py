class ContourConfigError(ValueError):
    """Raised when contouring parameters are invalid. Values are never clamped."""


class TINFormatError(ValueError):
    """Raised when a TIN is not a sequence of three finite (x, y, z) vertices per triangle."""
