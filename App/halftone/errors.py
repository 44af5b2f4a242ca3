"""Exceptions raised by the halftone pipeline."""


class HalftoneError(Exception):
    """Base class for halftone pipeline errors."""


class InvalidInputError(HalftoneError, ValueError):
    """Raised when image data or sampling parameters are malformed."""


class ConfigValidationError(HalftoneError, ValueError):
    """Raised when configuration validation fails.

    Args:
        errors: Human-readable description of every problem found
    """

    def __init__(self, errors: "list[str] | str"):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("Invalid configuration: " + "; ".join(self.errors))


class ResourceExhaustedError(HalftoneError, MemoryError):
    """Raised when an image is too large to process in memory."""
