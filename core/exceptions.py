class StructureError(Exception):
    """Base class for errors raised by the structure models."""


class InvalidConfigurationError(StructureError, ValueError):
    """Raised when a model is constructed with parameters it cannot honour."""
