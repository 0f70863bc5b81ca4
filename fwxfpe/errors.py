"""Exception types raised by the fwxfpe engine."""


class FPEError(ValueError):
    """Base class for every error the engine raises on bad configuration or input."""


class ConfigurationError(FPEError):
    """Raised when a context cannot be built from the given parameters."""


class InputValidationError(FPEError):
    """Raised when a value, base or IV is rejected before any cipher work."""


class DomainExhaustionError(FPEError):
    """Raised when cycle walking hits its iteration cap without landing in range."""

    def __init__(self, message: str, attempts: int) -> None:
        super().__init__(message)
        self.attempts = attempts


__all__ = [
    "ConfigurationError",
    "DomainExhaustionError",
    "FPEError",
    "InputValidationError",
]
