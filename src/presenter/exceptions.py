"""
Exception hierarchy for the presenter package.
"""


class PresenterError(Exception):
    """Base exception for presenter errors"""
    pass


class ConfigurationError(PresenterError):
    """Raised when a component is misconfigured at construction or registration time"""
    pass


class InvalidArgumentError(ConfigurationError, TypeError):
    """Raised when a constructor argument has an unsupported type"""
    pass


class SerializationError(PresenterError, ValueError):
    """Raised when template variables cannot be serialized to JSON"""
    pass


__all__ = [
    'PresenterError', 'ConfigurationError', 'InvalidArgumentError',
    'SerializationError'
]
