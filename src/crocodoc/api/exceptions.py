"""Library-specific exceptions for crocodoc."""

from typing import Any, Dict, Optional


class CrocodocError(Exception):
    """Base exception for crocodoc errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ConfigurationError(CrocodocError):
    """Invalid configuration."""
    pass


class CrocodocHTTPError(CrocodocError):
    """The API answered with a status other than 200."""

    def __init__(self, status_code: int, body: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(f"HTTP Error {status_code}: {body}", details)
        self.status_code = status_code
        self.body = body


class TransportError(CrocodocError):
    """The request never got a response."""
    pass


class UnsupportedOperationError(CrocodocError):
    """Operation is not implemented by this client."""
    pass


class ParameterError(CrocodocError, TypeError):
    """A request parameter value cannot be sent."""

    def __init__(self, message: str, name: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, details)
        self.name = name


class GeneratorError(CrocodocError):
    """Scaffolding files could not be written."""
    pass
