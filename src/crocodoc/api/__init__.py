"""Public API for the crocodoc library."""

from .exceptions import (
    ConfigurationError,
    CrocodocError,
    CrocodocHTTPError,
    GeneratorError,
    ParameterError,
    TransportError,
    UnsupportedOperationError,
)
from .types import (
    DocumentStatus,
    HttpMethod,
    Params,
    SessionResult,
    UploadResult,
)
from .client import CrocodocAPI

# Public API exports
__all__ = [
    # Client
    'CrocodocAPI',

    # Types
    'HttpMethod',
    'Params',
    'UploadResult',
    'DocumentStatus',
    'SessionResult',

    # Exceptions
    'CrocodocError',
    'ConfigurationError',
    'CrocodocHTTPError',
    'TransportError',
    'UnsupportedOperationError',
    'ParameterError',
    'GeneratorError',
]
