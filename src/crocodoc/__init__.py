"""Python client for the Crocodoc document conversion API.

This package provides a small library wrapping the Crocodoc HTTP API and a
command-line interface, including a generator that scaffolds configuration
files into an application.

Library Usage:
    from crocodoc import CrocodocAPI, CrocodocConfig

    api = CrocodocAPI(CrocodocConfig(token="<token>"))
    uuid = api.upload("http://www.example.com/test.doc")["uuid"]
    api.status_one(uuid)

    # Or load the token from crocodoc.yml / CROCODOC_API_TOKEN
    from crocodoc import load_settings

    api = CrocodocAPI(load_settings().config)
    session = api.session(uuid, {"editable": True, "user": "1337,Peter"})
    print(api.view(session["session"]))
"""

__version__ = "0.1.0"

from .api import (
    CrocodocAPI,
    HttpMethod,
    CrocodocError,
    ConfigurationError,
    CrocodocHTTPError,
    TransportError,
    UnsupportedOperationError,
    ParameterError,
    GeneratorError,
)
from .config import CrocodocConfig, Settings, load_settings

__all__ = [
    # Version
    "__version__",

    # Client
    "CrocodocAPI",
    "HttpMethod",

    # Configuration
    "CrocodocConfig",
    "Settings",
    "load_settings",

    # Exceptions
    "CrocodocError",
    "ConfigurationError",
    "CrocodocHTTPError",
    "TransportError",
    "UnsupportedOperationError",
    "ParameterError",
    "GeneratorError",
]
