"""Type definitions for the crocodoc client API."""

from enum import Enum
from typing import Dict, List, Mapping, Optional, TypedDict, Union

from .exceptions import ParameterError


class HttpMethod(Enum):
    """HTTP verbs used by the Crocodoc API."""
    GET = "GET"
    POST = "POST"


ParamValue = Union[str, bool, int, float, None]
Params = Mapping[str, ParamValue]


class UploadResult(TypedDict, total=False):
    """Response of document/upload."""
    uuid: str
    error: str


class DocumentStatus(TypedDict, total=False):
    """One element of the document/status response."""
    uuid: str
    status: str
    viewable: bool
    error: str


StatusList = List[DocumentStatus]


class SessionResult(TypedDict):
    """Response of session/create."""
    session: str


def coerce_param(name: str, value: ParamValue) -> Optional[str]:
    """Convert a parameter value to the string sent on the wire.

    Booleans become ``"true"``/``"false"``, numbers use ``str()`` and
    ``None`` means the parameter is left out.

    Raises:
        ParameterError: If the value has any other type
    """
    if value is None:
        return None
    # bool before int: bool is a subclass of int
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    raise ParameterError(
        f"Cannot send parameter {name!r} of type {type(value).__name__}",
        name=name,
    )


def coerce_params(params: Params) -> Dict[str, str]:
    """Coerce every value of a parameter mapping, dropping ``None`` values."""
    coerced = {}
    for name, value in params.items():
        text = coerce_param(name, value)
        if text is not None:
            coerced[name] = text
    return coerced

