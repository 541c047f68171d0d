"""Configuration schemas using Pydantic."""

from typing import Any, Callable, Union

from pydantic import BaseModel, Field, field_validator

DEFAULT_BASE_URL = "https://crocodoc.com/api/v2"
DEFAULT_VIEW_URL = "https://crocodoc.com/view"
DEFAULT_PARAM_NAME = "token"


class CrocodocConfig(BaseModel):
    """Configuration shared by every Crocodoc API client."""

    token: str = Field(min_length=1)
    # Either a fixed name or a zero-argument callable producing it
    param_name: Union[str, Callable[[], str]] = Field(default=DEFAULT_PARAM_NAME)
    base_url: str = Field(default=DEFAULT_BASE_URL)
    view_url: str = Field(default=DEFAULT_VIEW_URL)
    timeout: float = Field(default=60, gt=0)

    @field_validator("base_url", "view_url")
    @classmethod
    def strip_trailing_slash(cls, v):
        """URLs are joined with '/' so keep them without a trailing one."""
        return v.rstrip("/")

    def resolve_param_name(self) -> str:
        """Return the name under which the token is sent."""
        if callable(self.param_name):
            return self.param_name()
        return self.param_name

    def model_dump_for_file(self) -> dict[str, Any]:
        """Export configuration for saving to file."""
        data = self.model_dump()
        if callable(data["param_name"]):
            data["param_name"] = self.resolve_param_name()
        return data
