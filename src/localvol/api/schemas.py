"""Plugin protocol request schemas.

Responses live in localvol.driver.result; the driver builds them directly.
Every field has a default: an empty body still reaches the driver, which
reports what is missing in ``Err``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class _PluginRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateRequest(_PluginRequest):
    name: str = Field(default="", alias="Name")
    opts: dict[str, Any] | None = Field(default=None, alias="Opts")


class MountRequest(_PluginRequest):
    name: str = Field(default="", alias="Name")
    id: str = Field(default="", alias="ID")
    opts: dict[str, Any] | None = Field(default=None, alias="Opts")


class UnmountRequest(_PluginRequest):
    name: str = Field(default="", alias="Name")
    id: str = Field(default="", alias="ID")


class VolumeRequest(_PluginRequest):
    """Body of Path, Get and Remove."""

    name: str = Field(default="", alias="Name")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
