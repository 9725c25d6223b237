"""Plugin protocol response models.

Field names follow the protocol's PascalCase JSON keys through aliases;
serialize with ``model_dump(by_alias=True)``. An empty ``err`` means success.
"""

from pydantic import BaseModel, ConfigDict, Field


class _PluginModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class ErrorResponse(_PluginModel):
    err: str = Field(default="", alias="Err")


class ActivateResponse(_PluginModel):
    implements: list[str] = Field(default_factory=list, alias="Implements")


class Capability(_PluginModel):
    scope: str = Field(default="local", alias="Scope")


class CapabilitiesResponse(_PluginModel):
    capabilities: Capability = Field(default_factory=Capability, alias="Capabilities")


class MountResponse(_PluginModel):
    mountpoint: str = Field(default="", alias="Mountpoint")
    err: str = Field(default="", alias="Err")


class PathResponse(_PluginModel):
    mountpoint: str = Field(default="", alias="Mountpoint")
    err: str = Field(default="", alias="Err")


class VolumeInfo(_PluginModel):
    name: str = Field(default="", alias="Name")
    mountpoint: str = Field(default="", alias="Mountpoint")


class GetResponse(_PluginModel):
    volume: VolumeInfo = Field(default_factory=VolumeInfo, alias="Volume")
    err: str = Field(default="", alias="Err")


class ListResponse(_PluginModel):
    volumes: list[VolumeInfo] = Field(default_factory=list, alias="Volumes")
    err: str = Field(default="", alias="Err")
