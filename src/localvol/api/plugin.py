"""Volume plugin protocol endpoints.

The orchestration host POSTs JSON to /Plugin.Activate and
/VolumeDriver.<Operation>. Every call answers 200, empty body included;
failures are reported in the body's ``Err`` field.
"""

from fastapi import APIRouter, Depends

from localvol.api.dependencies import get_driver
from localvol.api.schemas import CreateRequest, MountRequest, UnmountRequest, VolumeRequest
from localvol.driver import LocalDriver
from localvol.driver.result import (
    ActivateResponse,
    CapabilitiesResponse,
    ErrorResponse,
    GetResponse,
    ListResponse,
    MountResponse,
    PathResponse,
)

router = APIRouter(tags=["plugin"])


@router.post("/Plugin.Activate", response_model=ActivateResponse)
async def activate(driver: LocalDriver = Depends(get_driver)) -> ActivateResponse:
    """Handshake: report the implemented plugin interfaces."""
    return await driver.activate()


@router.post("/VolumeDriver.Capabilities", response_model=CapabilitiesResponse)
async def capabilities(driver: LocalDriver = Depends(get_driver)) -> CapabilitiesResponse:
    return await driver.capabilities()


@router.post("/VolumeDriver.Create", response_model=ErrorResponse)
async def create(
    request: CreateRequest | None = None,
    driver: LocalDriver = Depends(get_driver),
) -> ErrorResponse:
    request = request or CreateRequest()
    return await driver.create(request.name, request.opts)


@router.post("/VolumeDriver.Mount", response_model=MountResponse)
async def mount(
    request: MountRequest | None = None,
    driver: LocalDriver = Depends(get_driver),
) -> MountResponse:
    request = request or MountRequest()
    return await driver.mount(request.name, request.opts)


@router.post("/VolumeDriver.Unmount", response_model=ErrorResponse)
async def unmount(
    request: UnmountRequest | None = None,
    driver: LocalDriver = Depends(get_driver),
) -> ErrorResponse:
    request = request or UnmountRequest()
    return await driver.unmount(request.name)


@router.post("/VolumeDriver.Path", response_model=PathResponse)
async def path(
    request: VolumeRequest | None = None,
    driver: LocalDriver = Depends(get_driver),
) -> PathResponse:
    request = request or VolumeRequest()
    return await driver.path(request.name)


@router.post("/VolumeDriver.Get", response_model=GetResponse)
async def get(
    request: VolumeRequest | None = None,
    driver: LocalDriver = Depends(get_driver),
) -> GetResponse:
    request = request or VolumeRequest()
    return await driver.get(request.name)


@router.post("/VolumeDriver.List", response_model=ListResponse)
async def list_volumes(driver: LocalDriver = Depends(get_driver)) -> ListResponse:
    return await driver.list()


@router.post("/VolumeDriver.Remove", response_model=ErrorResponse)
async def remove(
    request: VolumeRequest | None = None,
    driver: LocalDriver = Depends(get_driver),
) -> ErrorResponse:
    request = request or VolumeRequest()
    return await driver.remove(request.name)
