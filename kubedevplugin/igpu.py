"""Integrated GPU resource."""

from __future__ import annotations

import logging
from pathlib import Path

from . import constants
from .api import ContainerAllocateResponse, Device, DeviceSpec, Resource, healthy_devices

logger = logging.getLogger(__name__)


class ResourceIGPU(Resource):
    """Exposes the GPU card and render nodes."""

    def resource_name(self) -> str:
        return constants.IGPU_RESOURCE_NAME

    def socket_path(self) -> str:
        return constants.IGPU_SOCKET_PATH

    def list_devices(self) -> list[Device]:
        if not Path(constants.IGPU_DEVICE_PATH).exists():
            return []
        return healthy_devices(constants.IGPU_DEVICE_PREFIX, constants.IGPU_DEVICE_COUNT)

    def allocate(self, device_ids: list[str]) -> list[ContainerAllocateResponse]:
        logger.info("igpu deviceIds - %s", device_ids)
        paths = (constants.IGPU_DEVICE_PATH, constants.RENDER_D128_DEVICE_PATH)
        return [
            ContainerAllocateResponse(
                devices=[
                    DeviceSpec(
                        container_path=path,
                        host_path=path,
                        permissions=constants.PERMISSIONS,
                    )
                    for path in paths
                ]
            )
        ]