"""udmabuf device resource."""

from __future__ import annotations

import logging
from pathlib import Path

from . import constants
from .api import ContainerAllocateResponse, Device, DeviceSpec, Resource, healthy_devices

logger = logging.getLogger(__name__)


class ResourceUDMA(Resource):
    """Exposes the udmabuf device node; needs the VFIO directory as well."""

    def resource_name(self) -> str:
        return constants.UDMA_RESOURCE_NAME

    def socket_path(self) -> str:
        return constants.UDMA_SOCKET_PATH

    def list_devices(self) -> list[Device]:
        if not Path(constants.UDMA_DEVICE_PATH).exists():
            return []
        if not Path(constants.VFIO_DEVICE_PATH).exists():
            return []
        return healthy_devices(constants.UDMA_DEVICE_PREFIX, constants.UDMA_DEVICE_COUNT)

    def allocate(self, device_ids: list[str]) -> list[ContainerAllocateResponse]:
        logger.info("udma deviceIds - %s", device_ids)
        path = constants.UDMA_DEVICE_PATH
        return [
            ContainerAllocateResponse(
                devices=[
                    DeviceSpec(
                        container_path=path,
                        host_path=path,
                        permissions=constants.PERMISSIONS,
                    )
                ]
            )
        ]