"""X11 socket directory resource."""

from __future__ import annotations

import logging
from pathlib import Path

from . import constants
from .api import ContainerAllocateResponse, Device, Mount, Resource, healthy_devices

logger = logging.getLogger(__name__)


class ResourceX11(Resource):
    """Shares the host X11 socket directory with containers."""

    def resource_name(self) -> str:
        return constants.X11_RESOURCE_NAME

    def socket_path(self) -> str:
        return constants.X11_SOCKET_PATH

    def list_devices(self) -> list[Device]:
        if not Path(constants.X11_DEVICE_PATH).exists():
            return []
        return healthy_devices(constants.X11_DEVICE_PREFIX, constants.X11_DEVICE_COUNT)

    def allocate(self, device_ids: list[str]) -> list[ContainerAllocateResponse]:
        logger.info("x11 deviceIds - %s", device_ids)
        path = constants.X11_DEVICE_PATH
        return [
            ContainerAllocateResponse(
                mounts=[Mount(container_path=path, host_path=path, read_only=False)]
            )
        ]