"""VFIO device directory resource."""

from __future__ import annotations

import logging
import os
from pathlib import Path

from . import constants
from .api import (
    ContainerAllocateResponse,
    Device,
    DeviceSpec,
    Mount,
    Resource,
    healthy_devices,
)

logger = logging.getLogger(__name__)


class ResourceVFIO(Resource):
    """Exposes every device node in the VFIO directory."""

    def resource_name(self) -> str:
        return constants.VFIO_RESOURCE_NAME

    def socket_path(self) -> str:
        return constants.VFIO_SOCKET_PATH

    def list_devices(self) -> list[Device]:
        if not Path(constants.VFIO_DEVICE_PATH).exists():
            return []
        return healthy_devices(constants.VFIO_DEVICE_PREFIX, constants.VFIO_DEVICE_COUNT)

    def allocate(self, device_ids: list[str]) -> list[ContainerAllocateResponse]:
        logger.info("vfio deviceIds - %s", device_ids)
        try:
            return allocate_devices_from_vfio_folder()
        except OSError:
            path = constants.VFIO_DEVICE_PATH
            return [
                ContainerAllocateResponse(
                    mounts=[Mount(container_path=path, host_path=path, read_only=False)]
                )
            ]


def allocate_devices_from_vfio_folder() -> list[ContainerAllocateResponse]:
    """One response listing every non-directory entry of the VFIO directory.

    Raises OSError when the directory cannot be read.
    """
    folder = constants.VFIO_DEVICE_PATH
    try:
        with os.scandir(folder) as entries:
            files = sorted(
                (entry for entry in entries if not entry.is_dir(follow_symlinks=False)),
                key=lambda entry: entry.name,
            )
    except OSError as exc:
        raise OSError(f"failed to read directory {folder}: {exc}") from exc

    devices = [
        DeviceSpec(
            container_path=os.path.join(folder, entry.name),
            host_path=os.path.join(folder, entry.name),
            permissions=constants.PERMISSIONS,
        )
        for entry in files
    ]
    return [ContainerAllocateResponse(devices=devices)]