"""USB bus resource."""

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


class ResourceUSB(Resource):
    """Exposes every device node on the host USB buses."""

    def resource_name(self) -> str:
        return constants.USB_RESOURCE_NAME

    def socket_path(self) -> str:
        return constants.USB_SOCKET_PATH

    def list_devices(self) -> list[Device]:
        if not Path(constants.USB_DEVICE_PATH).exists():
            return []
        return healthy_devices(constants.USB_DEVICE_PREFIX, constants.USB_DEVICE_COUNT)

    def allocate(self, device_ids: list[str]) -> list[ContainerAllocateResponse]:
        logger.info("usb deviceIds - %s", device_ids)
        try:
            return scan_usb_bus()
        except OSError:
            path = constants.USB_DEVICE_PATH
            return [
                ContainerAllocateResponse(
                    mounts=[Mount(container_path=path, host_path=path, read_only=False)]
                )
            ]


def _sorted_entries(path: str) -> list[os.DirEntry]:
    with os.scandir(path) as entries:
        return sorted(entries, key=lambda entry: entry.name)


def scan_usb_bus() -> list[ContainerAllocateResponse]:
    """One response listing the device files under every bus directory.

    Raises OSError when the bus root cannot be read; unreadable bus
    directories are skipped.
    """
    root = constants.USB_DEVICE_PATH
    try:
        buses = _sorted_entries(root)
    except OSError as exc:
        raise OSError(f"failed to read USB bus directory: {exc}") from exc

    devices: list[DeviceSpec] = []
    for bus in buses:
        if not bus.is_dir(follow_symlinks=False):
            continue
        bus_path = os.path.join(root, bus.name)
        try:
            entries = _sorted_entries(bus_path)
        except OSError:
            continue
        devices.extend(
            DeviceSpec(
                container_path=os.path.join(bus_path, entry.name),
                host_path=os.path.join(bus_path, entry.name),
                permissions=constants.PERMISSIONS,
            )
            for entry in entries
            if not entry.is_dir(follow_symlinks=False)
        )
    return [ContainerAllocateResponse(devices=devices)]