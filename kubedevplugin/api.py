"""Device plugin data types and the interface every resource implements."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from . import constants


@dataclass(frozen=True)
class Device:
    """A schedulable device advertised to the kubelet."""

    id: str
    health: str = constants.HEALTHY


@dataclass(frozen=True)
class DeviceSpec:
    """A device node exposed inside a container."""

    container_path: str
    host_path: str
    permissions: str


@dataclass(frozen=True)
class Mount:
    """A host path bind-mounted into a container."""

    container_path: str
    host_path: str
    read_only: bool = False


@dataclass
class ContainerAllocateResponse:
    """What one container receives for an allocation."""

    devices: list[DeviceSpec] = field(default_factory=list)
    mounts: list[Mount] = field(default_factory=list)


class Resource(ABC):
    """A device resource served by its own plugin endpoint."""

    @abstractmethod
    def resource_name(self) -> str:
        """Name under which the resource registers with the kubelet."""

    @abstractmethod
    def socket_path(self) -> str:
        """Path of the plugin's unix socket."""

    @abstractmethod
    def list_devices(self) -> list[Device]:
        """Devices currently available."""

    @abstractmethod
    def allocate(self, device_ids: list[str]) -> list[ContainerAllocateResponse]:
        """Container responses for the requested device IDs."""


def healthy_devices(prefix: str, count: int) -> list[Device]:
    """Return ``count`` healthy devices named ``<prefix>-<n>``."""
    return [Device(id=f"{prefix}-{i}", health=constants.HEALTHY) for i in range(count)]