"""gRPC device plugin endpoints and their registration with the kubelet."""

from __future__ import annotations

import logging
import os
import threading
import time
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor

import grpc

from . import constants
from .api import ContainerAllocateResponse, Device, Resource
from .wire import (
    decode_allocate_request,
    encode_allocate_response,
    encode_list_and_watch_response,
    encode_register_request,
)

logger = logging.getLogger(__name__)

_SERVICE = "v1beta1.DevicePlugin"
_REGISTER_METHOD = "/v1beta1.Registration/Register"
_REGISTER_TIMEOUT = 30.0
_RESTART_DELAY = 10.0
_MONITOR_INTERVAL = 1.0
_MAX_WORKERS = 10
_EMPTY_MESSAGE = b""

RegisterFunc = Callable[[str, str], None]


class DevicePluginServer:
    """Serves the DevicePlugin service for one resource."""

    update_interval = 20.0

    def __init__(self, resource: Resource) -> None:
        self.resource = resource

    def handler(self) -> grpc.GenericRpcHandler:
        """The gRPC handler for the DevicePlugin service."""
        return grpc.method_handlers_generic_handler(
            _SERVICE,
            {
                "GetDevicePluginOptions": grpc.unary_unary_rpc_method_handler(
                    self.get_device_plugin_options
                ),
                "GetPreferredAllocation": grpc.unary_unary_rpc_method_handler(
                    self.get_preferred_allocation
                ),
                "ListAndWatch": grpc.unary_stream_rpc_method_handler(
                    self.list_and_watch,
                    response_serializer=encode_list_and_watch_response,
                ),
                "Allocate": grpc.unary_unary_rpc_method_handler(
                    self.allocate,
                    request_deserializer=decode_allocate_request,
                    response_serializer=encode_allocate_response,
                ),
            },
        )

    def get_device_plugin_options(self, request: bytes, context) -> bytes:
        """Empty plugin options."""
        return _EMPTY_MESSAGE

    def get_preferred_allocation(self, request: bytes, context) -> bytes:
        """Empty preferred allocation."""
        return _EMPTY_MESSAGE

    def list_and_watch(self, request: bytes, context) -> Iterator[list[Device]]:
        """Send the device list now and again every ``update_interval`` seconds."""
        done = threading.Event()

        def _on_done() -> None:
            logger.info("Stream context done, kubelet may have restarted")
            done.set()

        if not context.add_callback(_on_done):
            done.set()

        yield self.resource.list_devices()
        while not done.wait(self.update_interval):
            yield self.resource.list_devices()
        logger.info("ListAndWatch stream context canceled")

    def allocate(self, request: list[list[str]], context) -> list[ContainerAllocateResponse]:
        """Allocate the first container's devices."""
        if not request:
            context.abort(grpc.StatusCode.INVALID_ARGUMENT, "no container requests")
        return list(self.resource.allocate(request[0]))


def register_with_kubelet(socket: str, resource_name: str) -> None:
    """Register the plugin endpoint at ``socket`` with the kubelet.

    Raises grpc.RpcError when the kubelet rejects or cannot be reached.
    """
    with grpc.insecure_channel(f"unix:{constants.KUBELET_SOCKET}") as channel:
        logger.info("connection created for %s", resource_name)
        register = channel.unary_unary(_REGISTER_METHOD)
        logger.info("client created for %s", resource_name)
        request = encode_register_request(
            constants.API_VERSION, os.path.basename(socket), resource_name
        )
        register(request, timeout=_REGISTER_TIMEOUT)


def cleanup_sockets(resources: Sequence[Resource]) -> None:
    """Remove each resource's socket file if it exists."""
    for resource in resources:
        socket = resource.socket_path()
        if os.path.lexists(socket):
            os.remove(socket)


def start_device_plugin(
    resources: Sequence[Resource],
    serve_func: Callable[[Sequence[Resource], RegisterFunc], None],
    register_func: RegisterFunc,
) -> None:
    """Run ``serve_func`` forever, restarting it after each return or failure."""
    while True:
        try:
            serve_func(resources, register_func)
        except Exception as exc:
            logger.error("Device plugin server failed: %s", exc)
        time.sleep(_RESTART_DELAY)
        logger.info("Restarting device plugin")


def _listen(server: grpc.Server, path: str) -> None:
    try:
        port = server.add_insecure_port(f"unix:{path}")
    except RuntimeError as exc:
        raise OSError(f"failed to listen on {path}: {exc}") from exc
    if port == 0:
        raise OSError(f"failed to listen on {path}")


def serve(resources: Sequence[Resource], register_func: RegisterFunc) -> None:
    """Serve every resource, register it, and wait until a socket disappears.

    Always ends by raising: RuntimeError when registration fails or a socket
    file is deleted, OSError when a socket cannot be bound.
    """
    try:
        cleanup_sockets(resources)
    except OSError as exc:
        logger.critical("Failed to remove existing socket file: %s", exc)
        raise SystemExit(1) from exc

    socket_gone = threading.Event()
    running: list[tuple[grpc.Server, ThreadPoolExecutor]] = []
    try:
        for resource in resources:
            name = resource.resource_name()
            path = resource.socket_path()
            plugin = DevicePluginServer(resource)
            executor = ThreadPoolExecutor(max_workers=_MAX_WORKERS)
            server = grpc.server(executor)
            server.add_generic_rpc_handlers((plugin.handler(),))
            running.append((server, executor))

            logger.info("Device plugin server starting for %s", name)
            _listen(server, path)
            server.start()

            logger.info("registering with kubelet for %s", name)
            try:
                register_func(path, name)
            except Exception as exc:
                raise RuntimeError(
                    f"failed to register resource {name} with Kubelet: {exc}"
                ) from exc

            threading.Thread(
                target=monitor_socket,
                args=(path, socket_gone),
                name=f"monitor-{name}",
                daemon=True,
            ).start()

        socket_gone.wait()
        raise RuntimeError("socket was deleted, kubelet likely restarted")
    finally:
        for server, executor in running:
            server.stop(None)
            executor.shutdown(wait=False)


def monitor_socket(socket: str, notify: threading.Event) -> None:
    """Set ``notify`` once the socket file no longer exists."""
    while True:
        if not os.path.lexists(socket):
            logger.info("Socket file %s was deleted", socket)
            notify.set()
            return
        time.sleep(_MONITOR_INTERVAL)