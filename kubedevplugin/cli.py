"""Command that runs the device plugin until it receives SIGINT or SIGTERM."""

from __future__ import annotations

import argparse
import logging
import signal
import threading

from .api import Resource
from .igpu import ResourceIGPU
from .server import cleanup_sockets, register_with_kubelet, serve, start_device_plugin
from .udma import ResourceUDMA
from .usb import ResourceUSB
from .vfio import ResourceVFIO
from .x11 import ResourceX11

logger = logging.getLogger(__name__)


def fetch_resources() -> list[Resource]:
    """All resources the plugin serves, in registration order."""
    return [ResourceX11(), ResourceUDMA(), ResourceIGPU(), ResourceVFIO(), ResourceUSB()]


def main(argv: list[str] | None = None) -> int:
    """Start the device plugin and block until asked to stop."""
    parser = argparse.ArgumentParser(
        prog="kubedevplugin",
        description="Kubernetes device plugin for X11, udmabuf, iGPU, VFIO and USB resources.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(message)s")

    logger.info("Starting device plugin")
    stop = threading.Event()
    exit_codes: list[int] = []

    def _run() -> None:
        try:
            start_device_plugin(fetch_resources(), serve, register_with_kubelet)
        except SystemExit as exc:
            exit_codes.append(exc.code if isinstance(exc.code, int) else 1)
            stop.set()

    previous = {
        sig: signal.signal(sig, lambda *_: stop.set())
        for sig in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        threading.Thread(target=_run, name="device-plugin", daemon=True).start()
        logger.info("Started device plugin")
        while not stop.wait(1.0):
            pass
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    if exit_codes:
        return exit_codes[0]

    logger.info("Shutting down device plugin")
    try:
        cleanup_sockets(fetch_resources())
    except OSError:
        logger.error("Could not clean up socket...Exiting")
    return 0