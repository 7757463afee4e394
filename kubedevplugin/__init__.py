"""Kubernetes device plugin serving X11, udmabuf, iGPU, VFIO and USB resources over gRPC."""

__version__ = "0.1.0"