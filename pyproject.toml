[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "kubedevplugin"
version = "0.1.0"
description = "Kubernetes device plugin advertising X11, udmabuf, iGPU, VFIO and USB resources to the kubelet"
requires-python = ">=3.10"
keywords = ["kubernetes", "kubelet", "device-plugin", "grpc", "gpu", "vfio", "usb"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: No Input/Output (Daemon)",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Clustering",
]
dependencies = [
    "grpcio",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
kubedevplugin = "kubedevplugin.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["kubedevplugin"]

[tool.pytest.ini_options]
addopts = "-ra"
