"""Resource names, device paths, socket locations and kubelet API values."""

# Kubelet device plugin API values.
DEVICE_PLUGIN_PATH = "/var/lib/kubelet/device-plugins/"
KUBELET_SOCKET = DEVICE_PLUGIN_PATH + "kubelet.sock"
API_VERSION = "v1beta1"
HEALTHY = "Healthy"
UNHEALTHY = "Unhealthy"

X11_RESOURCE_NAME = "intel.com/x11"
X11_DEVICE_PREFIX = "x11"
X11_DEVICE_PATH = "/tmp/.X11-unix"
X11_SOCK_NAME = "x11.sock"
X11_SOCKET_PATH = DEVICE_PLUGIN_PATH + X11_SOCK_NAME
X11_DEVICE_COUNT = 1000

UDMA_RESOURCE_NAME = "intel.com/udma"
UDMA_DEVICE_PREFIX = "udma"
UDMA_DEVICE_PATH = "/dev/udmabuf"
UDMA_SOCK_NAME = "udma.sock"
UDMA_SOCKET_PATH = DEVICE_PLUGIN_PATH + UDMA_SOCK_NAME
UDMA_DEVICE_COUNT = 1000

IGPU_RESOURCE_NAME = "intel.com/igpu"
IGPU_DEVICE_PREFIX = "igpu"
IGPU_DEVICE_PATH = "/dev/dri/card0"
RENDER_D128_DEVICE_PATH = "/dev/dri/renderD128"
IGPU_SOCK_NAME = "igpu.sock"
IGPU_SOCKET_PATH = DEVICE_PLUGIN_PATH + IGPU_SOCK_NAME
IGPU_DEVICE_COUNT = 1000

VFIO_RESOURCE_NAME = "intel.com/vfio"
VFIO_DEVICE_PREFIX = "vfio"
VFIO_DEVICE_PATH = "/dev/vfio"
VFIO_SOCKET_NAME = "vfio.sock"
VFIO_SOCKET_PATH = DEVICE_PLUGIN_PATH + VFIO_SOCKET_NAME
VFIO_DEVICE_COUNT = 1000

USB_RESOURCE_NAME = "intel.com/usb"
USB_DEVICE_PREFIX = "usb"
USB_DEVICE_PATH = "/dev/bus/usb"
USB_SOCKET_NAME = "usb.sock"
USB_SOCKET_PATH = DEVICE_PLUGIN_PATH + USB_SOCKET_NAME
USB_DEVICE_COUNT = 1000

PERMISSIONS = "rw"