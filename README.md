# kubedevplugin

A Kubernetes device plugin that advertises host devices to the kubelet so that
pods can request them as extended resources.

It serves five resources, each on its own Unix socket in the kubelet's
device-plugin directory (`/var/lib/kubelet/device-plugins/`):

| Resource         | Host path checked     | What a container gets                          |
|------------------|-----------------------|------------------------------------------------|
| `intel.com/x11`  | `/tmp/.X11-unix`      | the X11 socket directory mounted read-write    |
| `intel.com/udma` | `/dev/udmabuf`        | the `/dev/udmabuf` device                      |
| `intel.com/igpu` | `/dev/dri/card0`      | `/dev/dri/card0` and `/dev/dri/renderD128`     |
| `intel.com/vfio` | `/dev/vfio`           | every device file under `/dev/vfio`            |
| `intel.com/usb`  | `/dev/bus/usb`        | every device file under `/dev/bus/usb/*/`      |

Each resource reports 1000 healthy device slots (`x11-0`, `x11-1`, …) while
its host path exists, and none when it does not. The `udma` resource also
needs `/dev/vfio` to be present. The list is sent to the kubelet once when it
connects and again every 20 seconds.

Device files are granted with `rw` permissions. If the VFIO or USB
directories cannot be read when a container is allocated, the whole directory
is mounted into the container instead. An allocation request is answered for
its first container only.

## Installation

```
pip install kubedevplugin
```

## Running

The plugin is meant to run as a privileged DaemonSet with the kubelet's
device-plugin directory mounted in. Start it with:

```
kubedevplugin
```

On start it removes stale sockets, opens a gRPC server per resource,
registers each one with the kubelet, and then watches its sockets. When the
kubelet restarts it deletes the sockets; the plugin notices, waits ten
seconds and starts again. A failed registration is handled the same way.
Send `SIGINT` or `SIGTERM` to stop it; its sockets are removed on the way
out. If stale sockets cannot be removed at start, the command exits with
status 1.

## Requesting devices in a pod

```yaml
resources:
  limits:
    intel.com/igpu: 1
    intel.com/x11: 1
```

## Using it as a library

Every resource implements `kubedevplugin.api.Resource`:

```python
from kubedevplugin.igpu import ResourceIGPU

gpu = ResourceIGPU()
print(gpu.resource_name(), gpu.socket_path())
devices = gpu.list_devices()        # list of kubedevplugin.api.Device
responses = gpu.allocate(["igpu-0"])  # list of ContainerAllocateResponse
```

The other resources are `ResourceX11` (`kubedevplugin.x11`), `ResourceUDMA`
(`kubedevplugin.udma`), `ResourceVFIO` (`kubedevplugin.vfio`) and
`ResourceUSB` (`kubedevplugin.usb`); `kubedevplugin.cli.fetch_resources()`
returns all five. Paths, names and counts live in `kubedevplugin.constants`.

In `kubedevplugin.server`:

- `DevicePluginServer(resource)` implements the kubelet's `DevicePlugin`
  gRPC service for one resource; `handler()` returns the handler to add to a
  `grpc.Server`.
- `serve(resources, register_func)` runs a server per resource, calls
  `register_func(socket, resource_name)` for each, and raises once a socket
  file disappears or registration fails.
- `start_device_plugin(resources, serve_func, register_func)` keeps calling
  `serve_func`, ten seconds apart, forever.
- `register_with_kubelet(socket, resource_name)` registers an endpoint with
  the kubelet; `cleanup_sockets(resources)` removes socket files;
  `monitor_socket(socket, notify)` sets a `threading.Event` when a socket
  file is gone.

`kubedevplugin.wire` encodes and decodes the protocol buffer messages the
service exchanges (`ListAndWatchResponse`, `AllocateRequest`,
`AllocateResponse`, `RegisterRequest`) without generated code.

## What it does not do

Device slots are fixed counts, not discovered hardware, and are always
reported healthy. Preferred allocation and plugin options are answered
empty. There is no configuration file or command-line option: resource
names, paths and counts are set in `kubedevplugin.constants`.

## Development

```
pip install -e .[test]
python -m pytest
```