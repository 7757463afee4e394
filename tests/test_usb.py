import pytest

from kubedevplugin import constants
from kubedevplugin.usb import ResourceUSB, scan_usb_bus


@pytest.fixture
def usb_env(tmp_path, monkeypatch):
    monkeypatch.setattr(constants, "USB_RESOURCE_NAME", "test.usb/resource")
    monkeypatch.setattr(constants, "USB_SOCKET_PATH", str(tmp_path / "test-usb.sock"))
    monkeypatch.setattr(
        constants, "USB_DEVICE_PATH", str(tmp_path / "test-usb-devices")
    )
    monkeypatch.setattr(constants, "USB_DEVICE_COUNT", 2)
    monkeypatch.setattr(constants, "USB_DEVICE_PREFIX", "usb")
    monkeypatch.setattr(constants, "PERMISSIONS", "rw")
    return tmp_path / "test-usb-devices"


def test_resource_name(usb_env):
    assert ResourceUSB().resource_name() == "test.usb/resource"


def test_socket_path(usb_env, tmp_path):
    assert ResourceUSB().socket_path() == str(tmp_path / "test-usb.sock")


def test_list_devices_path_not_exist(usb_env):
    assert ResourceUSB().list_devices() == []


def test_list_devices_returns_devices(usb_env):
    usb_env.mkdir()
    devices = ResourceUSB().list_devices()
    assert len(devices) == 2
    assert [d.id for d in devices] == ["usb-0", "usb-1"]


def test_allocate_success(usb_env):
    (usb_env / "001").mkdir(parents=True)
    (usb_env / "001" / "dev1").touch()
    resp = ResourceUSB().allocate(["usb-0"])
    assert len(resp) == 1
    assert len(resp[0].devices) == 1
    dev = resp[0].devices[0]
    assert dev.host_path == str(usb_env / "001" / "dev1")
    assert dev.container_path == dev.host_path
    assert dev.permissions == "rw"


def test_allocate_error_path(usb_env):
    resp = ResourceUSB().allocate(["usb-0"])
    assert len(resp) == 1
    assert len(resp[0].mounts) == 1
    assert resp[0].mounts[0].host_path == str(usb_env)
    assert resp[0].mounts[0].read_only is False


def test_scan_ignores_files_at_root_and_nested_dirs(usb_env):
    (usb_env / "001" / "nested").mkdir(parents=True)
    (usb_env / "001" / "dev2").touch()
    (usb_env / "001" / "dev1").touch()
    (usb_env / "stray").touch()
    responses = scan_usb_bus()
    assert [d.host_path for d in responses[0].devices] == [
        str(usb_env / "001" / "dev1"),
        str(usb_env / "001" / "dev2"),
    ]


def test_scan_missing_root_raises(usb_env):
    with pytest.raises(OSError):
        scan_usb_bus()