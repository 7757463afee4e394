import pytest

from kubedevplugin import constants
from kubedevplugin.igpu import ResourceIGPU


@pytest.fixture
def igpu_env(tmp_path, monkeypatch):
    monkeypatch.setattr(constants, "IGPU_RESOURCE_NAME", "test.igpu/resource")
    monkeypatch.setattr(constants, "IGPU_SOCKET_PATH", str(tmp_path / "igpu.sock"))
    monkeypatch.setattr(constants, "IGPU_DEVICE_PATH", str(tmp_path / "igpu"))
    monkeypatch.setattr(constants, "IGPU_DEVICE_COUNT", 2)
    monkeypatch.setattr(constants, "IGPU_DEVICE_PREFIX", "igpu")
    monkeypatch.setattr(
        constants, "RENDER_D128_DEVICE_PATH", str(tmp_path / "renderD128")
    )
    monkeypatch.setattr(constants, "PERMISSIONS", "rw")
    return tmp_path


def test_resource_name(igpu_env):
    assert ResourceIGPU().resource_name() == "test.igpu/resource"


def test_socket_path(igpu_env):
    assert ResourceIGPU().socket_path() == str(igpu_env / "igpu.sock")


def test_list_devices_path_not_exist(igpu_env):
    assert ResourceIGPU().list_devices() == []


def test_list_devices_returns_devices(igpu_env):
    (igpu_env / "igpu").mkdir()
    devices = ResourceIGPU().list_devices()
    assert len(devices) == 2
    for i, dev in enumerate(devices):
        assert dev.id == f"igpu-{i}"
        assert dev.health == constants.HEALTHY


def test_allocate(igpu_env):
    resp = ResourceIGPU().allocate(["igpu-0"])
    assert len(resp) == 1
    specs = {spec.host_path: spec for spec in resp[0].devices}
    assert len(resp[0].devices) == 2
    igpu_path = str(igpu_env / "igpu")
    render_path = str(igpu_env / "renderD128")
    assert set(specs) == {igpu_path, render_path}
    assert specs[igpu_path].container_path == igpu_path
    assert specs[render_path].container_path == render_path
    assert all(spec.permissions == "rw" for spec in specs.values())