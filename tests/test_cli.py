import pytest

from kubedevplugin import constants
from kubedevplugin.cli import fetch_resources, main


def test_fetch_resources_order():
    names = [resource.resource_name() for resource in fetch_resources()]
    assert names == [
        constants.X11_RESOURCE_NAME,
        constants.UDMA_RESOURCE_NAME,
        constants.IGPU_RESOURCE_NAME,
        constants.VFIO_RESOURCE_NAME,
        constants.USB_RESOURCE_NAME,
    ]


def test_fetch_resources_socket_paths():
    sockets = [resource.socket_path() for resource in fetch_resources()]
    assert sockets == [
        constants.X11_SOCKET_PATH,
        constants.UDMA_SOCKET_PATH,
        constants.IGPU_SOCKET_PATH,
        constants.VFIO_SOCKET_PATH,
        constants.USB_SOCKET_PATH,
    ]
    assert len(set(sockets)) == len(sockets)


def test_fetch_resources_returns_fresh_list():
    first = fetch_resources()
    first.clear()
    assert len(fetch_resources()) == 5


def test_main_help_exits_cleanly(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--help"])
    assert excinfo.value.code == 0
    assert "kubedevplugin" in capsys.readouterr().out


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as excinfo:
        main(["--bogus"])
    assert excinfo.value.code == 2