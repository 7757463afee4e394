import pytest

from kubedevplugin import constants
from kubedevplugin.api import ContainerAllocateResponse, Device, DeviceSpec, Mount
from kubedevplugin.wire import (
    decode_allocate_request,
    decode_allocate_response,
    decode_list_and_watch_response,
    decode_register_request,
    encode_allocate_request,
    encode_allocate_response,
    encode_list_and_watch_response,
    encode_register_request,
)


def test_register_request_bytes():
    data = encode_register_request("v1beta1", "x.sock", "intel.com/x11")
    assert data == b"\n\x07v1beta1\x12\x06x.sock\x1a\x0dintel.com/x11"


def test_list_and_watch_bytes():
    data = encode_list_and_watch_response([Device(id="usb-0", health="Healthy")])
    assert data == b"\n\x10\n\x05usb-0\x12\x07Healthy"


def test_empty_device_list():
    assert encode_list_and_watch_response([]) == b""
    assert decode_list_and_watch_response(b"") == []


def test_register_request_round_trip():
    data = encode_register_request(constants.API_VERSION, "usb.sock", "test.com/mock")
    assert decode_register_request(data) == (constants.API_VERSION, "usb.sock", "test.com/mock")


def test_list_and_watch_round_trip():
    devices = [
        Device(id="usb-0", health=constants.HEALTHY),
        Device(id="usb-1", health=constants.UNHEALTHY),
        Device(id="usb-2", health=""),
    ]
    assert decode_list_and_watch_response(encode_list_and_watch_response(devices)) == devices


def test_allocate_request_round_trip():
    requests = [["usb-0", "usb-1"], [], ["vfio-3"]]
    assert decode_allocate_request(encode_allocate_request(requests)) == requests


def test_allocate_response_round_trip():
    responses = [
        ContainerAllocateResponse(
            devices=[
                DeviceSpec(container_path="/dev/a", host_path="/dev/a", permissions="rw"),
                DeviceSpec(container_path="/dev/b", host_path="/host/b", permissions="r"),
            ]
        ),
        ContainerAllocateResponse(
            mounts=[
                Mount(container_path="/tmp/x", host_path="/tmp/x", read_only=False),
                Mount(container_path="/ro", host_path="/data", read_only=True),
            ]
        ),
        ContainerAllocateResponse(),
    ]
    assert decode_allocate_response(encode_allocate_response(responses)) == responses


def test_unknown_fields_are_skipped():
    data = encode_register_request("v1", "e.sock", "test.com/r") + b"\x48\x05"
    assert decode_register_request(data) == ("v1", "e.sock", "test.com/r")


def test_truncated_message_raises():
    data = encode_register_request("v1", "e.sock", "test.com/r")
    with pytest.raises(ValueError):
        decode_register_request(data[:-1])


def test_truncated_varint_raises():
    with pytest.raises(ValueError):
        decode_allocate_request(b"\x0a\x80")


def test_wrong_wire_type_raises():
    with pytest.raises(ValueError):
        decode_register_request(b"\x08\x01")


def test_invalid_utf8_raises():
    with pytest.raises(ValueError):
        decode_list_and_watch_response(b"\x0a\x03\x0a\x01\xff")