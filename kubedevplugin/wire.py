"""Protocol buffer encoding of the kubelet device plugin messages."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .api import ContainerAllocateResponse, Device, DeviceSpec, Mount

_VARINT = 0
_I64 = 1
_LEN = 2
_I32 = 5


def _encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("negative varint")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _decode_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    shift = 0
    while True:
        if pos >= len(data):
            raise ValueError("truncated varint")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
        shift += 7
        if shift >= 64:
            raise ValueError("varint too long")


def _key(field: int, wire_type: int) -> bytes:
    return _encode_varint(field << 3 | wire_type)


def _message_field(field: int, payload: bytes) -> bytes:
    return _key(field, _LEN) + _encode_varint(len(payload)) + payload


def _string_field(field: int, value: str) -> bytes:
    if not value:
        return b""
    return _message_field(field, value.encode("utf-8"))


def _bool_field(field: int, value: bool) -> bytes:
    return _key(field, _VARINT) + b"\x01" if value else b""


def _fields(data: bytes) -> Iterator[tuple[int, int, int | bytes]]:
    """Yield (field number, wire type, value) for every field in ``data``."""
    data = bytes(data)
    pos = 0
    while pos < len(data):
        key, pos = _decode_varint(data, pos)
        field, wire_type = key >> 3, key & 0x07
        if field == 0:
            raise ValueError("invalid field number 0")
        if wire_type == _VARINT:
            value, pos = _decode_varint(data, pos)
        elif wire_type == _LEN:
            length, pos = _decode_varint(data, pos)
            end = pos + length
            if end > len(data):
                raise ValueError("truncated length-delimited field")
            value = data[pos:end]
            pos = end
        elif wire_type in (_I64, _I32):
            size = 8 if wire_type == _I64 else 4
            end = pos + size
            if end > len(data):
                raise ValueError("truncated fixed-width field")
            value = int.from_bytes(data[pos:end], "little")
            pos = end
        else:
            raise ValueError(f"unsupported wire type {wire_type}")
        yield field, wire_type, value


def _payload(field: int, wire_type: int, value: int | bytes) -> bytes:
    if wire_type != _LEN:
        raise ValueError(f"field {field} must be length-delimited")
    return value  # type: ignore[return-value]


def _text(field: int, wire_type: int, value: int | bytes) -> str:
    return _payload(field, wire_type, value).decode("utf-8")


def _flag(field: int, wire_type: int, value: int | bytes) -> bool:
    if wire_type != _VARINT:
        raise ValueError(f"field {field} must be a varint")
    return bool(value)


def _encode_device(device: Device) -> bytes:
    return _string_field(1, device.id) + _string_field(2, device.health)


def _decode_device(data: bytes) -> Device:
    device_id = ""
    health = ""
    for field, wire_type, value in _fields(data):
        if field == 1:
            device_id = _text(field, wire_type, value)
        elif field == 2:
            health = _text(field, wire_type, value)
    return Device(id=device_id, health=health)


def encode_list_and_watch_response(devices: Iterable[Device]) -> bytes:
    """Encode a ListAndWatchResponse holding ``devices``."""
    return b"".join(_message_field(1, _encode_device(device)) for device in devices)


def decode_list_and_watch_response(data: bytes) -> list[Device]:
    """Decode a ListAndWatchResponse into its devices."""
    return [
        _decode_device(_payload(field, wire_type, value))
        for field, wire_type, value in _fields(data)
        if field == 1
    ]


def encode_allocate_request(container_requests: Iterable[Iterable[str]]) -> bytes:
    """Encode an AllocateRequest; each item is one container's device IDs."""
    return b"".join(
        _message_field(1, b"".join(_message_field(1, i.encode("utf-8")) for i in ids))
        for ids in container_requests
    )


def decode_allocate_request(data: bytes) -> list[list[str]]:
    """Decode an AllocateRequest into a list of device ID lists."""
    requests = []
    for field, wire_type, value in _fields(data):
        if field != 1:
            continue
        ids = [
            _text(inner, inner_type, inner_value)
            for inner, inner_type, inner_value in _fields(_payload(field, wire_type, value))
            if inner == 1
        ]
        requests.append(ids)
    return requests


def _encode_mount(mount: Mount) -> bytes:
    return (
        _string_field(1, mount.container_path)
        + _string_field(2, mount.host_path)
        + _bool_field(3, mount.read_only)
    )


def _decode_mount(data: bytes) -> Mount:
    values = {"container_path": "", "host_path": "", "read_only": False}
    for field, wire_type, value in _fields(data):
        if field == 1:
            values["container_path"] = _text(field, wire_type, value)
        elif field == 2:
            values["host_path"] = _text(field, wire_type, value)
        elif field == 3:
            values["read_only"] = _flag(field, wire_type, value)
    return Mount(**values)


def _encode_device_spec(spec: DeviceSpec) -> bytes:
    return (
        _string_field(1, spec.container_path)
        + _string_field(2, spec.host_path)
        + _string_field(3, spec.permissions)
    )


def _decode_device_spec(data: bytes) -> DeviceSpec:
    values = {"container_path": "", "host_path": "", "permissions": ""}
    names = {1: "container_path", 2: "host_path", 3: "permissions"}
    for field, wire_type, value in _fields(data):
        if field in names:
            values[names[field]] = _text(field, wire_type, value)
    return DeviceSpec(**values)


def _encode_container_response(response: ContainerAllocateResponse) -> bytes:
    mounts = b"".join(_message_field(2, _encode_mount(m)) for m in response.mounts)
    devices = b"".join(_message_field(3, _encode_device_spec(d)) for d in response.devices)
    return mounts + devices


def _decode_container_response(data: bytes) -> ContainerAllocateResponse:
    response = ContainerAllocateResponse()
    for field, wire_type, value in _fields(data):
        if field == 2:
            response.mounts.append(_decode_mount(_payload(field, wire_type, value)))
        elif field == 3:
            response.devices.append(_decode_device_spec(_payload(field, wire_type, value)))
    return response


def encode_allocate_response(responses: Iterable[ContainerAllocateResponse]) -> bytes:
    """Encode an AllocateResponse holding one entry per container."""
    return b"".join(_message_field(1, _encode_container_response(r)) for r in responses)


def decode_allocate_response(data: bytes) -> list[ContainerAllocateResponse]:
    """Decode an AllocateResponse into its container responses."""
    return [
        _decode_container_response(_payload(field, wire_type, value))
        for field, wire_type, value in _fields(data)
        if field == 1
    ]


def encode_register_request(version: str, endpoint: str, resource_name: str) -> bytes:
    """Encode a kubelet RegisterRequest."""
    return (
        _string_field(1, version)
        + _string_field(2, endpoint)
        + _string_field(3, resource_name)
    )


def decode_register_request(data: bytes) -> tuple[str, str, str]:
    """Decode a RegisterRequest into (version, endpoint, resource_name)."""
    values = ["", "", ""]
    for field, wire_type, value in _fields(data):
        if field in (1, 2, 3):
            values[field - 1] = _text(field, wire_type, value)
    return values[0], values[1], values[2]