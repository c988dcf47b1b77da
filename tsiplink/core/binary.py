from __future__ import annotations

import struct


def _window(data: bytes, offset: int, size: int) -> bytes:
    if offset < 0 or offset + size > len(data):
        raise ValueError(f"field of {size} bytes at offset {offset} exceeds buffer of {len(data)} bytes")
    return bytes(data[offset: offset + size])


def b2_to_uint16(data: bytes, offset: int) -> int:
    raw = _window(data, offset, 2)
    return (raw[0] << 8) | raw[1]


def b4_to_uint32(data: bytes, offset: int) -> int:
    raw = _window(data, offset, 4)
    return (raw[0] << 24) | (raw[1] << 16) | (raw[2] << 8) | raw[3]


def b4_to_int32(data: bytes, offset: int) -> int:
    value = b4_to_uint32(data, offset)
    return value - (1 << 32) if value & 0x80000000 else value


def b4_to_single(data: bytes, offset: int) -> float:
    # Assemble the IEEE-754 bit pattern big-endian first, then reinterpret.
    bits = b4_to_uint32(data, offset)
    return struct.unpack(">f", bits.to_bytes(4, byteorder="big"))[0]


def b8_to_double(data: bytes, offset: int) -> float:
    bits = int.from_bytes(_window(data, offset, 8), byteorder="big")
    return struct.unpack(">d", bits.to_bytes(8, byteorder="big"))[0]


def hex_dump(data: bytes, width: int = 16) -> str:
    lines = []
    for start in range(0, len(data), width):
        chunk = data[start: start + width]
        lines.append(f"{start:04x}  " + " ".join(f"{b:02x}" for b in chunk))
    return "\n".join(lines)
