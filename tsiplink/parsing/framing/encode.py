"""
Wire encoding of TSIP packets: ``DLE <payload, DLE doubled> DLE ETX``.
"""
from __future__ import annotations

from tsiplink.parsing.framing.framer import DLE, ETX


def stuff_payload(payload: bytes) -> bytes:
    """Double every ``DLE`` byte of ``payload``."""
    buf = bytearray()
    for byte in payload:
        buf.append(byte)
        if byte == DLE:
            buf.append(DLE)
    return bytes(buf)


def encode_packet(payload: bytes) -> bytes:
    """
    Wrap a raw payload into a complete wire packet.

    Args:
        payload: Unescaped packet bytes, starting with the report code.

    Returns:
        The bytes as they appear on the serial line.
    """
    if not payload:
        raise ValueError("payload must contain at least the report code")
    return bytes([DLE]) + stuff_payload(payload) + bytes([DLE, ETX])
