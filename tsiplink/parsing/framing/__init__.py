"""
Packet framing for the TSIP serial byte stream.

This sub-package turns a raw byte stream into unescaped packets (``PacketFramer``)
and builds the wire form of a payload (``encode_packet``).
"""
from tsiplink.parsing.framing.encode import encode_packet, stuff_payload
from tsiplink.parsing.framing.framer import (
    DLE,
    ETX,
    MAX_DATA,
    FeedResult,
    FramerState,
    PacketFramer,
)

__all__ = [
    "encode_packet",
    "stuff_payload",
    "DLE",
    "ETX",
    "MAX_DATA",
    "FeedResult",
    "FramerState",
    "PacketFramer",
]
