"""
Byte-at-a-time packet framer for the TSIP wire format.

A packet on the wire is ``DLE <payload> DLE ETX``. A ``DLE`` inside the
payload is sent twice and collapses to a single stored byte. The framer holds
one fixed-size buffer that is reused for every packet.
"""
from __future__ import annotations

from enum import Enum

DLE = 0x10
ETX = 0x03

# Largest unescaped payload kept; anything past it is dropped.
MAX_DATA = 128


class FramerState(Enum):
    IDLE = "idle"
    FRAMED = "framed"
    IN_DATA = "in_data"
    IN_DATA_ESCAPE = "in_data_escape"


class FeedResult(Enum):
    IN_PROGRESS = "in_progress"
    REPORT_COMPLETED = "report_completed"
    MISFRAMED = "misframed"


class PacketFramer:
    """
    Collects a serial byte stream into unescaped TSIP packets.

    ``feed`` is called once per received byte and never blocks. When it
    returns ``FeedResult.REPORT_COMPLETED`` the packet is available through
    ``frame`` until the next packet starts.

    Attributes:
        state: The current ``FramerState``.
    """

    def __init__(self) -> None:
        self.state = FramerState.IDLE
        self._buffer = bytearray(MAX_DATA)
        self._length = 0
        self._frame = b""

    @property
    def length(self) -> int:
        return self._length

    @property
    def frame(self) -> bytes:
        """The last completed packet, without delimiters or stuffed bytes."""
        return self._frame

    def reset(self) -> None:
        self.state = FramerState.IDLE
        self._clear_buffer()
        self._frame = b""

    def _clear_buffer(self) -> None:
        self._buffer[:] = bytes(MAX_DATA)
        self._length = 0

    def _store(self, byte: int) -> None:
        if self._length < MAX_DATA:
            self._buffer[self._length] = byte
            self._length += 1

    def feed(self, byte: int) -> FeedResult:
        """
        Advance the state machine by one byte.

        Args:
            byte: The received byte value (0-255).

        Returns:
            ``REPORT_COMPLETED`` when ``DLE ETX`` closes a packet,
            ``MISFRAMED`` when an unexpected byte forced a return to idle,
            otherwise ``IN_PROGRESS``.
        """
        if not 0 <= byte <= 0xFF:
            raise ValueError(f"byte value out of range: {byte}")

        if self.state is FramerState.IDLE:
            if byte == DLE:
                self.state = FramerState.FRAMED
            return FeedResult.IN_PROGRESS

        if self.state is FramerState.FRAMED:
            if byte in (DLE, ETX):
                self.state = FramerState.IDLE
                return FeedResult.MISFRAMED
            self._clear_buffer()
            self._store(byte)
            self.state = FramerState.IN_DATA
            return FeedResult.IN_PROGRESS

        if self.state is FramerState.IN_DATA:
            if byte == DLE:
                self.state = FramerState.IN_DATA_ESCAPE
            else:
                self._store(byte)
            return FeedResult.IN_PROGRESS

        # IN_DATA_ESCAPE
        if byte == DLE:
            self._store(byte)
            self.state = FramerState.IN_DATA
            return FeedResult.IN_PROGRESS
        self.state = FramerState.IDLE
        if byte == ETX:
            self._frame = bytes(self._buffer[: self._length])
            return FeedResult.REPORT_COMPLETED
        return FeedResult.MISFRAMED
