from __future__ import annotations

import logging
from typing import BinaryIO, Iterable, Iterator, Optional

from tsiplink.config import DecoderSettings
from tsiplink.core.binary import hex_dump
from tsiplink.logging import create_logger
from tsiplink.parsing.framing import FeedResult, PacketFramer
from tsiplink.parsing.reports import Report, ReportKind, decode_report, report_id
from tsiplink.store import ReportStore


class TsipReceiver:
    """
    Decodes the serial byte stream of a TSIP timing receiver.

    The receiver owns one ``PacketFramer`` and one ``ReportStore``. Bytes are
    pushed in with ``feed``; whenever a packet completes it is decoded and the
    matching store slot is replaced before ``feed`` returns. The application
    reads the store through ``get`` and the updated flags.

    ``verbose`` and ``debug`` only control diagnostics: with ``verbose`` each
    decoded report and each misframed packet is logged at INFO, with ``debug``
    the raw packet buffer is dumped at DEBUG.
    """

    def __init__(
        self,
        verbose: bool = True,
        debug: bool = False,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.framer = PacketFramer()
        self.store = ReportStore()
        self._last_kind = ReportKind(0)
        self.logger = logger or create_logger("tsiplink", 200)
        self.verbose = verbose
        self.debug = False
        self._level_before_debug: Optional[int] = None
        self.set_debug(debug)

    @classmethod
    def from_settings(cls, settings: DecoderSettings) -> "TsipReceiver":
        logger = create_logger(settings.logger_name, settings.log_ring_size)
        return cls(verbose=settings.verbose, debug=settings.debug, logger=logger)

    def set_verbose(self, verbose: bool) -> None:
        self.verbose = verbose

    def set_debug(self, debug: bool) -> None:
        """
        Toggle buffer dumps. While on, the logger level is lowered to DEBUG;
        turning it off restores the level this receiver replaced.
        """
        if debug and not self.debug:
            if self.logger.getEffectiveLevel() > logging.DEBUG:
                self._level_before_debug = self.logger.level
                self.logger.setLevel(logging.DEBUG)
        elif not debug and self._level_before_debug is not None:
            self.logger.setLevel(self._level_before_debug)
            self._level_before_debug = None
        self.debug = debug

    @property
    def last_kind(self) -> ReportKind:
        """Kind of the most recently completed report, empty before the first."""
        return self._last_kind

    def reset(self) -> None:
        """Drop any partial packet and every stored report."""
        self.framer.reset()
        self.store.reset()

    # ---- ingress ----
    def feed(self, byte: int) -> FeedResult:
        """
        Push one received byte.

        Returns:
            The framer outcome. On ``REPORT_COMPLETED`` the decoded report is
            already in the store.
        """
        result = self.framer.feed(byte)
        if result is FeedResult.REPORT_COMPLETED:
            self._update_report(self.framer.frame)
        elif result is FeedResult.MISFRAMED and self.verbose:
            self.logger.info("misframed", extra={"details": {"byte": byte}})
        return result

    def feed_bytes(self, data: Iterable[int]) -> list[ReportKind]:
        """Feed every byte of ``data`` and return the kinds completed, in order."""
        completed: list[ReportKind] = []
        for byte in data:
            if self.feed(byte) is FeedResult.REPORT_COMPLETED:
                completed.append(self._last_kind)
        return completed

    def iter_reports(
        self,
        stream: BinaryIO,
        chunk_size: int = 256,
        stop_on_empty: bool = True,
    ) -> Iterator[ReportKind]:
        """
        Read a binary byte source, yielding each completed report kind.

        Args:
            stream: Any object with a ``read(size)`` method returning bytes,
                such as a capture file or an open serial port.
            chunk_size: Maximum number of bytes requested per read.
            stop_on_empty: Treat an empty read as end of stream. A serial port
                opened with a read timeout returns ``b""`` when no data
                arrived in time; pass ``False`` for such sources to keep
                reading until the caller stops iterating.
        """
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                if stop_on_empty:
                    return
                continue
            yield from self.feed_bytes(chunk)

    def _update_report(self, frame: bytes) -> None:
        record = decode_report(frame)
        self._last_kind = self.store.update(record)
        if self.verbose:
            code, subcode = report_id(frame)
            self.logger.info(
                "found_report",
                extra={"details": {"code": code, "subcode": subcode, "kind": self._last_kind.name}},
            )
        if self.debug:
            self.logger.debug(
                "report_buffer",
                extra={"details": {"length": len(frame), "dump": hex_dump(frame)}},
            )

    # ---- egress ----
    def get(self, kind: ReportKind) -> tuple[Optional[Report], bool]:
        return self.store.get(kind)

    @property
    def updated(self) -> ReportKind:
        return self.store.updated

    def is_updated(self, kind: ReportKind) -> bool:
        return self.store.is_updated(kind)

    def clear_updated(self, kinds: Optional[ReportKind] = None) -> None:
        self.store.clear_updated(kinds)

    def consume_updated(self) -> ReportKind:
        return self.store.consume_updated()
