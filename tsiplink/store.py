"""In-memory store for the latest report of each kind.

The store is only mutated through ``update``; each call replaces one slot as a
whole and marks that kind as updated.
"""

from __future__ import annotations

from typing import Optional

from tsiplink.parsing.reports.codes import ALL_KINDS, ReportKind
from tsiplink.parsing.reports.model import (
    DoublePosition,
    EcefPositionD,
    EcefPositionS,
    EcefVelocity,
    EnuVelocity,
    IoOptions,
    PrimaryTime,
    Report,
    SecondaryTime,
    SinglePosition,
    SoftwareVersion,
    UnknownReport,
    UtcGpsTime,
)


class ReportStore:
    """Latest value per report kind plus the "updated since last read" set.

    Not thread-safe: a single owner feeds it (see ``tsiplink.jobs``).
    """

    def __init__(self) -> None:
        self._slots: dict[ReportKind, Optional[Report]] = {}
        self._updated = ReportKind(0)
        self.reset()

    def reset(self) -> None:
        """Forget every record and clear all updated flags."""
        self._slots = {kind: None for kind in ALL_KINDS}
        self._updated = ReportKind(0)

    def update(self, record: Report) -> ReportKind:
        """Store ``record`` in the slot of its kind and flag that kind."""
        kind = record.KIND
        self._slots[kind] = record
        self._updated |= kind
        return kind

    def get(self, kind: ReportKind) -> tuple[Optional[Report], bool]:
        """Return ``(value, valid)`` for one report kind."""
        if kind not in self._slots:
            raise KeyError(f"no report slot for {kind!r}")
        value = self._slots[kind]
        return value, value is not None

    def is_valid(self, kind: ReportKind) -> bool:
        return self.get(kind)[1]

    # --- updated flags ---
    @property
    def updated(self) -> ReportKind:
        return self._updated

    def is_updated(self, kind: ReportKind) -> bool:
        return bool(self._updated & kind)

    def clear_updated(self, kinds: Optional[ReportKind] = None) -> None:
        if kinds is None:
            self._updated = ReportKind(0)
        else:
            self._updated &= ~kinds

    def consume_updated(self) -> ReportKind:
        """Return the updated set and clear it."""
        updated = self._updated
        self._updated = ReportKind(0)
        return updated

    # --- typed accessors ---
    @property
    def ecef_position_s(self) -> Optional[EcefPositionS]:
        return self._slots[ReportKind.ECEF_POSITION_S]

    @property
    def ecef_position_d(self) -> Optional[EcefPositionD]:
        return self._slots[ReportKind.ECEF_POSITION_D]

    @property
    def ecef_velocity(self) -> Optional[EcefVelocity]:
        return self._slots[ReportKind.ECEF_VELOCITY]

    @property
    def sw_version(self) -> Optional[SoftwareVersion]:
        return self._slots[ReportKind.SW_VERSION]

    @property
    def single_position(self) -> Optional[SinglePosition]:
        return self._slots[ReportKind.SINGLE_POSITION]

    @property
    def double_position(self) -> Optional[DoublePosition]:
        return self._slots[ReportKind.DOUBLE_POSITION]

    @property
    def io_options(self) -> Optional[IoOptions]:
        return self._slots[ReportKind.IO_OPTIONS]

    @property
    def enu_velocity(self) -> Optional[EnuVelocity]:
        return self._slots[ReportKind.ENU_VELOCITY]

    @property
    def utc_gps_time(self) -> Optional[UtcGpsTime]:
        return self._slots[ReportKind.UTC_GPS_TIME]

    @property
    def primary_time(self) -> Optional[PrimaryTime]:
        return self._slots[ReportKind.PRIMARY_TIME]

    @property
    def secondary_time(self) -> Optional[SecondaryTime]:
        return self._slots[ReportKind.SECONDARY_TIME]

    @property
    def unknown(self) -> Optional[UnknownReport]:
        return self._slots[ReportKind.UNKNOWN]
