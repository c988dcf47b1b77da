"""
Report codes and report kinds of the TSIP timing receiver.

A report is identified by its code byte; code ``0x8F`` ("super packet")
carries a second sub-code byte selecting one of the extended timing reports.
"""
from __future__ import annotations

from enum import IntFlag

REPORT_ECEF_POSITION_S = 0x42
REPORT_ECEF_VELOCITY = 0x43
REPORT_SW_VERSION = 0x45
REPORT_SINGLE_POSITION = 0x4A
REPORT_IO_OPTIONS = 0x55
REPORT_ENU_VELOCITY = 0x56
REPORT_ECEF_POSITION_D = 0x83
REPORT_DOUBLE_POSITION = 0x84
REPORT_SUPER = 0x8F

# Sub-codes of REPORT_SUPER.
REPORT_SUPER_UTC_GPS_TIME = 0xA2
REPORT_SUPER_PRIMARY_TIME = 0xAB
REPORT_SUPER_SECONDARY_TIME = 0xAC


class ReportKind(IntFlag):
    """
    One member per report record kept by the store.

    Being an ``IntFlag``, members also combine into the "updated since last
    read" set.
    """

    ECEF_POSITION_S = 1 << 0
    ECEF_POSITION_D = 1 << 1
    ECEF_VELOCITY = 1 << 2
    SW_VERSION = 1 << 3
    SINGLE_POSITION = 1 << 4
    DOUBLE_POSITION = 1 << 5
    IO_OPTIONS = 1 << 6
    ENU_VELOCITY = 1 << 7
    UTC_GPS_TIME = 1 << 8
    PRIMARY_TIME = 1 << 9
    SECONDARY_TIME = 1 << 10
    UNKNOWN = 1 << 11


# Every single-bit kind, in declaration order.
ALL_KINDS: tuple[ReportKind, ...] = (
    ReportKind.ECEF_POSITION_S,
    ReportKind.ECEF_POSITION_D,
    ReportKind.ECEF_VELOCITY,
    ReportKind.SW_VERSION,
    ReportKind.SINGLE_POSITION,
    ReportKind.DOUBLE_POSITION,
    ReportKind.IO_OPTIONS,
    ReportKind.ENU_VELOCITY,
    ReportKind.UTC_GPS_TIME,
    ReportKind.PRIMARY_TIME,
    ReportKind.SECONDARY_TIME,
    ReportKind.UNKNOWN,
)
