"""
Report decoding for TSIP timing receivers.

This sub-package maps a completed packet to its typed report record. Each
report code (and super packet subcode) has a fixed big-endian layout; packets
without a decoder are preserved as ``UnknownReport``.
"""
from tsiplink.parsing.reports.codes import ALL_KINDS, ReportKind
from tsiplink.parsing.reports.decode import (
    REPORT_DECODERS,
    SUPER_REPORT_DECODERS,
    decode_report,
    report_id,
)
from tsiplink.parsing.reports.model import (
    CriticalAlarms,
    DiscipliningActivity,
    DiscipliningMode,
    DoublePosition,
    EcefPositionD,
    EcefPositionS,
    EcefVelocity,
    EnuVelocity,
    GpsDecodingStatus,
    IoOptions,
    MinorAlarms,
    PrimaryTime,
    ReceiverMode,
    Report,
    SecondaryTime,
    SinglePosition,
    SoftwareVersion,
    TimingFlags,
    UnknownReport,
    UtcGpsTime,
    UtcGpsTimeBits,
)

__all__ = [
    "ALL_KINDS",
    "ReportKind",
    "REPORT_DECODERS",
    "SUPER_REPORT_DECODERS",
    "decode_report",
    "report_id",
    "CriticalAlarms",
    "DiscipliningActivity",
    "DiscipliningMode",
    "DoublePosition",
    "EcefPositionD",
    "EcefPositionS",
    "EcefVelocity",
    "EnuVelocity",
    "GpsDecodingStatus",
    "IoOptions",
    "MinorAlarms",
    "PrimaryTime",
    "ReceiverMode",
    "Report",
    "SecondaryTime",
    "SinglePosition",
    "SoftwareVersion",
    "TimingFlags",
    "UnknownReport",
    "UtcGpsTime",
    "UtcGpsTimeBits",
]
