"""
Decoder for completed TSIP packets.

A packet is ``[code] [payload...]``, or ``[0x8F] [subcode] [payload...]`` for
super packets. Every layout is fixed; offsets below are relative to the first
payload byte. Packets shorter than their layout are zero padded, so decoding
never fails: content without a decoder ends up in an ``UnknownReport``.
"""
from __future__ import annotations

from typing import Callable

from tsiplink.core.binary import (
    b2_to_uint16,
    b4_to_int32,
    b4_to_single,
    b4_to_uint32,
    b8_to_double,
)
from tsiplink.parsing.framing.framer import MAX_DATA
from tsiplink.parsing.reports.codes import (
    REPORT_DOUBLE_POSITION,
    REPORT_ECEF_POSITION_D,
    REPORT_ECEF_POSITION_S,
    REPORT_ECEF_VELOCITY,
    REPORT_ENU_VELOCITY,
    REPORT_IO_OPTIONS,
    REPORT_SINGLE_POSITION,
    REPORT_SUPER,
    REPORT_SUPER_PRIMARY_TIME,
    REPORT_SUPER_SECONDARY_TIME,
    REPORT_SUPER_UTC_GPS_TIME,
    REPORT_SW_VERSION,
)
from tsiplink.parsing.reports.model import (
    CriticalAlarms,
    DoublePosition,
    EcefPositionD,
    EcefPositionS,
    EcefVelocity,
    EnuVelocity,
    IoOptions,
    MinorAlarms,
    PrimaryTime,
    Report,
    SecondaryTime,
    SinglePosition,
    SoftwareVersion,
    TimingFlags,
    UnknownReport,
    UtcGpsTime,
    UtcGpsTimeBits,
)


def _padded(payload: bytes, size: int) -> bytes:
    if len(payload) >= size:
        return payload
    return payload + bytes(size - len(payload))


def _ecef_position_s(p: bytes) -> EcefPositionS:
    return EcefPositionS(
        x=b4_to_int32(p, 0),
        y=b4_to_int32(p, 4),
        z=b4_to_int32(p, 8),
        time_of_fix=b4_to_uint32(p, 12),
    )


def _ecef_position_d(p: bytes) -> EcefPositionD:
    return EcefPositionD(
        x=b8_to_double(p, 0),
        y=b8_to_double(p, 8),
        z=b8_to_double(p, 16),
        clock_bias=b8_to_double(p, 24),
        time_of_fix=b4_to_single(p, 32),
    )


def _ecef_velocity(p: bytes) -> EcefVelocity:
    return EcefVelocity(
        x=b4_to_single(p, 0),
        y=b4_to_single(p, 4),
        z=b4_to_single(p, 8),
        bias_rate=b4_to_single(p, 12),
        time_of_fix=b4_to_single(p, 16),
    )


def _sw_version(p: bytes) -> SoftwareVersion:
    return SoftwareVersion(
        app_major=p[0],
        app_minor=p[1],
        app_month=p[2],
        app_day=p[3],
        app_year=p[4],
        core_major=p[5],
        core_minor=p[6],
        core_month=p[7],
        core_day=p[8],
        core_year=p[9],
    )


def _single_position(p: bytes) -> SinglePosition:
    return SinglePosition(
        latitude=b4_to_single(p, 0),
        longitude=b4_to_single(p, 4),
        altitude=b4_to_single(p, 8),
        clock_bias=b4_to_single(p, 12),
        time_of_fix=b4_to_single(p, 16),
    )


def _double_position(p: bytes) -> DoublePosition:
    return DoublePosition(
        latitude=b8_to_double(p, 0),
        longitude=b8_to_double(p, 8),
        altitude=b8_to_double(p, 16),
        clock_bias=b8_to_double(p, 24),
        time_of_fix=b4_to_single(p, 32),
    )


def _io_options(p: bytes) -> IoOptions:
    return IoOptions(position=p[0], velocity=p[1], timing=p[2], auxiliary=p[3])


def _enu_velocity(p: bytes) -> EnuVelocity:
    return EnuVelocity(
        east=b4_to_single(p, 0),
        north=b4_to_single(p, 4),
        up=b4_to_single(p, 8),
        clock_bias_rate=b4_to_single(p, 12),
        time_of_fix=b4_to_single(p, 16),
    )


def _utc_gps_time(p: bytes) -> UtcGpsTime:
    return UtcGpsTime(bits=UtcGpsTimeBits(p[0]))


def _primary_time(p: bytes) -> PrimaryTime:
    return PrimaryTime(
        seconds_of_week=b4_to_uint32(p, 0),
        week_number=b2_to_uint16(p, 4),
        utc_offset=b2_to_uint16(p, 6),
        flags=TimingFlags(p[8]),
        seconds=p[9],
        minutes=p[10],
        hours=p[11],
        day=p[12],
        month=p[13],
        year=b2_to_uint16(p, 14),
    )


def _secondary_time(p: bytes) -> SecondaryTime:
    return SecondaryTime(
        receiver_mode=p[0],
        disciplining_mode=p[1],
        self_survey_progress=p[2],
        holdover_duration=b4_to_uint32(p, 3),
        critical_alarms=CriticalAlarms(b2_to_uint16(p, 7)),
        minor_alarms=MinorAlarms(b2_to_uint16(p, 9)),
        gps_decoding_status=p[11],
        disciplining_activity=p[12],
        spare_status1=p[13],
        spare_status2=p[14],
        pps_offset=b4_to_single(p, 15),
        ten_mhz_offset=b4_to_single(p, 19),
        dac_value=b4_to_uint32(p, 23),
        dac_voltage=b4_to_single(p, 27),
        temperature=b4_to_single(p, 31),
        latitude=b8_to_double(p, 35),
        longitude=b8_to_double(p, 43),
        altitude=b8_to_double(p, 51),
        spare=bytes(p[59:67]),
    )


# code -> (payload length, decoder)
REPORT_DECODERS: dict[int, tuple[int, Callable[[bytes], Report]]] = {
    REPORT_ECEF_POSITION_S: (16, _ecef_position_s),
    REPORT_ECEF_POSITION_D: (36, _ecef_position_d),
    REPORT_ECEF_VELOCITY: (20, _ecef_velocity),
    REPORT_SW_VERSION: (10, _sw_version),
    REPORT_SINGLE_POSITION: (20, _single_position),
    REPORT_DOUBLE_POSITION: (36, _double_position),
    REPORT_IO_OPTIONS: (4, _io_options),
    REPORT_ENU_VELOCITY: (20, _enu_velocity),
}

# REPORT_SUPER subcode -> (payload length, decoder)
SUPER_REPORT_DECODERS: dict[int, tuple[int, Callable[[bytes], Report]]] = {
    REPORT_SUPER_UTC_GPS_TIME: (1, _utc_gps_time),
    REPORT_SUPER_PRIMARY_TIME: (16, _primary_time),
    REPORT_SUPER_SECONDARY_TIME: (67, _secondary_time),
}


def report_id(frame: bytes) -> tuple[int | None, int | None]:
    """
    Return the ``(code, subcode)`` pair of a packet.

    ``subcode`` is only set for super packets; both are ``None`` for an empty
    packet.
    """
    if not frame:
        return None, None
    code = frame[0]
    if code == REPORT_SUPER and len(frame) > 1:
        return code, frame[1]
    return code, None


def decode_report(frame: bytes) -> Report:
    """
    Decode one unescaped packet into its typed report.

    Args:
        frame: The packet bytes as produced by ``PacketFramer``, starting with
            the report code.

    Returns:
        The decoded record. Exactly one record is produced for every packet;
        an unsupported code or super packet subcode yields ``UnknownReport``.
    """
    code, subcode = report_id(frame)

    if code == REPORT_SUPER:
        entry = SUPER_REPORT_DECODERS.get(subcode) if subcode is not None else None
        payload = frame[2:]
    else:
        entry = REPORT_DECODERS.get(code) if code is not None else None
        payload = frame[1:]

    if entry is None:
        return UnknownReport(data=bytes(frame[:MAX_DATA]))

    length, decoder = entry
    return decoder(_padded(bytes(payload), length))
