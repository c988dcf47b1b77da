"""Tests for report decoding (layouts, super packets, unknown fallback)."""
import datetime as dt
import math
import struct

from tsiplink.parsing.framing import MAX_DATA
from tsiplink.parsing.reports import (
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
    ReportKind,
    SecondaryTime,
    SinglePosition,
    SoftwareVersion,
    TimingFlags,
    UnknownReport,
    UtcGpsTime,
    decode_report,
    report_id,
)


def _primary_time_frame(**overrides) -> bytes:
    fields = dict(
        seconds_of_week=100, week_number=2000, utc_offset=18, flags=0,
        seconds=45, minutes=30, hours=12, day=15, month=6, year=2024,
    )
    fields.update(overrides)
    return bytes([0x8F, 0xAB]) + struct.pack(
        ">IHHBBBBBBH",
        fields["seconds_of_week"], fields["week_number"], fields["utc_offset"], fields["flags"],
        fields["seconds"], fields["minutes"], fields["hours"], fields["day"], fields["month"], fields["year"],
    )


def _secondary_time_frame() -> bytes:
    return bytes([0x8F, 0xAC]) + struct.pack(
        ">BBBIHHBBBBffIffddd8s",
        4, 0, 100, 3600,
        0x0010, 0x0022,
        0, 0, 0, 0,
        1.5, -0.25,
        0x8000, 2.5, 38.75,
        0.6981317007977318, -1.9198621771937625, 1520.25,
        bytes(range(8)),
    )


def test_report_id():
    assert report_id(b"") == (None, None)
    assert report_id(bytes([0x42, 0x8F])) == (0x42, None)
    assert report_id(bytes([0x8F, 0xAB, 0x00])) == (0x8F, 0xAB)
    assert report_id(bytes([0x8F])) == (0x8F, None)


def test_ecef_position_single():
    frame = bytes([0x42]) + struct.pack(">iiiI", -2_700_000, 4_300_000, -3_850_000, 345_600)
    report = decode_report(frame)
    assert isinstance(report, EcefPositionS)
    assert report.KIND is ReportKind.ECEF_POSITION_S
    assert (report.x, report.y, report.z) == (-2_700_000, 4_300_000, -3_850_000)
    assert report.time_of_fix == 345_600


def test_ecef_position_double():
    frame = bytes([0x83]) + struct.pack(">ddddf", -2694685.25, -4293642.5, 3857878.125, 12.5, 1024.0)
    report = decode_report(frame)
    assert report == EcefPositionD(
        x=-2694685.25, y=-4293642.5, z=3857878.125, clock_bias=12.5, time_of_fix=1024.0,
    )


def test_ecef_velocity():
    frame = bytes([0x43]) + struct.pack(">fffff", 0.5, -0.25, 0.0, 1.0, 60.0)
    report = decode_report(frame)
    assert isinstance(report, EcefVelocity)
    assert (report.x, report.y, report.z, report.bias_rate, report.time_of_fix) == (0.5, -0.25, 0.0, 1.0, 60.0)


def test_sw_version():
    frame = bytes([0x45, 3, 1, 10, 25, 105, 1, 16, 2, 14, 105])
    report = decode_report(frame)
    assert isinstance(report, SoftwareVersion)
    assert report.app_version == "3.01"
    assert report.core_version == "1.16"
    assert report.app_day == 25
    assert report.core_year == 105


def test_single_position():
    lat = math.radians(45.0)
    frame = bytes([0x4A]) + struct.pack(">fffff", lat, -1.5, 250.5, 3.0, 100.0)
    report = decode_report(frame)
    assert isinstance(report, SinglePosition)
    assert report.altitude == 250.5
    assert report.longitude == -1.5
    assert math.isclose(report.latitude_deg, 45.0, rel_tol=1e-6)


def test_double_position():
    frame = bytes([0x84]) + struct.pack(">ddddf", 0.6981317007977318, -1.9198621771937625, 1520.25, 0.0, 7.5)
    report = decode_report(frame)
    assert isinstance(report, DoublePosition)
    assert report.latitude == 0.6981317007977318
    assert math.isclose(report.latitude_deg, 40.0)
    assert math.isclose(report.longitude_deg, -110.0)
    assert report.time_of_fix == 7.5


def test_io_options():
    report = decode_report(bytes([0x55, 0x12, 0x02, 0x00, 0x08]))
    assert report == IoOptions(position=0x12, velocity=0x02, timing=0x00, auxiliary=0x08)


def test_enu_velocity():
    frame = bytes([0x56]) + struct.pack(">fffff", 1.25, 2.5, -0.5, 0.125, 42.0)
    report = decode_report(frame)
    assert report == EnuVelocity(east=1.25, north=2.5, up=-0.5, clock_bias_rate=0.125, time_of_fix=42.0)


def test_utc_gps_time():
    report = decode_report(bytes([0x8F, 0xA2, 0x03]))
    assert isinstance(report, UtcGpsTime)
    assert report.utc_time is True
    assert report.utc_pps is True
    report = decode_report(bytes([0x8F, 0xA2, 0x02]))
    assert report.utc_time is False
    assert report.utc_pps is True


def test_primary_time_scenario():
    report = decode_report(_primary_time_frame())
    assert report == PrimaryTime(
        seconds_of_week=100, week_number=2000, utc_offset=18, flags=TimingFlags(0),
        seconds=45, minutes=30, hours=12, day=15, month=6, year=2024,
    )
    assert report.time_set is True
    assert report.as_datetime() == dt.datetime(2024, 6, 15, 12, 30, 45, tzinfo=dt.timezone.utc)


def test_primary_time_flags():
    report = decode_report(_primary_time_frame(flags=0b0000_0111))
    assert TimingFlags.UTC_TIME in report.flags
    assert TimingFlags.UTC_PPS in report.flags
    assert report.time_set is False


def test_primary_time_invalid_date():
    report = decode_report(_primary_time_frame(day=0, month=0, year=0))
    assert report.as_datetime() is None


def test_secondary_time():
    report = decode_report(_secondary_time_frame())
    assert isinstance(report, SecondaryTime)
    assert report.receiver_mode_name is ReceiverMode.FULL_POSITION
    assert report.disciplining_mode_name is DiscipliningMode.NORMAL
    assert report.self_survey_progress == 100
    assert report.holdover_duration == 3600
    assert report.critical_alarms == CriticalAlarms.CONTROL_VOLTAGE_AT_RAIL
    assert MinorAlarms.ANTENNA_OPEN in report.minor_alarms
    assert MinorAlarms.SURVEY_IN_PROGRESS in report.minor_alarms
    assert MinorAlarms.ANTENNA_SHORTED not in report.minor_alarms
    assert report.gps_decoding_status_name is GpsDecodingStatus.DOING_FIXES
    assert report.disciplining_activity_name is DiscipliningActivity.PHASE_LOCKING
    assert report.pps_offset == 1.5
    assert report.ten_mhz_offset == -0.25
    assert report.dac_value == 0x8000
    assert report.dac_voltage == 2.5
    assert report.temperature == 38.75
    assert report.latitude == 0.6981317007977318
    assert report.longitude == -1.9198621771937625
    assert report.altitude == 1520.25
    assert report.spare == bytes(range(8))


def test_secondary_time_unmapped_codes_stay_integers():
    frame = bytearray(_secondary_time_frame())
    frame[2] = 0x42  # receiver mode
    frame[13] = 0x77  # decoding status
    report = decode_report(bytes(frame))
    assert report.receiver_mode_name == 0x42
    assert not isinstance(report.receiver_mode_name, ReceiverMode)
    assert report.gps_decoding_status_name == 0x77


def test_short_frame_is_zero_padded():
    report = decode_report(bytes([0x8F, 0xAB, 0x00, 0x00, 0x00, 0x64]))
    assert isinstance(report, PrimaryTime)
    assert report.seconds_of_week == 100
    assert report.week_number == 0
    assert report.year == 0


def test_unknown_code_keeps_raw_bytes():
    frame = bytes([0x6D, 0x01, 0x02, 0x03])
    report = decode_report(frame)
    assert isinstance(report, UnknownReport)
    assert report.KIND is ReportKind.UNKNOWN
    assert report.data == frame
    assert report.code == 0x6D


def test_unknown_super_subcode_is_unknown_report():
    frame = bytes([0x8F, 0xA7, 0x01, 0x02])
    report = decode_report(frame)
    assert isinstance(report, UnknownReport)
    assert report.data == frame


def test_super_without_subcode_is_unknown():
    report = decode_report(bytes([0x8F]))
    assert report == UnknownReport(data=bytes([0x8F]))


def test_empty_frame_is_unknown():
    report = decode_report(b"")
    assert report == UnknownReport(data=b"")
    assert report.code is None


def test_unknown_is_capped_at_capacity():
    frame = bytes([0x6D]) + bytes(range(200))
    report = decode_report(frame)
    assert report.data == frame[:MAX_DATA]


def test_records_are_frozen():
    report = decode_report(bytes([0x55, 1, 2, 3, 4]))
    try:
        report.position = 9
        assert False, "Should not allow mutation"
    except AttributeError:
        pass
