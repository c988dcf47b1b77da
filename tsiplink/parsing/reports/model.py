from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import ClassVar, Optional, Union

from tsiplink.parsing.reports.codes import ReportKind


class UtcGpsTimeBits(IntFlag):
    UTC_TIME = 1 << 0
    UTC_PPS = 1 << 1


class TimingFlags(IntFlag):
    UTC_TIME = 1 << 0
    UTC_PPS = 1 << 1
    TIME_NOT_SET = 1 << 2
    NO_UTC_INFO = 1 << 3
    TIME_FROM_USER = 1 << 4


class CriticalAlarms(IntFlag):
    ROM_CHECKSUM_ERROR = 1 << 0
    RAM_CHECK_FAILED = 1 << 1
    POWER_SUPPLY_FAILURE = 1 << 2
    FPGA_CHECK_FAILED = 1 << 3
    CONTROL_VOLTAGE_AT_RAIL = 1 << 4


class MinorAlarms(IntFlag):
    CONTROL_VOLTAGE_NEAR_RAIL = 1 << 0
    ANTENNA_OPEN = 1 << 1
    ANTENNA_SHORTED = 1 << 2
    NOT_TRACKING_SATELLITES = 1 << 3
    NOT_DISCIPLINING = 1 << 4
    SURVEY_IN_PROGRESS = 1 << 5
    NO_STORED_POSITION = 1 << 6
    LEAP_SECOND_PENDING = 1 << 7
    TEST_MODE = 1 << 8
    POSITION_QUESTIONABLE = 1 << 9
    EEPROM_CORRUPT = 1 << 10
    ALMANAC_INCOMPLETE = 1 << 11


class ReceiverMode(IntEnum):
    AUTOMATIC = 0
    SINGLE_SATELLITE = 1
    HORIZONTAL = 3
    FULL_POSITION = 4
    DGPS_REFERENCE = 5
    CLOCK_HOLD = 6
    OVERDETERMINED_CLOCK = 7


class DiscipliningMode(IntEnum):
    NORMAL = 0
    POWER_UP = 1
    AUTO_HOLDOVER = 2
    MANUAL_HOLDOVER = 3
    RECOVERY = 4
    DISABLED = 6


class GpsDecodingStatus(IntEnum):
    DOING_FIXES = 0x00
    NO_GPS_TIME = 0x01
    PDOP_TOO_HIGH = 0x03
    NO_USABLE_SATS = 0x08
    ONLY_1_USABLE_SAT = 0x09
    ONLY_2_USABLE_SATS = 0x0A
    ONLY_3_USABLE_SATS = 0x0B
    CHOSEN_SAT_UNUSABLE = 0x0C
    TRAIM_REJECTED_FIX = 0x10


class DiscipliningActivity(IntEnum):
    PHASE_LOCKING = 0
    OSCILLATOR_WARM_UP = 1
    FREQUENCY_LOCKING = 2
    PLACING_PPS = 3
    INITIALIZING_LOOP_FILTER = 4
    COMPENSATING_OCXO = 5
    INACTIVE = 6
    RECOVERY_MODE = 8
    CALIBRATION = 9


def _lookup(enum_cls, value: int) -> Union[IntEnum, int]:
    try:
        return enum_cls(value)
    except ValueError:
        return value


@dataclass(frozen=True)
class EcefPositionS:
    """Report 0x42: ECEF position as integers plus the time of fix."""
    KIND: ClassVar[ReportKind] = ReportKind.ECEF_POSITION_S

    x: int
    y: int
    z: int
    time_of_fix: int


@dataclass(frozen=True)
class EcefPositionD:
    """Report 0x83: double precision ECEF position in metres."""
    KIND: ClassVar[ReportKind] = ReportKind.ECEF_POSITION_D

    x: float
    y: float
    z: float
    clock_bias: float
    time_of_fix: float


@dataclass(frozen=True)
class EcefVelocity:
    KIND: ClassVar[ReportKind] = ReportKind.ECEF_VELOCITY

    x: float
    y: float
    z: float
    bias_rate: float
    time_of_fix: float


@dataclass(frozen=True)
class SoftwareVersion:
    """Report 0x45: application and GPS core firmware versions."""
    KIND: ClassVar[ReportKind] = ReportKind.SW_VERSION

    app_major: int
    app_minor: int
    app_month: int
    app_day: int
    app_year: int
    core_major: int
    core_minor: int
    core_month: int
    core_day: int
    core_year: int

    @property
    def app_version(self) -> str:
        return f"{self.app_major}.{self.app_minor:02d}"

    @property
    def core_version(self) -> str:
        return f"{self.core_major}.{self.core_minor:02d}"


@dataclass(frozen=True)
class SinglePosition:
    """Report 0x4A: single precision LLA position, angles in radians."""
    KIND: ClassVar[ReportKind] = ReportKind.SINGLE_POSITION

    latitude: float
    longitude: float
    altitude: float
    clock_bias: float
    time_of_fix: float

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)


@dataclass(frozen=True)
class DoublePosition:
    """Report 0x84: double precision LLA position, angles in radians."""
    KIND: ClassVar[ReportKind] = ReportKind.DOUBLE_POSITION

    latitude: float
    longitude: float
    altitude: float
    clock_bias: float
    time_of_fix: float

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)


@dataclass(frozen=True)
class IoOptions:
    KIND: ClassVar[ReportKind] = ReportKind.IO_OPTIONS

    position: int
    velocity: int
    timing: int
    auxiliary: int


@dataclass(frozen=True)
class EnuVelocity:
    KIND: ClassVar[ReportKind] = ReportKind.ENU_VELOCITY

    east: float
    north: float
    up: float
    clock_bias_rate: float
    time_of_fix: float


@dataclass(frozen=True)
class UtcGpsTime:
    """Report 0x8F-A2: whether time and PPS are referenced to UTC or GPS."""
    KIND: ClassVar[ReportKind] = ReportKind.UTC_GPS_TIME

    bits: UtcGpsTimeBits

    @property
    def utc_time(self) -> bool:
        return UtcGpsTimeBits.UTC_TIME in self.bits

    @property
    def utc_pps(self) -> bool:
        return UtcGpsTimeBits.UTC_PPS in self.bits


@dataclass(frozen=True)
class PrimaryTime:
    """
    Report 0x8F-AB: primary timing packet.

    Attributes:
        seconds_of_week: GPS seconds into the current week.
        week_number: GPS week number (not extended).
        utc_offset: Current GPS-UTC offset in seconds.
        flags: Timing flags bitfield.
        seconds, minutes, hours, day, month, year: Calendar time in the time
            base selected by ``flags``.
    """
    KIND: ClassVar[ReportKind] = ReportKind.PRIMARY_TIME

    seconds_of_week: int
    week_number: int
    utc_offset: int
    flags: TimingFlags
    seconds: int
    minutes: int
    hours: int
    day: int
    month: int
    year: int

    @property
    def time_set(self) -> bool:
        return TimingFlags.TIME_NOT_SET not in self.flags

    def as_datetime(self) -> Optional[dt.datetime]:
        """
        The calendar fields as a timezone-aware datetime.

        Returns:
            The datetime, or ``None`` when the fields do not form a valid date
            (e.g. before the receiver has time).
        """
        try:
            # A leap second (60) is folded into :59.
            return dt.datetime(
                self.year, self.month, self.day, self.hours, self.minutes, min(self.seconds, 59),
                tzinfo=dt.timezone.utc,
            )
        except ValueError:
            return None


@dataclass(frozen=True)
class SecondaryTime:
    """
    Report 0x8F-AC: supplemental timing packet.

    Carries receiver and disciplining state, alarm bitfields, oscillator
    telemetry and the receiver position. Latitude and longitude are radians,
    altitude is metres.
    """
    KIND: ClassVar[ReportKind] = ReportKind.SECONDARY_TIME

    receiver_mode: int
    disciplining_mode: int
    self_survey_progress: int
    holdover_duration: int
    critical_alarms: CriticalAlarms
    minor_alarms: MinorAlarms
    gps_decoding_status: int
    disciplining_activity: int
    spare_status1: int
    spare_status2: int
    pps_offset: float
    ten_mhz_offset: float
    dac_value: int
    dac_voltage: float
    temperature: float
    latitude: float
    longitude: float
    altitude: float
    spare: bytes

    @property
    def receiver_mode_name(self) -> Union[ReceiverMode, int]:
        return _lookup(ReceiverMode, self.receiver_mode)

    @property
    def disciplining_mode_name(self) -> Union[DiscipliningMode, int]:
        return _lookup(DiscipliningMode, self.disciplining_mode)

    @property
    def gps_decoding_status_name(self) -> Union[GpsDecodingStatus, int]:
        return _lookup(GpsDecodingStatus, self.gps_decoding_status)

    @property
    def disciplining_activity_name(self) -> Union[DiscipliningActivity, int]:
        return _lookup(DiscipliningActivity, self.disciplining_activity)

    @property
    def latitude_deg(self) -> float:
        return math.degrees(self.latitude)

    @property
    def longitude_deg(self) -> float:
        return math.degrees(self.longitude)


@dataclass(frozen=True)
class UnknownReport:
    """A packet with no decoder, kept verbatim (code byte included)."""
    KIND: ClassVar[ReportKind] = ReportKind.UNKNOWN

    data: bytes

    @property
    def code(self) -> Optional[int]:
        return self.data[0] if self.data else None


Report = Union[
    EcefPositionS,
    EcefPositionD,
    EcefVelocity,
    SoftwareVersion,
    SinglePosition,
    DoublePosition,
    IoOptions,
    EnuVelocity,
    UtcGpsTime,
    PrimaryTime,
    SecondaryTime,
    UnknownReport,
]
