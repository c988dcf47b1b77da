from tsiplink.config import DecoderSettings, get_settings
from tsiplink.parsing.framing import FeedResult, PacketFramer, encode_packet
from tsiplink.parsing.reports import ReportKind, decode_report
from tsiplink.receiver import TsipReceiver
from tsiplink.store import ReportStore
from importlib.metadata import PackageNotFoundError, version

__all__ = [
    "DecoderSettings",
    "get_settings",
    "FeedResult",
    "PacketFramer",
    "encode_packet",
    "ReportKind",
    "decode_report",
    "TsipReceiver",
    "ReportStore",
]

try:
    __version__ = version("tsiplink")
except PackageNotFoundError:
    __version__ = "0.0.0"
