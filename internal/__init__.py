from utils.timestamp import Tai64N, SystemClock, format_timestamp, get_clock
from internal.logging import LogLevel, StructuredLogger, get_logger

__all__ = [
    "Tai64N",
    "SystemClock",
    "format_timestamp",
    "get_clock",
    "LogLevel",
    "StructuredLogger",
    "get_logger",
]
