"""TAI64N timestamps and the default clock.

TAI64N: 8 bytes TAI64 label (2^62 + TAI seconds) + 4 bytes nanoseconds,
both big-endian, so byte order is chronological order.
"""

import struct
import threading
import time
from datetime import datetime, timedelta, timezone

TAI64_BASE = 1 << 62
# TAI - UTC at the Unix epoch
TAI_UNIX_OFFSET = 10
NANOS_PER_SECOND = 1_000_000_000
TAI64N_SIZE = 12

_TAI64N = struct.Struct(">QI")
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Tai64N:
    """External TAI64N time: label seconds plus nanosecond fraction."""

    __slots__ = ("seconds", "nanos")

    def __init__(self, seconds, nanos=0):
        if not 0 <= nanos < NANOS_PER_SECOND:
            raise ValueError(f"nanos out of range: {nanos}")
        if not 0 <= seconds < 1 << 64:
            raise ValueError(f"seconds out of range: {seconds}")
        object.__setattr__(self, "seconds", seconds)
        object.__setattr__(self, "nanos", nanos)

    @classmethod
    def from_unix(cls, unix_seconds, nanos=0, offset=TAI_UNIX_OFFSET):
        return cls(TAI64_BASE + offset + unix_seconds, nanos)

    @classmethod
    def from_unix_nanos(cls, unix_nanos, offset=TAI_UNIX_OFFSET):
        unix_seconds, nanos = divmod(unix_nanos, NANOS_PER_SECOND)
        return cls.from_unix(unix_seconds, nanos, offset)

    @classmethod
    def from_bytes(cls, data):
        """Decode 12 TAI64N bytes. Raises ValueError on bad length or nanos."""
        if len(data) != TAI64N_SIZE:
            raise ValueError(f"expected {TAI64N_SIZE} bytes, got {len(data)}")
        seconds, nanos = _TAI64N.unpack(bytes(data))
        return cls(seconds, nanos)

    @classmethod
    def now(cls, offset=TAI_UNIX_OFFSET):
        return cls.from_unix_nanos(time.time_ns(), offset)

    def to_bytes(self):
        return _TAI64N.pack(self.seconds, self.nanos)

    def to_unix(self, offset=TAI_UNIX_OFFSET):
        """Return (unix_seconds, nanos)."""
        return self.seconds - TAI64_BASE - offset, self.nanos

    def to_unix_nanos(self, offset=TAI_UNIX_OFFSET):
        unix_seconds, nanos = self.to_unix(offset)
        return unix_seconds * NANOS_PER_SECOND + nanos

    def to_datetime(self, offset=TAI_UNIX_OFFSET):
        """UTC datetime, truncated to microseconds.

        Raises OverflowError outside the years 1..9999.
        """
        unix_seconds, nanos = self.to_unix(offset)
        return _UNIX_EPOCH + timedelta(seconds=unix_seconds, microseconds=nanos // 1000)

    def _key(self):
        return (self.seconds, self.nanos)

    def __eq__(self, other):
        if not isinstance(other, Tai64N):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, Tai64N):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other):
        if not isinstance(other, Tai64N):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other):
        if not isinstance(other, Tai64N):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other):
        if not isinstance(other, Tai64N):
            return NotImplemented
        return self._key() >= other._key()

    def __hash__(self):
        return hash(self._key())

    def __setattr__(self, name, value):
        raise AttributeError("Tai64N is immutable")

    def __delattr__(self, name):
        raise AttributeError("Tai64N is immutable")

    def __reduce__(self):
        return (Tai64N, (self.seconds, self.nanos))

    def __repr__(self):
        return f"Tai64N(seconds={self.seconds}, nanos={self.nanos})"


class SystemClock:
    """Wall-clock TAI64N source.

    Samples never go backwards. With strictly_increasing, a repeated or
    regressed reading is bumped to 1ns past the previous sample.
    """

    def __init__(self, config=None, time_source=time.time_ns):
        if config is None:
            from config import get_config
            config = get_config().clock
        self.offset = config.tai_offset
        self.strictly_increasing = config.strictly_increasing
        self._time_source = time_source
        self._lock = threading.Lock()
        self._last = None

    def sample(self):
        """Return the current time as a Tai64N."""
        with self._lock:
            unix_nanos = self._time_source()
            if self._last is not None:
                floor = self._last + 1 if self.strictly_increasing else self._last
                unix_nanos = max(unix_nanos, floor)
            self._last = unix_nanos
        return Tai64N.from_unix_nanos(unix_nanos, self.offset)

    def __call__(self):
        return self.sample().to_bytes()


_clock = None
_clock_lock = threading.Lock()


def get_clock():
    global _clock
    if _clock is None:
        with _clock_lock:
            if _clock is None:
                _clock = SystemClock()
    return _clock


def format_timestamp(epoch_us=None):
    """Format timestamp as ISO 8601 with microseconds."""
    if epoch_us is None:
        epoch_us = time.time_ns() // 1000

    dt = datetime.fromtimestamp(epoch_us / 1_000_000, tz=timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.%f") + "Z"
