"""Sortable hash IDs.

Layout (44 bytes): TAI64N timestamp (12) || hash digest (32).
The timestamp leads, so comparing the raw bytes orders IDs by creation
time and falls back to the digest only on a timestamp tie.
"""

from core.errors import BuilderConsumedError, ClockUnavailableError, MalformedInputError
from internal.logging import get_logger
from utils.timestamp import TAI_UNIX_OFFSET, TAI64N_SIZE, Tai64N, get_clock

TIMESTAMP_SIZE = TAI64N_SIZE
HASH_SIZE = 32
HASH_ID_SIZE = TIMESTAMP_SIZE + HASH_SIZE

_BYTES_LIKE = (bytes, bytearray, memoryview)


def _coerce_digest(digest):
    # hashlib / blake3 hasher objects
    if not isinstance(digest, _BYTES_LIKE) and hasattr(digest, "digest"):
        digest = digest.digest()
    if not isinstance(digest, _BYTES_LIKE):
        get_logger().warn("hash rejected", component="hash", type=type(digest).__name__)
        raise MalformedInputError(
            f"hash must be bytes, got {type(digest).__name__}",
            component="hash", expected=HASH_SIZE,
        )
    digest = bytes(digest)
    if len(digest) != HASH_SIZE:
        get_logger().warn("hash rejected", component="hash", size=len(digest))
        raise MalformedInputError(
            f"hash must be {HASH_SIZE} bytes, got {len(digest)}",
            component="hash", expected=HASH_SIZE, actual=len(digest),
        )
    return digest


def _sample(clock):
    if clock is None:
        clock = get_clock()
    try:
        sample = clock()
    except Exception as exc:
        get_logger().error("clock sample failed", error=exc, clock=repr(clock))
        raise ClockUnavailableError("clock failed to produce a timestamp", clock=clock, cause=exc) from exc

    if isinstance(sample, Tai64N):
        sample = sample.to_bytes()
    if not isinstance(sample, _BYTES_LIKE) or len(bytes(sample)) != TIMESTAMP_SIZE:
        actual = len(bytes(sample)) if isinstance(sample, _BYTES_LIKE) else type(sample).__name__
        get_logger().warn("timestamp rejected", component="timestamp", actual=actual)
        raise MalformedInputError(
            f"timestamp must be {TIMESTAMP_SIZE} bytes, got {actual}",
            component="timestamp", expected=TIMESTAMP_SIZE, actual=actual,
        )
    return bytes(sample)


def _identifier_bytes(value):
    if isinstance(value, HashID):
        return value._raw
    if isinstance(value, _BYTES_LIKE):
        raw = bytes(value)
        if len(raw) == HASH_ID_SIZE:
            return raw
        actual = len(raw)
    else:
        actual = type(value).__name__
    get_logger().warn("identifier rejected", component="identifier", actual=actual)
    raise MalformedInputError(
        f"identifier must be {HASH_ID_SIZE} bytes, got {actual}",
        component="identifier", expected=HASH_ID_SIZE, actual=actual,
    )


class HashIDBuilder:
    """Stages a hash ID: the timestamp is sampled here, not in build()."""

    __slots__ = ("_timestamp", "_digest", "_built")

    def __init__(self, digest, clock=None):
        self._digest = _coerce_digest(digest)
        self._timestamp = _sample(clock)
        self._built = False

    @property
    def timestamp_bytes(self):
        return self._timestamp

    @property
    def hash_bytes(self):
        return self._digest

    @property
    def built(self):
        return self._built

    def build(self):
        """Concatenate the staged timestamp and digest. Single use."""
        if self._built:
            raise BuilderConsumedError("builder already consumed")
        self._built = True
        hash_id = HashID._from_parts(self._timestamp, self._digest)
        get_logger().debug("hash id built", id=hash_id.hex())
        return hash_id

    def __repr__(self):
        state = "built" if self._built else "unbuilt"
        return f"HashIDBuilder(timestamp={self._timestamp.hex()}, {state})"


class HashID:
    """Immutable 44-byte identifier. Ordered and hashed by its raw bytes."""

    __slots__ = ("_raw",)

    SIZE = HASH_ID_SIZE
    TIMESTAMP_SIZE = TIMESTAMP_SIZE
    HASH_SIZE = HASH_SIZE

    def __init__(self, data):
        object.__setattr__(self, "_raw", _identifier_bytes(data))

    @classmethod
    def new(cls, digest, clock=None):
        """Sample the clock now and stage a builder for ``digest``."""
        return HashIDBuilder(digest, clock)

    @classmethod
    def generate(cls, digest, clock=None):
        return HashIDBuilder(digest, clock).build()

    @classmethod
    def from_bytes(cls, data):
        return cls(data)

    @classmethod
    def from_hex(cls, text):
        try:
            data = bytes.fromhex(text)
        except (TypeError, ValueError) as exc:
            raise MalformedInputError("identifier is not valid hex", component="identifier", cause=exc) from exc
        return cls(data)

    @classmethod
    def _from_parts(cls, timestamp, digest):
        return cls(timestamp + digest)

    @property
    def timestamp_bytes(self):
        return get_timestamp(self)

    @property
    def hash_bytes(self):
        return get_hash(self)

    @property
    def timestamp(self):
        return decode_timestamp(self)

    @property
    def created_at(self):
        """Creation time as a UTC datetime, assuming the default TAI offset."""
        stamp = self.timestamp
        try:
            return stamp.to_datetime(TAI_UNIX_OFFSET)
        except OverflowError as exc:
            raise MalformedInputError(
                f"timestamp outside the datetime range: {stamp!r}", component="timestamp", cause=exc,
            ) from exc

    def hex(self):
        return self._raw.hex()

    def __bytes__(self):
        return self._raw

    def __len__(self):
        return HASH_ID_SIZE

    def __str__(self):
        return self.hex()

    def __repr__(self):
        return f"HashID('{self.hex()}')"

    def __eq__(self, other):
        if not isinstance(other, HashID):
            return NotImplemented
        return self._raw == other._raw

    def __ne__(self, other):
        if not isinstance(other, HashID):
            return NotImplemented
        return self._raw != other._raw

    def __lt__(self, other):
        if not isinstance(other, HashID):
            return NotImplemented
        return compare(self, other) < 0

    def __le__(self, other):
        if not isinstance(other, HashID):
            return NotImplemented
        return compare(self, other) <= 0

    def __gt__(self, other):
        if not isinstance(other, HashID):
            return NotImplemented
        return compare(self, other) > 0

    def __ge__(self, other):
        if not isinstance(other, HashID):
            return NotImplemented
        return compare(self, other) >= 0

    def __hash__(self):
        return hash(self._raw)

    def __setattr__(self, name, value):
        raise AttributeError("HashID is immutable")

    def __delattr__(self, name):
        raise AttributeError("HashID is immutable")

    def __reduce__(self):
        return (HashID, (self._raw,))


def compare(a, b):
    """Total order over hash IDs: -1, 0 or 1.

    Unsigned byte-wise over all 44 bytes, first byte most significant, which
    is timestamp order with the digest as tie-breaker.
    """
    a_raw, b_raw = _identifier_bytes(a), _identifier_bytes(b)
    return (a_raw > b_raw) - (a_raw < b_raw)


def get_timestamp(hash_id):
    """Raw TAI64N bytes [0, 12) exactly as sampled."""
    return _identifier_bytes(hash_id)[:TIMESTAMP_SIZE]


def get_hash(hash_id):
    """Raw digest bytes [12, 44) exactly as supplied."""
    return _identifier_bytes(hash_id)[TIMESTAMP_SIZE:]


def decode_timestamp(hash_id):
    """Decode the timestamp component into a Tai64N."""
    timestamp = get_timestamp(hash_id)
    try:
        return Tai64N.from_bytes(timestamp)
    except ValueError as exc:
        raise MalformedInputError(
            f"timestamp is not valid TAI64N: {exc}", component="timestamp", cause=exc,
        ) from exc
