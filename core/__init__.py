from core.errors import BuilderConsumedError, ClockUnavailableError, HashIDError, MalformedInputError
from core.identifier import (
    HASH_ID_SIZE,
    HASH_SIZE,
    TIMESTAMP_SIZE,
    HashID,
    HashIDBuilder,
    compare,
    decode_timestamp,
    get_hash,
    get_timestamp,
)
from core.random_id import rand32, rand64, random_digest, random_id

__all__ = [
    "HASH_ID_SIZE",
    "HASH_SIZE",
    "TIMESTAMP_SIZE",
    "HashID",
    "HashIDBuilder",
    "compare",
    "decode_timestamp",
    "get_hash",
    "get_timestamp",
    "rand32",
    "rand64",
    "random_digest",
    "random_id",
    "HashIDError",
    "MalformedInputError",
    "ClockUnavailableError",
    "BuilderConsumedError",
]
