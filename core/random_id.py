"""Random hash IDs: BLAKE3 over fresh CSPRNG bytes."""

import secrets

import blake3

from config import ENTROPY_SIZES, get_config
from core.identifier import HashIDBuilder


def random_digest(entropy_bytes=32):
    """BLAKE3 digest of ``entropy_bytes`` random bytes."""
    if entropy_bytes not in ENTROPY_SIZES:
        raise ValueError(f"entropy_bytes must be one of {ENTROPY_SIZES}, got {entropy_bytes}")
    return blake3.blake3(secrets.token_bytes(entropy_bytes)).digest()


def rand32(clock=None):
    """Stage a builder over the hash of 32 random bytes."""
    return HashIDBuilder(random_digest(32), clock)


def rand64(clock=None):
    """Stage a builder over the hash of 64 random bytes."""
    return HashIDBuilder(random_digest(64), clock)


def random_id(entropy_bytes=None, clock=None):
    if entropy_bytes is None:
        entropy_bytes = get_config().random.entropy_bytes
    return HashIDBuilder(random_digest(entropy_bytes), clock).build()
