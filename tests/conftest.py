"""Pytest fixtures for all tests."""

import pytest

import internal.logging
from config import ClockConfig
from utils.timestamp import SystemClock, Tai64N


class SequenceClock:
    """Clock that replays a fixed list of TAI64N samples."""

    def __init__(self, samples):
        self.samples = list(samples)
        self.calls = 0

    def __call__(self):
        sample = self.samples[self.calls]
        self.calls += 1
        return sample


@pytest.fixture
def zero_hash():
    """32 zero bytes."""
    return bytes(32)


@pytest.fixture
def scenario_timestamp():
    """TAI64N label 10, no nanoseconds."""
    return bytes.fromhex("00000000" "0000000a" "00000000")


@pytest.fixture
def sequence_clock():
    """Factory for clocks returning one sample per call."""
    def make(*samples):
        return SequenceClock(samples)
    return make


@pytest.fixture
def unix_clock(sequence_clock):
    """Factory for clocks built from unix seconds."""
    def make(*unix_seconds):
        return sequence_clock(*[Tai64N.from_unix(s).to_bytes() for s in unix_seconds])
    return make


@pytest.fixture
def system_clock():
    """Strictly increasing system clock, independent of config.json."""
    return SystemClock(config=ClockConfig(tai_offset=10, strictly_increasing=True))


@pytest.fixture
def reset_logger():
    """Restore the process-wide logger after a test replaces it."""
    original = internal.logging._logger
    yield
    internal.logging._logger = original
