import json
import threading
from pathlib import Path

_DEFAULT_CONFIG = Path(__file__).parent / "config.json"

ENTROPY_SIZES = (32, 64)
LOG_LEVELS = ("DEBUG", "INFO", "WARN", "WARNING", "ERROR")


class ClockConfig:
    __slots__ = ("tai_offset", "strictly_increasing")

    def __init__(self, tai_offset=10, strictly_increasing=True):
        self.tai_offset = tai_offset
        self.strictly_increasing = strictly_increasing


class RandomConfig:
    __slots__ = ("entropy_bytes",)

    def __init__(self, entropy_bytes=32):
        if entropy_bytes not in ENTROPY_SIZES:
            raise ValueError(f"entropy_bytes must be one of {ENTROPY_SIZES}, got {entropy_bytes}")
        self.entropy_bytes = entropy_bytes


class LoggingConfig:
    __slots__ = ("level",)

    def __init__(self, level="INFO"):
        if str(level).upper() not in LOG_LEVELS:
            raise ValueError(f"level must be one of {LOG_LEVELS}, got {level!r}")
        self.level = level


class Config:
    __slots__ = ("clock", "random", "logging")

    def __init__(self, clock=None, random=None, logging=None):
        self.clock = clock or ClockConfig()
        self.random = random or RandomConfig()
        self.logging = logging or LoggingConfig()

    @classmethod
    def from_dict(cls, d):
        return cls(
            ClockConfig(**d.get("clock", {})),
            RandomConfig(**d.get("random", {})),
            LoggingConfig(**d.get("logging", {})),
        )


def load_config(path=None):
    config_path = Path(path) if path else _DEFAULT_CONFIG

    if not config_path.exists():
        return Config()

    with open(config_path) as file:
        return Config.from_dict(json.load(file))


_config = None
_config_lock = threading.Lock()


def get_config():
    """Process-wide config, loaded from config.json on first use."""
    global _config
    if _config is None:
        with _config_lock:
            if _config is None:
                _config = load_config()
    return _config
