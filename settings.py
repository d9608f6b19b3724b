import json
import logging
import os
from dataclasses import dataclass, fields, replace

# Timing constants (ms)
DIT_DURATION = 100
DAH_DURATION = 300
INTRA_CHAR_PAUSE = 100
CHARACTER_TIMEOUT = 1000

# Audio constants
SAMPLE_RATE = 44100
FREQUENCY = 600
VOLUME = 0.5

# Placeholder appended when a keyed code has no character
UNKNOWN_CHAR = '?'

# Characters a keyed code is made of
SYMBOLS = '.-'

logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    pass


@dataclass(frozen=True)
class TrainerSettings:
    dit_duration: int = DIT_DURATION
    dah_duration: int = DAH_DURATION
    intra_char_pause: int = INTRA_CHAR_PAUSE
    character_timeout: int = CHARACTER_TIMEOUT
    sample_rate: int = SAMPLE_RATE
    frequency: float = FREQUENCY
    volume: float = VOLUME

    def validate(self):
        for field in fields(self):
            value = getattr(self, field.name)
            # Millisecond and sample-rate fields are whole numbers
            whole = field.type in (int, 'int')
            allowed = int if whole else (int, float)
            if isinstance(value, bool) or not isinstance(value, allowed):
                kind = "an integer" if whole else "a number"
                raise ConfigurationError(f"{field.name} must be {kind}, got {value!r}")
        for name in ('dit_duration', 'dah_duration', 'character_timeout', 'sample_rate', 'frequency'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)!r}")
        if self.intra_char_pause < 0:
            raise ConfigurationError(f"intra_char_pause must not be negative, got {self.intra_char_pause!r}")
        if not 0 < self.volume <= 1:
            raise ConfigurationError(f"volume must be in (0, 1], got {self.volume!r}")
        return self


def load_settings(path=None):
    """Build settings from the defaults, overridden by a JSON object at `path`."""
    settings = TrainerSettings()
    if path is None:
        return settings

    if not os.path.exists(path):
        raise ConfigurationError(f"Settings file not found: {path}")
    try:
        with open(path, 'r') as f:
            overrides = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Error loading settings from {path}: {e}") from e

    if not isinstance(overrides, dict):
        raise ConfigurationError(f"Settings file {path} must contain a JSON object")

    known = {field.name for field in fields(TrainerSettings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"Unknown settings in {path}: {', '.join(unknown)}")

    settings = replace(settings, **overrides).validate()
    logger.info(f"Loaded settings from {path}: {overrides}")
    return settings


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
