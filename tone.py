from enum import Enum

import numpy as np

from settings import TrainerSettings

MAX_AMPLITUDE = 32767


class SymbolTone(Enum):
    DOT = '.'
    DASH = '-'

    @property
    def symbol(self):
        return self.value

    def duration(self, settings):
        return settings.dit_duration if self is SymbolTone.DOT else settings.dah_duration

    @classmethod
    def from_symbol(cls, symbol):
        try:
            return cls(symbol)
        except ValueError:
            raise ValueError(f"Not a Morse symbol: {symbol!r}") from None


def sample_count(duration_ms, sample_rate):
    return duration_ms * sample_rate // 1000


def generate_samples(duration_ms, settings):
    # Plain sine, no fade in/out
    i = np.arange(sample_count(duration_ms, settings.sample_rate))
    angle = 2 * np.pi * i * settings.frequency / settings.sample_rate
    tone = np.round(settings.volume * MAX_AMPLITUDE * np.sin(angle))
    return tone.astype('<i2')


def generate(tone_kind, settings=None):
    """Render one dot or dash as 16-bit signed little-endian mono PCM bytes."""
    settings = settings or TrainerSettings()
    return generate_samples(tone_kind.duration(settings), settings).tobytes()


class ToneBank:
    """Dot and dash buffers, rendered once and reused for every playback."""

    def __init__(self, settings=None):
        self.settings = settings or TrainerSettings()
        self._cache = {kind: generate(kind, self.settings) for kind in SymbolTone}

    def get(self, tone_kind):
        return self._cache[tone_kind]

    def for_symbol(self, symbol):
        return self._cache[SymbolTone.from_symbol(symbol)]

    def duration_ms(self, symbol):
        return SymbolTone.from_symbol(symbol).duration(self.settings)
