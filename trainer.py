import logging
import random
import time

from PyQt5.QtCore import QTimer

from morse_table import MORSE_CODE, TARGET_WORDS, build_reverse_table, lookup_code
from settings import UNKNOWN_CHAR, ConfigurationError, TrainerSettings
from tone import SymbolTone

logger = logging.getLogger(__name__)


class DeadlineTimeout:
    """Single-shot countdown checked cooperatively through `poll()`."""

    def __init__(self, interval_ms, clock=time.monotonic):
        self.interval_ms = interval_ms
        self.clock = clock
        self.callback = None
        self._deadline = None

    def start(self):
        # Replaces any running countdown
        self._deadline = self.clock() + self.interval_ms / 1000

    def cancel(self):
        self._deadline = None

    def is_active(self):
        return self._deadline is not None

    def poll(self):
        if self._deadline is None or self.clock() < self._deadline:
            return False
        self._deadline = None
        if self.callback:
            self.callback()
        return True


class QtPendingTimeout:
    """Single-shot countdown driven by the Qt event loop."""

    def __init__(self, interval_ms, parent=None):
        self.callback = None
        self._timer = QTimer(parent)
        self._timer.setSingleShot(True)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._fire)

    def start(self):
        # QTimer.start() restarts an active timer
        self._timer.start()

    def cancel(self):
        self._timer.stop()

    def is_active(self):
        return self._timer.isActive()

    def _fire(self):
        if self.callback:
            self.callback()


class MorseTrainer:
    def __init__(self, table=None, target_words=None, timeout=None, player=None,
                 rng=None, on_change=None, settings=None):
        self.settings = (settings or TrainerSettings()).validate()
        self.table = dict(MORSE_CODE if table is None else table)
        self.target_words = list(TARGET_WORDS if target_words is None else target_words)
        if not self.target_words:
            raise ConfigurationError("Target word list is empty")
        self._reverse = build_reverse_table(self.table)

        self.player = player
        self.on_change = on_change
        self.random = rng or random.Random()

        self.timeout = timeout or DeadlineTimeout(self.settings.character_timeout)
        self.timeout.callback = self._on_timeout

        self.current_input = []
        self.translated = []
        self.target_word = None
        self.set_random_target()

    def set_random_target(self):
        self.target_word = self.random.choice(self.target_words)

    def add_symbol(self, symbol):
        SymbolTone.from_symbol(symbol)
        self.current_input.append(symbol)
        if self.player is not None:
            self.player.play_symbol(symbol)
        self.timeout.start()
        logger.debug(f"Keyed {symbol!r}, current code {self.get_current_code()!r}")
        self._changed()

    def finalize_character(self):
        self.timeout.cancel()
        if not self.current_input:
            return

        code = self.get_current_code()
        self.current_input.clear()
        char = lookup_code(self._reverse, code)
        if char is None:
            logger.debug(f"Unknown code {code!r}")
            char = UNKNOWN_CHAR
        self.translated.append(char)
        self._changed()

    def reset(self):
        self.timeout.cancel()
        self.current_input.clear()
        self.translated.clear()
        if self.player is not None:
            self.player.cancel()
        self.set_random_target()
        logger.debug(f"New target {self.target_word!r}")
        self._changed()

    def get_current_code(self):
        return ''.join(self.current_input)

    def get_translated(self):
        return ''.join(self.translated)

    def get_target_word(self):
        return self.target_word

    def is_complete(self):
        return self.get_translated() == self.target_word

    def _on_timeout(self):
        if self.current_input:
            self.finalize_character()

    def _changed(self):
        if self.on_change:
            self.on_change()
