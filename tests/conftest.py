import os
import threading
import time

import pytest

# Qt widgets and pygame audio run without a display or sound card
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from PyQt5.QtWidgets import QApplication  # noqa: E402

from playback import AudioUnavailable  # noqa: E402
from settings import TrainerSettings  # noqa: E402

# Short tones and pauses keep playback tests quick
FAST = TrainerSettings(dit_duration=5, dah_duration=15, intra_char_pause=20, sample_rate=8000)


class RecordingSink:
    """Stands in for the sound card and records every tone it is asked to play."""

    def __init__(self, fail_acquires=0, block_first=False):
        self.played = []
        self.acquired = 0
        self.released = 0
        self.fail_acquires = fail_acquires
        self.first_started = threading.Event()
        self.unblock = threading.Event()
        if not block_first:
            self.unblock.set()

    def acquire(self):
        if self.fail_acquires:
            self.fail_acquires -= 1
            raise AudioUnavailable("no audio device")
        self.acquired += 1

    def play(self, pcm, duration_ms):
        start = time.monotonic()
        self.first_started.set()
        self.unblock.wait(5)
        time.sleep(duration_ms / 1000)
        self.played.append((pcm, duration_ms, start, time.monotonic()))

    def release(self):
        self.released += 1


@pytest.fixture
def sink():
    return RecordingSink()


class FakeClock:
    def __init__(self):
        self.now_ms = 0

    def __call__(self):
        return self.now_ms / 1000

    def advance(self, ms):
        self.now_ms += ms


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(scope="session")
def app():
    return QApplication.instance() or QApplication([])


def run_events(app, seconds):
    deadline = time.monotonic() + seconds
    while time.monotonic() < deadline:
        app.processEvents()
        time.sleep(0.005)
