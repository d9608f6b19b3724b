import logging
import queue
import threading

import pygame

from settings import SYMBOLS, TrainerSettings
from tone import SymbolTone, ToneBank

logger = logging.getLogger(__name__)

# Marker that tells the worker to exit
_STOP = object()


class AudioUnavailable(Exception):
    pass


class PygameSink:
    """Blocking audio output through pygame.mixer (16-bit signed, mono)."""

    def __init__(self, sample_rate=44100):
        self.sample_rate = sample_rate

    def acquire(self):
        if pygame.mixer.get_init():
            return
        try:
            # Force mono so raw buffers play at their real length
            pygame.mixer.init(frequency=self.sample_rate, size=-16, channels=1, allowedchanges=0)
        except pygame.error as e:
            raise AudioUnavailable(str(e)) from e

    def play(self, pcm, duration_ms):
        sound = pygame.mixer.Sound(buffer=pcm)
        sound.play()
        pygame.time.wait(duration_ms)  # Wait for the tone to finish

    def release(self):
        if pygame.mixer.get_init():
            pygame.mixer.quit()


class MorsePlayer:
    """Plays dots, dashes and whole codes one request at a time on a worker thread.

    Requests are queued and return immediately. `cancel()` drops whatever is
    queued and stops a running sequence before its next tone; the tone that
    is already sounding always plays to the end.
    """

    def __init__(self, settings=None, sink=None, tones=None):
        self.settings = settings or TrainerSettings()
        self.tones = tones or ToneBank(self.settings)
        self.sink = sink if sink is not None else PygameSink(self.settings.sample_rate)

        self._queue = queue.Queue()
        self._condition = threading.Condition()
        self._generation = 0
        self._closed = False
        self._thread = None

    def __enter__(self):
        return self.start()

    def __exit__(self, exc_type, exc, tb):
        self.shutdown()

    def start(self):
        with self._condition:
            if not self._closed:
                self._ensure_worker()
        return self

    def play_symbol(self, symbol):
        SymbolTone.from_symbol(symbol)
        self._submit(self._play_symbol, symbol)

    def play_sequence(self, code):
        self._submit(self._play_sequence, code)

    def cancel(self):
        with self._condition:
            self._generation += 1
            self._condition.notify_all()
        logger.debug("Playback cancelled")

    def wait_until_idle(self):
        self._queue.join()

    def shutdown(self, wait=True):
        with self._condition:
            if self._closed:
                return
            self._closed = True
            self._generation += 1
            self._condition.notify_all()
            thread = self._thread

        if thread is None:
            self.sink.release()
            return

        self._queue.put(_STOP)
        if wait:
            thread.join()

    @property
    def closed(self):
        return self._closed

    # ───────── worker
    def _submit(self, func, arg):
        with self._condition:
            if self._closed:
                logger.warning(f"Player is shut down, ignoring playback of {arg!r}")
                return
            self._ensure_worker()
            # Queued under the lock so nothing lands behind the stop marker
            self._queue.put((func, arg, self._generation))

    def _ensure_worker(self):
        # Caller holds self._condition
        if self._thread is None:
            self._thread = threading.Thread(target=self._run, name="morse-playback", daemon=True)
            self._thread.start()

    def _run(self):
        try:
            while True:
                request = self._queue.get()
                try:
                    if request is _STOP:
                        break
                    func, arg, generation = request
                    if self._is_cancelled(generation):
                        continue
                    try:
                        func(arg, generation)
                    except AudioUnavailable as e:
                        logger.warning(f"Audio output unavailable, dropping playback of {arg!r}: {e}")
                    except Exception:
                        logger.exception(f"Playback of {arg!r} failed")
                finally:
                    self._queue.task_done()
        finally:
            self.sink.release()

    def _is_cancelled(self, generation):
        with self._condition:
            return generation != self._generation

    def _wait_pause(self, generation):
        # True when cancelled while waiting
        timeout = self.settings.intra_char_pause / 1000
        with self._condition:
            return self._condition.wait_for(lambda: generation != self._generation, timeout=timeout)

    def _play_tone(self, symbol):
        self.sink.play(self.tones.for_symbol(symbol), self.tones.duration_ms(symbol))

    def _play_symbol(self, symbol, generation):
        self.sink.acquire()
        self._play_tone(symbol)

    def _play_sequence(self, code, generation):
        self.sink.acquire()
        played = 0
        for symbol in code:
            if symbol not in SYMBOLS:
                logger.debug(f"Skipping {symbol!r} in {code!r}")
                continue
            if played and self._wait_pause(generation):
                return
            if self._is_cancelled(generation):
                return
            self._play_tone(symbol)
            played += 1
