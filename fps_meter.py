"""Render-loop frame rate, measured independently of polling."""
import time

from constants import FPS_THRESHOLDS, FPS_WINDOW_MS, FRAME_INTERVAL_MS
from scheduling import RepeatingTask
from thresholds import Direction, classify


def _now_ms():
    return time.perf_counter() * 1000


class FrameRateMonitor:
    """
    Counts frame callbacks and reports fps once at least a second has passed.

    ``on_update(fps, severity)`` is called with the rounded rate and its tier
    (inverted direction: a low frame rate is the bad case).
    """

    def __init__(self, on_update, thresholds=FPS_THRESHOLDS, window_ms=FPS_WINDOW_MS, clock=_now_ms):
        self.on_update = on_update
        self.warn_at, self.danger_at = thresholds
        self.window_ms = window_ms
        self.clock = clock
        self.fps = 0
        self.frames = 0
        self.last_time = self.clock()
        self._task = None

    def reset(self, now=None):
        self.frames = 0
        self.last_time = self.clock() if now is None else now

    def frame(self, now=None):
        """Record one frame. Returns the new fps when a measurement completes."""
        now = self.clock() if now is None else now
        self.frames += 1
        elapsed = now - self.last_time
        if elapsed < self.window_ms:
            return None

        self.fps = round(self.frames * 1000 / elapsed)
        self.frames = 0
        self.last_time = now
        self.on_update(self.fps, classify(self.fps, self.warn_at, self.danger_at, Direction.INVERTED))
        return self.fps

    def run(self, scheduler, token=None, interval_ms=FRAME_INTERVAL_MS):
        """Drive frame() from the scheduler's refresh loop until the token is cancelled."""
        self.reset()
        self._task = RepeatingTask(scheduler, interval_ms, self.frame, token=token, name="frame-rate")
        self._task.start(immediate=False)
        return self._task
