"""Cancellable repeating tasks on top of a Tk-style ``after`` scheduler.

Any object with ``after(ms, func) -> id`` and ``after_cancel(id)`` works as a
scheduler; in the app that is the Tk root window.
"""
import logging
import threading

logger = logging.getLogger(__name__)


class CancellationToken:
    """Shared stop flag for every loop owned by one window."""

    def __init__(self):
        self._event = threading.Event()

    def cancel(self):
        self._event.set()

    @property
    def cancelled(self):
        return self._event.is_set()


class RepeatingTask:
    """Runs ``callback`` every ``interval_ms`` until the token is cancelled.

    The next run is scheduled after the callback returns, so runs never overlap.
    Exceptions are logged and do not stop the loop.
    """

    def __init__(self, scheduler, interval_ms, callback, token=None, name=None):
        self.scheduler = scheduler
        self.interval_ms = interval_ms
        self.callback = callback
        self.token = token or CancellationToken()
        self.name = name or getattr(callback, "__name__", "task")
        self._after_id = None

    def start(self, immediate=True):
        if immediate:
            self._run()
        else:
            self._schedule()

    def _schedule(self):
        if not self.token.cancelled:
            self._after_id = self.scheduler.after(self.interval_ms, self._run)

    def _run(self):
        self._after_id = None
        if self.token.cancelled:
            return
        try:
            self.callback()
        except Exception:
            logger.exception("Scheduled task %s failed", self.name)
        finally:
            self._schedule()

    def cancel(self):
        self.token.cancel()
        if self._after_id is not None:
            self.scheduler.after_cancel(self._after_id)
            self._after_id = None
