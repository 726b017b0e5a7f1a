"""Periodic snapshot polling against the metrics provider."""
import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass

from channel import RequestFailed
from constants import POLL_INTERVAL_MS, JOIN_CHECK_MS
from models import MetricSnapshot, TemperatureSnapshot, HardwareSpecs
from readouts import build_readouts, placeholder_readouts
from scheduling import CancellationToken

logger = logging.getLogger(__name__)

STATUS_OK = "ok"
STATUS_OFFLINE = "offline"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class CycleResult:
    """What one poll tick publishes to the display."""
    status: str
    readouts: dict

    @property
    def ok(self):
        return self.status == STATUS_OK


def fetch_hardware_specs(channel):
    """One-shot spec lookup. Returns None when offline, raises RequestFailed on error."""
    if not channel:
        return None
    try:
        return HardwareSpecs.from_payload(channel("get_hardware_specs"))
    except Exception as e:
        raise RequestFailed(str(e) or type(e).__name__) from e


class PollingOrchestrator:
    """
    Fetches a system snapshot and a temperature snapshot every interval.

    Both requests are issued together on the executor and joined before
    anything is published: a tick either updates every readout or reverts
    all of them to the placeholder. The next tick is only scheduled once the
    current join has finished, keeping the cadence measured from tick start.
    """

    def __init__(self, channel, series, on_cycle, scheduler=None, executor=None,
                 thresholds=None, interval_ms=POLL_INTERVAL_MS, token=None,
                 clock=time.monotonic):
        self.channel = channel
        self.series = series
        self.on_cycle = on_cycle
        self.scheduler = scheduler
        self.thresholds = thresholds
        self.interval_ms = interval_ms
        self.token = token or CancellationToken()
        self.clock = clock
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="provider")
        self._after_id = None
        self._tick_started = 0.0
        self.last_result = None

    @property
    def offline(self):
        return not self.channel

    # ---- Scheduled loop ----
    def start(self):
        """Run one cycle now, then keep going every interval."""
        self._tick()

    def stop(self):
        self.token.cancel()
        if self._after_id is not None and self.scheduler is not None:
            self.scheduler.after_cancel(self._after_id)
            self._after_id = None
        if self._owns_executor:
            self.executor.shutdown(wait=False, cancel_futures=True)

    def _tick(self):
        self._after_id = None
        if self.token.cancelled:
            return
        self._tick_started = self.clock()
        if self.offline:
            try:
                self._publish(CycleResult(STATUS_OFFLINE, placeholder_readouts()))
            except Exception:
                logger.exception("Publishing offline readouts failed")
            finally:
                self._schedule_next()
            return
        self._await_join(self._submit())

    def _await_join(self, futures):
        if self.token.cancelled:
            return
        if not all(f.done() for f in futures):
            self._after_id = self.scheduler.after(JOIN_CHECK_MS, lambda: self._await_join(futures))
            return
        try:
            self._finish(futures)
        except Exception:
            logger.exception("Poll cycle failed")
        finally:
            self._schedule_next()

    def _schedule_next(self):
        if self.token.cancelled:
            return
        elapsed_ms = (self.clock() - self._tick_started) * 1000
        delay = max(0, int(self.interval_ms - elapsed_ms))
        self._after_id = self.scheduler.after(delay, self._tick)

    # ---- One cycle ----
    def poll_once(self):
        """Synchronous cycle: blocks until both requests are back."""
        if self.offline:
            result = CycleResult(STATUS_OFFLINE, placeholder_readouts())
            self._publish(result)
            return result
        futures = self._submit()
        wait(futures)
        return self._finish(futures)

    def fetch(self):
        """Both snapshots, or RequestFailed if either request failed."""
        futures = self._submit()
        wait(futures)
        return self._collect(futures)

    def _submit(self):
        return (
            self.executor.submit(self.channel, "get_system_info"),
            self.executor.submit(self.channel, "get_cpu_temperature"),
        )

    def _collect(self, futures):
        system_future, temp_future = futures
        try:
            snapshot = MetricSnapshot.from_payload(system_future.result())
            temperature = TemperatureSnapshot.from_payload(temp_future.result())
        except Exception as e:
            raise RequestFailed(str(e) or type(e).__name__) from e
        return snapshot, temperature

    def _finish(self, futures):
        try:
            snapshot, temperature = self._collect(futures)
        except RequestFailed as e:
            logger.error("Failed to get system info: %s", e)
            result = CycleResult(STATUS_FAILED, placeholder_readouts())
        else:
            result = self._apply(snapshot, temperature)
        self._publish(result)
        return result

    def _apply(self, snapshot, temperature):
        if not temperature.available:
            logger.debug("No CPU temperature reading this tick")
        self.series.push(round(snapshot.cpu_usage), round(snapshot.memory_usage), temperature.celsius)
        return CycleResult(STATUS_OK, build_readouts(snapshot, temperature, self.thresholds))

    def _publish(self, result):
        self.last_result = result
        self.on_cycle(result)
