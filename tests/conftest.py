"""Shared fakes: a clock-driven scheduler, synchronous executors and scripted channels."""
import heapq
import itertools
from concurrent.futures import Future

import pytest


class FakeScheduler:
    """Tk ``after``/``after_cancel`` lookalike driven by ``advance(ms)``."""

    def __init__(self):
        self.now_ms = 0
        self._queue = []
        self._ids = itertools.count(1)
        self.cancelled = set()

    def after(self, ms, func):
        after_id = next(self._ids)
        heapq.heappush(self._queue, (self.now_ms + ms, after_id, func))
        return after_id

    def after_cancel(self, after_id):
        self.cancelled.add(after_id)

    def advance(self, ms):
        target = self.now_ms + ms
        while self._queue and self._queue[0][0] <= target:
            due, after_id, func = heapq.heappop(self._queue)
            self.now_ms = due
            if after_id not in self.cancelled:
                func()
        self.now_ms = target

    def clock(self):
        """Seconds, for components that expect time.monotonic()."""
        return self.now_ms / 1000

    @property
    def pending(self):
        return [entry for entry in self._queue if entry[1] not in self.cancelled]


def _run_into(future, fn, args, kwargs):
    try:
        future.set_result(fn(*args, **kwargs))
    except Exception as e:
        future.set_exception(e)


class ImmediateExecutor:
    """Runs submitted work inline; futures are already done."""

    def __init__(self):
        self.submitted = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.submitted.append(args)
        _run_into(future, fn, args, kwargs)
        return future

    def shutdown(self, wait=True, cancel_futures=False):
        pass


class DeferredExecutor:
    """Holds submitted work until ``complete_all()``."""

    def __init__(self):
        self.pending = []
        self.submitted = []

    def submit(self, fn, *args, **kwargs):
        future = Future()
        self.submitted.append(args)
        self.pending.append((future, fn, args, kwargs))
        return future

    def complete_all(self):
        pending, self.pending = self.pending, []
        for future, fn, args, kwargs in pending:
            _run_into(future, fn, args, kwargs)

    def shutdown(self, wait=True, cancel_futures=False):
        pass


SYSTEM_PAYLOAD = {
    "cpu_usage": 42.4,
    "memory_usage": 80.6,
    "total_memory": 17_179_869_184,
    "used_memory": 13_851_000_000,
    "uptime": 7 * 3600 + 125,
}

SPECS_PAYLOAD = {
    "cpu_model": "Intel(R) Core(TM) i7-8700K CPU @ 3.70GHz",
    "cpu_cores": 12,
    "cpu_arch": "x86_64",
    "total_memory_gb": 15.9,
    "os_name": "Linux",
    "os_version": "6.1.0",
    "hostname": "hivemind",
}


class ScriptedChannel:
    """Provider channel answering from a dict; values may be payloads, exceptions or callables."""

    def __init__(self, **responses):
        self.responses = {
            "get_system_info": dict(SYSTEM_PAYLOAD),
            "get_cpu_temperature": {"temperature": 55.2},
            "get_hardware_specs": dict(SPECS_PAYLOAD),
        }
        self.responses.update(responses)
        self.calls = []

    def __call__(self, command):
        self.calls.append(command)
        response = self.responses[command]
        if isinstance(response, Exception):
            raise response
        if callable(response):
            return response()
        return response


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def executor():
    return ImmediateExecutor()


@pytest.fixture
def channel():
    return ScriptedChannel()
