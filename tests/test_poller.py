import logging
import threading

import pytest

from channel import NULL_CHANNEL, RequestFailed
from constants import PLACEHOLDER
from poller import (STATUS_FAILED, STATUS_OFFLINE, STATUS_OK, PollingOrchestrator,
                    fetch_hardware_specs)
from series import SeriesSet
from thresholds import Severity

from conftest import DeferredExecutor, ScriptedChannel


def make_poller(channel, scheduler, executor, **kwargs):
    results = []
    poller = PollingOrchestrator(
        channel,
        SeriesSet(),
        results.append,
        scheduler=scheduler,
        executor=executor,
        clock=scheduler.clock,
        **kwargs,
    )
    return poller, results


def test_successful_cycle(channel, scheduler, executor):
    poller, results = make_poller(channel, scheduler, executor)
    poller.start()

    assert [r.status for r in results] == [STATUS_OK]
    readouts = results[0].readouts
    assert readouts["cpu"].text == "42"
    assert readouts["memory"].severity is Severity.WARNING
    assert readouts["temperature"].text == "55"
    assert poller.series.cpu.values() == [42.0]
    assert poller.series.memory.values() == [81.0]
    assert poller.series.temperature.values() == [55.2]
    assert sorted(channel.calls) == ["get_cpu_temperature", "get_system_info"]
    assert poller.last_result is results[0]


def test_offline_publishes_placeholders_without_requests(scheduler, executor):
    poller, results = make_poller(NULL_CHANNEL, scheduler, executor)
    poller.start()
    scheduler.advance(4000)

    assert [r.status for r in results] == [STATUS_OFFLINE] * 3
    assert all(r.text == PLACEHOLDER for r in results[-1].readouts.values())
    assert executor.submitted == []
    assert len(poller.series.cpu) == 0


def test_failed_request_reverts_every_readout(scheduler, executor, caplog):
    channel = ScriptedChannel(get_cpu_temperature=RuntimeError("sensor bus error"))
    poller, results = make_poller(channel, scheduler, executor)

    with caplog.at_level(logging.ERROR, logger="poller"):
        poller.start()

    assert results[0].status == STATUS_FAILED
    assert all(r.text == PLACEHOLDER for r in results[0].readouts.values())
    assert len(poller.series.cpu) == 0
    assert "Failed to get system info: sensor bus error" in caplog.text

    channel.responses["get_cpu_temperature"] = {"temperature": 48.0}
    scheduler.advance(1999)
    assert len(results) == 1
    scheduler.advance(1)
    assert results[1].status == STATUS_OK
    assert results[1].readouts["cpu"].text == "42"


def test_malformed_payload_counts_as_failure(scheduler, executor):
    channel = ScriptedChannel(get_system_info={"cpu_usage": "busy"})
    poller, results = make_poller(channel, scheduler, executor)
    poller.start()
    assert results[0].status == STATUS_FAILED


def test_missing_temperature(scheduler, executor):
    channel = ScriptedChannel(get_cpu_temperature={"temperature": None})
    poller, results = make_poller(channel, scheduler, executor)
    poller.start()

    readouts = results[0].readouts
    assert results[0].ok
    assert readouts["temperature"].text == PLACEHOLDER
    assert readouts["temperature"].severity is None
    assert readouts["cpu"].text == "42"
    assert poller.series.temperature.values() == [0.0]


def test_fixed_cadence(channel, scheduler, executor):
    poller, results = make_poller(channel, scheduler, executor)
    poller.start()
    scheduler.advance(6000)
    assert len(results) == 4


def test_ticks_never_overlap(channel, scheduler):
    executor = DeferredExecutor()
    poller, results = make_poller(channel, scheduler, executor)
    poller.start()

    # Requests hang well past the interval: no new tick is started meanwhile
    scheduler.advance(5000)
    assert len(executor.submitted) == 2
    assert results == []

    executor.complete_all()
    scheduler.advance(25)
    assert len(results) == 1
    # Overdue: the next tick goes out right away
    assert len(executor.submitted) == 4


def test_stop_cancels_pending_tick(channel, scheduler, executor):
    poller, results = make_poller(channel, scheduler, executor)
    poller.start()
    poller.stop()
    scheduler.advance(10000)
    assert len(results) == 1
    assert poller.token.cancelled


def test_callback_error_does_not_stop_loop(channel, scheduler, executor, caplog):
    calls = []

    def on_cycle(result):
        calls.append(result)
        raise RuntimeError("display gone")

    poller = PollingOrchestrator(channel, SeriesSet(), on_cycle, scheduler=scheduler,
                                 executor=executor, clock=scheduler.clock)
    with caplog.at_level(logging.ERROR, logger="poller"):
        poller.start()
        scheduler.advance(2000)
    assert len(calls) == 2
    assert "Poll cycle failed" in caplog.text


def test_fetch_chains_underlying_error(executor, scheduler):
    cause = ConnectionError("provider went away")
    poller, _ = make_poller(ScriptedChannel(get_system_info=cause), scheduler, executor)
    with pytest.raises(RequestFailed) as info:
        poller.fetch()
    assert info.value.__cause__ is cause


def test_poll_once_runs_both_requests_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    def system_info():
        barrier.wait()
        return {"cpu_usage": 12.0, "memory_usage": 30.0, "total_memory": 8 * 1024 ** 3,
                "used_memory": 2 * 1024 ** 3, "uptime": 60}

    def temperature():
        barrier.wait()
        return {"temperature": 40.0}

    channel = ScriptedChannel(get_system_info=system_info, get_cpu_temperature=temperature)
    poller = PollingOrchestrator(channel, SeriesSet(), lambda result: None)
    try:
        result = poller.poll_once()
    finally:
        poller.stop()

    assert result.ok
    assert result.readouts["used_memory"].text == "2.0 GB"


def test_fetch_hardware_specs(channel):
    specs = fetch_hardware_specs(channel)
    assert specs.cpu_cores == 12
    assert fetch_hardware_specs(NULL_CHANNEL) is None

    with pytest.raises(RequestFailed):
        fetch_hardware_specs(ScriptedChannel(get_hardware_specs={"cpu_model": "x"}))
