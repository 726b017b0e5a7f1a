from fps_meter import FrameRateMonitor
from poller import PollingOrchestrator
from series import SeriesSet
from thresholds import Severity

from conftest import ScriptedChannel


def frame_times(count, span_ms):
    return [k * span_ms / count for k in range(1, count + 1)]


def test_120_frames_over_two_seconds():
    updates = []
    monitor = FrameRateMonitor(lambda fps, severity: updates.append((fps, severity)), clock=lambda: 0)
    for t in frame_times(120, 2000):
        monitor.frame(t)

    assert len(updates) == 2
    assert all(abs(fps - 60) <= 1 for fps, _ in updates)
    assert all(severity is Severity.GOOD for _, severity in updates)


def test_no_update_before_window_elapses():
    updates = []
    monitor = FrameRateMonitor(lambda *args: updates.append(args), clock=lambda: 0)
    assert monitor.frame(500) is None
    assert monitor.frame(999) is None
    assert monitor.frame(1000) == 3
    assert updates == [(3, Severity.DANGER)]


def test_low_frame_rate_is_the_bad_case():
    updates = []
    monitor = FrameRateMonitor(lambda fps, severity: updates.append((fps, severity)), clock=lambda: 0)
    for t in frame_times(45, 1000):
        monitor.frame(t)
    assert updates == [(45, Severity.WARNING)]


def test_measurement_unaffected_by_poll_loop(scheduler, executor):
    updates = []
    monitor = FrameRateMonitor(lambda fps, severity: updates.append(fps), clock=lambda: scheduler.now_ms)
    monitor.reset()
    for t in frame_times(120, 2000):
        scheduler.after(t, lambda t=t: monitor.frame(t))

    cycles = []
    poller = PollingOrchestrator(ScriptedChannel(), SeriesSet(), cycles.append, scheduler=scheduler,
                                 executor=executor, interval_ms=500, clock=scheduler.clock)
    poller.start()
    scheduler.advance(2000)

    assert len(cycles) == 5
    assert len(updates) == 2
    assert all(abs(fps - 60) <= 1 for fps in updates)


def test_run_drives_frames_from_scheduler(scheduler):
    updates = []
    monitor = FrameRateMonitor(lambda fps, severity: updates.append(fps), clock=lambda: scheduler.now_ms)
    task = monitor.run(scheduler, interval_ms=20)

    scheduler.advance(1000)
    assert updates == [50]

    task.cancel()
    scheduler.advance(5000)
    assert updates == [50]
