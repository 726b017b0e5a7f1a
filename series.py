"""Bounded rolling history for the chart."""
from collections import deque

from constants import MAX_POINTS


class RollingSeriesBuffer:
    """Fixed-capacity FIFO; the oldest sample is dropped once full."""

    def __init__(self, capacity=MAX_POINTS):
        if capacity < 1:
            raise ValueError("capacity must be positive")
        self._points = deque(maxlen=capacity)

    @property
    def capacity(self):
        return self._points.maxlen

    def push(self, value):
        self._points.append(float(value))

    def values(self):
        """Current samples, oldest first."""
        return list(self._points)

    def __len__(self):
        return len(self._points)


class SeriesSet:
    """The three chart series, pushed together once per successful tick."""

    def __init__(self, capacity=MAX_POINTS):
        self.cpu = RollingSeriesBuffer(capacity)
        self.memory = RollingSeriesBuffer(capacity)
        self.temperature = RollingSeriesBuffer(capacity)

    @property
    def capacity(self):
        return self.cpu.capacity

    def push(self, cpu, memory, temperature):
        # 0 stands in for "no temperature reading"
        self.cpu.push(cpu)
        self.memory.push(memory)
        self.temperature.push(temperature if temperature is not None else 0.0)

    def has_temperature(self):
        """True if any retained temperature sample is a real (positive) reading."""
        return any(t > 0 for t in self.temperature.values())
