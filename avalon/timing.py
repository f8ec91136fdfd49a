"""Rolling frame and render timing statistics."""

from __future__ import annotations

import time
from collections import deque
from typing import Callable

__all__ = ["FrameTimings"]

DEFAULT_WINDOW = 120


class FrameTimings:
    """Tracks the last ``window`` frame and render durations, in seconds."""

    def __init__(
        self,
        window: int = DEFAULT_WINDOW,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if window <= 0:
            raise ValueError("window must be positive")
        self._clock = clock
        now = clock()
        self._start_time = now
        self._frame_start = now
        self._render_start = now
        self._frame_times: deque[float] = deque(maxlen=window)
        self._render_times: deque[float] = deque(maxlen=window)

    def start_frame(self) -> None:
        self._frame_start = self._clock()

    def end_frame(self) -> None:
        self._frame_times.append(self._clock() - self._frame_start)

    def start_render(self) -> None:
        self._render_start = self._clock()

    def end_render(self) -> None:
        self._render_times.append(self._clock() - self._render_start)

    def average_frame_time(self) -> float:
        """Mean of the recorded frame durations, or 0.0 if none."""
        return _mean(self._frame_times)

    def average_render_time(self) -> float:
        """Mean of the recorded render durations, or 0.0 if none."""
        return _mean(self._render_times)

    def total_runtime(self) -> float:
        """Seconds elapsed since the timings were created."""
        return self._clock() - self._start_time


def _mean(samples: deque[float]) -> float:
    return sum(samples) / len(samples) if samples else 0.0