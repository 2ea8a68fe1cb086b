"""
Name: Stage Timing Utilities

Responsibilities:
  - Measure elapsed time of named stages (llm call, response parsing)
  - Expose timings as a flat dict for structured logs

Collaborators:
  - application.ai_bridge: times the outbound completion call
  - ai_routes.py: times response parsing
"""

import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Timer:
    """
    R: Simple timer for measuring elapsed time.

    Usage:
        with Timer() as t:
            ...
        print(f"Took {t.elapsed_ms}ms")
    """

    _start_time: Optional[float] = field(default=None, repr=False)
    _end_time: Optional[float] = field(default=None, repr=False)

    def start(self) -> "Timer":
        self._start_time = time.perf_counter()
        self._end_time = None
        return self

    def stop(self) -> "Timer":
        if self._start_time is None:
            raise RuntimeError("Timer was not started")
        self._end_time = time.perf_counter()
        return self

    @property
    def elapsed_seconds(self) -> float:
        if self._start_time is None:
            return 0.0
        end = self._end_time or time.perf_counter()
        return end - self._start_time

    @property
    def elapsed_ms(self) -> float:
        return round(self.elapsed_seconds * 1000, 2)

    def __enter__(self) -> "Timer":
        return self.start()

    def __exit__(self, *args) -> None:
        self.stop()


@dataclass
class StageTimings:
    """
    R: Container for multi-stage timing measurements.

    Usage:
        timings = StageTimings()
        with timings.measure("llm"):
            reply = service.complete(messages)
        timings.to_dict()  # {"llm_ms": 812.4, "total_ms": 812.9}
    """

    _stages: dict[str, float] = field(default_factory=dict)
    _total_timer: Timer = field(default_factory=Timer)

    def __post_init__(self):
        self._total_timer.start()

    def measure(self, stage_name: str) -> "_StageTimer":
        return _StageTimer(stage_name, self)

    def record(self, stage_name: str, elapsed_ms: float) -> None:
        self._stages[stage_name] = elapsed_ms

    def to_dict(self) -> dict[str, float]:
        """R: All timings as {stage}_ms keys plus total_ms."""
        result = {f"{name}_ms": ms for name, ms in self._stages.items()}
        result["total_ms"] = self._total_timer.elapsed_ms
        return result


class _StageTimer(Timer):
    """R: Internal timer that records to parent StageTimings."""

    def __init__(self, stage_name: str, parent: StageTimings):
        super().__init__()
        self._stage_name = stage_name
        self._parent = parent

    def __exit__(self, *args) -> None:
        super().__exit__(*args)
        self._parent.record(self._stage_name, self.elapsed_ms)
