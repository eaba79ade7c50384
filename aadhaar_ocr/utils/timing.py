"""
Per-stage timing for the extraction pipeline.

`timed_operation` times one stage (recognition, field extraction) and can
feed the result into a `Timer`, which keeps running statistics per stage
across every card a processor handles.
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, Optional

from rich.table import Table


@dataclass
class TimingResult:
    """Outcome of one timed stage."""
    name: str
    duration_sec: float = 0.0
    success: bool = True
    error: Optional[str] = None

    def __str__(self) -> str:
        text = f"{self.name}: {format_duration(self.duration_sec)}"
        if not self.success:
            text += f" (failed: {self.error})"
        return text


@dataclass
class StageStats:
    """Running statistics for one stage name."""
    count: int = 0
    total_sec: float = 0.0
    fastest_sec: float = 0.0
    slowest_sec: float = 0.0
    failures: int = 0

    def add(self, duration_sec: float, success: bool = True) -> None:
        if self.count == 0:
            self.fastest_sec = self.slowest_sec = duration_sec
        else:
            self.fastest_sec = min(self.fastest_sec, duration_sec)
            self.slowest_sec = max(self.slowest_sec, duration_sec)
        self.count += 1
        self.total_sec += duration_sec
        if not success:
            self.failures += 1

    @property
    def average_sec(self) -> float:
        return self.total_sec / self.count if self.count else 0.0


class Timer:
    """
    Collects stage durations.

    Usage:
        timer = Timer()
        with timer.measure("image"):
            processor.run(path)
        console.print(timer.as_table())
    """

    def __init__(self):
        self._stages: Dict[str, StageStats] = {}
        self._created = time.perf_counter()

    def record(self, name: str, duration_sec: float, success: bool = True) -> None:
        self._stages.setdefault(name, StageStats()).add(duration_sec, success)

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        start = time.perf_counter()
        success = True
        try:
            yield
        except Exception:
            success = False
            raise
        finally:
            self.record(name, time.perf_counter() - start, success)

    def stats(self, name: str) -> StageStats:
        """Statistics for a stage (all zero if it never ran)."""
        return self._stages.get(name, StageStats())

    @property
    def stage_names(self) -> list:
        return list(self._stages)

    @property
    def elapsed(self) -> float:
        """Seconds since the timer was created."""
        return time.perf_counter() - self._created

    def summary(self) -> str:
        lines = ["Timing Summary:"]
        for name, stats in self._stages.items():
            line = f"  {name}: {format_duration(stats.total_sec)}"
            if stats.count > 1:
                line += f" total, {format_duration(stats.average_sec)} avg ({stats.count}x)"
            if stats.failures:
                line += f", {stats.failures} failed"
            lines.append(line)
        lines.append(f"  Total elapsed: {format_duration(self.elapsed)}")
        return "\n".join(lines)

    def as_table(self, title: str = "Timings") -> Table:
        table = Table(title=title)
        table.add_column("Stage", style="bold")
        for column in ("Runs", "Total", "Average", "Fastest", "Slowest"):
            table.add_column(column, justify="right")

        for name, stats in self._stages.items():
            table.add_row(
                name,
                str(stats.count),
                format_duration(stats.total_sec),
                format_duration(stats.average_sec),
                format_duration(stats.fastest_sec),
                format_duration(stats.slowest_sec),
            )
        return table


@contextmanager
def timed_operation(
    name: str,
    logger: Optional[logging.Logger] = None,
    log_level: int = logging.DEBUG,
    timer: Optional[Timer] = None,
) -> Iterator[TimingResult]:
    """
    Time one pipeline stage.

    The yielded TimingResult is filled in when the block exits, and the
    duration is added to `timer` when one is given. Exceptions propagate.
    """
    result = TimingResult(name=name)
    start = time.perf_counter()
    try:
        yield result
    except Exception as e:
        result.success = False
        result.error = str(e)
        raise
    finally:
        result.duration_sec = time.perf_counter() - start
        if timer is not None:
            timer.record(name, result.duration_sec, result.success)
        if logger:
            logger.log(log_level, str(result))


def format_duration(seconds: float) -> str:
    if seconds < 1:
        return f"{seconds * 1000:.1f}ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    return f"{int(seconds // 60)}m {seconds % 60:.1f}s"
