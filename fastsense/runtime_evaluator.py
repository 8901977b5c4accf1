"""Transparent runtime measurement of named, possibly nested tasks."""

from __future__ import annotations

import copy
import math
import threading
import time
from dataclasses import dataclass, field
from typing import ClassVar, List, Optional

from fastsense.filter import SlidingWindowFilter

_ULL_MAX = (1 << 64) - 1
_FIELDS = ("task", "count", "last", "min", "max", "avg", "run_avg")
_HIST_BUCKETS = 10
_HIST_BUCKET_SIZE = 10


def _now_us_ns() -> int:
    return time.perf_counter_ns()


@dataclass
class EvaluationFormular:
    """Measurement variables of one task; times are in microseconds."""

    name: str
    active: bool = False
    accumulate: int = 0
    count: int = 0
    last: int = 0
    sum: int = 0
    min: int = _ULL_MAX
    max: int = 0
    filter: SlidingWindowFilter = field(default_factory=lambda: SlidingWindowFilter(100))


class RuntimeEvaluationError(Exception):
    """Raised when start and stop are not called in the right order."""

    def __init__(self) -> None:
        super().__init__(
            "Runtime evaluation exception:\nStart was called for an already started "
            "measurement or stop was called before calling start!"
        )


class RuntimeEvaluator:
    """Measures several named tasks at once, excluding its own overhead."""

    _instance: ClassVar[Optional[RuntimeEvaluator]] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self) -> None:
        self._forms: List[EvaluationFormular] = []
        self._histogram = [0] * _HIST_BUCKETS
        self._start = _now_us_ns()

    @classmethod
    def get_instance(cls) -> RuntimeEvaluator:
        """Return the shared evaluator, creating it on first use."""
        with cls._instance_lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    def _pause(self) -> None:
        duration = (_now_us_ns() - self._start) // 1000
        for form in self._forms:
            if form.active:
                form.accumulate += duration

    def _resume(self) -> None:
        self._start = _now_us_ns()

    def _find(self, task_name: str) -> Optional[EvaluationFormular]:
        return next((f for f in self._forms if f.name == task_name), None)

    def start(self, task_name: str) -> None:
        """Start measuring task_name; raise if it is already being measured."""
        self._pause()
        form = self._find(task_name)
        if form is None:
            form = EvaluationFormular(task_name)
            self._forms.append(form)
        elif form.active:
            raise RuntimeEvaluationError()
        form.active = True
        form.accumulate = 0
        self._resume()

    def stop(self, task_name: str) -> None:
        """Stop measuring task_name and record the result; raise if it was not started."""
        self._pause()
        form = self._find(task_name)
        if form is None or not form.active:
            raise RuntimeEvaluationError()

        elapsed = form.accumulate
        form.active = False
        form.count += 1
        form.last = elapsed
        form.sum += elapsed
        form.filter.update(float(elapsed))
        if elapsed < form.min:
            form.min = elapsed
        if elapsed > form.max and form.count != 1:  # the first run is ignored
            form.max = elapsed

        if task_name == "total":
            time_ms = elapsed / 1000.0
            bucket = min(int(time_ms / _HIST_BUCKET_SIZE), _HIST_BUCKETS - 1)
            self._histogram[bucket] += 1

        self._resume()

    def clear(self) -> None:
        """Forget all measured tasks."""
        self._forms.clear()

    def forms(self) -> List[EvaluationFormular]:
        """Return copies of the measurement variables of every task."""
        return copy.deepcopy(self._forms)

    def to_string(self) -> str:
        """Return a table of all finished measurements in milliseconds."""
        self._pause()

        width = max([len(f.name) for f in self._forms] + [len(f) for f in _FIELDS])
        last = len(_FIELDS) - 1
        parts = ["\n"]
        parts.extend(
            name.rjust(width) + ("\n" if i == last else " | ") for i, name in enumerate(_FIELDS)
        )
        parts.extend("-" * width + ("-\n" if i == last else "-+-") for i in range(len(_FIELDS)))

        for form in self._forms:
            if form.active:
                continue
            avg = form.sum // form.count
            run_avg = int(form.filter.mean)
            values = (form.last, form.min, form.max, avg, run_avg)
            parts.append(f"{form.name:>{width}} | {form.count:>{width}} | ")
            parts.append(" | ".join(f"{v // 1000:>{width}}" for v in values) + "\n")

        total = self._find("total")
        if total is not None:
            line_length = len(_FIELDS) * (width + 2) + (len(_FIELDS) - 1) - len("10-20: ")
            for i, hits in enumerate(self._histogram):
                upper = f"{(i + 1) * _HIST_BUCKET_SIZE:>2}" if i < _HIST_BUCKETS - 1 else "  "
                bars = math.ceil(hits * line_length / total.count) if total.count else 0
                parts.append(f"{i * _HIST_BUCKET_SIZE:>2}-{upper}: {'=' * bars}\n")

        self._resume()
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_string()