from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, asdict
from typing import Dict, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntervalCounts:
    """Counts accumulated since the previous take_interval() call."""
    hits: int = 0
    misses: int = 0
    queries: int = 0


@dataclass(frozen=True)
class MetricsSnapshot:
    hits: int
    misses: int
    strings_processed: int

    @property
    def queries(self) -> int:
        return self.hits + self.misses

    @property
    def hit_percentage(self) -> float:
        total = self.queries
        if total == 0:
            return 0.0
        return self.hits / total * 100.0

    @property
    def calls_per_string(self) -> float:
        # Historical formula: hits over misses, not queries over strings.
        if self.misses == 0:
            return 0.0
        return self.hits / self.misses

    def as_dict(self) -> Dict[str, float]:
        """ Counter names as exposed to external monitoring. """
        return {
            "total-cache-hits": self.hits,
            "total-cache-misses": self.misses,
            "total-cache-queries": self.queries,
            "total-paths-processed": self.strings_processed,
            "measurement-calls-per-text-string": self.calls_per_string,
            "percentage-cache-hits": self.hit_percentage,
        }


class MetricsCollector:
    """
    Running cache counters for width measurements.
      - report_measurement(is_hit) once per width query (hit or miss)
      - report_new_string() once per full path assigned to a label
    Derived values (hit %, calls per string) are computed on read.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._strings = 0
        self._interval = {"hits": 0, "misses": 0}

    # ---------- reporting ----------
    def report_measurement(self, is_hit: bool) -> None:
        with self._lock:
            if is_hit:
                self._hits += 1
                self._interval["hits"] += 1
            else:
                self._misses += 1
                self._interval["misses"] += 1

    def report_new_string(self) -> None:
        with self._lock:
            self._strings += 1

    # ---------- totals ----------
    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    @property
    def queries(self) -> int:
        return self.snapshot().queries

    @property
    def strings_processed(self) -> int:
        return self._strings

    @property
    def hit_percentage(self) -> float:
        return self.snapshot().hit_percentage

    @property
    def calls_per_string(self) -> float:
        return self.snapshot().calls_per_string

    def snapshot(self) -> MetricsSnapshot:
        with self._lock:
            return MetricsSnapshot(self._hits, self._misses, self._strings)

    def take_interval(self) -> IntervalCounts:
        """ Return the per-period counts and start a new period. """
        with self._lock:
            h, m = self._interval["hits"], self._interval["misses"]
            self._interval = {"hits": 0, "misses": 0}
        return IntervalCounts(hits=h, misses=m, queries=h + m)

    def reset(self) -> None:
        with self._lock:
            self._hits = self._misses = self._strings = 0
            self._interval = {"hits": 0, "misses": 0}

    def log_summary(self, log: Optional[logging.Logger] = None) -> MetricsSnapshot:
        snap = self.snapshot()
        (log or logger).info(
            "measure cache: hits=%d misses=%d queries=%d hit%%=%.1f paths=%d calls/string=%.2f",
            snap.hits, snap.misses, snap.queries, snap.hit_percentage,
            snap.strings_processed, snap.calls_per_string,
        )
        return snap

    def __repr__(self) -> str:
        return f"MetricsCollector({asdict(self.snapshot())})"
