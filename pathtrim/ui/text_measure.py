from __future__ import annotations

import logging
from typing import Dict, List, Optional, Protocol, Tuple

from pathtrim.metrics import MetricsCollector
from pathtrim.ui.fonts import FontKey

logger = logging.getLogger(__name__)

Size = Tuple[float, float]


class TextOracle(Protocol):
    """Anything that can measure rendered text for a font (FontCache does)."""
    def measure(self, k: FontKey, text: str) -> Size: ...


class CacheControl:
    """
    Switch for width caching. Disabling it leaves existing entries in place;
    they are simply not read or written until it is enabled again.
    """
    def __init__(self, enabled: bool = True) -> None:
        self._enabled = bool(enabled)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @enabled.setter
    def enabled(self, on: bool) -> None:
        self._enabled = bool(on)

    def set_cache_enabled(self, on: bool) -> None:
        self._enabled = bool(on)

    def is_cache_enabled(self) -> bool:
        return self._enabled


class TextMeasurer:
    """
    Measures text under one font, with two independent caches:
      - width cache: honours CacheControl, reports a hit/miss per call
      - size cache:  always on, reports nothing
    Cache keys are the exact text (case-sensitive, no normalization).
    """

    def __init__(
        self,
        font: FontKey,
        oracle: TextOracle,
        metrics: MetricsCollector,
        cache_control: CacheControl,
    ) -> None:
        self._font = font
        self._oracle = oracle
        self._metrics = metrics
        self._control = cache_control
        self._widths: Dict[str, float] = {}
        self._sizes: Dict[str, Size] = {}

    @property
    def font(self) -> FontKey:
        return self._font

    @property
    def cached_widths(self) -> int:
        return len(self._widths)

    @property
    def cached_sizes(self) -> int:
        return len(self._sizes)

    def measure_width(self, text: str) -> float:
        if not self._control.enabled:
            width = self._compute(text)[0]
            self._metrics.report_measurement(False)
            return width

        width = self._widths.get(text)
        is_hit = width is not None
        if not is_hit:
            # Racing callers may both compute; setdefault keeps the first value.
            width = self._widths.setdefault(text, self._compute(text)[0])
        self._metrics.report_measurement(is_hit)
        return width

    def measure_size(self, text: str) -> Size:
        size = self._sizes.get(text)
        if size is None:
            size = self._sizes.setdefault(text, self._compute(text))
        return size

    def clear(self) -> None:
        self._widths.clear()
        self._sizes.clear()

    def _compute(self, text: str) -> Size:
        w, h = self._oracle.measure(self._font, text)
        return float(w), float(h)

    def __repr__(self) -> str:
        return f"TextMeasurer({self._font.signature()!r}, widths={len(self._widths)}, sizes={len(self._sizes)})"


class MeasurerRegistry:
    """
    One TextMeasurer per distinct font configuration, created on first use and
    kept for the registry's lifetime. Owns the cache switch and the metrics
    sink shared by every measurer it hands out.
    """

    def __init__(
        self,
        oracle: TextOracle,
        metrics: Optional[MetricsCollector] = None,
        cache_control: Optional[CacheControl] = None,
    ) -> None:
        self.oracle = oracle
        self.metrics = metrics if metrics is not None else MetricsCollector()
        self.cache_control = cache_control if cache_control is not None else CacheControl()
        self._measurers: Dict[str, TextMeasurer] = {}

    def get(self, font: FontKey) -> TextMeasurer:
        sig = font.signature()
        m = self._measurers.get(sig)
        if m is None:
            m = self._measurers.setdefault(
                sig, TextMeasurer(font, self.oracle, self.metrics, self.cache_control)
            )
            logger.debug("measurer for %s ready (%d total)", sig, len(self._measurers))
        return m

    def signatures(self) -> List[str]:
        return list(self._measurers)

    def __len__(self) -> int:
        return len(self._measurers)

    # --- cache switch passthrough ---
    def set_cache_enabled(self, on: bool) -> None:
        self.cache_control.set_cache_enabled(on)

    def is_cache_enabled(self) -> bool:
        return self.cache_control.is_cache_enabled()

    def reset(self) -> None:
        """ Forget every measurer (and with them, their caches). """
        self._measurers.clear()
