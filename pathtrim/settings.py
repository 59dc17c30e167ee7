from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional
import logging
import os

import yaml

from pathtrim.ui.fonts import FontKey, make_font_key

logger = logging.getLogger(__name__)

# Resolved from the package location so the viewer can start from any cwd
DEFAULTS_PATH = str(Path(__file__).resolve().parents[1] / "viewer" / "config" / "defaults.yaml")


@dataclass
class WindowCfg:
    width: int = 720
    height: int = 360
    title: str = "Path Trimming"
    bg_rgb: tuple[int, int, int] = (18, 20, 24)


@dataclass
class FontCfg:
    family: Optional[str] = None        # None = pygame default font; a .ttf path or a system font name
    size: float = 22.0
    weight: int = 400                   # >= 600 renders bold
    style: str = "normal"               # normal | italic | oblique
    stretch: str = "normal"
    text_rgb: tuple[int, int, int] = (237, 237, 237)

    def key(self) -> FontKey:
        return make_font_key(self.family, self.size, weight=self.weight, style=self.style, stretch=self.stretch)


@dataclass
class TrimCfg:
    ellipsis: str = "..."
    separator: str = os.sep
    cache_enabled: bool = True


@dataclass
class MetricsCfg:
    log_interval_s: float = 5.0         # 0 disables periodic metrics logging


@dataclass
class AppCfg:
    fps: int = 60
    log_level: str = "INFO"
    window: WindowCfg = field(default_factory=WindowCfg)
    font: FontCfg = field(default_factory=FontCfg)
    trim: TrimCfg = field(default_factory=TrimCfg)
    metrics: MetricsCfg = field(default_factory=MetricsCfg)
    paths: List[str] = field(default_factory=list)


def _get(d: dict, path: str, default: Any):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _read_yaml(path: str) -> dict:
    p = Path(path)
    if not p.exists():
        logger.warning("Config '%s' not found, using defaults", path)
        return {}
    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: top level must be a mapping")
    return data


def load_settings(path: str = DEFAULTS_PATH) -> AppCfg:
    data = _read_yaml(path)
    d = AppCfg()

    family = _get(data, "font.family", d.font.family)
    paths = _get(data, "paths", []) or []
    if not isinstance(paths, list):
        raise ValueError(f"{path}: 'paths' must be a list")

    cfg = AppCfg(
        fps=int(_get(data, "fps", d.fps)),
        log_level=str(_get(data, "logging.level", d.log_level)).upper(),
        window=WindowCfg(
            width=int(_get(data, "window.width", d.window.width)),
            height=int(_get(data, "window.height", d.window.height)),
            title=str(_get(data, "window.title", d.window.title)),
            bg_rgb=tuple(_get(data, "window.bg_rgb", d.window.bg_rgb)),
        ),
        font=FontCfg(
            family=str(family) if family else None,
            size=float(_get(data, "font.size", d.font.size)),
            weight=int(_get(data, "font.weight", d.font.weight)),
            style=str(_get(data, "font.style", d.font.style)),
            stretch=str(_get(data, "font.stretch", d.font.stretch)),
            text_rgb=tuple(_get(data, "font.text_rgb", d.font.text_rgb)),
        ),
        trim=TrimCfg(
            ellipsis=str(_get(data, "trim.ellipsis", d.trim.ellipsis)),
            separator=str(_get(data, "trim.separator", d.trim.separator) or os.sep),
            cache_enabled=bool(_get(data, "trim.cache_enabled", d.trim.cache_enabled)),
        ),
        metrics=MetricsCfg(
            log_interval_s=float(_get(data, "metrics.log_interval_s", d.metrics.log_interval_s)),
        ),
        paths=[str(p) for p in paths],
    )
    # Fail early on bad style/stretch names rather than at first draw.
    cfg.font.key()
    return cfg
