from __future__ import annotations
from typing import List
import pygame

from pathtrim.settings import AppCfg
from pathtrim.ui.fonts import FontCache, make_font_key
from pathtrim.ui.text_measure import MeasurerRegistry
from pathtrim.ui.widgets.path_label import PathLabel

_MARGIN = 16
_ROW_GAP = 10


class PathListScene:
    """
    Stacks one PathLabel per configured path and keeps them fitted to the
    window width. Keys:
      C       toggle the width cache
      Up/Down grow/shrink the label column by 20px
    """
    def __init__(self, cfg: AppCfg, fonts: FontCache, registry: MeasurerRegistry):
        self.cfg = cfg
        self.fonts = fonts
        self.registry = registry
        self.font = cfg.font.key()
        self.status_font = make_font_key(cfg.font.family, max(10.0, cfg.font.size * 0.6))
        self.inset = 0
        self.labels: List[PathLabel] = []
        for p in cfg.paths:
            lbl = PathLabel(
                pygame.Rect(_MARGIN, 0, 0, 0),
                self.font,
                fonts,
                registry,
                sep=cfg.trim.separator,
                ellipsis=cfg.trim.ellipsis,
                color=cfg.font.text_rgb,
            )
            lbl.set_text(p)
            self.labels.append(lbl)

    # --- layout ---
    def layout(self, size: tuple[int, int]) -> None:
        w, _ = size
        col_w = max(0, w - 2 * _MARGIN - self.inset)
        y = _MARGIN
        for lbl in self.labels:
            h = lbl.preferred_height()
            lbl.set_rect(pygame.Rect(_MARGIN, y, col_w, h))
            y += h + _ROW_GAP

    # --- loop ---
    def handle_event(self, e: pygame.event.Event, size: tuple[int, int]) -> bool:
        if e.type == pygame.VIDEORESIZE:
            self.layout((e.w, e.h))
            return True
        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_c:
                self.registry.set_cache_enabled(not self.registry.is_cache_enabled())
                return True
            if e.key in (pygame.K_UP, pygame.K_DOWN):
                step = -20 if e.key == pygame.K_UP else 20
                self.inset = max(0, min(size[0] - 2 * _MARGIN, self.inset + step))
                self.layout(size)
                return True
        return False

    def status_line(self) -> str:
        s = self.registry.metrics.snapshot()
        cache = "on" if self.registry.is_cache_enabled() else "off"
        return (f"cache {cache}  hits {s.hits}  misses {s.misses}  "
                f"hit% {s.hit_percentage:.1f}  paths {s.strings_processed}")

    def draw(self, surface: pygame.Surface) -> None:
        surface.fill(self.cfg.window.bg_rgb)
        for lbl in self.labels:
            pygame.draw.rect(surface, (40, 44, 52), lbl.rect, 1)
            lbl.draw(surface)
        status = self.fonts.render(self.status_font, self.status_line(), (150, 152, 160))
        surface.blit(status, (_MARGIN, surface.get_height() - status.get_height() - _MARGIN // 2))
