from __future__ import annotations

import logging
import pygame

from pathtrim.settings import AppCfg
from pathtrim.ui.fonts import FontCache
from pathtrim.ui.text_measure import MeasurerRegistry

from viewer.scenes.path_list import PathListScene

logger = logging.getLogger(__name__)


class PathViewerApp:
    """
    Minimal window shell around PathListScene. Owns the measurement services
    (font cache, measurer registry, metrics) and the resize handling; the scene
    re-trims its labels whenever the window size changes.
    """

    def __init__(self, cfg: AppCfg):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )

        self.fonts = FontCache()
        self.registry = MeasurerRegistry(self.fonts)
        self.registry.set_cache_enabled(cfg.trim.cache_enabled)

        self.clock = pygame.time.Clock()
        self.running = True
        self._since_log = 0.0

        self.scene = PathListScene(cfg, self.fonts, self.registry)
        self.scene.layout(self.screen.get_size())

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        while self.running:
            dt = self.clock.tick(self.cfg.fps) / 1000.0
            self.step(dt, pygame.event.get())
            pygame.display.flip()

        self.registry.metrics.log_summary()
        pygame.quit()

    def step(self, dt: float, events) -> None:
        for e in events:
            if e.type == pygame.QUIT:
                self.running = False
                break

            # Resize the display first, then let the scene re-layout
            if e.type == pygame.VIDEORESIZE:
                self._resize_to(e.w, e.h)

            if self.scene.handle_event(e, self.screen.get_size()):
                continue

            if e.type == pygame.KEYDOWN:
                if e.key == pygame.K_ESCAPE:
                    self.running = False
                    continue
                if (e.key == pygame.K_q) and (pygame.key.get_mods() & pygame.KMOD_CTRL):
                    self.running = False
                    continue

        self._tick_metrics(dt)
        self.scene.draw(self.screen)

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface."""
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)

    def _tick_metrics(self, dt: float) -> None:
        every = self.cfg.metrics.log_interval_s
        if every <= 0:
            return
        self._since_log += dt
        if self._since_log < every:
            return
        self._since_log = 0.0
        period = self.registry.metrics.take_interval()
        if period.queries:
            logger.info("last %.1fs: %d queries (%d hits, %d misses)",
                        every, period.queries, period.hits, period.misses)
