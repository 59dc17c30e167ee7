from __future__ import annotations
import os
from typing import Optional, Tuple
import pygame

from pathtrim.ui.fonts import FontCache, FontKey
from pathtrim.ui.path_trim import ELLIPSIS, PathTrimmer
from pathtrim.ui.text_measure import MeasurerRegistry


class PathLabel:
    """
    Single-line label that shows a file path trimmed to its width.

      - text:         the full path, never modified by trimming
      - display_text: what is drawn (recomputed on set_text / resize)

    Each set_text() counts as one new string for the registry's metrics,
    however many measurements trimming it takes.
    """
    __slots__ = (
        "rect",
        "font",
        "_color",
        "fonts",
        "registry",
        "trimmer",
        "_text",
        "_display",
        "_surf",
    )

    def __init__(
        self,
        rect: pygame.Rect,
        font: FontKey,
        fonts: FontCache,
        registry: MeasurerRegistry,
        *,
        sep: str = os.sep,
        ellipsis: str = ELLIPSIS,
        color: Tuple[int, int, int] = (237, 237, 237),
    ):
        self.rect = pygame.Rect(rect)
        self.font = font
        self._color = color
        self.fonts = fonts
        self.registry = registry
        self.trimmer = PathTrimmer(registry.get(font), sep=sep, ellipsis=ellipsis)
        self._text: str = ""
        self._display: str = ""
        self._surf: Optional[pygame.Surface] = None

    # ---------- public ----------
    @property
    def text(self) -> str:
        return self._text

    @property
    def color(self) -> Tuple[int, int, int]:
        return self._color

    @color.setter
    def color(self, rgb: Tuple[int, int, int]) -> None:
        if tuple(rgb) != tuple(self._color):
            self._surf = None
        self._color = rgb

    @property
    def display_text(self) -> str:
        return self._display

    @property
    def filename(self) -> str:
        return self.trimmer.split(self._text)[1]

    @property
    def directory(self) -> str:
        return self.trimmer.split(self._text)[0]

    def set_text(self, path: Optional[str]) -> None:
        self._text = path or ""
        self._retrim()
        self.registry.metrics.report_new_string()

    def set_rect(self, rect: pygame.Rect) -> None:
        old_w = self.rect.width
        self.rect = pygame.Rect(rect)
        if self.rect.width != old_w:
            self._retrim()

    def set_width(self, width: int) -> None:
        """ Resize trigger: re-trim the stored path for the new width. """
        r = self.rect.copy()
        r.width = max(0, int(width))
        self.set_rect(r)

    def preferred_height(self) -> int:
        return self.fonts.line_height(self.font)

    def draw(self, surface: pygame.Surface) -> None:
        if not self._display:
            return
        if self._surf is None:
            self._surf = self.fonts.render(self.font, self._display, self.color)
        prev_clip = surface.get_clip()
        surface.set_clip(self.rect)
        surface.blit(self._surf, self.rect.topleft)
        surface.set_clip(prev_clip)

    # ---------- internals ----------
    def _retrim(self) -> None:
        # Nothing to lay out until there is both text and room for it.
        if not self._text or self.rect.width <= 0:
            new = ""
        else:
            new = self.trimmer.trim(self._text, self.rect.width)
        if new != self._display:
            self._display = new
            self._surf = None
