from __future__ import annotations
from dataclasses import dataclass
from collections import OrderedDict
from enum import Enum
from typing import Tuple, Optional
import pygame

_FONT_FILE_SUFFIXES = (".ttf", ".otf", ".ttc", ".fon")
BOLD_WEIGHT = 600


class FontStyle(str, Enum):
    NORMAL  = "normal"
    ITALIC  = "italic"
    OBLIQUE = "oblique"


class FontStretch(str, Enum):
    ULTRA_CONDENSED = "ultra-condensed"
    EXTRA_CONDENSED = "extra-condensed"
    CONDENSED       = "condensed"
    SEMI_CONDENSED  = "semi-condensed"
    NORMAL          = "normal"
    SEMI_EXPANDED   = "semi-expanded"
    EXPANDED        = "expanded"
    EXTRA_EXPANDED  = "extra-expanded"
    ULTRA_EXPANDED  = "ultra-expanded"


@dataclass(frozen=True)
class FontKey:
    family: Optional[str]
    size: float
    weight: int = 400
    style: FontStyle = FontStyle.NORMAL
    stretch: FontStretch = FontStretch.NORMAL

    def __post_init__(self) -> None:
        # Equal keys must format to equal signatures: 12 and 12.0, "italic" and FontStyle.ITALIC.
        object.__setattr__(self, "family", self.family or None)
        object.__setattr__(self, "size", float(self.size))
        object.__setattr__(self, "weight", int(self.weight))
        object.__setattr__(self, "style", FontStyle(self.style))
        object.__setattr__(self, "stretch", FontStretch(self.stretch))

    def signature(self) -> str:
        """ Stable string identity used to partition measurement caches. """
        family = self.family or ""
        return f"{self.size}-{family}-{self.weight}-{self.style.value}-{self.stretch.value}"

    @property
    def pixel_size(self) -> int:
        return max(1, int(round(self.size)))

    @property
    def bold(self) -> bool:
        return self.weight >= BOLD_WEIGHT

    @property
    def italic(self) -> bool:
        return self.style in (FontStyle.ITALIC, FontStyle.OBLIQUE)


def make_font_key(
    family: Optional[str],
    size: float,
    *,
    weight: int = 400,
    style: str | FontStyle = FontStyle.NORMAL,
    stretch: str | FontStretch = FontStretch.NORMAL,
) -> FontKey:
    """
    Build a FontKey from loose values (e.g. strings read from YAML).
    Raises ValueError for unknown style/stretch names.
    """
    return FontKey(family, size, weight, style, stretch)


class FontCache:
    """
    Tiny LRU cache for pygame.font.Font objects keyed by FontKey.
    It is also the measurement oracle handed to TextMeasurer:
      - w,h  = fonts.measure(key, "Hello")
      - surf = fonts.render(key, "Hello", (255,255,255))
    Stretch has no pygame equivalent; it only partitions the caches.
    """

    def __init__(self, max_entries: int = 64) -> None:
        self._cache: "OrderedDict[FontKey, pygame.font.Font]" = OrderedDict()
        self._max = max(1, int(max_entries))

    # ---------- Public: acquire fonts ----------
    def get(self, k: FontKey) -> pygame.font.Font:
        """Get a pygame.font.Font for immediate use (cached)."""
        return self._get_by_key(k)

    # ---------- Public: draw/measure via key ----------
    def measure(self, k: FontKey, text: str) -> Tuple[float, float]:
        """Return (width, height) of text using the cached font."""
        w, h = self._get_by_key(k).size(text or "")
        return float(w), float(h)

    def render(
        self,
        k: FontKey,
        text: str,
        color: Tuple[int, int, int],
        aa: bool = True,
    ) -> pygame.Surface:
        """Render text to a Surface using a cached font."""
        font = self._get_by_key(k)
        return font.render(text or "", aa, color)

    def ascent(self, k: FontKey) -> int:
        return self._get_by_key(k).get_ascent()

    def descent(self, k: FontKey) -> int:
        return self._get_by_key(k).get_descent()

    def line_height(self, k: FontKey) -> int:
        return self._get_by_key(k).get_linesize()

    # ---------- Cache management ----------
    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()

    def set_max_entries(self, n: int) -> None:
        self._max = max(1, int(n))
        self._shrink()

    # ---------- Internals ----------
    def _get_by_key(self, k: FontKey) -> pygame.font.Font:
        f = self._cache.get(k)
        if f is not None:
            # touch for LRU
            self._cache.move_to_end(k)
            return f

        f = self._load(k)
        if k.bold:
            f.set_bold(True)
        if k.italic:
            f.set_italic(True)

        # Insert and enforce LRU size
        self._cache[k] = f
        self._shrink()
        return f

    def _load(self, k: FontKey) -> pygame.font.Font:
        if not pygame.font.get_init():
            pygame.font.init()
        family = k.family
        if family is None:
            return pygame.font.Font(None, k.pixel_size)
        if family.lower().endswith(_FONT_FILE_SUFFIXES):
            return pygame.font.Font(family, k.pixel_size)
        return pygame.font.SysFont(family, k.pixel_size)

    def _shrink(self) -> None:
        while len(self._cache) > self._max:
            self._cache.popitem(last=False)
