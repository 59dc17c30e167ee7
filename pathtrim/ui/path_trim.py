from __future__ import annotations

import logging
import os
from typing import Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

ELLIPSIS = "..."


class WidthMeasurer(Protocol):
    def measure_width(self, text: str) -> float: ...


def split_path(path: str, sep: str = os.sep) -> Tuple[str, str]:
    """
    Split at the last separator into (directory, filename).
    With the platform separator, the platform's alternate separator counts too.
    A path without a separator is all filename.
    """
    path = path or ""
    idx = path.rfind(sep)
    if sep == os.sep and os.altsep:
        idx = max(idx, path.rfind(os.altsep))
    if idx < 0:
        return "", path
    return path[:idx], path[idx + 1:]


def _take(text: str, n: int, truncate_left: bool) -> str:
    if n <= 0:
        return ""
    return text[-n:] if truncate_left else text[:n]


def truncate_text(
    text: str,
    available_width: float,
    measurer: WidthMeasurer,
    prefix: str = ELLIPSIS,
    truncate_left: bool = True,
) -> str:
    """
    Longest `prefix + piece` of `text` fitting in `available_width`.
    truncate_left keeps the tail of the text (drops leading characters),
    otherwise the head is kept. Binary search over the piece length, so the
    number of measurements grows with log2(len(text)).

    The prefix width is subtracted once instead of measuring every
    concatenation; kerning between prefix and piece is ignored.
    If nothing fits, the prefix alone is returned (it may still overflow).
    """
    measure = measurer.measure_width

    if measure(prefix + text) <= available_width:
        return prefix + text

    if prefix:
        available_width -= measure(prefix)

    low = 0             # longest length known to fit
    high = len(text)    # shortest length known not to fit
    while low < high - 1:
        mid = low + (high - low) // 2
        if measure(_take(text, mid, truncate_left)) <= available_width:
            low = mid
        else:
            high = mid

    return prefix + _take(text, low, truncate_left)


def trim_path(
    path: Optional[str],
    available_width: float,
    measurer: WidthMeasurer,
    sep: str = os.sep,
    ellipsis: str = ELLIPSIS,
) -> str:
    """
    Fit a path into `available_width` pixels, preferring the filename:
      1. the whole path, if it fits
      2. "<ellipsis><tail of filename>" if even "<ellipsis><sep><filename>" is too wide
      3. "<head of directory><ellipsis><sep><filename>" otherwise
    """
    if not path:
        return ""
    measure = measurer.measure_width

    if measure(path) <= available_width:
        return path

    directory, filename = split_path(path, sep)
    filename_and_ellipsis = f"{ellipsis}{sep}{filename}"
    filename_w = measure(filename_and_ellipsis)

    if filename_w > available_width:
        logger.debug("trim %r @%.1f: filename only", path, available_width)
        return truncate_text(filename, available_width, measurer, prefix=ellipsis, truncate_left=True)

    logger.debug("trim %r @%.1f: directory head + filename", path, available_width)
    head = truncate_text(directory, available_width - filename_w, measurer, prefix="", truncate_left=False)
    return head + filename_and_ellipsis


class PathTrimmer:
    """ Binds a measurer and separator style so callers only pass path + width. """

    def __init__(self, measurer: WidthMeasurer, sep: str = os.sep, ellipsis: str = ELLIPSIS):
        self.measurer = measurer
        self.sep = sep
        self.ellipsis = ellipsis

    def trim(self, path: Optional[str], available_width: float) -> str:
        return trim_path(path, available_width, self.measurer, sep=self.sep, ellipsis=self.ellipsis)

    def split(self, path: str) -> Tuple[str, str]:
        return split_path(path, self.sep)
