"""Circular scroll window over marker-bearing text.

The window is chosen so it holds exactly ``width`` printable characters.
Markers are never dropped or duplicated: the ones before the window are
collapsed to its front, the ones inside keep their relative position,
and the rest are collapsed to its back. That keeps the style state at
the end of the slice identical to the style state at the end of the
full text.
"""

from dataclasses import dataclass

from .markers import MARKER, count_markers


@dataclass(frozen=True)
class SliceResult:
    """A composed slice and how its markers were partitioned.

    Attributes:
        text: Front markers, window content, trailing markers.
        start: Window start after skipping markers at the cursor.
        front_markers: Markers in the source strictly before ``start``.
        visible_markers: Markers copied as part of the window.
        trailing_markers: Markers in the source after the window.
    """
    text: str
    start: int
    front_markers: int
    visible_markers: int
    trailing_markers: int

    @property
    def total_markers(self) -> int:
        return self.front_markers + self.visible_markers + self.trailing_markers


def skip_markers(text: str, cursor: int) -> int:
    """Move ``cursor`` past any markers sitting exactly at it.

    A marker at the window start would otherwise be counted both as a
    front marker and as a window marker.
    """
    while cursor < len(text) and text[cursor] == MARKER:
        cursor += 1
    return cursor


def compose_slice(text: str, cursor: int, width: int) -> SliceResult:
    """Compose the visible slice of ``text`` starting at ``cursor``.

    Characters are copied from the (marker-skipped) cursor until
    ``width`` printable characters are collected. If the text ends
    first, the window is padded with spaces; markers met before the end
    stay in the window, ahead of the padding. Markers following the last
    printable character of a full window belong to the trailing set.

    Args:
        text: Full current text, line breaks already joined.
        cursor: Start offset into ``text``; must be ``<= len(text)``.
        width: Number of printable characters to show.

    Returns:
        The composed slice with its marker partition.
    """
    start = skip_markers(text, cursor)

    window = []
    printable = 0
    visible_markers = 0
    pos = start
    while printable < width and pos < len(text):
        char = text[pos]
        window.append(char)
        if char == MARKER:
            visible_markers += 1
        else:
            printable += 1
        pos += 1
    if printable < width:
        window.append(" " * (width - printable))

    total = count_markers(text)
    front_markers = count_markers(text, 0, start)
    trailing_markers = total - front_markers - visible_markers

    return SliceResult(
        text=MARKER * front_markers + "".join(window) + MARKER * trailing_markers,
        start=start,
        front_markers=front_markers,
        visible_markers=visible_markers,
        trailing_markers=trailing_markers,
    )


def advance_cursor(text: str, cursor: int, step: int) -> int:
    """Advance ``cursor`` by ``step``, wrapping to 0 at end of text."""
    cursor += step
    if cursor >= len(text):
        return 0
    return cursor
