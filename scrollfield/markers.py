"""Marker and separator helpers for scrolling text.

A marker is a single reserved character embedded in generated text to
signal a style change. It has no printable width: the scroll window
counts everything except markers toward its visible width.
"""

from typing import Iterator, Optional, Tuple

# Reserved zero-width style-change sentinel
MARKER = "\x01"

# Line breaks are shown as this separator so multi-line content scrolls
# as a single line.
LINE_SEPARATOR = "|"


def count_markers(text: str, start: int = 0, end: Optional[int] = None) -> int:
    """Count markers in ``text[start:end]``."""
    if end is None:
        end = len(text)
    return text.count(MARKER, start, end)


def printable_length(text: str) -> int:
    """Length of the text minus its markers."""
    return len(text) - text.count(MARKER)


def strip_markers(text: str) -> str:
    """Remove every marker, for hosts that do not render styles."""
    return text.replace(MARKER, "")


def join_lines(text: str, separator: str = LINE_SEPARATOR) -> str:
    """Replace each line break with ``separator``.

    Args:
        text: Text as produced by a text source.
        separator: Replacement for every ``\\n``.

    Returns:
        The text with all line breaks replaced.
    """
    return text.replace("\n", separator)


def iter_runs(text: str) -> Iterator[Tuple[int, str]]:
    """Split text into runs separated by markers.

    Yields ``(marker_index, run)`` pairs where ``marker_index`` is the
    number of markers seen before the run (0 for text before the first
    marker). Empty runs are skipped.
    """
    marker_index = 0
    for index, run in enumerate(text.split(MARKER)):
        if index:
            marker_index += 1
        if run:
            yield marker_index, run
