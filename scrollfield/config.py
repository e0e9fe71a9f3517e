"""Scroll field configuration.

Two concerns live here:

1. ``ScrollSettings`` - process-wide knobs read from the environment
   (buffer capacity, line separator, refresh interval).
2. ``parse_scroll_arg`` - parsing of the per-field argument
   ``"<width> [<step>] <text>"``.

Environment Variables:
    SCROLLFIELD_MAX_TEXT: Evaluation buffer size and default output capacity (default: 16384)
    SCROLLFIELD_LINE_SEPARATOR: Replacement for line breaks (default: '|')
    SCROLLFIELD_INTERVAL: Refresh interval in seconds for the CLI (default: 1.0)
    SCROLLFIELD_STYLES: Path to a JSON style table (default: unset)
"""

import logging
import os
import re
from dataclasses import dataclass, field
from typing import Optional

from .errors import ConfigurationError, USAGE
from .markers import LINE_SEPARATOR

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT = 16384

# A whitespace-delimited base-10 integer followed by its trailing whitespace
_INT_TOKEN = re.compile(r"(\d+)(?:\s+|$)")


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %d", name, value, default)
        return default


def _env_float(name: str, default: float) -> float:
    value = os.environ.get(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid %s=%r, using %s", name, value, default)
        return default


@dataclass
class ScrollSettings:
    """Process-wide settings shared by scroll fields."""
    max_text: int = field(default_factory=lambda: _env_int("SCROLLFIELD_MAX_TEXT", DEFAULT_MAX_TEXT))
    line_separator: str = field(default_factory=lambda: os.environ.get("SCROLLFIELD_LINE_SEPARATOR") or LINE_SEPARATOR)
    interval: float = field(default_factory=lambda: _env_float("SCROLLFIELD_INTERVAL", 1.0))
    styles_path: Optional[str] = field(default_factory=lambda: os.environ.get("SCROLLFIELD_STYLES") or None)


@dataclass(frozen=True)
class ScrollArgs:
    """Parsed ``"<width> [<step>] <text>"`` argument."""
    width: int
    step: int
    text: str


def parse_scroll_arg(raw_argument: Optional[str]) -> ScrollArgs:
    """Parse a scroll field argument.

    The first token is the visible width. A second integer token is the
    step, but only when literal text follows it; a lone trailing number
    is the text itself and the step stays 1. Everything after the
    consumed tokens (and their trailing whitespace) is taken verbatim.

    Args:
        raw_argument: The free-form argument, e.g. ``"20 2 ${time} hello"``.

    Returns:
        The parsed width, step and literal text.

    Raises:
        ConfigurationError: If no width can be parsed, or the width is 0.
    """
    if not raw_argument:
        raise ConfigurationError(USAGE, raw_argument)

    pos = len(raw_argument) - len(raw_argument.lstrip())
    match = _INT_TOKEN.match(raw_argument, pos)
    if not match:
        raise ConfigurationError(USAGE, raw_argument)
    width = int(match.group(1))
    if width < 1:
        raise ConfigurationError("scroll length must be at least 1", raw_argument)
    pos = match.end()

    step = 1
    match = _INT_TOKEN.match(raw_argument, pos)
    if match and match.end() < len(raw_argument):
        step = int(match.group(1))
        pos = match.end()

    return ScrollArgs(width=width, step=step, text=raw_argument[pos:])
