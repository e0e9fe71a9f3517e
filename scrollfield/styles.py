"""Named styles for ``${color ...}`` markers.

Templates switch styles with ``${color <name>}``. The name is looked up
in a style table first; anything else must be a valid Rich style string
(``"bold red"``, ``"#ff8800 on #202020"``).

The table is built from:
1. Built-in defaults (``DEFAULT_STYLES``)
2. A JSON file given explicitly or via SCROLLFIELD_STYLES, of the form::

    {
      "warning": {"fg": "#f5f543", "bold": true},
      "alert": {"fg": "#ffffff", "bg": "#c01c28"}
    }

Table entries resolve to Rich style strings. prompt_toolkit hosts can
install the table with ``prompt_toolkit_style`` or convert resolved
strings with ``scrollfield.formatting``.
"""

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from prompt_toolkit.styles import Style as PTStyle
from rich.color import Color, ColorParseError
from rich.errors import StyleSyntaxError
from rich.style import Style

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

HEX_COLOR_PATTERN = re.compile(r'^#[0-9A-Fa-f]{6}$')

# Style of a marker that switches back to the renderer's base style
BASE_STYLE = ""

# prompt_toolkit class names are lowercase words, dots and dashes
_PT_CLASS_PATTERN = re.compile(r"^[a-z0-9._-]+$")


def is_hex_color(value: str) -> bool:
    """Check if a string is a valid hex color."""
    return bool(HEX_COLOR_PATTERN.match(value))


def _to_hex(color: str) -> str:
    """Hex value of a Rich color name, or the name itself if Rich cannot map it."""
    if is_hex_color(color):
        return color
    try:
        parsed = Color.parse(color)
    except ColorParseError:
        return color
    if parsed.is_default:
        return "default"
    return parsed.get_truecolor().hex


@dataclass
class StyleSpec:
    """Specification for a single named style.

    Colors are hex values (#RRGGBB) or Rich color names (e.g. "red").
    """
    fg: Optional[str] = None
    bg: Optional[str] = None
    bold: bool = False
    italic: bool = False
    dim: bool = False
    underline: bool = False

    def to_rich(self) -> str:
        """Convert to a Rich style string like "bold #ffffff on #333333"."""
        parts = []

        if self.bold:
            parts.append("bold")
        if self.italic:
            parts.append("italic")
        if self.dim:
            parts.append("dim")
        if self.underline:
            parts.append("underline")

        if self.fg:
            parts.append(self.fg)
        if self.bg:
            parts.append(f"on {self.bg}")

        return " ".join(parts)

    def to_prompt_toolkit(self) -> str:
        """Convert to a prompt_toolkit style string like "bg:#333333 #ffffff bold".

        Rich color names are translated to hex values.
        """
        parts = []

        if self.bg:
            parts.append(f"bg:{_to_hex(self.bg)}")
        if self.fg:
            parts.append(_to_hex(self.fg))

        if self.bold:
            parts.append("bold")
        if self.italic:
            parts.append("italic")
        if self.dim:
            parts.append("dim")
        if self.underline:
            parts.append("underline")

        return " ".join(parts)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StyleSpec":
        """Create from a dictionary, ignoring unknown keys."""
        return cls(
            fg=data.get("fg"),
            bg=data.get("bg"),
            bold=bool(data.get("bold", False)),
            italic=bool(data.get("italic", False)),
            dim=bool(data.get("dim", False)),
            underline=bool(data.get("underline", False)),
        )


DEFAULT_STYLES: Dict[str, StyleSpec] = {
    "primary": StyleSpec(fg="#5fafff"),
    "secondary": StyleSpec(fg="#87afaf"),
    "success": StyleSpec(fg="#23d18b", bold=True),
    "warning": StyleSpec(fg="#f5f543", bold=True),
    "error": StyleSpec(fg="#f14c4c", bold=True),
    "muted": StyleSpec(fg="#808080", dim=True),
    "highlight": StyleSpec(fg="#000000", bg="#ffaf00"),
}


def load_styles(path: Optional[Union[str, Path]] = None) -> Dict[str, StyleSpec]:
    """Build the style table.

    Args:
        path: JSON file with extra or overriding styles. Defaults to the
            SCROLLFIELD_STYLES environment variable.

    Returns:
        Built-in styles merged with the file's styles. A missing or
        malformed file is logged and ignored.
    """
    table = dict(DEFAULT_STYLES)
    if path is None:
        path = os.environ.get("SCROLLFIELD_STYLES") or None
    if path is None:
        return table

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load style table %s: %s", path, e)
        return table

    if not isinstance(data, dict):
        logger.warning("Style table must contain a dict: %s", path)
        return table

    for name, spec in data.items():
        if isinstance(spec, dict):
            table[name] = StyleSpec.from_dict(spec)
        elif isinstance(spec, str):
            table[name] = StyleSpec(fg=spec)
        else:
            logger.warning("Skipping style %r in %s: expected dict or color", name, path)
    return table


def prompt_toolkit_style(table: Optional[Dict[str, StyleSpec]] = None) -> PTStyle:
    """Build a prompt_toolkit Style with one ``scroll.<name>`` class per table entry.

    Hosts pass ``"class:scroll.<name>"`` as the base style of
    ``to_formatted_text``. Entries whose name is not a valid class name,
    or whose colors prompt_toolkit rejects, are logged and skipped.
    """
    if table is None:
        table = DEFAULT_STYLES
    rules = []
    for name, spec in table.items():
        class_name = f"scroll.{name.lower()}"
        if not _PT_CLASS_PATTERN.match(class_name):
            logger.warning("Style %r has no valid prompt_toolkit class name, skipped", name)
            continue
        style_str = spec.to_prompt_toolkit()
        try:
            PTStyle([(class_name, style_str)])
        except ValueError as e:
            logger.warning("Style %r is not valid for prompt_toolkit, skipped: %s", name, e)
            continue
        rules.append((class_name, style_str))
    return PTStyle(rules)


def resolve_style(name: str, table: Optional[Dict[str, StyleSpec]] = None) -> str:
    """Resolve a ``${color ...}`` argument to a Rich style string.

    Args:
        name: A style table name, a Rich style string, or empty for the
            base style.
        table: Style table; defaults to ``DEFAULT_STYLES``.

    Returns:
        A Rich style string (``BASE_STYLE`` for an empty name).

    Raises:
        ConfigurationError: If ``name`` is neither a table entry nor a
            valid Rich style.
    """
    name = name.strip()
    if not name:
        return BASE_STYLE
    if table is None:
        table = DEFAULT_STYLES
    spec = table.get(name)
    if spec is not None:
        return spec.to_rich()
    try:
        Style.parse(name)
    except StyleSyntaxError as e:
        raise ConfigurationError(f"invalid color {name!r}: {e}", name) from e
    return name
