"""scrollfield - marquee-style scrolling text fields for live displays.

Usage:
    from scrollfield import ScrollField, to_rich_text

    field = ScrollField.configure("16 hello from a very long status line", "")
    text = to_rich_text(field.render(), field.styles)
"""

from scrollfield.config import ScrollArgs, ScrollSettings, parse_scroll_arg
from scrollfield.errors import ConfigurationError, ScrollFieldError
from scrollfield.field import ScrollField
from scrollfield.formatting import (
    rich_style_to_prompt_toolkit,
    to_formatted_text,
    to_rich_text,
)
from scrollfield.markers import LINE_SEPARATOR, MARKER, strip_markers
from scrollfield.styles import StyleSpec, load_styles, prompt_toolkit_style, resolve_style
from scrollfield.text_source import (
    CallableTextSource,
    LiteralTextSource,
    TemplateTextSource,
    TextSource,
)
from scrollfield.window import SliceResult, advance_cursor, compose_slice

__all__ = [
    # Field
    "ScrollField",
    # Configuration
    "ScrollArgs",
    "ScrollSettings",
    "parse_scroll_arg",
    # Errors
    "ConfigurationError",
    "ScrollFieldError",
    # Markers
    "MARKER",
    "LINE_SEPARATOR",
    "strip_markers",
    # Window
    "SliceResult",
    "compose_slice",
    "advance_cursor",
    # Text sources
    "TextSource",
    "LiteralTextSource",
    "CallableTextSource",
    "TemplateTextSource",
    # Styles and formatting
    "StyleSpec",
    "load_styles",
    "prompt_toolkit_style",
    "resolve_style",
    "to_rich_text",
    "to_formatted_text",
    "rich_style_to_prompt_toolkit",
]
