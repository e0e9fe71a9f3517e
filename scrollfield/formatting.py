"""Convert rendered slices into styled text for Rich or prompt_toolkit.

A rendered slice carries markers; ``styles`` holds, in order, the style
each marker switches to. An empty style means the renderer's base
style. Surplus styles (a slice cut by its output capacity) are ignored,
and a marker without a style falls back to the base style.
"""

from typing import List, Sequence, Tuple

from prompt_toolkit.formatted_text import FormattedText
from rich.style import Style
from rich.text import Text

from .markers import iter_runs


def _style_at(styles: Sequence[str], marker_index: int) -> str:
    # marker_index counts markers seen so far; marker k switches to styles[k - 1]
    if marker_index == 0 or marker_index > len(styles):
        return ""
    return styles[marker_index - 1]


def to_rich_text(rendered: str, styles: Sequence[str], base_style: str = "") -> Text:
    """Build a Rich ``Text`` from a rendered slice.

    Args:
        rendered: Slice returned by ``ScrollField.render``.
        styles: Style per marker, from ``ScrollField.styles``.
        base_style: Style for text before the first marker and for
            markers switching to the base style.

    Returns:
        Text without markers, styled per run.
    """
    text = Text(style=base_style)
    for marker_index, run in iter_runs(rendered):
        style = _style_at(styles, marker_index)
        if style:
            text.append(run, style=style)
        else:
            text.append(run)
    return text


def rich_style_to_prompt_toolkit(style: str) -> str:
    """Translate a Rich style string to a prompt_toolkit style string.

    Colors are emitted as hex values so named, 256-color and truecolor
    Rich colors all map. Attributes prompt_toolkit lacks are dropped.

    Args:
        style: Rich style string, e.g. "bold #ffffff on #333333".

    Returns:
        prompt_toolkit style string, e.g. "bg:#333333 #ffffff bold".
    """
    if not style:
        return ""
    parsed = Style.parse(style)
    parts: List[str] = []

    if parsed.bgcolor is not None and not parsed.bgcolor.is_default:
        parts.append(f"bg:{parsed.bgcolor.get_truecolor().hex}")
    if parsed.color is not None and not parsed.color.is_default:
        parts.append(parsed.color.get_truecolor().hex)

    if parsed.bold:
        parts.append("bold")
    if parsed.italic:
        parts.append("italic")
    if parsed.underline:
        parts.append("underline")
    if parsed.reverse:
        parts.append("reverse")

    return " ".join(parts)


def to_formatted_text(
    rendered: str,
    styles: Sequence[str],
    base_style: str = "",
) -> FormattedText:
    """Build prompt_toolkit formatted text from a rendered slice.

    Args:
        rendered: Slice returned by ``ScrollField.render``.
        styles: Rich style per marker, from ``ScrollField.styles``.
        base_style: prompt_toolkit style (e.g. "class:status") used for
            unstyled runs and prepended to styled ones.

    Returns:
        ``FormattedText`` of (style, text) tuples.
    """
    fragments: List[Tuple[str, str]] = []
    for marker_index, run in iter_runs(rendered):
        style = rich_style_to_prompt_toolkit(_style_at(styles, marker_index))
        combined = " ".join(part for part in (base_style, style) if part)
        fragments.append((combined, run))
    return FormattedText(fragments)

