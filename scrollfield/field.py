"""Scroll field: a fixed-width marquee over regenerated text.

On every refresh tick the host calls ``render``. The field asks its
text source for the current text and returns a slice holding exactly
``visible_width`` printable characters, advancing its cursor by
``step`` so successive renders slide through the text.

Usage:
    from scrollfield import ScrollField

    field = ScrollField.configure("20 2 ${color warning}$nodename${color} up")
    while running:
        slice_text = field.render()
        draw(slice_text, field.styles)
    field.dispose()
"""

import logging
from typing import Dict, List, Optional

from .config import ScrollSettings, parse_scroll_arg
from .errors import ConfigurationError
from .markers import MARKER, join_lines, printable_length
from .styles import StyleSpec
from .text_source import TemplateTextSource, TextSource, VariableFunc
from .window import advance_cursor, compose_slice

logger = logging.getLogger(__name__)


class ScrollField:
    """A single scrolling text field.

    The cursor is private state: an offset into the most recently
    evaluated text, markers included. Only ``render`` moves it.
    """

    def __init__(
        self,
        visible_width: int,
        source: TextSource,
        step: int = 1,
        reset_style: Optional[str] = None,
        settings: Optional[ScrollSettings] = None,
        prefix_literal: Optional[str] = None,
    ):
        """Create a field over an existing text source.

        Most callers want ``configure``, which parses an argument string
        and builds a template source with lead-in blanks.

        Args:
            visible_width: Printable characters per slice; at least 1.
            source: The text source; owned (and closed) by the field.
            step: Cursor advance per render.
            reset_style: Style restored after each slice, or None when
                the host does not render styles.
            settings: Buffer capacity and line separator.
            prefix_literal: The template text the source was built from.
        """
        if visible_width < 1:
            raise ConfigurationError("scroll length must be at least 1", str(visible_width))
        self._visible_width = visible_width
        self._step = step
        self._source: Optional[TextSource] = source
        self._reset_style = reset_style
        self._settings = settings or ScrollSettings()
        self._prefix_literal = prefix_literal
        self._cursor = 0
        self._styles: List[str] = []

    @classmethod
    def configure(
        cls,
        raw_argument: Optional[str],
        current_style: Optional[str] = None,
        *,
        variables: Optional[Dict[str, VariableFunc]] = None,
        style_table: Optional[Dict[str, StyleSpec]] = None,
        settings: Optional[ScrollSettings] = None,
    ) -> "ScrollField":
        """Build a field from a ``"<width> [<step>] <text>"`` argument.

        The literal text is prefixed with ``width`` spaces so scrolling
        starts from a blank field, then parsed as a template so it may
        hold variables, colors and nested scroll fields.

        Args:
            raw_argument: The field argument.
            current_style: Style active where the field appears; restored
                after each slice. None for hosts that ignore styles.
            variables: Extra template variables.
            style_table: Named styles for ``${color ...}``.
            settings: Shared settings.

        Returns:
            The configured field, cursor at 0.

        Raises:
            ConfigurationError: If the argument has no valid width, or the
                template cannot be parsed.
        """
        args = parse_scroll_arg(raw_argument)
        prefix_literal = " " * args.width + args.text
        source = TemplateTextSource(
            prefix_literal,
            variables=variables,
            style_table=style_table,
            settings=settings,
            current_style=current_style,
        )
        logger.debug(
            "Configured scroll field: width=%d step=%d text=%r",
            args.width, args.step, args.text,
        )
        return cls(
            args.width,
            source,
            step=args.step,
            reset_style=current_style,
            settings=settings,
            prefix_literal=prefix_literal,
        )

    # ==================== Properties ====================

    @property
    def visible_width(self) -> int:
        return self._visible_width

    @property
    def step(self) -> int:
        return self._step

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def prefix_literal(self) -> Optional[str]:
        return self._prefix_literal

    @property
    def reset_style(self) -> Optional[str]:
        return self._reset_style

    @property
    def styles(self) -> List[str]:
        """Style of each marker in the last rendered slice, in order."""
        return list(self._styles)

    @property
    def disposed(self) -> bool:
        return self._source is None

    # ==================== Rendering ====================

    def render(self, output_capacity: Optional[int] = None) -> str:
        """Render the current slice and advance the cursor.

        Args:
            output_capacity: Maximum length of the result; defaults to
                the settings' ``max_text``. Longer results are cut.

        Returns:
            The slice. When the whole text fits it is returned as is;
            otherwise it holds exactly ``visible_width`` printable
            characters, every marker of the text, and a trailing reset
            marker if the field has a reset style.
        """
        if output_capacity is None:
            output_capacity = self._settings.max_text
        if self._source is None:
            return ""

        text = join_lines(
            self._source.generate(self._settings.max_text),
            self._settings.line_separator,
        )
        source_styles = self._source.styles

        if self._cursor >= len(text):
            # Text shrank since the last render
            self._cursor = 0

        if printable_length(text) <= self._visible_width:
            self._styles = source_styles
            return text[:output_capacity]

        result = compose_slice(text, self._cursor, self._visible_width)
        self._cursor = advance_cursor(text, result.start, self._step)
        if self._cursor == 0:
            logger.debug("Scroll field wrapped around (%d chars)", len(text))

        rendered = result.text
        styles = list(source_styles)
        if self._reset_style is not None:
            rendered += MARKER
            styles.append(self._reset_style)
        self._styles = styles
        return rendered[:output_capacity]

    # ==================== Lifecycle ====================

    def dispose(self) -> None:
        """Release the text source and prefix literal. Safe to call twice."""
        if self._source is None:
            return
        self._source.close()
        self._source = None
        self._prefix_literal = None
        self._styles = []

    def __enter__(self) -> "ScrollField":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()
