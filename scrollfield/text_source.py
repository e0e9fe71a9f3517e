"""Text sources feeding scroll fields.

A text source produces, on demand, the full current text for a scroll
field. Style changes inside the text are ``MARKER`` characters; the
style each marker switches to is listed, in order, in ``styles``.
Line breaks are left as ``\\n``: joining lines is the field's job.

Usage:
    from scrollfield.text_source import TemplateTextSource

    source = TemplateTextSource("${color warning}load:${color} $uptime",
                                variables={"uptime": lambda arg: "3d"})
    text = source.generate(4096)
    source.styles   # ["bold #f5f543", ""]
"""

import logging
import os
import platform
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Sequence, Tuple, Union

from .config import ScrollSettings
from .markers import MARKER, count_markers, strip_markers
from .styles import StyleSpec, resolve_style

if TYPE_CHECKING:
    from .field import ScrollField

logger = logging.getLogger(__name__)

# Signature: (argument text) -> value
VariableFunc = Callable[[str], str]

_NAME_PATTERN = re.compile(r"[A-Za-z0-9_]+")


class TextSource(ABC):
    """Produces the current full text of a scroll field."""

    @abstractmethod
    def generate(self, max_size: int) -> str:
        """Produce a fresh text of at most ``max_size`` characters."""
        pass

    @property
    def styles(self) -> List[str]:
        """Style of each marker in the last generated text, in order."""
        return []

    def close(self) -> None:
        """Release resources held by the source."""
        pass


class LiteralTextSource(TextSource):
    """A fixed text."""

    def __init__(self, text: str, styles: Sequence[str] = ()):
        self._text = text
        self._styles = list(styles)

    def generate(self, max_size: int) -> str:
        return self._text[:max_size]

    @property
    def styles(self) -> List[str]:
        return list(self._styles)


class CallableTextSource(TextSource):
    """Text produced by a host callback on every tick.

    The callback returns either the text, or a ``(text, styles)`` pair
    when the text carries markers.
    """

    def __init__(self, func: Callable[[], Union[str, Tuple[str, Sequence[str]]]]):
        self._func = func
        self._styles: List[str] = []

    def generate(self, max_size: int) -> str:
        result = self._func()
        if isinstance(result, tuple):
            text, styles = result
        else:
            text, styles = result, ()
        text = text[:max_size]
        self._styles = list(styles)[:count_markers(text)]
        return text

    @property
    def styles(self) -> List[str]:
        return list(self._styles)


# =============================================================================
# Templates
# =============================================================================

def _var_time(arg: str) -> str:
    return datetime.now().strftime(arg.strip() or "%H:%M:%S")


def _var_env(arg: str) -> str:
    return os.environ.get(arg.strip(), "")


def _var_nodename(arg: str) -> str:
    return platform.node()


BUILTIN_VARIABLES: Dict[str, VariableFunc] = {
    "time": _var_time,
    "env": _var_env,
    "nodename": _var_nodename,
}


@dataclass
class _Segment:
    """One parsed piece of a template."""
    kind: str  # "text", "color", "var", "scroll"
    text: str = ""  # literal text, style, or variable argument
    name: str = ""
    func: Optional[VariableFunc] = None
    field: Optional["ScrollField"] = None


def _find_closing_brace(template: str, start: int) -> int:
    """Index of the brace closing a ``${`` whose body starts at ``start``, or -1."""
    depth = 1
    for index in range(start, len(template)):
        char = template[index]
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return index
    return -1


class TemplateTextSource(TextSource):
    """Evaluates a ``$var`` / ``${var args}`` template on every tick.

    Supported forms:
        ``$$``                          a literal dollar sign
        ``${color}``                    switch back to the base style
        ``${color <name-or-style>}``    switch style (emits a marker)
        ``${scroll <w> [<step>] <text>}`` a nested scroll field
        ``$name`` / ``${name args}``    a registered variable

    The template is parsed once, at construction. Unknown variables are
    kept as literal text.
    """

    def __init__(
        self,
        template: str,
        variables: Optional[Dict[str, VariableFunc]] = None,
        style_table: Optional[Dict[str, StyleSpec]] = None,
        settings: Optional[ScrollSettings] = None,
        current_style: Optional[str] = None,
    ):
        """Parse the template.

        Args:
            template: The template text.
            variables: Extra variables, overriding the built-ins.
            style_table: Named styles for ``${color ...}``.
            settings: Settings passed on to nested scroll fields.
            current_style: Style active where the template starts.

        Raises:
            ConfigurationError: If a ``${color ...}`` style is invalid or
                a nested ``${scroll ...}`` cannot be configured.
        """
        self._variables: Dict[str, VariableFunc] = dict(BUILTIN_VARIABLES)
        if variables:
            self._variables.update(variables)
        self._style_table = style_table
        self._settings = settings
        self._styles: List[str] = []
        self._segments: List[_Segment] = []
        try:
            self._parse(template, current_style)
        except Exception:
            self.close()
            raise

    def _parse(self, template: str, current_style: Optional[str]) -> None:
        literal: List[str] = []
        i = 0
        while i < len(template):
            char = template[i]
            if char != "$":
                literal.append(char)
                i += 1
                continue

            following = template[i + 1:i + 2]
            if following == "$":
                literal.append("$")
                i += 2
                continue
            if following == "{":
                end = _find_closing_brace(template, i + 2)
                if end < 0:
                    logger.warning("Unterminated ${ in template: %r", template[i:])
                    literal.append(template[i:])
                    break
                body = template[i + 2:end]
                raw = template[i:end + 1]
                i = end + 1
            else:
                match = _NAME_PATTERN.match(template, i + 1)
                if not match:
                    literal.append(char)
                    i += 1
                    continue
                body = match.group(0)
                raw = template[i:match.end()]
                i = match.end()

            parts = body.lstrip().split(None, 1)
            name = parts[0] if parts else ""
            arg = parts[1] if len(parts) > 1 else ""

            if name == "color":
                self._flush(literal)
                current_style = resolve_style(arg, self._style_table)
                self._segments.append(_Segment(kind="color", text=current_style))
            elif name == "scroll":
                from .field import ScrollField

                self._flush(literal)
                nested = ScrollField.configure(
                    arg,
                    current_style,
                    variables=self._variables,
                    style_table=self._style_table,
                    settings=self._settings,
                )
                self._segments.append(_Segment(kind="scroll", name=name, field=nested))
            elif name in self._variables:
                self._flush(literal)
                self._segments.append(
                    _Segment(kind="var", text=arg, name=name, func=self._variables[name])
                )
            else:
                logger.warning("Unknown variable %r in template, shown literally", name)
                literal.append(raw)
        self._flush(literal)

    def _flush(self, literal: List[str]) -> None:
        if literal:
            # Bare markers in literal text would have no style
            text = strip_markers("".join(literal))
            if text:
                self._segments.append(_Segment(kind="text", text=text))
            literal.clear()

    def generate(self, max_size: int) -> str:
        parts: List[str] = []
        styles: List[str] = []
        for segment in self._segments:
            if segment.kind == "text":
                parts.append(segment.text)
            elif segment.kind == "color":
                parts.append(MARKER)
                styles.append(segment.text)
            elif segment.kind == "var":
                try:
                    value = segment.func(segment.text)
                except Exception as e:
                    logger.warning("Variable %r failed: %s", segment.name, e)
                    value = ""
                # Bare markers from a variable would have no style
                parts.append(strip_markers(str(value)))
            elif segment.kind == "scroll":
                rendered = segment.field.render(max_size)
                parts.append(rendered)
                styles.extend(segment.field.styles[:count_markers(rendered)])

        text = "".join(parts)[:max_size]
        self._styles = styles[:count_markers(text)]
        return text

    @property
    def styles(self) -> List[str]:
        return list(self._styles)

    def close(self) -> None:
        """Dispose nested scroll fields and drop the parsed template."""
        for segment in self._segments:
            if segment.field is not None:
                segment.field.dispose()
        self._segments = []
        self._styles = []
