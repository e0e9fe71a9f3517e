"""Error types for scroll fields."""

from typing import Optional

USAGE = "scroll needs arguments: <length> [<step>] <text>"


class ScrollFieldError(Exception):
    """Base class for scroll field errors."""
    pass


class ConfigurationError(ScrollFieldError):
    """A scroll field could not be configured.

    Raised by ``ScrollField.configure`` when the argument has no usable
    width, or when the template names an invalid style. The field is
    not constructed; the host is expected to abort building the widget.
    """

    def __init__(self, message: str = USAGE, argument: Optional[str] = None):
        self.argument = argument
        if argument is not None:
            message = f"{message} (got {argument!r})"
        super().__init__(message)
