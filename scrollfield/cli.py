"""Command-line host for a single scroll field.

Renders a scroll field once per refresh interval, the way a status bar
would. On a terminal the field is shown in place with a Rich live
display; otherwise each frame is printed on its own line.

Examples:
    python -m scrollfield "20 ${color warning}$nodename${color} is up since ${time %H:%M}"
    python -m scrollfield --interval 0.2 --ticks 40 "10 2 breaking news"
"""

import argparse
import logging
import os
import sys
import time
from typing import Iterator, List, Optional

from dotenv import load_dotenv
from rich.console import Console
from rich.live import Live
from rich.text import Text

from .config import ScrollSettings
from .errors import ConfigurationError
from .field import ScrollField
from .formatting import to_rich_text
from .styles import load_styles, resolve_style

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Send logs to SCROLLFIELD_LOG_FILE if set, else to stderr.

    A live display owns the terminal, so a log file is the way to see
    DEBUG output while it runs.
    """
    log_file = os.environ.get("SCROLLFIELD_LOG_FILE")
    if log_file:
        os.makedirs(os.path.dirname(os.path.abspath(log_file)), exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
        ))
        # Package logger only, and no propagation to stderr handlers
        package_logger = logging.getLogger("scrollfield")
        package_logger.handlers = [file_handler]
        package_logger.setLevel(logging.DEBUG)
        package_logger.propagate = False
        return

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _frames(field: ScrollField, ticks: int, interval: float, base_style: str) -> Iterator[Text]:
    """Yield one rendered frame per tick; ``ticks`` of 0 means forever."""
    count = 0
    while not ticks or count < ticks:
        if count and interval > 0:
            time.sleep(interval)
        rendered = field.render()
        yield to_rich_text(rendered, field.styles, base_style)
        count += 1


def _run_live(console: Console, frames: Iterator[Text], interval: float) -> None:
    refresh = max(1.0, 1.0 / interval) if interval > 0 else 10.0
    with Live(console=console, refresh_per_second=refresh, auto_refresh=False) as live:
        for frame in frames:
            live.update(frame, refresh=True)


def _run_plain(console: Console, frames: Iterator[Text]) -> None:
    for frame in frames:
        console.print(frame, soft_wrap=True)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="scrollfield",
        description="Show a scrolling text field, refreshed at a fixed interval",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        allow_abbrev=False,
        epilog="""
Template syntax inside <text>:
  $name / ${name args}           variable (time, env, nodename)
  ${color <name-or-style>}       switch style; ${color} restores the base style
  ${scroll <w> [<step>] <text>}  nested scroll field
  $$                             literal dollar sign
        """,
    )
    parser.add_argument(
        "argument",
        help='Field argument: "<width> [<step>] <text>"',
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=None,
        help="Seconds between refreshes (default: SCROLLFIELD_INTERVAL or 1.0)",
    )
    parser.add_argument(
        "--ticks",
        type=int,
        default=0,
        help="Render this many frames and exit (default: run until Ctrl+C)",
    )
    parser.add_argument(
        "--style",
        default="",
        help="Base style of the field: a style name or a Rich style string",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to .env file (default: .env)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging",
    )

    args = parser.parse_args(argv)

    load_dotenv(args.env_file)
    _configure_logging(args.verbose)

    settings = ScrollSettings()
    interval = args.interval if args.interval is not None else settings.interval
    style_table = load_styles(settings.styles_path)

    try:
        base_style = resolve_style(args.style, style_table)
        field = ScrollField.configure(
            args.argument,
            base_style,
            style_table=style_table,
            settings=settings,
        )
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    console = Console()
    frames = _frames(field, args.ticks, interval, base_style)
    with field:
        try:
            if console.is_terminal:
                _run_live(console, frames, interval)
            else:
                _run_plain(console, frames)
        except KeyboardInterrupt:
            logger.debug("Interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
