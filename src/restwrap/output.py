"""Response rendering on stdout, diagnostics on stderr.

Payloads handed to :func:`format_response` are the only thing written to
stdout. Progress notes, errors and cache events go to stderr, and colour is
turned off when ``NO_COLOR`` is set or ``TERM=dumb``.

The clients log cache hits, misses and clears via ``get_output().debug``;
those lines appear only after a manager built with ``verbose=True`` has been
installed with :func:`set_output`.
"""

from __future__ import annotations

import json
import os
import sys
from enum import Enum
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax


class OutputFormat(str, Enum):
    """How :meth:`OutputManager.format_response` renders a payload.

    ``AUTO`` picks ``RICH`` for a colour-capable terminal and ``PLAIN``
    for pipes and redirects.
    """

    AUTO = "auto"
    JSON = "json"
    PLAIN = "plain"
    RICH = "rich"


class OutputManager:
    """Console pair used by the clients and by scripts built on them.

    Args:
        format: Payload rendering, see :class:`OutputFormat`.
        no_color: Force colourless output.
        quiet: Drop :meth:`info` lines. Errors are always shown.
        verbose: Show :meth:`debug` lines (cache events).
    """

    def __init__(
        self,
        format: OutputFormat = OutputFormat.AUTO,
        no_color: bool = False,
        quiet: bool = False,
        verbose: bool = False,
    ) -> None:
        self._plain_text = no_color or _should_disable_color()
        self._quiet = quiet
        self._verbose = verbose

        if format == OutputFormat.AUTO:
            rich_ok = _is_tty() and not self._plain_text
            format = OutputFormat.RICH if rich_ok else OutputFormat.PLAIN
        self._format = format

        self._stdout = Console(
            file=sys.stdout,
            no_color=self._plain_text,
            force_terminal=format == OutputFormat.RICH,
        )
        self._stderr = Console(file=sys.stderr, no_color=self._plain_text, stderr=True)

    @property
    def format(self) -> OutputFormat:
        return self._format

    def format_response(self, data: Any) -> None:
        """Write one response payload to stdout."""
        if self._format == OutputFormat.JSON:
            self._emit(_to_json(data))
        elif data is None:
            return
        elif self._format == OutputFormat.RICH and isinstance(data, (dict, list)):
            self._stdout.print(Syntax(_to_json(data), "json", theme="monokai", word_wrap=True))
        elif self._format == OutputFormat.RICH:
            self._stdout.print(str(data))
        else:
            for line in _plain_lines(data):
                self._emit(line)

    def info(self, message: str) -> None:
        if self._quiet:
            return
        if self._plain_text:
            print(message, file=sys.stderr, flush=True)
        else:
            self._stderr.print(message)

    def error(self, message: str) -> None:
        if self._plain_text:
            print(f"Error: {message}", file=sys.stderr, flush=True)
        else:
            self._stderr.print(f"[bold red]Error:[/bold red] {message}")

    def debug(self, message: str) -> None:
        if not self._verbose:
            return
        if self._plain_text:
            print(f"[debug] {message}", file=sys.stderr, flush=True)
        else:
            # Fingerprints may contain "[" so the message is escaped for markup.
            self._stderr.print(f"[dim]\\[debug] {escape(message)}[/dim]", highlight=False)

    @staticmethod
    def _emit(text: str) -> None:
        print(text, file=sys.stdout, flush=True)


def _to_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False, default=str)


def _plain_lines(data: Any) -> list[str]:
    """Tab-separated rows: ``key<TAB>value`` for a mapping, one row per list item."""
    if isinstance(data, dict):
        return [f"{key}\t{value}" for key, value in data.items()]
    if isinstance(data, list):
        return [
            "\t".join(str(v) for v in item.values()) if isinstance(item, dict) else str(item)
            for item in data
        ]
    return [str(data)]


def _is_tty() -> bool:
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _should_disable_color() -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return True
    return os.environ.get("TERM") == "dumb"


_output: Optional[OutputManager] = None


def get_output() -> OutputManager:
    """Process-wide manager; a default one is built on first use."""
    global _output
    if _output is None:
        _output = OutputManager()
    return _output


def set_output(output: OutputManager) -> None:
    global _output
    _output = output


def reset_output() -> None:
    global _output
    _output = None


def format_response(data: Any) -> None:
    get_output().format_response(data)


def info(message: str) -> None:
    get_output().info(message)


def error(message: str) -> None:
    get_output().error(message)
