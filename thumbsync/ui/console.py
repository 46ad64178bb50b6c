"""Console output for thumbnail progress and per-item notices.

ConsoleManager adapts output to:
- a Rich live status line when stderr is a TTY
- JSON events for machine-readable logs (CI/CD)
- plain-text lines otherwise
"""

from __future__ import annotations

import json
import logging
import sys
import threading
from datetime import datetime
from typing import Any, Optional, Protocol, runtime_checkable

from rich.console import Console
from rich.logging import RichHandler
from rich.status import Status


@runtime_checkable
class Notifier(Protocol):
    """Surface the transcode queue reports progress and failures to."""

    def show_progress(self, message: str) -> None:
        ...

    def hide_progress(self) -> None:
        ...

    def notice(self, message: str) -> None:
        ...


class NullNotifier:
    """Notifier that discards everything."""

    def show_progress(self, message: str) -> None:
        pass

    def hide_progress(self) -> None:
        pass

    def notice(self, message: str) -> None:
        pass


class ThreadSafeConsole:
    """Thread-safe wrapper around Rich Console."""

    def __init__(self, console: Console):
        self._console = console
        self._lock = threading.RLock()  # Reentrant lock for nested calls

    def print(self, *args, **kwargs):
        """Thread-safe print method."""
        with self._lock:
            self._console.print(*args, **kwargs)

    def status(self, *args, **kwargs) -> Status:
        """Create a status line bound to the wrapped console."""
        with self._lock:
            return self._console.status(*args, **kwargs)


class ConsoleManager:
    """Progress and notice surface backed by Rich."""

    def __init__(self, verbose: bool = False, json_output: bool = False):
        self.verbose = verbose
        self.json_output = json_output
        self.is_tty = sys.stderr.isatty()

        if self.json_output:
            self.console = None
        else:
            self.console = ThreadSafeConsole(Console(stderr=True))

        self._status_lock = threading.RLock()
        self._status: Optional[Status] = None
        self._last_progress: Optional[str] = None

    def setup_logging(self, logger: logging.Logger) -> None:
        """Configure logging with Rich handler or JSON/plain formatter.

        Adds a handler and sets logger level based on `verbose`.
        """

        def _has_handler_of_type(h_type):
            return any(isinstance(h, h_type) for h in logger.handlers)

        if self.json_output:
            if not _has_handler_of_type(logging.StreamHandler):
                handler = logging.StreamHandler(sys.stderr)
                handler.setFormatter(logging.Formatter("%(message)s"))
                logger.addHandler(handler)
        else:
            if not _has_handler_of_type(RichHandler):
                handler = RichHandler(
                    console=self.console._console if self.console else None,
                    show_time=True,
                    show_path=self.verbose,
                    rich_tracebacks=True,
                )
                logger.addHandler(handler)
        logger.setLevel(logging.DEBUG if self.verbose else logging.INFO)

    def show_progress(self, message: str) -> None:
        """Show or update the single progress line."""
        with self._status_lock:
            if message == self._last_progress:
                return
            self._last_progress = message

            if self.json_output:
                self._emit_json({"type": "progress", "message": message})
            elif self.is_tty and self.console is not None:
                if self._status is None:
                    self._status = self.console.status(message)
                    self._status.start()
                else:
                    self._status.update(message)
            else:
                print(message, file=sys.stderr)

    def hide_progress(self) -> None:
        """Retract the progress line."""
        with self._status_lock:
            if self._last_progress is None:
                return
            self._last_progress = None

            if self._status is not None:
                self._status.stop()
                self._status = None
            if self.json_output:
                self._emit_json({"type": "progress_done"})

    def notice(self, message: str) -> None:
        """Show a transient, non-fatal notice."""
        if self.json_output:
            self._emit_json({"type": "notice", "message": message})
        elif self.console is not None and self.is_tty:
            self.console.print(f"[yellow]{message}[/yellow]")
        else:
            print(message, file=sys.stderr)

    def print_summary(self, results: dict[str, Any]) -> None:
        """Print a sync summary as JSON or plain lines."""
        if self.json_output:
            self._emit_json({"type": "summary", "results": results})
            return
        lines = [f"  {key}: {value}" for key, value in results.items()]
        text = "\n".join(["Sync Summary:", *lines])
        if self.console is not None:
            self.console.print(text, highlight=False)
        else:
            print(text, file=sys.stderr)

    def _emit_json(self, payload: dict[str, Any]) -> None:
        payload = {"timestamp": datetime.now().isoformat(), **payload}
        print(json.dumps(payload), file=sys.stderr)
