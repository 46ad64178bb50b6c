"""User-facing progress and notice output."""

from .console import ConsoleManager, Notifier, NullNotifier, ThreadSafeConsole

__all__ = ["ConsoleManager", "Notifier", "NullNotifier", "ThreadSafeConsole"]
