"""
Logging redirection for TUI mode.
Console handlers would write over the urwid screen, so they are detached
while the TUI owns the terminal and put back afterwards.
"""

import contextlib
import logging
from typing import Dict, List, Optional, Sequence

DEFAULT_LOGGER_NAMES = ('KeybindMenu', '')


def _is_console_handler(handler: logging.Handler) -> bool:
    # FileHandler subclasses StreamHandler but never targets the terminal
    return isinstance(handler, logging.StreamHandler) and not isinstance(handler, logging.FileHandler)


class TUILogCapture:
    """Detaches console handlers from a set of loggers for the TUI's lifetime."""

    def __init__(self, logger_names: Optional[Sequence[str]] = None):
        self.logger_names = tuple(logger_names) if logger_names is not None else DEFAULT_LOGGER_NAMES
        self.detached: Dict[str, List[logging.Handler]] = {}
        self.active = False

    def start_capture(self):
        if self.active:
            return
        self.active = True
        for name in self.logger_names:
            target = logging.getLogger(name)
            handlers = [h for h in target.handlers if _is_console_handler(h)]
            for handler in handlers:
                target.removeHandler(handler)
            self.detached[name] = handlers

    def stop_capture(self):
        if not self.active:
            return
        self.active = False
        for name, handlers in self.detached.items():
            target = logging.getLogger(name)
            for handler in handlers:
                target.addHandler(handler)
        self.detached.clear()


@contextlib.contextmanager
def tui_redirect_context(logger_names: Optional[Sequence[str]] = None):
    """Context manager for automatic TUI log redirection."""
    capture = TUILogCapture(logger_names)
    capture.start_capture()
    try:
        yield capture
    finally:
        capture.stop_capture()
