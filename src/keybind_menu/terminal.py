"""
Terminal ownership for the keybind menu.

TerminalSession puts the terminal into raw mode on the alternate screen and
guarantees it is put back on every exit path, including exceptions,
Ctrl+C and SIGTERM/SIGHUP.
"""

import logging
import signal

from urwid.display import raw

from .error_handler_util import ErrorHandlerUtil

logger = logging.getLogger('KeybindMenu.Terminal')

DEFAULT_SIZE = (80, 24)

# Signals that would otherwise kill the process without restoring the tty
CLEANUP_SIGNALS = tuple(
    getattr(signal, name) for name in ('SIGTERM', 'SIGHUP') if hasattr(signal, name)
)


class TerminalError(RuntimeError):
    """The terminal could not be acquired or released."""


class SafeScreen(raw.Screen):
    """Raw display screen that falls back to a default size instead of failing."""

    def get_cols_rows(self):
        try:
            cols, rows = super().get_cols_rows()
        except (OSError, ValueError) as e:
            logger.debug(f"Terminal size query failed, using {DEFAULT_SIZE}: {e}")
            return DEFAULT_SIZE
        if cols <= 0 or rows <= 0:
            return DEFAULT_SIZE
        return cols, rows


def _raise_exit(signum, frame):
    logger.info(f"Received signal {signum}, leaving the terminal session")
    raise SystemExit(128 + signum)


class TerminalSession:
    """
    Context manager owning the terminal screen.

    Entering starts the screen and installs signal handlers that turn
    termination signals into SystemExit so the release in __exit__ runs.
    Release is idempotent; the urwid main loop may already have stopped the
    screen by the time the session exits.
    """

    def __init__(self, screen=None):
        self.screen = screen if screen is not None else SafeScreen()
        self.active = False
        self._previous_handlers = {}

    def __enter__(self):
        self._install_signal_handlers()
        try:
            self.screen.start()
        except Exception as e:
            self._restore_signal_handlers()
            try:
                self.screen.stop()
            except Exception as stop_error:
                ErrorHandlerUtil.log_and_continue(stop_error, "Terminal restore after failed start", logger)
            ErrorHandlerUtil.log_and_raise_initialization_error(
                "Terminal",
                exception_class=TerminalError,
                logger_instance=logger,
                cause=e,
            )
        self.active = True
        logger.debug("Terminal session started")
        return self.screen

    def __exit__(self, exc_type, exc_value, tb):
        self.release()
        return False

    def release(self):
        """Stop the screen and restore signal handlers. Safe to call twice."""
        if not self.active:
            return
        self.active = False
        try:
            self._stop_screen()
        finally:
            self._restore_signal_handlers()
        logger.debug("Terminal session released")

    def _stop_screen(self):
        try:
            self.screen.stop()
        except Exception as e:
            ErrorHandlerUtil.log_and_raise(
                f"Could not restore terminal: {e}",
                exception_class=TerminalError,
                logger_instance=logger,
                cause=e,
            )

    def _install_signal_handlers(self):
        for signum in CLEANUP_SIGNALS:
            try:
                self._previous_handlers[signum] = signal.signal(signum, _raise_exit)
            except (ValueError, OSError) as e:
                # Only the main thread may install handlers
                logger.debug(f"Could not install handler for signal {signum}: {e}")

    def _restore_signal_handlers(self):
        for signum, handler in self._previous_handlers.items():
            signal.signal(signum, handler)
        self._previous_handlers.clear()
