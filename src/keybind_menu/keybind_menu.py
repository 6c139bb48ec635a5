import logging
import os
import sys
import time
from pathlib import Path

from .config_loader import APP_NAME, load_entries
from .error_handler_util import ErrorHandlerUtil
from .keybind_tui import KeybindMenuApp
from .terminal import TerminalError

LOG_ENV_VAR = 'NEBULA_KEYBIND_MENU_LOG'
PROFILE_ENV_VAR = 'NEBULA_KEYBIND_MENU_PROFILE'
DEFAULT_LOG_PATH = Path('~/.cache').expanduser() / APP_NAME / 'debug.log'

LOG_FORMAT = '%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

logger = logging.getLogger('KeybindMenu')


def configure_logging(log_path=None):
    """
    Send debug logging to a file and only critical messages to the console.

    The file defaults to ~/.cache/nebula-keybind-menu/debug.log and can be
    moved with NEBULA_KEYBIND_MENU_LOG. Calling this again replaces the
    handlers installed by the previous call.
    """
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.CRITICAL)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    logger.addHandler(console_handler)

    path = Path(log_path or os.environ.get(LOG_ENV_VAR) or DEFAULT_LOG_PATH)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path)
    except OSError as e:
        ErrorHandlerUtil.log_and_continue(e, f"Opening log file {path}", logger, logging.DEBUG)
        return logger

    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    logger.addHandler(file_handler)
    return logger


class StartupProfiler:
    """Collects elapsed-time marks from process start; reported after the TUI exits."""

    def __init__(self, enabled=False, start=None):
        self.enabled = enabled
        self.start = time.perf_counter() if start is None else start
        self.marks = []

    def mark(self, label):
        elapsed = time.perf_counter() - self.start
        self.marks.append((label, elapsed))
        logger.info(f"startup: {label} in {elapsed * 1000:.2f}ms")

    def report(self, stream=None):
        if not self.enabled:
            return
        stream = stream or sys.stderr
        for label, elapsed in self.marks:
            print(f"startup: {label} in {elapsed * 1000:.2f}ms", file=stream)


def profiling_requested(flag=False):
    return flag or PROFILE_ENV_VAR in os.environ


def run_menu(profile=False, entries=None, session=None):
    """
    Launch the interactive menu and return the process exit code.

    When entries is None the keybinds are loaded from configuration after the
    first frame is drawn.
    """
    profiler = StartupProfiler(enabled=profiling_requested(profile))
    loader = None if entries is not None else load_entries
    app = KeybindMenuApp(entries, loader=loader, profiler=profiler)
    profiler.mark("app ready")

    try:
        return app.run(session)
    except TerminalError as e:
        print(f"{APP_NAME}: {e}", file=sys.stderr)
        return 1
    finally:
        profiler.report()


def main():
    """Main entry point for the application"""
    from .cli_commands import main as cli_main
    cli_main()


if __name__ == '__main__':
    main()
