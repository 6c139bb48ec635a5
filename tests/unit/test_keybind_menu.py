"""
Tests for logging setup, startup profiling and the run_menu entry point.
"""

import io
import logging

import pytest
from unittest.mock import patch

from keybind_menu import keybind_menu
from keybind_menu.keybind_menu import (
    PROFILE_ENV_VAR, StartupProfiler, configure_logging, profiling_requested, run_menu
)
from keybind_menu.terminal import TerminalSession
from keybind_menu.tui.logging_redirect import TUILogCapture, tui_redirect_context
from test_helpers import SAMPLE_ENTRIES, FakeScreen


@pytest.fixture
def clean_logger():
    """Restore the KeybindMenu logger's handlers after each test."""
    target = logging.getLogger('KeybindMenu')
    saved = list(target.handlers)
    yield target
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()
    for handler in saved:
        target.addHandler(handler)


class TestConfigureLogging:

    def test_writes_debug_messages_to_file(self, tmp_path, clean_logger):
        log_path = tmp_path / 'logs' / 'debug.log'
        configure_logging(log_path)

        logging.getLogger('KeybindMenu.Query').debug("hello from the query engine")
        for handler in clean_logger.handlers:
            handler.flush()

        content = log_path.read_text()
        assert "KeybindMenu.Query - DEBUG - hello from the query engine" in content

    def test_console_handler_is_critical_only(self, tmp_path, clean_logger):
        configure_logging(tmp_path / 'debug.log')

        console = [h for h in clean_logger.handlers if type(h) is logging.StreamHandler]
        assert len(console) == 1
        assert console[0].level == logging.CRITICAL

    def test_environment_overrides_default_path(self, tmp_path, monkeypatch, clean_logger):
        log_path = tmp_path / 'env.log'
        monkeypatch.setenv('NEBULA_KEYBIND_MENU_LOG', str(log_path))

        configure_logging()

        file_handlers = [h for h in clean_logger.handlers if isinstance(h, logging.FileHandler)]
        assert [h.baseFilename for h in file_handlers] == [str(log_path)]

    def test_reconfiguring_replaces_handlers(self, tmp_path, clean_logger):
        configure_logging(tmp_path / 'a.log')
        configure_logging(tmp_path / 'b.log')

        assert len(clean_logger.handlers) == 2

    def test_unwritable_location_skips_file_logging(self, tmp_path, clean_logger):
        blocker = tmp_path / 'not-a-dir'
        blocker.write_text("")

        configure_logging(blocker / 'debug.log')

        assert not any(isinstance(h, logging.FileHandler) for h in clean_logger.handlers)


class TestLogCapture:

    def test_console_handlers_detached_during_tui(self, tmp_path):
        target = logging.getLogger('KeybindMenu.CaptureTest')
        console = logging.StreamHandler(io.StringIO())
        file_handler = logging.FileHandler(tmp_path / 'capture.log')
        target.addHandler(console)
        target.addHandler(file_handler)
        try:
            with tui_redirect_context(['KeybindMenu.CaptureTest']):
                assert console not in target.handlers
                assert file_handler in target.handlers
            assert console in target.handlers
        finally:
            target.removeHandler(console)
            target.removeHandler(file_handler)
            file_handler.close()

    def test_start_and_stop_are_idempotent(self):
        capture = TUILogCapture(['KeybindMenu.IdempotentTest'])
        capture.start_capture()
        capture.start_capture()
        capture.stop_capture()
        capture.stop_capture()
        assert capture.active is False
        assert capture.detached == {}


class TestStartupProfiler:

    def test_marks_are_recorded_in_order(self):
        profiler = StartupProfiler(enabled=True)
        profiler.mark("app ready")
        profiler.mark("terminal ready")

        assert [label for label, _ in profiler.marks] == ["app ready", "terminal ready"]
        assert profiler.marks[0][1] <= profiler.marks[1][1]

    def test_report_when_enabled(self):
        profiler = StartupProfiler(enabled=True, start=0.0)
        profiler.marks = [("first frame", 0.0125)]
        stream = io.StringIO()

        profiler.report(stream)

        assert stream.getvalue() == "startup: first frame in 12.50ms\n"

    def test_report_silent_when_disabled(self):
        profiler = StartupProfiler(enabled=False)
        profiler.mark("app ready")
        stream = io.StringIO()

        profiler.report(stream)

        assert stream.getvalue() == ""

    def test_profiling_requested(self, monkeypatch):
        monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
        assert profiling_requested(False) is False
        assert profiling_requested(True) is True
        monkeypatch.setenv(PROFILE_ENV_VAR, "1")
        assert profiling_requested(False) is True


class TestRunMenu:

    def test_quit_returns_zero(self):
        screen = FakeScreen()
        with patch('keybind_menu.keybind_tui.urwid.MainLoop'):
            exit_code = run_menu(entries=SAMPLE_ENTRIES, session=TerminalSession(screen))

        assert exit_code == 0
        assert screen.started is False

    def test_terminal_failure_returns_one(self, capsys):
        screen = FakeScreen(fail_start=True)
        with patch('keybind_menu.keybind_tui.urwid.MainLoop'):
            exit_code = run_menu(entries=SAMPLE_ENTRIES, session=TerminalSession(screen))

        assert exit_code == 1
        assert "nebula-keybind-menu: Terminal failed to initialize" in capsys.readouterr().err
        assert screen.stop_calls == 1

    def test_profile_report_printed_after_exit(self, capsys, monkeypatch):
        monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)
        with patch('keybind_menu.keybind_tui.urwid.MainLoop'):
            run_menu(profile=True, entries=SAMPLE_ENTRIES, session=TerminalSession(FakeScreen()))

        err = capsys.readouterr().err
        assert "startup: app ready in" in err
        assert "startup: terminal ready in" in err

    def test_entries_default_to_config_loader(self):
        with patch('keybind_menu.keybind_menu.KeybindMenuApp') as mock_app_cls:
            mock_app_cls.return_value.run.return_value = 0
            run_menu()

        args, kwargs = mock_app_cls.call_args
        assert args == (None,)
        assert kwargs['loader'] is keybind_menu.load_entries
