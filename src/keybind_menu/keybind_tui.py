import time
import urwid
import logging

from .models import QueryState, SelectionState
from .query_engine import QueryEngine
from .terminal import DEFAULT_SIZE, TerminalSession
from .tui.widgets import SearchEdit, KeybindRow
from .tui.logging_redirect import tui_redirect_context
from .tui.key_bindings import *

logger = logging.getLogger('KeybindMenu.TUI')

TITLE_TEXT = "  Keybinds"
CLOSE_HINT = "Esc to close"
PLACEHOLDER_TEXT = "Type to search keybinds"
LOADING_TEXT = "Loading keybinds..."
NO_MATCHES_TEXT = "No matches. Try a different query."

# Margin, title, blank, bordered search box (3), spacer
HEADER_ROWS = 7
ROWS_PER_ENTRY = 3

PALETTE = [
    ('body', 'default', 'default'),
    ('title', 'light green,bold', 'default'),
    ('hint', 'dark gray', 'default'),

    # Search box
    ('input', 'white', 'default'),
    ('placeholder_text', 'dark gray', 'default'),
    ('search_border', 'dark gray', 'default'),

    # Keybind list
    ('results', 'default', 'default'),
    ('keys', 'white,bold', 'default'),
    ('name', 'default,bold', 'default'),
    ('description', 'dark gray', 'default'),
    ('indicator', 'light cyan', 'default'),
    ('highlight', 'light cyan', 'default'),
    ('message', 'white', 'default'),
]


class KeybindMenuApp:
    """
    Interactive keybind search screen.

    Typing edits the query in the search box; every edit re-filters the
    entries and moves the highlight back to the first match. Up/Down and
    Page Up/Page Down move the highlight, Esc or Ctrl+C leaves.

    Entries are either passed in directly or fetched through ``loader``
    once the first frame is on screen.
    """

    def __init__(self, entries=None, loader=None, screen=None, profiler=None):
        self.loader = loader
        self.screen = screen
        self.profiler = profiler
        self.loop = None
        self.selection = SelectionState()
        self.entries_loaded = entries is not None
        self.query_engine = QueryEngine(entries or ())

        self.input_box = SearchEdit(caption=" ", placeholder_text=PLACEHOLDER_TEXT)
        self.results_list = urwid.SimpleFocusListWalker([])
        self.results_box = urwid.ListBox(self.results_list)

        title = urwid.Columns([
            urwid.Text(('title', TITLE_TEXT), wrap='clip'),
            ('pack', urwid.Text(('hint', CLOSE_HINT), align='right')),
        ])
        search_box = urwid.LineBox(urwid.AttrMap(self.input_box, 'input'))
        self.header = urwid.Pile([
            urwid.Divider(),
            title,
            urwid.Divider(),
            urwid.AttrMap(search_box, 'search_border'),
            urwid.Divider(),
        ])
        self.header.focus_position = 3

        frame = urwid.Frame(
            body=urwid.AttrMap(self.results_box, 'results'),
            header=self.header,
            focus_part='header'
        )
        self.main_layout = urwid.AttrMap(urwid.Padding(frame, left=1, right=1), 'body')

        urwid.connect_signal(self.input_box, 'postchange', self.on_input_changed)

        if self.entries_loaded:
            self._display_results(self.query_engine.view)
        else:
            self._show_message(LOADING_TEXT)

    # State accessors

    @property
    def query_state(self) -> QueryState:
        return QueryState(text=self.input_box.edit_text, cursor_index=self.input_box.edit_pos)

    @property
    def filtered_view(self):
        return self.query_engine.view

    @property
    def highlighted_entry(self):
        view = self.query_engine.view
        if not view:
            return None
        return view[self.selection.highlighted_index]

    # Query handling

    def on_input_changed(self, widget, old_text):
        new_text = widget.edit_text
        logger.debug("Query changed: %r -> %r", old_text, new_text)
        self.apply_query(new_text)

    def apply_query(self, query):
        """Re-filter for query and put the highlight on the first match."""
        view = self.query_engine.update_query(query)
        self.selection.reset()
        if self.entries_loaded:
            self._display_results(view)

    def set_entries(self, entries):
        """Replace the candidate list, keeping whatever has been typed so far."""
        self.query_engine = QueryEngine(entries)
        self.entries_loaded = True
        self.apply_query(self.input_box.edit_text)

    def load_entries(self):
        if self.loader is None:
            return
        start = time.perf_counter()
        entries = self.loader()
        logger.info(f"Loaded {len(entries)} keybinds in {time.perf_counter() - start:.3f}s")
        self.set_entries(entries)

    # Rendering

    def _show_message(self, text):
        self.results_list.clear()
        self.results_list.append(urwid.Text(('message', text)))

    def _display_results(self, view):
        if not view:
            self._show_message(NO_MATCHES_TEXT)
            return
        highlighted = self.selection.clamp(len(view))
        self.results_list.clear()
        self.results_list.extend([
            KeybindRow(entry, highlighted=(index == highlighted))
            for index, entry in enumerate(view)
        ])
        self._sync_focus()

    def _sync_focus(self):
        """Point the list box at the highlighted row so it scrolls into view."""
        if self.query_engine.view:
            self.results_box.focus_position = self.selection.highlighted_index

    def render(self, size, focus=True):
        """Render the whole screen at size; used by tests and redraws alike."""
        return self.main_layout.render(size, focus)

    def redraw(self):
        if self.loop is not None:
            self.loop.draw_screen()

    # Navigation

    def move_selection(self, delta):
        count = len(self.query_engine.view)
        old_index = self.selection.highlighted_index
        new_index = self.selection.move(delta, count)
        if count == 0 or new_index == old_index:
            return
        self.results_list[old_index].set_highlighted(False)
        self.results_list[new_index].set_highlighted(True)
        self._sync_focus()

    def page_size(self):
        """Number of entries in one screenful of list."""
        _cols, rows = self.screen_size()
        return max(1, (rows - HEADER_ROWS) // ROWS_PER_ENTRY)

    def screen_size(self):
        if self.loop is None:
            return DEFAULT_SIZE
        try:
            return self.loop.screen.get_cols_rows()
        except OSError as e:
            logger.debug(f"Could not read screen size: {e}")
            return DEFAULT_SIZE

    # Input

    def unhandled_input(self, key):
        if not isinstance(key, str):
            # Mouse events arrive as tuples; mouse support is off
            return

        if key in QUIT_KEYS:
            logger.info(f"Quit requested with '{key}'")
            raise urwid.ExitMainLoop()
        elif key == KEY_NAVIGATE_UP:
            self.move_selection(-1)
        elif key == KEY_NAVIGATE_DOWN:
            self.move_selection(1)
        elif key == KEY_PAGE_UP:
            self.move_selection(-self.page_size())
        elif key == KEY_PAGE_DOWN:
            self.move_selection(self.page_size())
        else:
            logger.debug(f"Ignoring key {key!r}")

    def process_key(self, key, size=None):
        """Feed one decoded key through the widgets, then the app, like the main loop."""
        if size is None:
            size = self.screen_size()
        remaining = self.main_layout.keypress(size, key)
        if remaining is not None:
            self.unhandled_input(remaining)

    # Main loop

    def _on_first_frame(self, loop, user_data=None):
        if self.profiler is not None:
            self.profiler.mark("first frame")
        if not self.entries_loaded:
            self.load_entries()

    def run(self, session=None):
        """
        Run the menu until the user quits.

        Returns the process exit code. The terminal is restored before this
        returns or raises.
        """
        if session is None:
            session = TerminalSession(self.screen)

        self.loop = urwid.MainLoop(
            self.main_layout,
            PALETTE,
            screen=session.screen,
            unhandled_input=self.unhandled_input,
            handle_mouse=False
        )
        self.loop.set_alarm_in(0, self._on_first_frame)

        with tui_redirect_context():
            with session:
                if self.profiler is not None:
                    self.profiler.mark("terminal ready")
                try:
                    self.loop.run()
                except KeyboardInterrupt:
                    logger.info("Interrupted, closing menu")
                except Exception:
                    logger.exception("TUI error")
                    raise
        return 0


def run_ui(entries=None, loader=None, profiler=None):
    return KeybindMenuApp(entries, loader=loader, profiler=profiler).run()
