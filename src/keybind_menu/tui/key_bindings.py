"""
Key binding constants for the keybind menu TUI.
Key names are urwid's decoded key strings.
"""

# Exit
KEY_QUIT = 'esc'
KEY_INTERRUPT = 'ctrl c'

# Selection movement
KEY_NAVIGATE_UP = 'up'
KEY_NAVIGATE_DOWN = 'down'
KEY_PAGE_UP = 'page up'
KEY_PAGE_DOWN = 'page down'

# Query editing (handled by the search edit widget)
KEY_BACKSPACE = 'backspace'
KEY_DELETE = 'delete'
KEY_CURSOR_LEFT = 'left'
KEY_CURSOR_RIGHT = 'right'
KEY_HOME = 'home'
KEY_END = 'end'

QUIT_KEYS = (KEY_QUIT, KEY_INTERRUPT)

NAVIGATION_KEYS = (KEY_NAVIGATE_UP, KEY_NAVIGATE_DOWN, KEY_PAGE_UP, KEY_PAGE_DOWN)

# Keys the search box hands back to the app instead of consuming
INPUT_PASSTHROUGH_KEYS = NAVIGATION_KEYS + QUIT_KEYS
