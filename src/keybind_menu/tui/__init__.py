"""
TUI components for the keybind menu.

- widgets/: search box and list row widgets
- key_bindings: decoded key names the app reacts to
- logging_redirect: keeps log output off the screen while the TUI runs
"""
