"""
Keybind configuration loading.

Candidate config files are tried in order (XDG config dir, ~/.config, system
share dir) and the first one that parses into a non-empty keybind list wins.
If none does, the built-in defaults are returned. Nothing here raises to the
caller.
"""

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from .error_handler_util import ErrorHandlerUtil
from .models import KeybindEntry

logger = logging.getLogger('KeybindMenu.Config')

APP_NAME = 'nebula-keybind-menu'
CONFIG_FILENAME = 'config.toml'
SYSTEM_CONFIG_PATH = Path('/usr/share') / APP_NAME / CONFIG_FILENAME

DEFAULT_KEYBINDS = (
    KeybindEntry("SUPER + SPACE", "Launcher", "Open app launcher"),
    KeybindEntry("SUPER + B", "Web Browser", "Open default browser"),
    KeybindEntry("SUPER + ENTER", "Terminal", "Open terminal"),
    KeybindEntry("SUPER + Q", "Close Window", "Close focused window"),
)

ENTRY_FIELDS = ('keys', 'name', 'desc')


class ConfigParseError(ValueError):
    """Raised when a config document does not describe a keybind list."""


@dataclass
class LoadResult:
    """Outcome of one loader strategy."""
    source: str
    entries: List[KeybindEntry] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, source: str, reason: str) -> 'LoadResult':
        return cls(source=source, error=reason)


def parse_keybinds(text: str) -> List[KeybindEntry]:
    """
    Parse a TOML document into keybind entries.

    Every record of the ``keybinds`` array must carry string ``keys``,
    ``name`` and ``desc`` values; other keys are ignored.

    Raises:
        ConfigParseError: if the document is not valid TOML or a record is
            malformed.
    """
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"invalid TOML: {e}") from e

    records = data.get('keybinds')
    if not isinstance(records, list):
        raise ConfigParseError("missing 'keybinds' array")

    entries = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ConfigParseError(f"keybinds[{index}] is not a table")
        values = []
        for name in ENTRY_FIELDS:
            value = record.get(name)
            if not isinstance(value, str):
                raise ConfigParseError(f"keybinds[{index}].{name} must be a string")
            values.append(value)
        entries.append(KeybindEntry(*values))
    return entries


def load_from_path(path: Path) -> LoadResult:
    """Try a single config file. An empty keybind list counts as a failure."""
    source = str(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        return LoadResult.failure(source, f"unreadable: {e}")

    try:
        entries = parse_keybinds(text)
    except ConfigParseError as e:
        return LoadResult.failure(source, str(e))

    if not entries:
        return LoadResult.failure(source, "no keybinds defined")
    return LoadResult(source=source, entries=entries)


def load_defaults() -> LoadResult:
    return LoadResult(source='built-in defaults', entries=list(DEFAULT_KEYBINDS))


def xdg_config_path(environ=None) -> Optional[Path]:
    """Config file under $XDG_CONFIG_HOME, if the variable is set."""
    environ = os.environ if environ is None else environ
    base = environ.get('XDG_CONFIG_HOME')
    if not base:
        return None
    return Path(base) / APP_NAME / CONFIG_FILENAME


def home_config_path(environ=None) -> Optional[Path]:
    """Config file under ~/.config, if HOME is known."""
    environ = os.environ if environ is None else environ
    home = environ.get('HOME')
    if not home:
        return None
    return Path(home) / '.config' / APP_NAME / CONFIG_FILENAME


def candidate_paths(environ=None) -> List[Path]:
    """Config files to try, most specific first, without duplicates."""
    paths = []
    for path in (xdg_config_path(environ), home_config_path(environ), SYSTEM_CONFIG_PATH):
        if path is not None and path not in paths:
            paths.append(path)
    return paths


def default_strategies(environ=None) -> List[Callable[[], LoadResult]]:
    """Ordered loader strategies ending with the built-in defaults."""
    strategies = [
        (lambda p=path: load_from_path(p)) for path in candidate_paths(environ)
    ]
    strategies.append(load_defaults)
    return strategies


def load_entries(strategies: Optional[Sequence[Callable[[], LoadResult]]] = None) -> List[KeybindEntry]:
    """
    Run loader strategies in order and return the first successful entry list.

    Returns an empty list only if every strategy fails, which cannot happen
    with the default chain.
    """
    if strategies is None:
        strategies = default_strategies()

    for strategy in strategies:
        result = ErrorHandlerUtil.handle_with_fallback(
            strategy,
            fallback_value=LoadResult.failure(getattr(strategy, '__name__', 'loader'), "loader raised"),
            error_message="Keybind loader raised",
            logger_instance=logger,
        )
        if result.ok:
            logger.info(f"Loaded {len(result.entries)} keybinds from {result.source}")
            return result.entries
        logger.debug(f"Skipping {result.source}: {result.error}")

    logger.warning("No keybind source succeeded; starting with an empty list")
    return []
