"""Command-line interface for the keybind menu."""

import argparse
import logging
import sys

from . import __version__

logger = logging.getLogger('KeybindMenu')


def build_parser():
    parser = argparse.ArgumentParser(
        prog='nebula-keybind-menu',
        description="Search and browse your desktop keybindings."
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument(
        '--profile', action='store_true',
        help='Print startup timings to stderr after the menu closes.'
    )
    return parser


def handle_cli_commands(argv=None):
    """Parse command-line arguments; --version exits here."""
    return build_parser().parse_args(argv)


def main(argv=None):
    """Main entry point for the application"""
    args = handle_cli_commands(argv)

    from .keybind_menu import configure_logging, run_menu

    configure_logging()
    logger.info(f"Starting nebula-keybind-menu {__version__}")
    exit_code = run_menu(profile=args.profile)
    logger.info(f"Exiting with code {exit_code}")
    sys.exit(exit_code)
