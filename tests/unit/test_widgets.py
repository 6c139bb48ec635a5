"""
Tests for the search box and description line widgets.
"""

import urwid
from unittest.mock import patch

from keybind_menu.tui.widgets import DescriptionLine, SearchEdit, make_desc_line
from test_helpers import screen_lines


class TestMakeDescLine:

    def test_centres_between_dashes(self):
        assert make_desc_line("abc", 11) == "--- abc ---"

    def test_odd_remainder_goes_right(self):
        assert make_desc_line("abc", 12) == "--- abc ----"

    def test_trims_description(self):
        assert make_desc_line("  abc  ", 11) == "--- abc ---"

    def test_too_narrow_returns_bare_text(self):
        assert make_desc_line("abcdef", 9) == "abcdef"
        assert make_desc_line("abc", 0) == "abc"

    def test_exact_minimum_width(self):
        assert make_desc_line("ab", 6) == "- ab -"


class TestDescriptionLine:

    def test_renders_one_row_at_width(self):
        widget = DescriptionLine("Open terminal")
        lines = screen_lines(widget.render((21,)))

        assert widget.rows((21,)) == 1
        assert lines == ["--- Open terminal ---"]

    def test_clips_when_narrow(self):
        widget = DescriptionLine("A rather long description")
        canvas = widget.render((10,))
        assert canvas.rows() == 1
        assert canvas.cols() == 10


class TestSearchEdit:
    """Test the search box widget."""

    def test_init(self):
        widget = SearchEdit(caption=" ", placeholder_text="Type here")

        assert widget.caption == " "
        assert widget.edit_text == ""
        assert widget.placeholder_text == "Type here"

    def test_placeholder_shown_while_empty(self):
        widget = SearchEdit(caption=" ", placeholder_text="Type here")
        assert screen_lines(widget.render((20,)))[0].rstrip() == " Type here"

    def test_text_replaces_placeholder(self):
        widget = SearchEdit(caption=" ", edit_text="abc", placeholder_text="Type here")
        line = screen_lines(widget.render((20,)))[0]

        assert "abc" in line
        assert "Type here" not in line

    def test_placeholder_is_single_row(self):
        widget = SearchEdit(caption=" ", placeholder_text="x" * 50)
        assert widget.rows((10,)) == 1
        assert widget.render((10,)).rows() == 1

    def test_keypress_passes_through_navigation_and_quit(self):
        widget = SearchEdit(placeholder_text="Type here")

        for key in ['up', 'down', 'page up', 'page down', 'esc', 'ctrl c']:
            assert widget.keypress((80,), key) == key
        assert widget.edit_text == ""

    def test_printable_keys_are_edited(self):
        widget = SearchEdit(placeholder_text="Type here")

        assert widget.keypress((80,), 'q') is None
        assert widget.edit_text == "q"

    def test_other_keys_reach_edit(self):
        widget = SearchEdit(placeholder_text="Type here")

        with patch.object(urwid.Edit, 'keypress', return_value=None) as mock_super_keypress:
            widget.keypress((80,), 'home')

        mock_super_keypress.assert_called_once_with((80,), 'home')
