"""
Unit tests for glob matching.
"""

import re

from vfind.tools.glob import glob_to_regex, match_glob


class TestGlobToRegex:
    """Test cases for glob pattern translation."""

    def test_wildcards(self):
        """Test that * and ? translate to their regex equivalents."""
        assert glob_to_regex("*.t?t") == r"^.*\.t.t$"

    def test_character_class_copied_verbatim(self):
        """Test that bracket expressions are copied unchanged."""
        assert glob_to_regex("file[0-9].log") == r"^file[0-9]\.log$"

    def test_unterminated_class(self):
        """Test that an unterminated class copies the rest of the pattern."""
        assert glob_to_regex("a[bc") == "^a[bc$"

    def test_metacharacters_escaped(self):
        """Test that regex metacharacters are treated literally."""
        pattern = glob_to_regex("a+b(c){d}|e^f$g\\h")
        assert re.fullmatch(pattern, "a+b(c){d}|e^f$g\\h")


class TestMatchGlob:
    """Test cases for match_glob."""

    def test_suffix_match(self):
        """Test the basic star suffix pattern."""
        assert match_glob("a.txt", "*.txt") is True

    def test_match_is_anchored(self):
        """Test that trailing characters prevent a match."""
        assert match_glob("a.txtx", "*.txt") is False
        assert match_glob("xa.txt", "a.txt") is False

    def test_ignore_case(self):
        """Test case-insensitive matching."""
        assert match_glob("A.TXT", "*.txt", ignore_case=True) is True
        assert match_glob("A.TXT", "*.txt") is False

    def test_question_mark_matches_single_character(self):
        """Test that ? consumes exactly one character."""
        assert match_glob("ab", "a?") is True
        assert match_glob("a", "a?") is False
        assert match_glob("abc", "a?") is False

    def test_star_matches_empty(self):
        """Test that * matches the empty sequence."""
        assert match_glob("a", "a*") is True

    def test_character_class(self):
        """Test bracket expressions."""
        assert match_glob("file3", "file[0-9]") is True
        assert match_glob("filex", "file[0-9]") is False

    def test_dot_is_literal(self):
        """Test that a dot only matches a dot."""
        assert match_glob("axtxt", "a.txt") is False

    def test_invalid_class_never_matches(self):
        """Test that a pattern translating to an invalid regex matches nothing."""
        assert match_glob("b", "[z-a]") is False

    def test_path_patterns(self):
        """Test matching a pattern against a relative path."""
        assert match_glob("./src/main.py", "*/src/*.py") is True
        assert match_glob("./src/main.py", "src/*.py") is False
