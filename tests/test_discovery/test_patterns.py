"""Tests for path pattern normalization."""

import pytest

from remote_call.discovery.patterns import (
    PatternError,
    normalize_pattern,
    normalize_patterns,
)


class TestNormalizePattern:
    """Tests for normalize_pattern function."""

    def test_recursive_pattern_matches_sources_beneath(self):
        """A trailing ** matches source files at any depth."""
        assert normalize_pattern("server/utils/**") == [
            "server/utils/**/*.ts",
            "server/utils/**/*.mts",
        ]

    def test_single_level_wildcard_appends_extensions(self):
        """A trailing * stays single-level and gets the extension set."""
        assert normalize_pattern("server/api/*") == [
            "server/api/*.ts",
            "server/api/*.mts",
        ]

    def test_directory_pattern_is_recursive(self):
        """A trailing separator is treated as a directory root."""
        assert normalize_pattern("server/") == [
            "server/**/*.ts",
            "server/**/*.mts",
        ]

    def test_missing_extension_is_appended(self):
        """A file reference without an extension gets the extension set."""
        assert normalize_pattern("server/utils/posts") == [
            "server/utils/posts.ts",
            "server/utils/posts.mts",
        ]

    @pytest.mark.parametrize("pattern", ["server/utils/posts.ts", "lib/math.mts"])
    def test_qualified_file_passes_through(self, pattern):
        """A pattern already naming a source file is unchanged."""
        assert normalize_pattern(pattern) == [pattern]

    def test_recursive_marker_takes_precedence_over_wildcard(self):
        """** is checked before the single-level * rule."""
        assert normalize_pattern("**") == ["**/*.ts", "**/*.mts"]

    def test_is_pure(self):
        """The same pattern always yields the same globs."""
        assert normalize_pattern("server/api/*") == normalize_pattern("server/api/*")

    @pytest.mark.parametrize("pattern", ["", "   "])
    def test_rejects_empty_pattern(self, pattern):
        """An empty pattern is malformed."""
        with pytest.raises(PatternError):
            normalize_pattern(pattern)

    def test_rejects_absolute_pattern(self):
        """Patterns must be relative to the project root."""
        with pytest.raises(PatternError) as exc_info:
            normalize_pattern("/etc/*")
        assert exc_info.value.pattern == "/etc/*"


class TestNormalizePatterns:
    """Tests for normalize_patterns function."""

    def test_keeps_one_group_per_pattern(self):
        """Each input pattern maps to its own group of globs, in order."""
        groups = normalize_patterns(["server/api/*", "server/utils/posts.ts"])

        assert groups == [
            ["server/api/*.ts", "server/api/*.mts"],
            ["server/utils/posts.ts"],
        ]

    def test_empty_list(self):
        assert normalize_patterns([]) == []
