"""Turn user path patterns into concrete source-file globs."""

import logging

logger = logging.getLogger(__name__)

SOURCE_EXTENSIONS = (".ts", ".mts")


class PatternError(Exception):
    """A path pattern that cannot be resolved against a project root."""

    def __init__(self, message: str, pattern: str = ""):
        super().__init__(message)
        self.pattern = pattern


def normalize_pattern(pattern: str) -> list[str]:
    """Normalize one pattern into globs that only match source files.

    pathlib globs have no brace alternation, so a pattern that needs the
    extension set appended expands to one glob per extension.

    Args:
        pattern: A pattern relative to the project root, e.g. "server/api/*"

    Returns:
        List of concrete glob patterns

    Raises:
        PatternError: If the pattern is empty or absolute
    """
    if not isinstance(pattern, str) or not pattern.strip():
        raise PatternError(f"Empty path pattern: {pattern!r}", pattern=str(pattern))
    if pattern.startswith("/") or (len(pattern) > 1 and pattern[1] == ":"):
        raise PatternError(f"Path pattern must be relative: {pattern}", pattern=pattern)

    # Recursive directory: every source file beneath it
    if pattern.endswith("**"):
        return [f"{pattern}/*{ext}" for ext in SOURCE_EXTENSIONS]
    # Single-level wildcard
    if pattern.endswith("*"):
        return [f"{pattern}{ext}" for ext in SOURCE_EXTENSIONS]
    # Directory root
    if pattern.endswith("/"):
        return [f"{pattern}**/*{ext}" for ext in SOURCE_EXTENSIONS]
    # File reference missing its extension
    if not pattern.endswith(SOURCE_EXTENSIONS):
        return [f"{pattern}{ext}" for ext in SOURCE_EXTENSIONS]
    return [pattern]


def normalize_patterns(patterns: list[str]) -> list[list[str]]:
    """Normalize a pattern list, keeping one group of globs per input pattern."""
    groups = [normalize_pattern(p) for p in patterns]
    logger.debug(f"Normalized {len(patterns)} patterns into {sum(map(len, groups))} globs")
    return groups
