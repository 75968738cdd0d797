"""Expand normalized path patterns against the filesystem."""

import logging
import os
from pathlib import Path

from remote_call.discovery.patterns import PatternError, normalize_pattern

logger = logging.getLogger(__name__)

# Build output, dependency caches and generated artifacts
EXCLUDED_DIRS = frozenset({"node_modules", ".nuxt", ".output", "dist"})


class ScanError(Exception):
    """The project root cannot be scanned."""

    def __init__(self, message: str, root: str = ""):
        super().__init__(message)
        self.root = root


def is_excluded(path: Path, root: Path) -> bool:
    """Check whether a path sits inside an excluded directory below root."""
    relative = Path(os.path.relpath(path, root))
    return any(part in EXCLUDED_DIRS for part in relative.parts[:-1])


def scan_files(root_dir: str | Path, patterns: list[str]) -> list[Path]:
    """Resolve patterns against root_dir into absolute source file paths.

    Patterns are processed in the order given. The files matched by one
    pattern are sorted by path, and a file already matched by an earlier
    pattern is skipped, so the result order is stable across runs.

    Args:
        root_dir: Project root the patterns are relative to
        patterns: Raw user patterns (normalized here)

    Returns:
        Deduplicated list of absolute file paths

    Raises:
        ScanError: If root_dir is missing or not a directory
        PatternError: If a pattern is malformed
    """
    if not patterns:
        logger.info("No function paths configured, skipping scan")
        return []

    root = Path(root_dir).resolve()
    if not root.is_dir():
        raise ScanError(f"Project root is not a directory: {root}", root=str(root))

    files: list[Path] = []
    seen: set[Path] = set()

    for pattern in patterns:
        matched: set[Path] = set()
        for glob_pattern in normalize_pattern(pattern):
            try:
                candidates = list(root.glob(glob_pattern))
            except (ValueError, NotImplementedError) as e:
                raise PatternError(f"Invalid path pattern {pattern}: {e}", pattern=pattern) from e
            for candidate in candidates:
                if not candidate.is_file():
                    continue
                if is_excluded(candidate, root):
                    continue
                matched.add(candidate.absolute())

        new_files = [p for p in sorted(matched, key=lambda p: p.as_posix()) if p not in seen]
        logger.debug(f"Pattern {pattern} matched {len(matched)} files ({len(new_files)} new)")
        files.extend(new_files)
        seen.update(new_files)

    logger.info(f"Scanned {len(patterns)} patterns, found {len(files)} files")
    return files
