# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Gitignore-style exclusion rules for the documentation corpus."""

import logging
import os
from pathlib import Path

import pathspec

logger = logging.getLogger(__name__)

IGNORE_FILE_NAME = ".docvalignore"


class IgnoreMatcher:
    """Match corpus-relative document paths against gitignore patterns."""

    def __init__(self, spec: pathspec.GitIgnoreSpec) -> None:
        """Initialize matcher.

        Args:
            spec: Compiled gitignore matcher.
        """
        self._spec = spec

    @classmethod
    def from_patterns(cls, patterns: list[str]) -> "IgnoreMatcher":
        """Build matcher from raw pattern lines."""
        return cls(spec=pathspec.GitIgnoreSpec.from_lines(patterns))

    @classmethod
    def from_docs_root(
        cls, docs_root: Path, extra_patterns: list[str] | None = None
    ) -> "IgnoreMatcher":
        """Build matcher from the docs root ignore file plus extra patterns.

        Args:
            docs_root: Root directory of the documentation corpus.
            extra_patterns: Additional patterns given on the command line.

        Returns:
            Configured ignore matcher.

        Raises:
            OSError: If the ignore file exists but cannot be read.
            UnicodeDecodeError: If the ignore file contains invalid UTF-8.
        """
        patterns: list[str] = []
        ignore_path = docs_root / IGNORE_FILE_NAME
        if ignore_path.is_file():
            patterns.extend(ignore_path.read_text(encoding="utf-8").splitlines())
            logger.debug(f"Loaded ignore file (path={ignore_path})")
        patterns.extend(extra_patterns or [])
        return cls.from_patterns(patterns)

    def matches(self, relative_path: str) -> bool:
        """Check whether a corpus-relative path is excluded.

        Args:
            relative_path: Corpus-relative POSIX path.

        Returns:
            True when the document should be skipped.
        """
        normalized = relative_path.replace(os.sep, "/").strip("/")
        if not normalized:
            return False
        return bool(self._spec.match_file(normalized))
