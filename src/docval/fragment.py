# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Document and code fragment DTOs shared by extraction and validation."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast, get_args


Intent = Literal["none", "expectsViolation", "expectsClean"]

_DECLARED_INTENTS: frozenset[str] = frozenset(get_args(Intent)) - {"none"}


@dataclass(frozen=True)
class Document:
    """Represent one documentation file read for a validation run.

    Attributes:
        path: Absolute path of the document.
        text: Full text content.
    """

    path: Path
    text: str


@dataclass(frozen=True)
class CodeFragment:
    """Represent one fenced code region extracted from a document.

    Attributes:
        code: Exact text between the fence lines, joined with ``\\n``.
        language: Language token of the opening fence; empty when absent.
        source_file: Path of the document the fragment was read from.
        source_line: Line of the opening fence (1-based).
        intent: Expected verifier outcome declared on the opening fence.
    """

    code: str
    language: str
    source_file: Path
    source_line: int
    intent: Intent = "none"

    @property
    def location(self) -> str:
        """Return ``file:line`` for diagnostics."""
        return f"{self.source_file}:{self.source_line}"


def parse_intent(token: str | None) -> Intent:
    """Map the second fence token to an intent.

    Args:
        token: Raw token following the language, or ``None``.

    Returns:
        The declared intent, or ``"none"`` for a missing or unknown token.
    """
    if token in _DECLARED_INTENTS:
        return cast(Intent, token)
    return "none"
