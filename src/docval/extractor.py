# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Fenced code example extraction from documentation files."""

import logging
import re
from collections.abc import Iterable, Iterator
from pathlib import Path

from docval.fragment import CodeFragment, Document, Intent, parse_intent
from docval.ignore import IgnoreMatcher

logger = logging.getLogger(__name__)

FENCE_MARKER = "```"
DEFAULT_PATTERN = "**/*.md"

_OPENING_FENCE_RE = re.compile(r"^```(?P<language>\w*)\S*(?:\s+(?P<modifier>\S+))?")


class CorpusError(RuntimeError):
    """Represent an unreadable documentation corpus."""


def read_document(path: Path) -> Document:
    """Read one document from disk.

    Args:
        path: Document path.

    Returns:
        Document with absolute path and full text.

    Raises:
        CorpusError: If the file cannot be read or decoded.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed reading document (path={path} error={exc})")
        raise CorpusError(f"Failed reading document {path}: {exc}") from exc
    return Document(path=path.resolve(), text=text)


def iter_documents(
    docs_root: Path,
    pattern: str = DEFAULT_PATTERN,
    ignore: IgnoreMatcher | None = None,
) -> Iterator[Document]:
    """Yield corpus documents in sorted path order.

    Args:
        docs_root: Root directory of the documentation corpus.
        pattern: Glob pattern relative to ``docs_root``.
        ignore: Optional matcher for excluded paths.

    Yields:
        Documents matching ``pattern`` that are not excluded.
    """
    for path in sorted(docs_root.glob(pattern)):
        if not path.is_file():
            continue
        relative_path = path.relative_to(docs_root).as_posix()
        if ignore is not None and ignore.matches(relative_path):
            logger.debug(f"Skipping excluded document (path={relative_path})")
            continue
        yield read_document(path)


def extract_fragments(document: Document) -> list[CodeFragment]:
    """Extract fenced code fragments in document order.

    One forward pass over the lines. A fence line seen outside a block opens
    one; any fence line inside a block closes it, so blocks never nest. A
    block still open at the end of the document is dropped.

    Args:
        document: Source document.

    Returns:
        Completed fragments, in the order their fences appear.
    """
    fragments: list[CodeFragment] = []
    inside = False
    body: list[str] = []
    language = ""
    intent: Intent = "none"
    start_line = 0

    for index, line in enumerate(document.text.split("\n")):
        if line.startswith(FENCE_MARKER):
            if inside:
                fragments.append(
                    CodeFragment(
                        code="\n".join(body),
                        language=language,
                        source_file=document.path,
                        source_line=start_line,
                        intent=intent,
                    )
                )
                inside = False
                body = []
                intent = "none"
            else:
                match = _OPENING_FENCE_RE.match(line)
                language = match.group("language") if match else ""
                intent = parse_intent(match.group("modifier") if match else None)
                inside = True
                start_line = index + 1
        elif inside:
            body.append(line)

    if inside:
        logger.debug(
            f"Discarding unterminated fence (path={document.path} line={start_line})"
        )
    return fragments


def select_target(
    fragments: Iterable[CodeFragment], languages: Iterable[str]
) -> list[CodeFragment]:
    """Keep only fragments whose language is one of ``languages``.

    Args:
        fragments: Extracted fragments.
        languages: Target language tokens.

    Returns:
        Fragments in their original order.
    """
    targets = set(languages)
    return [fragment for fragment in fragments if fragment.language in targets]
