# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Freshness comparison between generated pages and their sources."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StalenessRule:
    """Describe one generated page and the sources it is generated from.

    Attributes:
        name: Human readable rule name.
        sources: Glob patterns relative to the source root.
        target: Generated page path.
        hint: Command that regenerates the page.
    """

    name: str
    sources: tuple[str, ...]
    target: Path
    hint: str


@dataclass(frozen=True)
class StalenessResult:
    """Represent the freshness of one generated page."""

    name: str
    source_mtime: float
    target_mtime: float
    hint: str

    @property
    def stale(self) -> bool:
        """Return ``True`` when a source is newer than the page."""
        return self.source_mtime > self.target_mtime


def latest_mtime(paths: Iterable[Path]) -> float:
    """Return the newest modification time, ``0`` for missing paths."""
    latest = 0.0
    for path in paths:
        if path.exists():
            latest = max(latest, path.stat().st_mtime)
    return latest


def check_rule(rule: StalenessRule, source_root: Path) -> StalenessResult:
    """Compare one generated page with its newest source.

    Args:
        rule: Rule to evaluate.
        source_root: Root that ``rule.sources`` are relative to.

    Returns:
        Source and page modification times.
    """
    source_paths = [
        path for pattern in rule.sources for path in sorted(source_root.glob(pattern))
    ]
    if not source_paths:
        logger.warning(f"No sources matched (rule={rule.name} root={source_root})")
    result = StalenessResult(
        name=rule.name,
        source_mtime=latest_mtime(source_paths),
        target_mtime=latest_mtime([rule.target]),
        hint=rule.hint,
    )
    logger.debug(
        f"Checked staleness (rule={rule.name} stale={result.stale} "
        f"source_mtime={result.source_mtime} target_mtime={result.target_mtime})"
    )
    return result


def default_rules(docs_root: Path) -> list[StalenessRule]:
    """Return the rules for the generated reference pages of the site.

    Args:
        docs_root: Root directory of the documentation corpus.

    Returns:
        Schema, package and CLI reference rules.
    """
    return [
        StalenessRule(
            name="Schema docs",
            sources=("corpus/schema/contract.schema.json",),
            target=docs_root / "contract-schema" / "schema-reference.md",
            hint="npm run docs:generate-schema",
        ),
        StalenessRule(
            name="Package docs",
            sources=("corpus/packages/**/contract.yaml",),
            target=docs_root / "supported-packages" / "overview.md",
            hint="npm run docs:generate-packages",
        ),
        StalenessRule(
            name="CLI docs",
            sources=("verify-cli/package.json",),
            target=docs_root / "cli-reference" / "overview.md",
            hint="npm run docs:generate-cli",
        ),
    ]
