# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Validation result models."""

from dataclasses import dataclass, field

from docval.fragment import CodeFragment


@dataclass(frozen=True)
class ValidationOutcome:
    """Represent the result of validating one fragment.

    Attributes:
        fragment: Validated fragment.
        compiled: Whether the static check accepted the fragment.
        cli_checked: Whether the contract verifier ran.
        passed: Whether every applicable stage passed.
        diagnostic: Failure detail; ``None`` when the fragment passed.
    """

    fragment: CodeFragment
    compiled: bool
    cli_checked: bool
    passed: bool
    diagnostic: str | None = None


@dataclass
class Report:
    """Aggregate counters for one validation run."""

    documents_scanned: int = 0
    total: int = 0
    validated: int = 0
    failed: int = 0
    skipped: int = 0
    outcomes: list[ValidationOutcome] = field(default_factory=list)

    def record(self, outcome: ValidationOutcome) -> None:
        """Count one fragment outcome."""
        self.outcomes.append(outcome)
        self.total += 1
        if outcome.passed:
            self.validated += 1
        else:
            self.failed += 1

    @property
    def exit_code(self) -> int:
        """Return ``1`` when any fragment failed, otherwise ``0``."""
        return 1 if self.failed > 0 else 0
