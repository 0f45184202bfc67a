# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Two-stage validation of documentation code fragments."""

import logging
from collections.abc import Callable, Iterable

from docval.extractor import extract_fragments, select_target
from docval.fragment import CodeFragment, Document
from docval.model import Report, ValidationOutcome
from docval.scratch import ScratchArea
from docval.tooling import Checker, ToolInvocationError, ToolResult, Verifier

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGES: tuple[str, ...] = ("typescript", "ts")

# Plain substring scan: a marker anywhere in the output counts, file paths included.
VIOLATION_MARKERS: tuple[str, ...] = ("ERROR", "WARNING")

OutcomeCallback = Callable[[Document, ValidationOutcome], None]
DocumentCallback = Callable[[Document, list[CodeFragment]], None]


def has_violations(output: str) -> bool:
    """Return ``True`` when verifier output contains a violation marker."""
    return any(marker in output for marker in VIOLATION_MARKERS)


class ValidationPipeline:
    """Validate target-language fragments with a checker and a verifier."""

    def __init__(
        self,
        checker: Checker,
        verifier: Verifier,
        scratch: ScratchArea,
        languages: Iterable[str] = DEFAULT_LANGUAGES,
        on_document: DocumentCallback | None = None,
        on_outcome: OutcomeCallback | None = None,
    ) -> None:
        """Initialize pipeline.

        Args:
            checker: Static checker run on every target fragment.
            verifier: Contract verifier run on fragments declaring an intent.
            scratch: Scratch area for temporary units and projects.
            languages: Fence language tokens selected for validation.
            on_document: Called before the target fragments of a document
                are validated; not called for documents without any.
            on_outcome: Called after each fragment outcome is recorded.

        Raises:
            ValueError: If ``languages`` is empty.
        """
        self._languages = tuple(languages)
        if not self._languages:
            raise ValueError("languages must not be empty")
        self._checker = checker
        self._verifier = verifier
        self._scratch = scratch
        self._on_document = on_document
        self._on_outcome = on_outcome

    def run(self, documents: Iterable[Document]) -> Report:
        """Validate every target fragment of every document in sequence.

        Args:
            documents: Corpus documents.

        Returns:
            Aggregate report for the run.
        """
        report = Report()
        for document in documents:
            report.documents_scanned += 1
            fragments = extract_fragments(document)
            targets = select_target(fragments, self._languages)
            report.skipped += len(fragments) - len(targets)
            if not targets:
                continue
            if self._on_document is not None:
                self._on_document(document, targets)
            for fragment in targets:
                outcome = self.validate_fragment(fragment)
                report.record(outcome)
                if self._on_outcome is not None:
                    self._on_outcome(document, outcome)

        logger.info(
            "validation_summary documents=%s total=%s validated=%s failed=%s skipped=%s",
            report.documents_scanned,
            report.total,
            report.validated,
            report.failed,
            report.skipped,
        )
        return report

    def validate_fragment(self, fragment: CodeFragment) -> ValidationOutcome:
        """Run the applicable stages for one fragment.

        The verifier only runs when the fragment declares an intent and the
        static check passed.

        Args:
            fragment: Target-language fragment.

        Returns:
            Outcome of the fragment.

        Raises:
            OSError: If scratch artifacts cannot be created or removed.
        """
        compile_error = self._check(fragment)
        if compile_error is not None:
            logger.warning(f"Static check failed (location={fragment.location})")
            return ValidationOutcome(
                fragment=fragment,
                compiled=False,
                cli_checked=False,
                passed=False,
                diagnostic=compile_error,
            )

        if fragment.intent == "none":
            return ValidationOutcome(
                fragment=fragment, compiled=True, cli_checked=False, passed=True
            )

        diagnostic = self._verify(fragment)
        if diagnostic is not None:
            logger.warning(
                f"Contract verification failed (location={fragment.location} "
                f"intent={fragment.intent})"
            )
        return ValidationOutcome(
            fragment=fragment,
            compiled=True,
            cli_checked=True,
            passed=diagnostic is None,
            diagnostic=diagnostic,
        )

    def _check(self, fragment: CodeFragment) -> str | None:
        """Run the static check and return a diagnostic on failure."""
        with self._scratch.unit_file(fragment.code, self._checker.suffix) as unit_path:
            try:
                result = self._checker.check(fragment, unit_path)
            except ToolInvocationError as exc:
                return str(exc)
        if result.ok:
            return None
        return result.stdout or result.stderr or f"Checker exited with {result.returncode}"

    def _verify(self, fragment: CodeFragment) -> str | None:
        """Run the contract verifier and return a diagnostic on failure."""
        with self._scratch.project_dir(
            fragment.code,
            source_name=self._verifier.source_name,
            files=self._verifier.config_files(),
        ) as project_dir:
            try:
                result = self._verifier.verify(fragment, project_dir)
            except ToolInvocationError as exc:
                return str(exc)
        return judge_verification(fragment, result)


def judge_verification(fragment: CodeFragment, result: ToolResult) -> str | None:
    """Compare verifier output with the fragment's declared intent.

    Args:
        fragment: Fragment declaring ``expectsViolation`` or ``expectsClean``.
        result: Verifier run.

    Returns:
        ``None`` when the outcome matches the intent, otherwise a diagnostic.
    """
    output = result.output
    violations = has_violations(output)
    if fragment.intent == "expectsViolation":
        if violations:
            return None
        if result.ok:
            return "Expected violations but found none"
        return (
            f"Expected violations but found none "
            f"(verifier exited with {result.returncode}): {output}"
        )

    if violations:
        return f"Expected clean but found violations: {output}"
    if not result.ok:
        return f"Verifier exited with {result.returncode}: {output}"
    return None
