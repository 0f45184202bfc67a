# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Command line entry point for documentation build checks."""

import argparse
import logging
import shlex
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import TextIO

from rich.console import Console
from rich.logging import RichHandler

from docval.checkers import TypeScriptChecker, VerifyCliVerifier
from docval.checkers.typescript import DEFAULT_CHECKER_COMMAND
from docval.extractor import DEFAULT_PATTERN, CorpusError, iter_documents
from docval.fragment import CodeFragment, Document
from docval.ignore import IgnoreMatcher
from docval.model import Report, ValidationOutcome
from docval.pipeline import DEFAULT_LANGUAGES, ValidationPipeline
from docval.scratch import open_scratch_area
from docval.staleness import StalenessResult, check_rule, default_rules
from docval.tooling import Checker, Verifier

logger = logging.getLogger(__name__)

DEFAULT_VERIFY_CLI = Path("../verify-cli/dist/index.js")
DEFAULT_CORPUS = Path("../corpus")
SUMMARY_RULE_WIDTH = 60


def configure_logging(level: int = logging.INFO) -> None:
    """Configure application logging with Rich handler.

    Args:
        level: Logging severity threshold.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser instance.
    """
    parser = argparse.ArgumentParser(prog="docval")
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate_parser = subparsers.add_parser("validate-examples")
    validate_parser.add_argument(
        "--docs", required=True, help="Documentation root to scan."
    )
    validate_parser.add_argument(
        "--pattern",
        default=DEFAULT_PATTERN,
        help="Glob pattern for documents, relative to --docs.",
    )
    validate_parser.add_argument(
        "--language",
        action="append",
        dest="languages",
        help="Fence language to validate; repeatable. Defaults to typescript and ts.",
    )
    validate_parser.add_argument(
        "--exclude",
        action="append",
        default=[],
        help="Gitignore-style pattern of documents to skip; repeatable.",
    )
    validate_parser.add_argument(
        "--verify-cli",
        default=str(DEFAULT_VERIFY_CLI),
        help="Path to the verify-cli JavaScript entry point.",
    )
    validate_parser.add_argument(
        "--corpus",
        default=str(DEFAULT_CORPUS),
        help="Contract corpus directory passed to verify-cli.",
    )
    validate_parser.add_argument(
        "--checker-command",
        default=shlex.join(DEFAULT_CHECKER_COMMAND),
        help="Static checker command; the example file path is appended.",
    )
    validate_parser.add_argument(
        "--scratch-dir",
        required=False,
        help="Directory for temporary example files. Defaults to the system temp dir.",
    )

    stale_parser = subparsers.add_parser("check-stale")
    stale_parser.add_argument(
        "--docs", required=True, help="Documentation root holding generated pages."
    )
    stale_parser.add_argument(
        "--source-root",
        default="..",
        help="Root holding corpus/ and verify-cli/.",
    )
    return parser


def run(argv: list[str], stdout: TextIO, stderr: TextIO) -> int:
    """Run CLI command.

    Args:
        argv: CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit:
        logger.warning(f"Argument parsing failed (argv={argv})")
        return 2
    if args.command == "validate-examples":
        return _run_validate_examples(args=args, stdout=stdout, stderr=stderr)
    if args.command == "check-stale":
        return _run_check_stale(args=args, stdout=stdout, stderr=stderr)

    logger.warning(f"Unsupported command (command={args.command})")
    stderr.write(f"Unsupported command: {args.command}\n")
    return 2


def _run_validate_examples(
    args: argparse.Namespace, stdout: TextIO, stderr: TextIO
) -> int:
    """Run validate-examples command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    docs_root = Path(args.docs).resolve()
    if not docs_root.is_dir():
        logger.warning(f"Docs path is not a directory (path={docs_root})")
        stderr.write(f"Docs path does not exist: {docs_root}\n")
        return 2
    checker_command = shlex.split(args.checker_command)
    if not checker_command:
        stderr.write("checker-command must not be empty\n")
        return 2
    verify_cli = Path(args.verify_cli)
    if not verify_cli.exists():
        logger.warning(f"verify-cli entry point not found (path={verify_cli})")

    try:
        ignore = IgnoreMatcher.from_docs_root(docs_root, extra_patterns=args.exclude)
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"Failed to read ignore file (error={exc})")
        stderr.write(f"Failed to read ignore file: {exc}\n")
        return 2

    console = _build_console(stdout)
    console.print("🔧 Validating documentation examples...\n")
    documents = _load_documents(docs_root, args.pattern, ignore, stderr)
    if documents is None:
        return 2
    console.print(f"Found {len(documents)} markdown files\n")

    def _on_document(document: Document, fragments: list[CodeFragment]) -> None:
        console.print(
            f"📄 {document.path.relative_to(docs_root)}", markup=False, highlight=False
        )

    def _on_outcome(document: Document, outcome: ValidationOutcome) -> None:
        _emit_outcome(console=console, outcome=outcome)

    scratch_parent = Path(args.scratch_dir) if args.scratch_dir else None
    try:
        with open_scratch_area(parent=scratch_parent) as scratch:
            pipeline = ValidationPipeline(
                checker=build_checker(command=checker_command),
                verifier=build_verifier(
                    cli_entry=verify_cli, corpus_path=Path(args.corpus)
                ),
                scratch=scratch,
                languages=args.languages or DEFAULT_LANGUAGES,
                on_document=_on_document,
                on_outcome=_on_outcome,
            )
            report = pipeline.run(documents)
    except OSError as exc:
        logger.warning(f"Scratch area failure (error={exc})")
        stderr.write(f"Scratch area failure: {exc}\n")
        return 2

    _emit_report(console=console, report=report)
    return report.exit_code


def build_checker(command: list[str]) -> Checker:
    """Create the static checker.

    Args:
        command: Checker command without the example path.

    Returns:
        Configured checker.
    """
    return TypeScriptChecker(command=command)


def build_verifier(cli_entry: Path, corpus_path: Path) -> Verifier:
    """Create the contract verifier.

    Args:
        cli_entry: verify-cli JavaScript entry point.
        corpus_path: Contract corpus directory.

    Returns:
        Configured verifier.
    """
    return VerifyCliVerifier(cli_entry=cli_entry, corpus_path=corpus_path)


def _load_documents(
    docs_root: Path, pattern: str, ignore: IgnoreMatcher, stderr: TextIO
) -> list[Document] | None:
    """Read all corpus documents, reporting an unreadable corpus on stderr."""
    try:
        return list(iter_documents(docs_root, pattern=pattern, ignore=ignore))
    except CorpusError as exc:
        stderr.write(f"{exc}\n")
        return None


def _build_console(stdout: TextIO) -> Console:
    return Console(
        file=stdout,
        force_terminal=False,
        color_system="truecolor",
        soft_wrap=True,
        emoji=False,
    )


def _emit_outcome(console: Console, outcome: ValidationOutcome) -> None:
    fragment = outcome.fragment
    if outcome.passed:
        console.print(f"   ✅ Line {fragment.source_line}")
        return
    stage = "TypeScript validation" if not outcome.compiled else "CLI validation"
    console.print(f"\n❌ {stage} failed:", markup=False, highlight=False)
    console.print(f"   File: {fragment.location}", markup=False, highlight=False)
    console.print(
        f"   Error: {outcome.diagnostic}", markup=False, highlight=False
    )


def _emit_report(console: Console, report: Report) -> None:
    console.print(f"\n{'=' * SUMMARY_RULE_WIDTH}")
    console.print(f"Total code blocks: {report.total}")
    console.print(f"✅ Validated: {report.validated}")
    console.print(f"❌ Failed: {report.failed}")
    console.print(
        f"total={report.total} validated={report.validated} "
        f"failed={report.failed} skipped={report.skipped}"
    )
    if report.failed > 0:
        console.print("\n❌ Validation failed! Fix the errors above and try again.")
        console.print("status=failure")
    else:
        console.print("\n✅ All examples validated successfully!")
        console.print("status=success")


def _run_check_stale(args: argparse.Namespace, stdout: TextIO, stderr: TextIO) -> int:
    """Run check-stale command.

    Args:
        args: Parsed CLI arguments.
        stdout: Standard output stream.
        stderr: Standard error stream.

    Returns:
        Exit code.
    """
    docs_root = Path(args.docs).resolve()
    source_root = Path(args.source_root).resolve()
    if not docs_root.is_dir():
        logger.warning(f"Docs path is not a directory (path={docs_root})")
        stderr.write(f"Docs path does not exist: {docs_root}\n")
        return 2

    console = _build_console(stdout)
    console.print("🔍 Checking if auto-generated docs are stale...\n")
    try:
        results = [check_rule(rule, source_root) for rule in default_rules(docs_root)]
    except OSError as exc:
        logger.warning(f"Failed to stat generated docs (error={exc})")
        stderr.write(f"Failed to stat generated docs: {exc}\n")
        return 2

    for result in results:
        _emit_staleness(console=console, result=result)

    if any(result.stale for result in results):
        console.print("💡 To regenerate all: npm run docs:generate")
        return 1
    console.print("🎉 All auto-generated docs are up to date!")
    return 0


def _emit_staleness(console: Console, result: StalenessResult) -> None:
    if not result.stale:
        console.print(f"✅ {result.name} are up to date\n")
        return
    console.print(f"⚠️  {result.name} are STALE")
    console.print(f"   Source: {_isoformat(result.source_mtime)}")
    console.print(f"   Docs:   {_isoformat(result.target_mtime)}")
    console.print(f"   Run: {result.hint}\n")


def _isoformat(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).isoformat()


def main() -> None:
    """Run the CLI application and exit."""
    configure_logging()
    exit_code = run(sys.argv[1:], stdout=sys.stdout, stderr=sys.stderr)
    raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
