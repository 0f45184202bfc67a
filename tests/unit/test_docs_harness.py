# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Unit tests for the docval CLI harness."""

import io
import os
import re
from pathlib import Path

import pytest

from cli.docs_harness import run
from docval.fragment import CodeFragment
from docval.tooling import ToolResult


def _write_file(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def _strip_ansi(text: str) -> str:
    return re.sub(r"\x1b\[[0-9;]*m", "", text)


class _StubChecker:
    suffix = ".ts"

    def check(self, fragment: CodeFragment, unit_path: Path) -> ToolResult:
        if "@ts-error" in fragment.code:
            return ToolResult(returncode=2, stdout="error TS1005: ';' expected.")
        return ToolResult(returncode=0)


class _StubVerifier:
    source_name = "example.ts"

    def __init__(self) -> None:
        self.calls = 0

    def config_files(self) -> dict[str, str]:
        return {"tsconfig.json": "{}"}

    def verify(self, fragment: CodeFragment, project_dir: Path) -> ToolResult:
        self.calls += 1
        if "axios.get(url);" in fragment.code:
            return ToolResult(returncode=1, stdout="ERROR axios.get: missing catch\n")
        return ToolResult(returncode=0, stdout="No violations found.\n")


@pytest.fixture
def stub_tools(monkeypatch) -> _StubVerifier:
    verifier = _StubVerifier()
    monkeypatch.setattr(
        "cli.docs_harness.build_checker", lambda command: _StubChecker()
    )
    monkeypatch.setattr(
        "cli.docs_harness.build_verifier",
        lambda cli_entry, corpus_path: verifier,
    )
    return verifier


def test_cli_001_requires_a_command() -> None:
    exit_code = run([], stdout=io.StringIO(), stderr=io.StringIO())

    assert exit_code == 2


def test_cli_002_fails_when_docs_path_is_missing(tmp_path: Path) -> None:
    stderr = io.StringIO()

    exit_code = run(
        ["validate-examples", "--docs", str(tmp_path / "missing")],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Docs path does not exist" in stderr.getvalue()


def test_cli_003_validates_annotated_examples_and_reports_success(
    tmp_path: Path, stub_tools: _StubVerifier
) -> None:
    docs = tmp_path / "docs"
    _write_file(
        docs / "guides" / "axios.md",
        "\n".join(
            [
                "# Axios",
                "```typescript expectsViolation",
                "axios.get(url);",
                "```",
                "```typescript expectsClean",
                "await axios.get(url).catch(handle);",
                "```",
                "```bash",
                "npm install axios",
                "```",
            ]
        ),
    )
    _write_file(docs / "intro.md", "No code here.\n")
    stdout = io.StringIO()
    stderr = io.StringIO()

    exit_code = run(
        ["validate-examples", "--docs", str(docs), "--scratch-dir", str(tmp_path / "s")],
        stdout=stdout,
        stderr=stderr,
    )

    output = _strip_ansi(stdout.getvalue())
    assert exit_code == 0
    assert "Found 2 markdown files" in output
    assert f"📄 {Path('guides') / 'axios.md'}" in output
    assert "✅ Line 2" in output
    assert "✅ Line 5" in output
    assert "total=2 validated=2 failed=0 skipped=1" in output
    assert "status=success" in output
    assert stub_tools.calls == 2
    assert stderr.getvalue() == ""
    assert list((tmp_path / "s").iterdir()) == []


def test_cli_004_failed_example_sets_exit_code_one(
    tmp_path: Path, stub_tools: _StubVerifier
) -> None:
    docs = tmp_path / "docs"
    _write_file(
        docs / "broken.md",
        "```ts expectsViolation\n// @ts-error\nconst = ;\n```\n```ts\nok();\n```\n",
    )
    stdout = io.StringIO()

    exit_code = run(
        ["validate-examples", "--docs", str(docs)],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    output = _strip_ansi(stdout.getvalue())
    assert exit_code == 1
    assert "TypeScript validation failed" in output
    assert "broken.md:1" in output
    assert "error TS1005" in output
    assert "Total code blocks: 2" in output
    assert "status=failure" in output
    assert stub_tools.calls == 0


def test_cli_005_language_and_exclude_options(
    tmp_path: Path, stub_tools: _StubVerifier
) -> None:
    docs = tmp_path / "docs"
    _write_file(docs / "a.md", "```foo expectsViolation\naxios.get(url);\n```\n")
    _write_file(docs / "drafts" / "b.md", "```foo\n// @ts-error\n```\n")
    stdout = io.StringIO()

    exit_code = run(
        [
            "validate-examples",
            "--docs",
            str(docs),
            "--language",
            "foo",
            "--exclude",
            "drafts/",
        ],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    output = _strip_ansi(stdout.getvalue())
    assert exit_code == 0
    assert "total=1 validated=1 failed=0 skipped=0" in output


def test_cli_006_scratch_area_failure_is_fatal(
    tmp_path: Path, stub_tools: _StubVerifier
) -> None:
    docs = tmp_path / "docs"
    _write_file(docs / "a.md", "```ts\nok();\n```\n")
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    stderr = io.StringIO()

    exit_code = run(
        ["validate-examples", "--docs", str(docs), "--scratch-dir", str(blocker)],
        stdout=io.StringIO(),
        stderr=stderr,
    )

    assert exit_code == 2
    assert "Scratch area failure" in stderr.getvalue()


def test_cli_007_check_stale_reports_stale_pages(tmp_path: Path) -> None:
    root = tmp_path / "site"
    docs = root / "docs"
    _write_file(root / "corpus" / "schema" / "contract.schema.json", "{}")
    _write_file(docs / "contract-schema" / "schema-reference.md", "schema")
    _write_file(root / "corpus" / "packages" / "axios" / "contract.yaml", "x: 1")
    _write_file(docs / "supported-packages" / "overview.md", "packages")
    _write_file(root / "verify-cli" / "package.json", "{}")
    _write_file(docs / "cli-reference" / "overview.md", "cli")
    os.utime(root / "corpus" / "schema" / "contract.schema.json", (100.0, 100.0))
    os.utime(docs / "contract-schema" / "schema-reference.md", (200.0, 200.0))
    os.utime(root / "corpus" / "packages" / "axios" / "contract.yaml", (300.0, 300.0))
    os.utime(docs / "supported-packages" / "overview.md", (200.0, 200.0))
    os.utime(root / "verify-cli" / "package.json", (100.0, 100.0))
    os.utime(docs / "cli-reference" / "overview.md", (200.0, 200.0))
    stdout = io.StringIO()

    exit_code = run(
        ["check-stale", "--docs", str(docs), "--source-root", str(root)],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    output = _strip_ansi(stdout.getvalue())
    assert exit_code == 1
    assert "Schema docs are up to date" in output
    assert "Package docs are STALE" in output
    assert "Run: npm run docs:generate-packages" in output
    assert "CLI docs are up to date" in output


def test_cli_008_check_stale_succeeds_when_pages_are_fresh(tmp_path: Path) -> None:
    root = tmp_path / "site"
    docs = root / "docs"
    for page in (
        "contract-schema/schema-reference.md",
        "supported-packages/overview.md",
        "cli-reference/overview.md",
    ):
        _write_file(docs / page, "generated")
    stdout = io.StringIO()

    exit_code = run(
        ["check-stale", "--docs", str(docs), "--source-root", str(root)],
        stdout=stdout,
        stderr=io.StringIO(),
    )

    assert exit_code == 0
    assert "All auto-generated docs are up to date" in _strip_ansi(stdout.getvalue())
