# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""TypeScript compiler checker and verify-cli contract verifier."""

import json
import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from docval.fragment import CodeFragment
from docval.tooling import ToolInvocationError, ToolResult

logger = logging.getLogger(__name__)

DEFAULT_CHECKER_COMMAND: tuple[str, ...] = ("npx", "tsc", "--noEmit", "--skipLibCheck")
PROJECT_CONFIG_NAME = "tsconfig.json"
PROJECT_SOURCE_NAME = "example.ts"
PROJECT_CONFIG: dict[str, object] = {
    "compilerOptions": {
        "target": "ES2020",
        "module": "commonjs",
        "strict": True,
        "esModuleInterop": True,
        "skipLibCheck": True,
    },
    "include": ["*.ts"],
}


def run_tool(command: Sequence[str], cwd: Path | None = None) -> ToolResult:
    """Run an external command and capture its output.

    Args:
        command: Program and arguments.
        cwd: Working directory for the command.

    Returns:
        Exit status and captured streams.

    Raises:
        ToolInvocationError: If the program cannot be started.
    """
    try:
        completed = subprocess.run(
            list(command),
            cwd=cwd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            check=False,
        )
    except OSError as exc:
        logger.warning(f"Failed to start tool (command={command[0]} error={exc})")
        raise ToolInvocationError(f"Failed to start {command[0]}: {exc}") from exc
    return ToolResult(
        returncode=completed.returncode,
        stdout=completed.stdout or "",
        stderr=completed.stderr or "",
    )


class TypeScriptChecker:
    """Type-check a single TypeScript file with ``tsc``."""

    suffix = ".ts"

    def __init__(self, command: Sequence[str] = DEFAULT_CHECKER_COMMAND) -> None:
        """Initialize checker.

        Args:
            command: Compiler command; the unit path is appended to it.
        """
        self._command = tuple(command)

    def check(self, fragment: CodeFragment, unit_path: Path) -> ToolResult:
        """Run the compiler on ``unit_path``."""
        return run_tool([*self._command, str(unit_path)])


class VerifyCliVerifier:
    """Run verify-cli against a temporary TypeScript project."""

    source_name = PROJECT_SOURCE_NAME

    def __init__(
        self, cli_entry: Path, corpus_path: Path, node_command: str = "node"
    ) -> None:
        """Initialize verifier.

        Args:
            cli_entry: Path to the verify-cli JavaScript entry point.
            corpus_path: Path to the contract corpus directory.
            node_command: Node.js executable.
        """
        self._cli_entry = cli_entry.resolve()
        self._corpus_path = corpus_path.resolve()
        self._node_command = node_command

    def config_files(self) -> dict[str, str]:
        """Return the minimal ``tsconfig.json`` for the project."""
        return {PROJECT_CONFIG_NAME: json.dumps(PROJECT_CONFIG, indent=2)}

    def verify(self, fragment: CodeFragment, project_dir: Path) -> ToolResult:
        """Run verify-cli from inside ``project_dir``."""
        return run_tool(
            [
                self._node_command,
                str(self._cli_entry),
                "--tsconfig",
                PROJECT_CONFIG_NAME,
                "--corpus",
                str(self._corpus_path),
            ],
            cwd=project_dir,
        )
