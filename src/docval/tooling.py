# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""External tool abstractions for fragment validation."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from docval.fragment import CodeFragment

logger = logging.getLogger(__name__)


class ToolInvocationError(RuntimeError):
    """Represent an external tool that could not be run at all."""


@dataclass(frozen=True)
class ToolResult:
    """Represent one completed external tool run."""

    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Return ``True`` for a zero exit status."""
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Return stdout followed by stderr."""
        return self.stdout + self.stderr


class Checker(Protocol):
    """Define the static check applied to every target fragment.

    Attributes:
        suffix: File suffix of the temporary unit, e.g. ``.ts``.
    """

    suffix: str

    def check(self, fragment: CodeFragment, unit_path: Path) -> ToolResult:
        """Check one fragment materialized as a single source file.

        Args:
            fragment: Fragment being validated.
            unit_path: Temporary file holding ``fragment.code``.

        Returns:
            Tool exit status and captured streams.

        Raises:
            ToolInvocationError: If the checker cannot be started.
        """


class Verifier(Protocol):
    """Define the behavioral contract check for annotated fragments.

    Attributes:
        source_name: File name the fragment is written to inside the project.
    """

    source_name: str

    def config_files(self) -> dict[str, str]:
        """Return project configuration files keyed by file name."""

    def verify(self, fragment: CodeFragment, project_dir: Path) -> ToolResult:
        """Verify one fragment materialized as a minimal project.

        Args:
            fragment: Fragment being validated.
            project_dir: Temporary project holding the fragment and its config.

        Returns:
            Tool exit status and captured streams.

        Raises:
            ToolInvocationError: If the verifier cannot be started.
        """
