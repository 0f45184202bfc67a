# Copyright 2026 Zsolt Kulcsar and Contributors. Licensed under the EUPL-1.2 or later
"""Scoped scratch area for temporary validation artifacts."""

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

RUN_PREFIX = "docval-run-"
UNIT_PREFIX = "example-"
PROJECT_PREFIX = "project-"


class ScratchArea:
    """Hand out uniquely named, fragment-scoped temporary artifacts.

    Every artifact lives below ``root`` and is removed when its context
    exits, whether the body returned or raised. Filesystem errors are not
    caught here.
    """

    def __init__(self, root: Path) -> None:
        """Initialize scratch area.

        Args:
            root: Existing directory owned by this scratch area.
        """
        self._root = root

    @property
    def root(self) -> Path:
        """Return the run directory."""
        return self._root

    @contextmanager
    def unit_file(self, code: str, suffix: str) -> Iterator[Path]:
        """Materialize ``code`` as a single temporary source file.

        Args:
            code: File content.
            suffix: File suffix, e.g. ``.ts``.

        Yields:
            Path of the temporary file.

        Raises:
            OSError: If the file cannot be created or removed.
        """
        fd, name = tempfile.mkstemp(prefix=UNIT_PREFIX, suffix=suffix, dir=self._root)
        path = Path(name)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(code)
            yield path
        finally:
            path.unlink(missing_ok=True)

    @contextmanager
    def project_dir(
        self, code: str, source_name: str, files: Mapping[str, str]
    ) -> Iterator[Path]:
        """Materialize ``code`` as a minimal standalone project.

        Args:
            code: Content of the project's only source file.
            source_name: File name of the source file.
            files: Extra project files keyed by file name.

        Yields:
            Path of the temporary project directory.

        Raises:
            OSError: If the project cannot be created or removed.
        """
        path = Path(tempfile.mkdtemp(prefix=PROJECT_PREFIX, dir=self._root))
        try:
            for file_name, content in files.items():
                (path / file_name).write_text(content, encoding="utf-8")
            (path / source_name).write_text(code, encoding="utf-8")
            yield path
        finally:
            shutil.rmtree(path)


@contextmanager
def open_scratch_area(parent: Path | None = None) -> Iterator[ScratchArea]:
    """Create an isolated run directory and remove it afterwards.

    Args:
        parent: Directory to create the run directory in; the system temporary
            directory when ``None``.

    Yields:
        Scratch area bound to the new run directory.

    Raises:
        OSError: If the run directory cannot be created or removed.
    """
    if parent is not None:
        parent.mkdir(parents=True, exist_ok=True)
    root = Path(tempfile.mkdtemp(prefix=RUN_PREFIX, dir=parent))
    logger.debug(f"Created scratch area (path={root})")
    try:
        yield ScratchArea(root=root)
    finally:
        shutil.rmtree(root)
        logger.debug(f"Removed scratch area (path={root})")
