import sys
from collections.abc import Iterator
from pathlib import Path

import pytest


def _add_src_to_path() -> None:
    root = Path(__file__).resolve().parents[1]
    src_path = root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


_add_src_to_path()

from docval.scratch import ScratchArea, open_scratch_area  # noqa: E402


@pytest.fixture
def scratch(tmp_path: Path) -> Iterator[ScratchArea]:
    """Provide a scratch area rooted in the test's temporary directory."""
    with open_scratch_area(parent=tmp_path) as area:
        yield area
