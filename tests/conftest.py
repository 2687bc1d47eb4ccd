import sys
from pathlib import Path
from typing import Optional, Sequence, Union

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from rhyme_scope.core.models import CharInfo, Line, Verse

Row = Union[Sequence[str], tuple]


def _placeholder_chars(line_index: int, length: int) -> str:
    # Distinct CJK code points per cell so no two spans repeat verbatim by accident.
    return "".join(chr(0x4E00 + line_index * 64 + offset) for offset in range(length))


def make_line(groups: Sequence[str], chars: Optional[str] = None, *, line_index: int = 0) -> Line:
    if chars is None:
        chars = _placeholder_chars(line_index, len(groups))
    assert len(chars) == len(groups), "chars and groups must align"
    infos = tuple(
        CharInfo(character=char, transcription=f"py{index}", normal_group=group, strict_group=group)
        for index, (char, group) in enumerate(zip(chars, groups))
    )
    return Line(text=chars, chars=infos)


def make_verse(*rows: Row) -> Verse:
    """Build a verse; each row is a list of groups or ``(groups, chars)``."""

    lines = []
    for line_index, row in enumerate(rows):
        if (
            isinstance(row, tuple)
            and len(row) == 2
            and isinstance(row[0], (list, tuple))
            and isinstance(row[1], str)
        ):
            groups, chars = row
        else:
            groups, chars = row, None
        lines.append(make_line(list(groups), chars, line_index=line_index))
    return Verse(lines=tuple(lines))


@pytest.fixture
def verse_factory():
    """Factory building verses from per-line rhyme-group lists."""

    return make_verse


@pytest.fixture
def line_factory():
    return make_line


class FakeClock:
    """Deterministic clock used to drive telemetry timers in tests."""

    def __init__(self, step: float = 0.01) -> None:
        self._current = 0.0
        self._step = step

    def __call__(self) -> float:
        value = self._current
        self._current += self._step
        return value


@pytest.fixture
def fake_clock():
    return FakeClock()
