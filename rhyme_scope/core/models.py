"""Dataclasses describing verse input, match candidates and analysis output."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Tuple

UNKNOWN_GROUP = "unknown"
SEQUENCE_SEPARATOR = "_"


def is_known_group(label: str) -> bool:
    """Return whether ``label`` names an identifiable rhyme class."""

    return bool(label) and label != UNKNOWN_GROUP


def sequence_key(sequence: Tuple[str, ...]) -> str:
    return SEQUENCE_SEPARATOR.join(sequence)


class RhymeType(Enum):
    END_RHYME = "end_rhyme"
    INTER_LINE_RHYME = "inter_line_rhyme"
    INTERNAL_RHYME = "internal_rhyme"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ")


@dataclass(frozen=True)
class CharInfo:
    """One character with its pinyin and rhyme-group labels."""

    character: str
    transcription: str
    normal_group: str
    strict_group: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "char": self.character,
            "pinyin": self.transcription,
            "normalGroup": self.normal_group,
            "strictGroup": self.strict_group,
        }


@dataclass(frozen=True)
class Line:
    text: str
    chars: Tuple[CharInfo, ...] = ()

    def __len__(self) -> int:
        return len(self.chars)

    def to_dict(self) -> Dict[str, Any]:
        return {"line": self.text, "charInfos": [info.to_dict() for info in self.chars]}


@dataclass(frozen=True)
class Verse:
    lines: Tuple[Line, ...] = ()

    def __len__(self) -> int:
        return len(self.lines)

    def __iter__(self) -> Iterator[Line]:
        return iter(self.lines)

    def __getitem__(self, index: int) -> Line:
        return self.lines[index]

    @property
    def total_chars(self) -> int:
        return sum(len(line) for line in self.lines)

    def to_list(self) -> List[Dict[str, Any]]:
        return [line.to_dict() for line in self.lines]


@dataclass(frozen=True)
class CandidateSpan:
    """A contiguous run of known rhyme groups inside a single line."""

    line_index: int
    start_index: int
    end_index: int
    sequence: Tuple[str, ...]
    characters: Tuple[str, ...]
    transcriptions: Tuple[str, ...]
    is_end_of_line: bool

    @property
    def length(self) -> int:
        return self.end_index - self.start_index + 1

    @property
    def sequence_key(self) -> str:
        return sequence_key(self.sequence)

    @property
    def priority_score(self) -> int:
        return (1000 if self.is_end_of_line else 0) + self.length * 10

    @property
    def text(self) -> str:
        return "".join(self.characters)

    def cells(self) -> Iterator[Tuple[int, int]]:
        for index in range(self.start_index, self.end_index + 1):
            yield (self.line_index, index)


@dataclass(frozen=True)
class CandidateMatch:
    first: CandidateSpan
    second: CandidateSpan
    rhyme_type: RhymeType
    interval: int
    priority: int

    @property
    def sequence(self) -> Tuple[str, ...]:
        return self.first.sequence

    @property
    def sequence_key(self) -> str:
        return self.first.sequence_key

    @property
    def length(self) -> int:
        return self.first.length

    def cells(self) -> Iterator[Tuple[int, int]]:
        yield from self.first.cells()
        yield from self.second.cells()


@dataclass(frozen=True)
class Position:
    line: int
    start_char: int
    length: int

    def cells(self) -> Iterator[Tuple[int, int]]:
        for offset in range(self.length):
            yield (self.line, self.start_char + offset)

    def to_dict(self) -> Dict[str, int]:
        return {"line": self.line, "startChar": self.start_char, "length": self.length}


@dataclass(frozen=True)
class RhymeResult:
    """A committed rhyme between two spans."""

    id: str
    rhyme_type: RhymeType
    rhyme_group: str
    sequence: Tuple[str, ...]
    positions: Tuple[Position, Position]
    characters: Tuple[Tuple[str, ...], Tuple[str, ...]]
    transcriptions: Tuple[Tuple[str, ...], Tuple[str, ...]]
    color: str
    interval: int = 0
    priority: int = 0
    similarity: float = 1.0

    @property
    def sequence_length(self) -> int:
        return len(self.sequence)

    @property
    def sequence_key(self) -> str:
        return sequence_key(self.sequence)

    @property
    def label(self) -> str:
        return f"{self.sequence_length}-character {self.rhyme_type.display_name}"

    def cells(self) -> Iterator[Tuple[int, int]]:
        for position in self.positions:
            yield from position.cells()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.rhyme_type.value,
            "rhymeType": self.label,
            "rhymeGroup": self.rhyme_group,
            "sequenceLength": self.sequence_length,
            "sequence": list(self.sequence),
            "positions": [position.to_dict() for position in self.positions],
            "chars": [list(chars) for chars in self.characters],
            "pinyins": [list(values) for values in self.transcriptions],
            "similarity": self.similarity,
            "color": self.color,
        }


@dataclass(frozen=True)
class AnalysisSummary:
    total_lines: int = 0
    total_rhyme_count: int = 0
    end_rhyme: int = 0
    internal_rhyme: int = 0

    @property
    def rhyme_types(self) -> Dict[str, int]:
        return {"end_rhyme": self.end_rhyme, "internal_rhyme": self.internal_rhyme}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "totalLines": self.total_lines,
            "totalRhymeCount": self.total_rhyme_count,
            "rhymeTypes": {
                "endRhyme": self.end_rhyme,
                "internalRhyme": self.internal_rhyme,
            },
        }


@dataclass(frozen=True)
class AnalysisResult:
    verse: Verse
    results: Tuple[RhymeResult, ...] = ()
    summary: AnalysisSummary = field(default_factory=AnalysisSummary)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rhymeGroups": self.verse.to_list(),
            "analysisResults": [result.to_dict() for result in self.results],
            "summary": self.summary.to_dict(),
        }


__all__ = [
    "UNKNOWN_GROUP",
    "SEQUENCE_SEPARATOR",
    "is_known_group",
    "sequence_key",
    "RhymeType",
    "CharInfo",
    "Line",
    "Verse",
    "CandidateSpan",
    "CandidateMatch",
    "Position",
    "RhymeResult",
    "AnalysisSummary",
    "AnalysisResult",
]
