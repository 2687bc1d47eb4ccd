"""Turn committed matches into identified, colored results and a summary."""

from __future__ import annotations

import re
from typing import Dict, List, Sequence

from .models import AnalysisSummary, CandidateMatch, Position, RhymeResult, Verse
from .selector import Selection

COLOR_PALETTE: Sequence[str] = (
    "#FF5733",
    "#33FF57",
    "#3357FF",
    "#FF33A8",
    "#FFC300",
    "#C70039",
    "#900C3F",
    "#581845",
    "#1ABC9C",
    "#3498DB",
)

_HEX_COLOR = re.compile(r"#[0-9A-Fa-f]{6}")


def result_id(ordinal: int) -> str:
    return f"rhyme_{ordinal:03d}"


class ResultAssembler:
    """Assign ids in commitment order and one palette color per sequence key."""

    def __init__(self, palette: Sequence[str] = COLOR_PALETTE) -> None:
        if not palette:
            raise ValueError("palette must contain at least one color")
        invalid = [
            color
            for color in palette
            if not isinstance(color, str) or not _HEX_COLOR.fullmatch(color)
        ]
        if invalid:
            raise ValueError(f"palette colors must be #RRGGBB strings, got {invalid!r}")
        self.palette = tuple(palette)

    def assemble(self, verse: Verse, selection: Selection) -> List[RhymeResult]:
        # Created per call so colors never leak between analyses.
        colors: Dict[str, str] = {}
        results: List[RhymeResult] = []
        for ordinal, match in enumerate(selection.committed, start=1):
            key = match.sequence_key
            if key not in colors:
                colors[key] = self.palette[len(colors) % len(self.palette)]
            results.append(self._to_result(match, result_id(ordinal), colors[key]))
        return results

    def summarize(self, verse: Verse, selection: Selection) -> AnalysisSummary:
        return AnalysisSummary(
            total_lines=len(verse),
            total_rhyme_count=len(selection.committed),
            end_rhyme=selection.end_rhyme,
            internal_rhyme=selection.internal_rhyme,
        )

    @staticmethod
    def _to_result(match: CandidateMatch, identifier: str, color: str) -> RhymeResult:
        first, second = match.first, match.second
        return RhymeResult(
            id=identifier,
            rhyme_type=match.rhyme_type,
            rhyme_group=match.sequence[0],
            sequence=match.sequence,
            positions=(
                Position(first.line_index, first.start_index, first.length),
                Position(second.line_index, second.start_index, second.length),
            ),
            characters=(first.characters, second.characters),
            transcriptions=(first.transcriptions, second.transcriptions),
            color=color,
            interval=match.interval,
            priority=match.priority,
        )


__all__ = ["COLOR_PALETTE", "ResultAssembler", "result_id"]
