"""Enumerate every contiguous run of known rhyme groups in a verse."""

from __future__ import annotations

from typing import List

from .models import CandidateSpan, Line, Verse, is_known_group


class SequenceExtractor:
    """Builds :class:`CandidateSpan` objects for all valid ``[start, end]`` runs.

    A run is valid only when every character in it carries a known
    ``normal_group``; a single unknown character invalidates the whole run
    and no shorter run is substituted for it. Spans are returned ordered by
    descending ``priority_score`` so end-of-line and longer spans come first.
    """

    def extract(self, verse: Verse) -> List[CandidateSpan]:
        spans: List[CandidateSpan] = []
        for line_index, line in enumerate(verse):
            spans.extend(self.extract_line(line, line_index))
        # sorted() is stable: ties keep line -> start -> end order.
        return sorted(spans, key=lambda span: span.priority_score, reverse=True)

    def extract_line(self, line: Line, line_index: int) -> List[CandidateSpan]:
        chars = line.chars
        last_index = len(chars) - 1
        spans: List[CandidateSpan] = []

        for start in range(len(chars)):
            for end in range(start, len(chars)):
                run = chars[start : end + 1]
                if not all(is_known_group(info.normal_group) for info in run):
                    continue
                spans.append(
                    CandidateSpan(
                        line_index=line_index,
                        start_index=start,
                        end_index=end,
                        sequence=tuple(info.normal_group for info in run),
                        characters=tuple(info.character for info in run),
                        transcriptions=tuple(info.transcription for info in run),
                        is_end_of_line=end == last_index,
                    )
                )
        return spans


def extract_rhyme_sequences(verse: Verse) -> List[CandidateSpan]:
    return SequenceExtractor().extract(verse)


__all__ = ["SequenceExtractor", "extract_rhyme_sequences"]
