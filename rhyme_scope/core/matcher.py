"""Pair candidate spans with identical rhyme-group sequences and classify them."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from .models import CandidateMatch, CandidateSpan, RhymeType, Verse
from .options import AnalysisOptions, DEFAULT_OPTIONS

TYPE_BASE_PRIORITY: Dict[RhymeType, int] = {
    RhymeType.END_RHYME: 1000,
    RhymeType.INTER_LINE_RHYME: 500,
    RhymeType.INTERNAL_RHYME: 100,
}
LENGTH_WEIGHT = 10


def match_priority(rhyme_type: RhymeType, interval: int, length: int) -> int:
    return TYPE_BASE_PRIORITY[rhyme_type] - interval + length * LENGTH_WEIGHT


def span_gap(first: CandidateSpan, second: CandidateSpan) -> int:
    """Characters strictly between two spans of one line; 0 if they touch."""

    if first.end_index < second.start_index:
        return second.start_index - first.end_index - 1
    if second.end_index < first.start_index:
        return first.start_index - second.end_index - 1
    return 0


class MatchGenerator:
    """Classify span pairs as end, inter-line or internal rhyme.

    Rules are tried in that order and the first applicable one decides the
    pair, even when it then rejects it. Pairs further apart than
    ``inter_line_line_diff_tolerance`` lines are never considered.
    """

    def __init__(self, options: Optional[AnalysisOptions] = None) -> None:
        self.options = options or DEFAULT_OPTIONS

    def generate(self, spans: Sequence[CandidateSpan], verse: Verse) -> List[CandidateMatch]:
        """Return matches in the order a full pairwise scan of ``spans`` yields them.

        Only spans sharing a sequence key can match, so pairs are drawn from
        per-key buckets and re-ordered by their ``(i, j)`` indices afterwards.
        """

        line_lengths = [len(line) for line in verse]
        buckets: Dict[str, List[int]] = {}
        for index, span in enumerate(spans):
            buckets.setdefault(span.sequence_key, []).append(index)

        found: List[Tuple[int, int, CandidateMatch]] = []
        for members in buckets.values():
            for offset, first_index in enumerate(members):
                first = spans[first_index]
                for second_index in members[offset + 1 :]:
                    match = self.classify(first, spans[second_index], line_lengths)
                    if match is not None:
                        found.append((first_index, second_index, match))

        found.sort(key=lambda item: (item[0], item[1]))
        return [match for _, _, match in found]

    def classify(
        self,
        first: CandidateSpan,
        second: CandidateSpan,
        line_lengths: Sequence[int],
    ) -> Optional[CandidateMatch]:
        options = self.options
        line_diff = abs(first.line_index - second.line_index)
        if line_diff > options.inter_line_line_diff_tolerance:
            return None
        if first.sequence_key != second.sequence_key:
            return None

        touches_line_end = first.is_end_of_line or second.is_end_of_line

        if options.detect_end_rhyme and touches_line_end:
            return self._build(first, second, RhymeType.END_RHYME, line_diff)

        if options.detect_inter_line_rhyme and line_diff and not touches_line_end:
            # Verbatim repetition is not rhyme.
            if first.characters == second.characters:
                return None
            interval = self._positional_distance(first, second, line_lengths)
            if interval > options.inter_line_tolerance:
                return None
            return self._build(first, second, RhymeType.INTER_LINE_RHYME, interval)

        if options.detect_internal_rhyme and not line_diff:
            gap = span_gap(first, second)
            allowed = min(first.length, second.length) + options.internal_rhyme_tolerance
            if gap > allowed:
                return None
            return self._build(first, second, RhymeType.INTERNAL_RHYME, gap)

        return None

    @staticmethod
    def _positional_distance(
        first: CandidateSpan,
        second: CandidateSpan,
        line_lengths: Sequence[int],
    ) -> int:
        forward = abs(first.start_index - second.start_index)
        first_from_end = line_lengths[first.line_index] - 1 - first.end_index
        second_from_end = line_lengths[second.line_index] - 1 - second.end_index
        return min(forward, abs(first_from_end - second_from_end))

    @staticmethod
    def _build(
        first: CandidateSpan,
        second: CandidateSpan,
        rhyme_type: RhymeType,
        interval: int,
    ) -> CandidateMatch:
        return CandidateMatch(
            first=first,
            second=second,
            rhyme_type=rhyme_type,
            interval=interval,
            priority=match_priority(rhyme_type, interval, first.length),
        )


__all__ = [
    "LENGTH_WEIGHT",
    "TYPE_BASE_PRIORITY",
    "MatchGenerator",
    "match_priority",
    "span_gap",
]
