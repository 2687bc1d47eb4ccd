"""Greedy, priority-ordered selection of non-overlapping matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Set, Tuple

from .models import CandidateMatch, RhymeType

Cell = Tuple[int, int]


@dataclass(frozen=True)
class Selection:
    """Matches committed by :class:`GreedySelector`, in commitment order."""

    committed: Tuple[CandidateMatch, ...] = ()
    end_rhyme: int = 0
    internal_rhyme: int = 0


class GreedySelector:
    """Commit the highest-priority matches whose cells are still free.

    Ties keep generation order. A discarded match never claims cells, and a
    committed one is never revisited, so the result is a greedy
    approximation rather than an optimal assignment.
    """

    def select(self, matches: Iterable[CandidateMatch]) -> Selection:
        ordered = sorted(matches, key=lambda match: match.priority, reverse=True)
        claimed: Set[Cell] = set()
        committed: List[CandidateMatch] = []
        end_rhyme = internal_rhyme = 0

        for match in ordered:
            cells = list(match.cells())
            if any(cell in claimed for cell in cells):
                continue
            claimed.update(cells)
            committed.append(match)
            if match.rhyme_type is RhymeType.END_RHYME:
                end_rhyme += 1
            else:
                internal_rhyme += 1

        return Selection(
            committed=tuple(committed),
            end_rhyme=end_rhyme,
            internal_rhyme=internal_rhyme,
        )


__all__ = ["Cell", "GreedySelector", "Selection"]
