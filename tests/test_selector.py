from rhyme_scope.core.extractor import extract_rhyme_sequences
from rhyme_scope.core.matcher import MatchGenerator
from rhyme_scope.core.models import CandidateMatch, CandidateSpan, RhymeType
from rhyme_scope.core.selector import GreedySelector


def _span(line, start, end, group="a", eol=False):
    length = end - start + 1
    return CandidateSpan(
        line_index=line,
        start_index=start,
        end_index=end,
        sequence=(group,) * length,
        characters=tuple("x" * length),
        transcriptions=tuple("x" * length),
        is_end_of_line=eol,
    )


def _match(first, second, rhyme_type, priority):
    return CandidateMatch(first, second, rhyme_type, interval=0, priority=priority)


def test_highest_priority_wins_contested_cells():
    low = _match(_span(0, 0, 0), _span(0, 2, 2), RhymeType.INTERNAL_RHYME, 110)
    high = _match(_span(0, 2, 2), _span(1, 2, 2, eol=True), RhymeType.END_RHYME, 1009)

    selection = GreedySelector().select([low, high])

    assert selection.committed == (high,)
    assert selection.end_rhyme == 1
    assert selection.internal_rhyme == 0


def test_ties_keep_generation_order():
    first = _match(_span(0, 0, 0), _span(1, 0, 0), RhymeType.INTER_LINE_RHYME, 510)
    second = _match(_span(0, 0, 0), _span(2, 0, 0), RhymeType.INTER_LINE_RHYME, 510)

    assert GreedySelector().select([first, second]).committed == (first,)
    assert GreedySelector().select([second, first]).committed == (second,)


def test_inter_line_and_internal_share_one_bucket():
    inter_line = _match(_span(0, 0, 0), _span(1, 0, 0), RhymeType.INTER_LINE_RHYME, 510)
    internal = _match(_span(2, 0, 0), _span(2, 1, 1), RhymeType.INTERNAL_RHYME, 110)
    end = _match(_span(3, 1, 1, eol=True), _span(4, 1, 1, eol=True), RhymeType.END_RHYME, 1009)

    selection = GreedySelector().select([internal, inter_line, end])

    assert selection.committed == (end, inter_line, internal)
    assert selection.end_rhyme == 1
    assert selection.internal_rhyme == 2


def test_committed_matches_never_share_a_cell(verse_factory):
    verse = verse_factory(
        ["a", "a", "b", "a"],
        ["b", "a", "a"],
        ["a", "b", "a", "b"],
    )
    matches = MatchGenerator().generate(extract_rhyme_sequences(verse), verse)

    selection = GreedySelector().select(matches)

    seen = set()
    for match in selection.committed:
        # Overlapping spans of one match may repeat a cell within that match.
        cells = set(match.cells())
        assert not cells & seen
        seen |= cells
    assert selection.committed


def test_empty_input_selects_nothing():
    selection = GreedySelector().select([])

    assert selection.committed == ()
    assert (selection.end_rhyme, selection.internal_rhyme) == (0, 0)
