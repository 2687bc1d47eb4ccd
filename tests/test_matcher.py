from rhyme_scope.core.extractor import extract_rhyme_sequences
from rhyme_scope.core.matcher import MatchGenerator, match_priority, span_gap
from rhyme_scope.core.models import RhymeType
from rhyme_scope.core.options import AnalysisOptions


def _matches(verse, **options):
    spans = extract_rhyme_sequences(verse)
    return MatchGenerator(AnalysisOptions(**options)).generate(spans, verse)


def _keyed(matches, key):
    return [match for match in matches if match.sequence_key == key]


def test_adjacent_line_endings_form_end_rhyme(verse_factory):
    verse = verse_factory(["p", "ang"], ["q", "ang"])

    [match] = _keyed(_matches(verse), "ang")

    assert match.rhyme_type is RhymeType.END_RHYME
    assert match.interval == 1
    assert match.priority == 1000 - 1 + 10


def test_line_distance_gate_blocks_distant_pairs(verse_factory):
    verse = verse_factory(["ang"], ["b"], ["c"], ["d"], ["e"], ["ang"])

    assert _keyed(_matches(verse), "ang") == []

    [match] = _keyed(_matches(verse, inter_line_line_diff_tolerance=5), "ang")
    assert match.rhyme_type is RhymeType.END_RHYME
    assert match.interval == 5


def test_inter_line_rhyme_uses_closest_of_forward_and_reverse_distance(verse_factory):
    verse = verse_factory(
        ["a", "x1", "x2", "x3", "x4"],
        ["y1", "y2", "y3", "a", "y4", "y5", "y6"],
    )

    [match] = _keyed(_matches(verse), "a")

    # Forward distance is 3, distance from the line end is |4 - 3| = 1.
    assert match.rhyme_type is RhymeType.INTER_LINE_RHYME
    assert match.interval == 1
    assert match.priority == 500 - 1 + 10


def test_inter_line_rhyme_outside_tolerance_is_rejected(verse_factory):
    verse = verse_factory(
        ["a", "x1", "x2"],
        ["y1", "y2", "y3", "y4", "a"] + [f"z{index}" for index in range(7)],
    )

    assert _keyed(_matches(verse), "a") == []
    [match] = _keyed(_matches(verse, inter_line_tolerance=4), "a")
    assert match.interval == 4


def test_verbatim_repetition_is_not_inter_line_rhyme(verse_factory):
    repeated = verse_factory((["a", "b", "c"], "甲乙丙"), (["a", "b", "d"], "甲乙丁"))
    varied = verse_factory((["a", "b", "c"], "甲乙丙"), (["a", "b", "d"], "戊己丁"))

    assert [m for m in _matches(repeated) if m.rhyme_type is RhymeType.INTER_LINE_RHYME] == []
    inter_line = [m for m in _matches(varied) if m.rhyme_type is RhymeType.INTER_LINE_RHYME]
    assert {match.sequence_key for match in inter_line} == {"a", "b", "a_b"}


def test_end_rhyme_takes_precedence_over_internal_on_same_line(verse_factory):
    verse = verse_factory(["a", "x", "a"])

    [with_end] = _keyed(_matches(verse), "a")
    [without_end] = _keyed(_matches(verse, detect_end_rhyme=False), "a")

    assert with_end.rhyme_type is RhymeType.END_RHYME
    assert with_end.interval == 0
    assert with_end.priority == 1010
    assert without_end.rhyme_type is RhymeType.INTERNAL_RHYME
    assert without_end.interval == 1
    assert without_end.priority == 100 - 1 + 10


def test_line_end_spans_never_become_inter_line_rhyme(verse_factory):
    verse = verse_factory(["x", "a"], ["y", "a"])

    assert _keyed(_matches(verse, detect_end_rhyme=False), "a") == []


def test_internal_gap_boundary(verse_factory):
    at_limit = verse_factory(["a", "x", "a", "z"])
    past_limit = verse_factory(["a", "x", "y", "a", "z"])

    [accepted] = _keyed(_matches(at_limit), "a")
    assert accepted.rhyme_type is RhymeType.INTERNAL_RHYME
    assert accepted.interval == 1

    assert _keyed(_matches(past_limit), "a") == []
    [tolerated] = _keyed(_matches(past_limit, internal_rhyme_tolerance=1), "a")
    assert tolerated.interval == 2
    assert tolerated.priority == 100 - 2 + 10


def test_disabled_types_produce_no_candidates(verse_factory):
    verse = verse_factory(["a", "x", "a", "q"], ["a", "y", "z"])

    matches = _matches(
        verse,
        detect_end_rhyme=False,
        detect_inter_line_rhyme=False,
        detect_internal_rhyme=False,
    )

    assert matches == []


def test_span_gap_handles_order_and_overlap(verse_factory):
    spans = {
        (span.start_index, span.end_index): span
        for span in extract_rhyme_sequences(verse_factory(["a"] * 6))
    }

    assert span_gap(spans[(0, 1)], spans[(4, 5)]) == 2
    assert span_gap(spans[(4, 5)], spans[(0, 1)]) == 2
    assert span_gap(spans[(0, 1)], spans[(2, 3)]) == 0
    assert span_gap(spans[(0, 2)], spans[(1, 3)]) == 0


def test_generation_order_matches_full_pairwise_scan(verse_factory):
    verse = verse_factory(
        ["a", "b", "a", "c"],
        ["b", "a", "c", "a"],
        ["c", "a", "b"],
        ["a", "b", "c", "a", "b"],
    )
    spans = extract_rhyme_sequences(verse)
    generator = MatchGenerator()
    line_lengths = [len(line) for line in verse]

    expected = []
    for i, first in enumerate(spans):
        for second in spans[i + 1 :]:
            match = generator.classify(first, second, line_lengths)
            if match is not None:
                expected.append(match)

    assert generator.generate(spans, verse) == expected
    assert expected


def test_match_priority_formula():
    assert match_priority(RhymeType.END_RHYME, 2, 3) == 1028
    assert match_priority(RhymeType.INTER_LINE_RHYME, 0, 1) == 510
    assert match_priority(RhymeType.INTERNAL_RHYME, 1, 2) == 119
