import pytest

from rhyme_scope.core import analyze_rhyme_patterns
from rhyme_scope.core.errors import (
    CharInfoShapeError,
    InputShapeError,
    LineShapeError,
    VerseShapeError,
)
from rhyme_scope.core.models import CharInfo, Line, Verse
from rhyme_scope.core.validation import coerce_verse, validate_verse


def _char(character="光", group="ang"):
    return {"character": character, "transcription": "guang", "normal_group": group, "strict_group": group}


def test_verse_instances_pass_through(verse_factory):
    verse = verse_factory(["a", "b"])

    assert coerce_verse(verse) is verse


def test_mixed_objects_and_mappings_are_normalised():
    info = CharInfo("上", "shang", "ang", "ang")
    raw = [
        Line(text="上", chars=(info,)),
        {"text": "光", "chars": [_char()]},
        {"line": "月", "char_infos": [{"char": "月", "pinyin": "yue", "normalGroup": "ie", "strictGroup": "ve"}]},
    ]

    verse = coerce_verse(raw)

    assert isinstance(verse, Verse)
    assert len(verse) == 3
    assert verse[0].chars == (info,)
    assert verse[1].chars[0] == CharInfo("光", "guang", "ang", "ang")
    assert verse[2].chars[0].strict_group == "ve"


@pytest.mark.parametrize("raw", [None, "床前明月光", 42, {"lines": []}])
def test_non_sequence_verses_are_rejected(raw):
    with pytest.raises(InputShapeError):
        coerce_verse(raw)


def test_line_errors_report_their_index():
    with pytest.raises(LineShapeError) as missing_chars:
        coerce_verse([{"text": "a", "chars": [_char()]}, {"text": "b"}])
    assert missing_chars.value.line_index == 1

    with pytest.raises(LineShapeError) as missing_text:
        coerce_verse([{"chars": []}])
    assert missing_text.value.line_index == 0

    with pytest.raises(LineShapeError):
        coerce_verse([["not", "a", "line"]])

    with pytest.raises(LineShapeError):
        coerce_verse([{"text": "a", "chars": "a"}])


def test_char_errors_report_line_and_char_index():
    broken = _char()
    broken["strict_group"] = None

    with pytest.raises(CharInfoShapeError) as error:
        coerce_verse([{"text": "ab", "chars": [_char(), broken]}])

    assert (error.value.line_index, error.value.char_index) == (0, 1)
    assert "strict_group" in str(error.value)

    with pytest.raises(CharInfoShapeError):
        coerce_verse([{"text": "a", "chars": ["a"]}])


def test_shape_errors_share_a_value_error_base():
    with pytest.raises(VerseShapeError):
        coerce_verse([{"text": 1, "chars": []}])
    with pytest.raises(ValueError):
        coerce_verse(object())


def test_validate_verse_does_not_raise():
    assert validate_verse([{"text": "光", "chars": [_char()]}]) is True
    assert validate_verse([]) is True
    assert validate_verse([{"text": "光"}]) is False
    assert validate_verse("text") is False


def test_dataclass_containers_holding_mappings_are_rebuilt():
    wire_char = {"char": "光", "pinyin": "guang", "normalGroup": "ang", "strictGroup": "uang"}
    raw = Verse(
        lines=(
            {"line": "光光", "charInfos": [wire_char, wire_char]},
            Line(text="上", chars=(_char("上"),)),
        )
    )

    assert validate_verse(raw) is True
    verse = coerce_verse(raw)

    assert verse is not raw
    assert all(isinstance(line, Line) for line in verse)
    assert all(isinstance(info, CharInfo) for line in verse for info in line.chars)
    assert verse[0].chars[0] == CharInfo("光", "guang", "ang", "uang")
    assert verse[1].chars[0].character == "上"


def test_validated_dataclass_containers_can_be_analysed():
    raw = [
        Line(text="天光", chars=(_char("天", "an"), _char("光"))),
        Line(text="地上", chars=(_char("地", "i"), _char("上"))),
    ]

    assert validate_verse(raw) is True
    [result] = analyze_rhyme_patterns(raw).results

    assert result.characters == (("光",), ("上",))
