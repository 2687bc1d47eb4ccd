"""Eager shape validation turning caller input into an immutable :class:`Verse`.

Lines and characters may be given as the dataclasses from
:mod:`rhyme_scope.core.models` or as plain mappings, using either the
snake_case field names or the camelCase names of the JSON wire format
(``line``/``charInfos`` and ``char``/``pinyin``/``normalGroup``/``strictGroup``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Optional, Tuple

from .errors import CharInfoShapeError, InputShapeError, LineShapeError
from .models import CharInfo, Line, Verse

_LINE_TEXT_KEYS = ("text", "line")
_LINE_CHARS_KEYS = ("chars", "charInfos", "char_infos")
_CHAR_FIELDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("character", ("character", "char")),
    ("transcription", ("transcription", "pinyin")),
    ("normal_group", ("normal_group", "normalGroup")),
    ("strict_group", ("strict_group", "strictGroup")),
)


def _first_present(mapping: Mapping, keys: Tuple[str, ...]) -> Any:
    for key in keys:
        if key in mapping:
            return mapping[key]
    return None


def _is_ordered_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _coerce_char(raw: Any, line_index: int, char_index: int) -> CharInfo:
    if isinstance(raw, CharInfo):
        values = {name: getattr(raw, name) for name, _ in _CHAR_FIELDS}
    elif isinstance(raw, Mapping):
        values = {name: _first_present(raw, keys) for name, keys in _CHAR_FIELDS}
    else:
        raise CharInfoShapeError(
            f"Character {char_index} of line {line_index} must be a CharInfo or mapping, "
            f"got {type(raw).__name__}",
            line_index=line_index,
            char_index=char_index,
        )

    invalid = [name for name, value in values.items() if not isinstance(value, str)]
    if invalid:
        raise CharInfoShapeError(
            f"Character {char_index} of line {line_index} has non-text fields: "
            + ", ".join(invalid),
            line_index=line_index,
            char_index=char_index,
        )
    if isinstance(raw, CharInfo):
        return raw
    return CharInfo(**values)


def _coerce_line(raw: Any, line_index: int) -> Line:
    text: Optional[Any]
    chars: Optional[Any]
    if isinstance(raw, Line):
        text, chars = raw.text, raw.chars
    elif isinstance(raw, Mapping):
        text = _first_present(raw, _LINE_TEXT_KEYS)
        chars = _first_present(raw, _LINE_CHARS_KEYS)
    else:
        raise LineShapeError(
            f"Line {line_index} must be a Line or mapping, got {type(raw).__name__}",
            line_index=line_index,
        )

    if not isinstance(text, str):
        raise LineShapeError(f"Line {line_index} is missing its text", line_index=line_index)
    if not _is_ordered_sequence(chars):
        raise LineShapeError(
            f"Line {line_index} is missing its character sequence", line_index=line_index
        )

    infos = tuple(
        _coerce_char(entry, line_index, char_index) for char_index, entry in enumerate(chars)
    )
    if isinstance(raw, Line) and infos == raw.chars:
        return raw
    return Line(text=text, chars=infos)


def coerce_verse(raw: Any) -> Verse:
    """Validate ``raw`` completely and return it as a :class:`Verse`.

    Raises :class:`InputShapeError`, :class:`LineShapeError` or
    :class:`CharInfoShapeError` on the first malformed element. Nothing is
    analysed until the whole input has been checked.
    """

    if isinstance(raw, Verse):
        lines = raw.lines
    elif _is_ordered_sequence(raw):
        lines = raw
    else:
        raise InputShapeError(
            f"Verse must be an ordered sequence of lines, got {type(raw).__name__}"
        )
    if not _is_ordered_sequence(lines):
        raise InputShapeError("Verse lines must be an ordered sequence")

    coerced = tuple(_coerce_line(line, index) for index, line in enumerate(lines))
    if isinstance(raw, Verse) and coerced == raw.lines:
        return raw
    return Verse(lines=coerced)


def validate_verse(raw: Any) -> bool:
    """Non-raising variant of :func:`coerce_verse`."""

    try:
        coerce_verse(raw)
    except (InputShapeError, LineShapeError, CharInfoShapeError):
        return False
    return True


__all__ = ["coerce_verse", "validate_verse"]
