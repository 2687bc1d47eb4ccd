"""Convert raw text into a :class:`Verse` labelled with rhyme groups."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Tuple

from pypinyin import Style, lazy_pinyin

from .errors import InputShapeError, NotReadyError
from .mapping_loader import RhymeGroupInfo, RhymeMapping, RhymeMappingLoader
from .models import CharInfo, Line, Verse


@lru_cache(maxsize=4096)
def transcribe_char(char: str) -> Tuple[str, str]:
    """Return ``(toneless pinyin, strict final)`` for one character.

    Characters without a reading, such as punctuation or Latin letters, give
    ``("", "")``.
    """

    syllables = lazy_pinyin(char, style=Style.NORMAL, errors="ignore")
    if not syllables:
        return "", ""
    finals = lazy_pinyin(char, style=Style.FINALS, strict=True, errors="ignore")
    return syllables[0], finals[0] if finals else ""


class RhymeConverter:
    """Label each character of a text with pinyin and rhyme groups.

    The converter must be given a loaded :class:`RhymeMapping` (or a loader
    that has already been loaded).
    """

    def __init__(self, mapping: RhymeMapping | RhymeMappingLoader | None) -> None:
        if isinstance(mapping, RhymeMappingLoader):
            mapping = mapping.mapping
        if not isinstance(mapping, RhymeMapping):
            raise NotReadyError("RhymeConverter requires a loaded RhymeMapping")
        self.mapping = mapping

    def rhyme_info(self, pinyin: str, final: str = "") -> RhymeGroupInfo:
        if pinyin in self.mapping:
            return self.mapping.lookup(pinyin)
        return self.mapping.lookup(final)

    def char_info(self, char: str) -> CharInfo:
        pinyin, final = transcribe_char(char)
        info = self.rhyme_info(pinyin, final) if pinyin else self.mapping.lookup("")
        return CharInfo(
            character=char,
            transcription=pinyin,
            normal_group=info.normal_group,
            strict_group=info.strict_group,
        )

    def convert_line(self, text: str) -> Line:
        stripped = text.strip()
        return Line(text=stripped, chars=tuple(self.char_info(char) for char in stripped))

    def convert(self, text: Any) -> Verse:
        """Split ``text`` on newlines and label every non-blank line."""

        if not isinstance(text, str):
            raise InputShapeError(f"Text to convert must be a string, got {type(text).__name__}")
        lines = [line for line in text.splitlines() if line.strip()]
        return Verse(lines=tuple(self.convert_line(line) for line in lines))


def convert_text_to_verse(text: Any, mapping: RhymeMapping | RhymeMappingLoader | None) -> Verse:
    return RhymeConverter(mapping).convert(text)


__all__ = ["RhymeConverter", "convert_text_to_verse", "transcribe_char"]
