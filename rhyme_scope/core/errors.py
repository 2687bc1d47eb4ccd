"""Exception hierarchy raised by the rhyme analysis core and its collaborators."""

from __future__ import annotations

from typing import Optional


class RhymeScopeError(Exception):
    """Base class for every error raised by RhymeScope."""


class VerseShapeError(RhymeScopeError, ValueError):
    """Input verse does not have the expected structure."""


class InputShapeError(VerseShapeError):
    """The verse is not an ordered sequence of lines."""


class LineShapeError(VerseShapeError):
    """A line lacks its text or its character sequence."""

    def __init__(self, message: str, *, line_index: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_index = line_index


class CharInfoShapeError(VerseShapeError):
    """A character entry lacks one of its text fields."""

    def __init__(
        self,
        message: str,
        *,
        line_index: Optional[int] = None,
        char_index: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.line_index = line_index
        self.char_index = char_index


class InputLimitError(RhymeScopeError, ValueError):
    """The verse exceeds the configured size bounds."""


class OptionsError(RhymeScopeError, ValueError):
    """Analysis options are malformed."""


class NotReadyError(RhymeScopeError, RuntimeError):
    """The rhyme mapping table was used before it was loaded."""


class MappingLoadError(RhymeScopeError):
    """The rhyme mapping source could not be read or parsed."""


__all__ = [
    "RhymeScopeError",
    "VerseShapeError",
    "InputShapeError",
    "LineShapeError",
    "CharInfoShapeError",
    "InputLimitError",
    "OptionsError",
    "NotReadyError",
    "MappingLoadError",
]
