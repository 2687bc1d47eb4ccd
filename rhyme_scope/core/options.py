"""Configuration accepted by the rhyme pattern analyzer."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

from .errors import OptionsError

# camelCase names used by the JSON wire format.
_CAMEL_CASE_ALIASES: Dict[str, str] = {
    "detectEndRhyme": "detect_end_rhyme",
    "detectInterLineRhyme": "detect_inter_line_rhyme",
    "detectInternalRhyme": "detect_internal_rhyme",
    "interLineTolerance": "inter_line_tolerance",
    "interLineLineDiffTolerance": "inter_line_line_diff_tolerance",
    "internalRhymeTolerance": "internal_rhyme_tolerance",
    "maxLines": "max_lines",
    "maxLineLength": "max_line_length",
}

_FLAG_FIELDS = ("detect_end_rhyme", "detect_inter_line_rhyme", "detect_internal_rhyme")
_TOLERANCE_FIELDS = (
    "inter_line_tolerance",
    "inter_line_line_diff_tolerance",
    "internal_rhyme_tolerance",
)
_LIMIT_FIELDS = ("max_lines", "max_line_length")


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class AnalysisOptions:
    """Switches and tolerances for the three rhyme types.

    ``max_lines`` and ``max_line_length`` optionally bound the verse size,
    since candidate generation grows quadratically with it.
    """

    detect_end_rhyme: bool = True
    detect_inter_line_rhyme: bool = True
    detect_internal_rhyme: bool = True
    inter_line_tolerance: int = 2
    inter_line_line_diff_tolerance: int = 4
    internal_rhyme_tolerance: int = 0
    max_lines: Optional[int] = None
    max_line_length: Optional[int] = None

    def __post_init__(self) -> None:
        for name in _FLAG_FIELDS:
            if not isinstance(getattr(self, name), bool):
                raise OptionsError(f"{name} must be a boolean")
        for name in _TOLERANCE_FIELDS:
            value = getattr(self, name)
            if not _is_int(value) or value < 0:
                raise OptionsError(f"{name} must be a non-negative integer, got {value!r}")
        for name in _LIMIT_FIELDS:
            value = getattr(self, name)
            if value is not None and (not _is_int(value) or value < 1):
                raise OptionsError(f"{name} must be a positive integer or None, got {value!r}")

    @classmethod
    def from_mapping(cls, values: Optional[Mapping[str, Any]]) -> "AnalysisOptions":
        """Build options from snake_case or camelCase keys."""

        if not values:
            return cls()
        known = {item.name for item in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            name = _CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                raise OptionsError(f"Unknown analysis option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)

    @classmethod
    def coerce(
        cls,
        options: "AnalysisOptions | Mapping[str, Any] | None" = None,
        **overrides: Any,
    ) -> "AnalysisOptions":
        if options is None:
            resolved = cls()
        elif isinstance(options, cls):
            resolved = options
        elif isinstance(options, Mapping):
            resolved = cls.from_mapping(options)
        else:
            raise OptionsError(
                f"options must be AnalysisOptions or a mapping, got {type(options).__name__}"
            )
        if overrides:
            resolved = resolved.merged(overrides)
        return resolved

    def merged(self, overrides: Mapping[str, Any]) -> "AnalysisOptions":
        known = {item.name for item in fields(self)}
        changes: Dict[str, Any] = {}
        for key, value in overrides.items():
            name = _CAMEL_CASE_ALIASES.get(key, key)
            if name not in known:
                raise OptionsError(f"Unknown analysis option: {key!r}")
            changes[name] = value
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


DEFAULT_OPTIONS = AnalysisOptions()

__all__ = ["AnalysisOptions", "DEFAULT_OPTIONS"]
