"""Loading of the pinyin → rhyme-group lookup table.

:class:`RhymeMappingLoader` reads the table once and hands back an immutable
:class:`RhymeMapping`. Code that needs rhyme groups holds that object; asking
the loader for lookups before :meth:`RhymeMappingLoader.load` is a usage
error and raises :class:`NotReadyError`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from rhyme_scope.utils.observability import get_logger

from .errors import MappingLoadError, NotReadyError
from .models import UNKNOWN_GROUP
from .rhyme_groups import DEFAULT_RHYME_GROUPS


@dataclass(frozen=True)
class RhymeGroupInfo:
    normal_group: str
    strict_group: str

    def to_dict(self) -> Dict[str, str]:
        return {"normalGroup": self.normal_group, "strictGroup": self.strict_group}


UNKNOWN_INFO = RhymeGroupInfo(UNKNOWN_GROUP, UNKNOWN_GROUP)


def build_rhyme_mappings(groups: Mapping[str, Mapping[str, Any]]) -> Dict[str, Dict[str, str]]:
    """Flatten ``{normal: {strict: [final, ...]}}`` into ``{final: {...}}``.

    Finals are trimmed; a final listed twice keeps its last assignment.
    """

    if not isinstance(groups, Mapping):
        raise MappingLoadError("Rhyme group definitions must be a JSON object")

    mappings: Dict[str, Dict[str, str]] = {}
    for normal_group, strict_groups in groups.items():
        if not isinstance(strict_groups, Mapping):
            raise MappingLoadError(f"Group {normal_group!r} must map strict groups to finals")
        for strict_group, finals in strict_groups.items():
            if not isinstance(finals, (list, tuple)):
                raise MappingLoadError(
                    f"Strict group {normal_group}/{strict_group} must list its finals"
                )
            for final in finals:
                if not isinstance(final, str) or not final.strip():
                    continue
                mappings[final.strip()] = {
                    "normalGroup": str(normal_group),
                    "strictGroup": str(strict_group),
                }
    return mappings


def _is_flat_mapping(payload: Mapping[str, Any]) -> bool:
    return all(
        isinstance(value, Mapping) and "normalGroup" in value for value in payload.values()
    )


class RhymeMapping:
    """Read-only pinyin → :class:`RhymeGroupInfo` table."""

    def __init__(self, entries: Mapping[str, RhymeGroupInfo], *, source: str = "default") -> None:
        self._entries: Mapping[str, RhymeGroupInfo] = MappingProxyType(dict(entries))
        self.source = source

    @classmethod
    def from_groups(
        cls, groups: Mapping[str, Mapping[str, Any]], *, source: str = "default"
    ) -> "RhymeMapping":
        return cls.from_flat(build_rhyme_mappings(groups), source=source)

    @classmethod
    def from_flat(
        cls, mappings: Mapping[str, Mapping[str, Any]], *, source: str = "default"
    ) -> "RhymeMapping":
        entries: Dict[str, RhymeGroupInfo] = {}
        for key, value in mappings.items():
            normal = value.get("normalGroup") if isinstance(value, Mapping) else None
            strict = value.get("strictGroup") if isinstance(value, Mapping) else None
            if not isinstance(normal, str) or not isinstance(strict, str):
                raise MappingLoadError(f"Mapping entry {key!r} lacks normalGroup/strictGroup")
            entries[str(key).strip()] = RhymeGroupInfo(normal, strict)
        return cls(entries, source=source)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, pinyin: object) -> bool:
        return isinstance(pinyin, str) and pinyin.strip() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def lookup(self, pinyin: Any) -> RhymeGroupInfo:
        """Return the groups for ``pinyin``; blank or unmapped input is unknown."""

        if not isinstance(pinyin, str) or not pinyin.strip():
            return UNKNOWN_INFO
        return self._entries.get(pinyin.strip(), UNKNOWN_INFO)

    def to_flat(self) -> Dict[str, Dict[str, str]]:
        return {key: info.to_dict() for key, info in self._entries.items()}


class RhymeMappingLoader:
    """Load a rhyme mapping from JSON, or the bundled default table.

    The file may contain either the flat ``{final: {normalGroup, strictGroup}}``
    table or the nested group definitions; the shape is detected on load.
    """

    def __init__(self, path: Optional[Path | str] = None) -> None:
        self.path: Optional[Path] = Path(path) if path is not None else None
        self._mapping: Optional[RhymeMapping] = None
        self._logger = get_logger(__name__).bind(component="rhyme_mapping_loader")

    @property
    def loaded(self) -> bool:
        return self._mapping is not None

    @property
    def mapping(self) -> RhymeMapping:
        if self._mapping is None:
            raise NotReadyError("Rhyme mappings are not loaded; call load() first")
        return self._mapping

    def lookup(self, pinyin: Any) -> RhymeGroupInfo:
        return self.mapping.lookup(pinyin)

    def load(self) -> RhymeMapping:
        if self._mapping is not None:
            return self._mapping

        if self.path is None:
            mapping = RhymeMapping.from_groups(DEFAULT_RHYME_GROUPS, source="default")
        else:
            mapping = self._load_file(self.path)

        self._mapping = mapping
        self._logger.info(
            "Rhyme mappings loaded",
            context={"source": mapping.source, "entries": len(mapping)},
        )
        return mapping

    def _load_file(self, path: Path) -> RhymeMapping:
        try:
            with path.open("r", encoding="utf-8") as handle:
                payload = json.load(handle)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            self._logger.error(
                "Failed to read rhyme mappings",
                context={"path": str(path), "error": str(exc)},
            )
            raise MappingLoadError(f"Failed to load rhyme mappings from {path}: {exc}") from exc

        if not isinstance(payload, Mapping) or not payload:
            raise MappingLoadError(f"Rhyme mappings in {path} must be a non-empty JSON object")
        if _is_flat_mapping(payload):
            return RhymeMapping.from_flat(payload, source=str(path))
        return RhymeMapping.from_groups(payload, source=str(path))


def load_rhyme_mapping(path: Optional[Path | str] = None) -> RhymeMapping:
    return RhymeMappingLoader(path).load()


__all__ = [
    "RhymeGroupInfo",
    "RhymeMapping",
    "RhymeMappingLoader",
    "UNKNOWN_INFO",
    "build_rhyme_mappings",
    "load_rhyme_mapping",
]
