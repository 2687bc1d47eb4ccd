"""Default rhyme-group table for Mandarin finals.

Keys are coarse groups, mapped to fine groups, mapped to the pinyin finals
that belong to them. Finals are spelled the way ``pypinyin`` reports them in
strict ``Style.FINALS`` mode (``v`` for ü, ``iou``/``uei``/``uen`` restored)
together with their common abbreviated spellings.
"""

from __future__ import annotations

from typing import Dict, List

RhymeGroupTable = Dict[str, Dict[str, List[str]]]

DEFAULT_RHYME_GROUPS: RhymeGroupTable = {
    "a": {"a": ["a"], "ia": ["ia"], "ua": ["ua"]},
    "o": {"o": ["o", "uo"], "e": ["e"]},
    "ie": {"ie": ["ie"], "ve": ["ve", "üe", "ue"]},
    "i": {"i": ["i"], "v": ["v", "ü"]},
    "u": {"u": ["u"]},
    "er": {"er": ["er"]},
    "ai": {"ai": ["ai"], "uai": ["uai"]},
    "ei": {"ei": ["ei"], "uei": ["uei", "ui"]},
    "ao": {"ao": ["ao"], "iao": ["iao"]},
    "ou": {"ou": ["ou"], "iou": ["iou", "iu"]},
    "an": {"an": ["an"], "ian": ["ian"], "uan": ["uan"], "van": ["van", "üan"]},
    "en": {"en": ["en"], "in": ["in"], "uen": ["uen", "un"], "vn": ["vn", "ün"]},
    "ang": {"ang": ["ang"], "iang": ["iang"], "uang": ["uang"]},
    "eng": {
        "eng": ["eng", "ueng"],
        "ing": ["ing"],
        "ong": ["ong"],
        "iong": ["iong"],
    },
}

__all__ = ["DEFAULT_RHYME_GROUPS", "RhymeGroupTable"]
