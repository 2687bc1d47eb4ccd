# -*- coding: utf-8 -*-
"""
Flattens rhyme-group definitions into the lookup table read at start-up.

Input  (groups JSON):   {normalGroup: {strictGroup: [final, ...]}}
Output (mappings JSON): {final: {"normalGroup": ..., "strictGroup": ...}}

Without an input path the bundled default groups are used.
"""
import json
import sys
from pathlib import Path

from rhyme_scope.core.mapping_loader import build_rhyme_mappings
from rhyme_scope.core.rhyme_groups import DEFAULT_RHYME_GROUPS


def main(output_path="rhyme-mappings.json", groups_path=None):
    if groups_path:
        with open(groups_path, "r", encoding="utf-8") as handle:
            groups = json.load(handle)
    else:
        groups = DEFAULT_RHYME_GROUPS

    mappings = build_rhyme_mappings(groups)
    output = Path(output_path)
    output.write_text(json.dumps(mappings, ensure_ascii=False, indent=2), encoding="utf-8")

    print(f"Rhyme mappings written to: {output}")
    print(f"{len(mappings)} finals mapped")
    return mappings


if __name__ == "__main__":
    main(*sys.argv[1:3])
