from __future__ import annotations

import json
from typing import Any, Dict

from .capabilities import full_name
from .store import CapabilityStore


def to_dict(store: CapabilityStore) -> Dict[str, Any]:
    info: Dict[str, Any] = {}
    if store.source_path:
        info["terminfo_file_path"] = store.source_path
    info["terminal_names"] = list(store.terminal_names)
    info["counts"] = {
        "booleans": len(store.booleans),
        "numbers": len(store.numbers),
        "strings": len(store.strings),
        "extended_booleans": len(store.extended_booleans),
        "extended_numbers": len(store.extended_numbers),
        "extended_strings": len(store.extended_strings),
    }
    # Standard tables iterate in ordinal order.
    info["booleans"] = {full_name(cap): value for cap, value in store.booleans.items()}
    info["numbers"] = {full_name(cap): value for cap, value in store.numbers.items()}
    info["strings"] = {full_name(cap): value for cap, value in store.strings.items()}
    info["extended_booleans"] = dict(sorted(store.extended_booleans.items()))
    info["extended_numbers"] = dict(sorted(store.extended_numbers.items()))
    info["extended_strings"] = dict(sorted(store.extended_strings.items()))
    if store.warnings:
        info["warnings"] = list(store.warnings)
    return info


def to_json(store: CapabilityStore, indent: int = 2) -> str:
    return json.dumps(to_dict(store), indent=indent, sort_keys=False)
