from __future__ import annotations

from enum import Enum
from sys import intern
from typing import Dict, Iterable, Mapping

ResourceKey = str


def resource_from_key(key: object) -> ResourceKey | None:
    if isinstance(key, Enum):
        key = key.value if isinstance(key.value, str) else key.name
    if not isinstance(key, str):
        return None
    if "." in key:
        key = key.split(".")[-1]
    key = key.strip()
    if not key:
        return None
    return intern(key)


def normalize_bom(raw: Mapping[object, object]) -> Dict[ResourceKey, int]:
    bom: Dict[ResourceKey, int] = {}
    for key, qty in raw.items():
        resource = resource_from_key(key)
        if resource is None:
            continue
        if isinstance(qty, bool):
            continue
        try:
            amount = int(qty)
        except (TypeError, ValueError):
            continue
        if amount <= 0:
            continue
        bom[resource] = bom.get(resource, 0) + amount
    return bom


def normalize_keys(raw: Iterable[object]) -> tuple[ResourceKey, ...]:
    keys: list[ResourceKey] = []
    for item in raw:
        resource = resource_from_key(item)
        if resource is None or resource in keys:
            continue
        keys.append(resource)
    return tuple(keys)


__all__ = [
    "ResourceKey",
    "normalize_bom",
    "normalize_keys",
    "resource_from_key",
]
