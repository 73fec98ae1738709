"""Capacity-bounded resource storage shared by materials and products."""

from __future__ import annotations

from dataclasses import dataclass, field
from hashlib import sha256
from typing import Dict, Iterator, Mapping

from plantsim.world.resources import ResourceKey, resource_from_key


def _is_quantity(amount: object) -> bool:
    # Fractions and bools would otherwise truncate into a silent zero-unit change.
    return isinstance(amount, int) and not isinstance(amount, bool) and amount > 0


@dataclass(slots=True)
class ResourceLedger:
    """Sparse ``key -> quantity`` store whose total never exceeds ``capacity``.

    Every mutation is all-or-nothing: a rejected call returns ``False`` and
    leaves the contents untouched.
    """

    capacity: int
    items: Dict[ResourceKey, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.capacity < 0:
            raise ValueError(f"ledger capacity must be non-negative, got {self.capacity}")
        seeded = dict(self.items)
        self.items = {}
        if not self.replace_all(seeded):
            raise ValueError("initial ledger contents exceed capacity or contain negative amounts")

    def __contains__(self, key: object) -> bool:
        return key in self.items

    def __iter__(self) -> Iterator[ResourceKey]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def get(self, key: ResourceKey) -> int:
        return int(self.items.get(key, 0))

    def total(self) -> int:
        return sum(self.items.values())

    def free_space(self) -> int:
        return max(0, self.capacity - self.total())

    def add(self, key: ResourceKey, amount: int) -> bool:
        if not _is_quantity(amount):
            return False
        resource = resource_from_key(key)
        if resource is None:
            return False
        if self.total() + amount > self.capacity:
            return False
        self.items[resource] = self.get(resource) + amount
        return True

    def consume(self, key: ResourceKey, amount: int) -> bool:
        if not _is_quantity(amount):
            return False
        current = self.items.get(key)
        if current is None or current < amount:
            return False
        remaining = current - amount
        if remaining == 0:
            del self.items[key]
        else:
            self.items[key] = remaining
        return True

    def clamp_add(self, key: ResourceKey, amount: int) -> int:
        """Add as much of ``amount`` as fits and return the committed quantity."""

        fits = min(int(amount), self.free_space())
        if fits <= 0:
            return 0
        self.add(key, fits)
        return fits

    def replace_all(self, entries: Mapping[ResourceKey, int]) -> bool:
        rebuilt: Dict[ResourceKey, int] = {}
        for key, qty in entries.items():
            resource = resource_from_key(key)
            if resource is None or not (qty == 0 or _is_quantity(qty)):
                return False
            if qty == 0:
                continue
            rebuilt[resource] = rebuilt.get(resource, 0) + qty
        if sum(rebuilt.values()) > self.capacity:
            return False
        self.items = rebuilt
        return True

    def as_dict(self) -> Dict[ResourceKey, int]:
        return dict(self.items)

    def signature(self) -> str:
        payload = {key: self.items[key] for key in sorted(self.items)}
        digest = sha256(str((self.capacity, payload)).encode("utf-8")).hexdigest()
        return digest


__all__ = ["ResourceLedger"]
