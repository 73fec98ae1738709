from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Mapping, MutableMapping

from plantsim.world.resources import ResourceKey, normalize_bom


@dataclass(frozen=True, slots=True)
class WorkshopRun:
    consumed: Mapping[ResourceKey, int] = field(default_factory=dict)
    produced: Mapping[ResourceKey, int] = field(default_factory=dict)
    ok: bool = False


@dataclass(frozen=True, slots=True)
class Workshop:
    """A fixed conversion rule: all ``inputs`` at once yield ``outputs``.

    ``cycle_time`` is shown to players but never enforced by the engine.
    """

    name: str
    inputs: Mapping[ResourceKey, int]
    outputs: Mapping[ResourceKey, int]
    cycle_time: int = 1

    def keys(self) -> frozenset[ResourceKey]:
        return frozenset(self.inputs) | frozenset(self.outputs)

    def can_run(self, available: Mapping[ResourceKey, int]) -> bool:
        return all(available.get(key, 0) >= qty for key, qty in self.inputs.items())

    def try_run(self, available: MutableMapping[ResourceKey, int]) -> WorkshopRun:
        """Consume the inputs from ``available`` in place when all are present.

        Outputs are reported, not written into ``available``; a product made
        here cannot feed a later workshop until it has been committed to
        storage.
        """

        if not self.can_run(available):
            return WorkshopRun()
        for key, qty in self.inputs.items():
            remaining = available.get(key, 0) - qty
            if remaining > 0:
                available[key] = remaining
            else:
                available.pop(key, None)
        return WorkshopRun(consumed=dict(self.inputs), produced=dict(self.outputs), ok=True)


def workshop(
    *,
    name: str,
    inputs: Mapping[object, object],
    outputs: Mapping[object, object],
    cycle_time: int = 1,
) -> Workshop:
    return Workshop(
        name=name,
        inputs=normalize_bom(inputs),
        outputs=normalize_bom(outputs),
        cycle_time=max(1, int(cycle_time)),
    )


def merge_into(target: Dict[ResourceKey, int], table: Mapping[ResourceKey, int]) -> None:
    for key, qty in table.items():
        target[key] = target.get(key, 0) + int(qty)


__all__ = [
    "Workshop",
    "WorkshopRun",
    "merge_into",
    "workshop",
]
