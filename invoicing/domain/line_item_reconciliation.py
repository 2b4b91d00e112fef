from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any


def _descriptor_id(descriptor: Any) -> int | None:
    return getattr(descriptor, "id", None)


@dataclass(frozen=True, slots=True)
class LineItemReconciliation:
    """Plan that brings an invoice's persisted line items in line with a submission.

    Semantics (intentionally centralized):
    - A submitted descriptor whose id matches an existing line item updates it.
    - Any other descriptor (no id, unknown id, or an id already claimed by an
      earlier descriptor) becomes a new line item.
    - Existing line items claimed by no descriptor are deleted.

    After applying the plan the invoice holds exactly one line item per
    submitted descriptor.
    """

    updates: tuple[tuple[int, Any], ...]
    creates: tuple[Any, ...]
    deletes: tuple[int, ...]

    @classmethod
    def plan(
        cls,
        existing_ids: Iterable[int],
        submitted: Sequence[Any],
        *,
        id_of: Callable[[Any], int | None] = _descriptor_id,
    ) -> LineItemReconciliation:
        existing = list(existing_ids)
        known = set(existing)
        claimed: set[int] = set()
        updates: list[tuple[int, Any]] = []
        creates: list[Any] = []

        for descriptor in submitted:
            item_id = id_of(descriptor)
            if item_id is not None and item_id in known and item_id not in claimed:
                claimed.add(item_id)
                updates.append((item_id, descriptor))
            else:
                creates.append(descriptor)

        deletes = tuple(item_id for item_id in existing if item_id not in claimed)
        return cls(updates=tuple(updates), creates=tuple(creates), deletes=deletes)

    @property
    def surviving_ids(self) -> tuple[int, ...]:
        return tuple(item_id for item_id, _ in self.updates)

    @property
    def resulting_count(self) -> int:
        return len(self.updates) + len(self.creates)
