"""Meal slot planning: canonical slot order, catalog tags and per-slot budgets."""

from __future__ import annotations

import logging
from typing import Iterable, List

from app.exceptions import ServiceValidationError
from domain.enums import SLOT_ORDER, SLOT_TAGS, MealSlot
from domain.nutrition import SlotSpec

logger = logging.getLogger("nutriplan.slots")


def normalize_slots(preferences: Iterable) -> List[MealSlot]:
    """
    Map a user's meal preferences onto MealSlot members in canonical order.

    Snack always sits between lunch and dinner whatever the input order.
    Duplicates collapse; unknown names are rejected.
    """
    chosen = set()
    unknown = []
    for raw in preferences or ():
        try:
            chosen.add(MealSlot(str(getattr(raw, "value", raw)).strip().lower()))
        except ValueError:
            unknown.append(raw)

    if unknown:
        raise ServiceValidationError(
            f"Unknown meal slots: {', '.join(map(str, unknown))}",
            details={"unknown_slots": [str(u) for u in unknown]},
        )
    if not chosen:
        raise ServiceValidationError(
            "Profile is incomplete: missing meals",
            details={"missing_fields": ["meals"]},
            code="PROFILE_INCOMPLETE",
        )
    return [slot for slot in SLOT_ORDER if slot in chosen]


def plan_slots(preferences: Iterable, daily_target: int) -> List[SlotSpec]:
    """Ordered slots, each with the same nominal budget floor(target / count)."""
    slots = normalize_slots(preferences)
    budget = int(daily_target) // len(slots)
    logger.debug(f"slots_planned slots={[s.value for s in slots]} budget={budget}")
    return [SlotSpec(slot=slot, tag=SLOT_TAGS[slot], budget=budget) for slot in slots]
