"""
Single-slot meal composition.

Fills one slot from a sampled candidate pool: the highest-calorie dish that fits
the slot budget, or a better-filling pair of dishes when the budget allows two.
When nothing fits, the cheapest dish is taken and flagged as over budget.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Tuple

from app.exceptions import NoCandidatesError
from domain.enums import SLOT_TAGS, MealSlot
from domain.nutrition import MealSlotSelection, RecipeNutritionRecord

logger = logging.getLogger("nutriplan.composer")

# Below this budget a slot holds one dish only.
PAIR_SEARCH_MIN_BUDGET = 200


def _best_single(fits: Sequence[RecipeNutritionRecord]) -> RecipeNutritionRecord:
    best = fits[0]
    for record in fits[1:]:
        if record.calories > best.calories:
            best = record
    return best


def _best_pair(
    fits: Sequence[RecipeNutritionRecord], budget: float
) -> Optional[Tuple[RecipeNutritionRecord, RecipeNutritionRecord]]:
    best: Optional[Tuple[RecipeNutritionRecord, RecipeNutritionRecord]] = None
    best_sum = 0.0
    for i in range(len(fits)):
        for j in range(i + 1, len(fits)):
            total = fits[i].calories + fits[j].calories
            if total <= budget and (best is None or total > best_sum):
                best = (fits[i], fits[j])
                best_sum = total
    return best


def compose_slot(
    candidates: Sequence[RecipeNutritionRecord], budget: float, slot: MealSlot
) -> List[MealSlotSelection]:
    """
    Pick one or two dishes for a slot, as close to the budget as possible
    without going over.

    The single highest-calorie dish that fits is the default. When the budget
    is at least PAIR_SEARCH_MIN_BUDGET every pair of fitting dishes is tried
    and the best pair wins if it beats the single dish. When nothing fits the
    cheapest dish is used and flagged over budget.

    Ties keep the first dish or pair in candidate order.
    """
    usable = [c for c in candidates if c.calories > 0]
    if not usable:
        raise NoCandidatesError(slot.label, SLOT_TAGS[slot].value)

    fits = [c for c in usable if c.calories <= budget]

    if not fits:
        cheapest = usable[0]
        for record in usable[1:]:
            if record.calories < cheapest.calories:
                cheapest = record
        logger.warning(
            f"slot_over_budget slot={slot.value} budget={budget:.0f} "
            f"recipe={cheapest.recipe_id} calories={cheapest.calories:.0f}"
        )
        return [MealSlotSelection.snapshot(slot, cheapest, over_budget=True)]

    chosen: Tuple[RecipeNutritionRecord, ...] = (_best_single(fits),)

    if budget >= PAIR_SEARCH_MIN_BUDGET and len(fits) >= 2:
        pair = _best_pair(fits, budget)
        if pair is not None and pair[0].calories + pair[1].calories > chosen[0].calories:
            chosen = pair

    logger.debug(
        f"slot_composed slot={slot.value} budget={budget:.0f} dishes={len(chosen)} "
        f"calories={sum(r.calories for r in chosen):.0f}"
    )
    return [MealSlotSelection.snapshot(slot, record) for record in chosen]
