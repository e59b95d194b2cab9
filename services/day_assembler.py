"""Day assembly and over-target rebalancing."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple
from uuid import UUID

from domain.nutrition import DayPlanDraft, MacroVector, MealSlotSelection, OverBudgetWarning

logger = logging.getLogger("nutriplan.assembler")


def summarize(meals: Iterable[MealSlotSelection]) -> Tuple[float, MacroVector]:
    total_calories = 0.0
    total_macros = MacroVector()
    for meal in meals:
        total_calories += meal.calories
        total_macros = total_macros + meal.macros
    return total_calories, total_macros


def assemble_day(
    plan_date: date,
    target_calories: int,
    slot_selections: Sequence[Sequence[MealSlotSelection]],
    goal_id: Optional[UUID] = None,
) -> DayPlanDraft:
    """Flatten per-slot selections into one day and compute its totals."""
    meals = tuple(meal for selections in slot_selections for meal in selections)
    total_calories, total_macros = summarize(meals)
    return DayPlanDraft(
        plan_date=plan_date,
        target_calories=int(target_calories),
        meals=meals,
        total_calories=total_calories,
        total_macros=total_macros,
        goal_id=goal_id,
    )


def rebalance(draft: DayPlanDraft) -> DayPlanDraft:
    """
    Trim two-dish slots, in slot order, until the day fits its target.

    Each trimmed slot keeps its higher-calorie dish. Single-dish slots are
    never reduced. A day that is still over target once no two-dish slot is
    left carries an OverBudgetWarning. Running it again on its own output
    changes nothing.
    """
    if draft.total_calories <= draft.target_calories:
        return draft

    meals: List[MealSlotSelection] = list(draft.meals)
    running = draft.total_calories

    for slot in draft.slots():
        if running <= draft.target_calories:
            break
        in_slot = [m for m in meals if m.slot == slot]
        if len(in_slot) < 2:
            continue
        first, second = in_slot[0], in_slot[1]
        dropped = second if second.calories <= first.calories else first
        meals.remove(dropped)
        running -= dropped.calories
        logger.info(
            f"slot_trimmed date={draft.plan_date} slot={slot.value} "
            f"removed={dropped.recipe_id} calories={dropped.calories:.0f}"
        )

    total_calories, total_macros = summarize(meals)
    warnings: Tuple[OverBudgetWarning, ...] = ()
    if total_calories > draft.target_calories:
        warning = OverBudgetWarning(total_calories, draft.target_calories)
        logger.warning(f"day_over_target date={draft.plan_date} {warning.message}")
        warnings = (warning,)

    return replace(
        draft,
        meals=tuple(meals),
        total_calories=total_calories,
        total_macros=total_macros,
        warnings=warnings,
    )
