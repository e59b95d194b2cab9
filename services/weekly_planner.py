"""
Weekly meal planning.

Seven single-dish-per-slot days drawn at random from candidate pools that are
fetched once per tag and shared across the week. Within a day a recipe is not
repeated unless every pooled recipe for the slot's tag is already used that
day.
"""

from __future__ import annotations

import logging
import random
from datetime import date, timedelta
from typing import Iterator, Mapping, Optional, Sequence
from uuid import UUID

from app.exceptions import InsufficientCandidatesError
from domain.enums import MealTimeTag
from domain.nutrition import DayPlanDraft, MealSlotSelection, RecipeNutritionRecord, SlotSpec
from services.day_assembler import assemble_day, rebalance

logger = logging.getLogger("nutriplan.weekly")

WEEK_LENGTH = 7
MIN_POOL_SIZE = 7


class WeeklyPlanner:
    """Random-assignment planner for a week of day plans."""

    def __init__(
        self,
        slot_specs: Sequence[SlotSpec],
        pools: Mapping[MealTimeTag, Sequence[RecipeNutritionRecord]],
        target_calories: int,
        goal_id: Optional[UUID] = None,
        min_pool_size: int = MIN_POOL_SIZE,
        rng: Optional[random.Random] = None,
    ):
        # recipes without calories are never eligible, as in the single-day composer
        pools = {tag: [r for r in pool if r.calories > 0] for tag, pool in pools.items()}
        for spec in slot_specs:
            found = len(pools.get(spec.tag) or ())
            if found < min_pool_size:
                raise InsufficientCandidatesError(
                    spec.label, spec.tag.value, min_pool_size, found
                )
        self.slot_specs = list(slot_specs)
        self.pools = pools
        self.target_calories = target_calories
        self.goal_id = goal_id
        self.rng = rng or random.Random()

    def plan_day(self, plan_date: date) -> DayPlanDraft:
        used: set[str] = set()
        selections = []
        for spec in self.slot_specs:
            pool = self.pools[spec.tag]
            fresh = [r for r in pool if r.recipe_id not in used]
            if fresh:
                record = self.rng.choice(fresh)
            else:
                logger.info(
                    f"weekly_pool_exhausted date={plan_date} slot={spec.slot.value} "
                    f"tag={spec.tag.value}"
                )
                record = self.rng.choice(pool)
            used.add(record.recipe_id)
            selections.append([MealSlotSelection.snapshot(spec.slot, record)])

        draft = assemble_day(plan_date, self.target_calories, selections, self.goal_id)
        return rebalance(draft)

    def days(self, start_date: date, count: int = WEEK_LENGTH) -> Iterator[DayPlanDraft]:
        """Yield one draft per day so callers can persist each as it is made."""
        for offset in range(count):
            yield self.plan_day(start_date + timedelta(days=offset))
