"""
Day plan mappers.
Handles transformation between engine drafts, DayPlan ORM rows and DTOs.
"""

import json
from typing import List

from domain.models import DayPlan, PlannedMeal
from domain.nutrition import (
    MACRO_FIELDS,
    DayPlanDraft,
    Ingredient,
    MacroVector,
    MealSlotSelection,
)
from domain.schemas.plan_schemas import (
    DayPlanResponse,
    IngredientResponse,
    MacroTotals,
    PlannedMealResponse,
)


class DayPlanMapper:
    """Mapper for day plan transformations."""

    @staticmethod
    def to_meal_row(position: int, meal: MealSlotSelection) -> PlannedMeal:
        """Copy a selection's snapshot into a new PlannedMeal row."""
        return PlannedMeal(
            position=position,
            slot=meal.slot,
            recipe_id=meal.recipe_id,
            name=meal.name,
            calories=meal.calories,
            image_url=meal.image_url,
            ingredients=json.dumps(
                [{"name": i.name, "amount": i.amount} for i in meal.ingredients]
            ),
            over_budget=meal.over_budget,
            **meal.macros.to_dict(),
        )

    @staticmethod
    def to_selection(row: PlannedMeal) -> MealSlotSelection:
        """Rebuild the stored snapshot of a meal row."""
        return MealSlotSelection(
            slot=row.slot,
            recipe_id=row.recipe_id,
            name=row.name,
            calories=row.calories,
            macros=MacroVector.from_mapping({n: getattr(row, n) for n in MACRO_FIELDS}),
            image_url=row.image_url,
            ingredients=tuple(
                Ingredient(i.get("name", ""), i.get("amount", ""))
                for i in json.loads(row.ingredients or "[]")
            ),
            over_budget=bool(row.over_budget),
        )

    @staticmethod
    def apply_draft(plan: DayPlan, draft: DayPlanDraft) -> DayPlan:
        """Overwrite a plan's meals and totals with a draft's content."""
        plan.plan_date = draft.plan_date
        plan.goal_id = draft.goal_id
        plan.is_goal_based = draft.goal_id is not None
        plan.target_calories = draft.target_calories
        plan.meals = [
            DayPlanMapper.to_meal_row(position, meal)
            for position, meal in enumerate(draft.meals)
        ]
        DayPlanMapper.apply_totals(plan, draft.total_calories, draft.total_macros.to_dict())
        return plan

    @staticmethod
    def apply_totals(plan: DayPlan, total_calories: float, macros: dict) -> None:
        plan.total_calories = total_calories
        for name in MACRO_FIELDS:
            setattr(plan, f"total_{name}", macros.get(name, 0))
        plan.over_target = total_calories > plan.target_calories

    @staticmethod
    def meal_to_response(meal: PlannedMeal) -> PlannedMealResponse:
        return PlannedMealResponse(
            type=meal.slot.label,
            slot=meal.slot,
            recipe_id=meal.recipe_id,
            name=meal.name,
            calories=meal.calories,
            macros=MacroTotals(**{name: getattr(meal, name) or 0 for name in MACRO_FIELDS}),
            image_url=meal.image_url,
            ingredients=[
                IngredientResponse(**item) for item in json.loads(meal.ingredients or "[]")
            ],
            over_budget=bool(meal.over_budget),
        )

    @staticmethod
    def to_response(plan: DayPlan) -> DayPlanResponse:
        return DayPlanResponse(
            plan_id=plan.plan_id,
            user_id=plan.user_id,
            date=plan.plan_date,
            goal_id=plan.goal_id,
            meals=[DayPlanMapper.meal_to_response(m) for m in plan.meals],
            total_calories=plan.total_calories,
            total_macros=MacroTotals(
                **{name: getattr(plan, f"total_{name}") or 0 for name in MACRO_FIELDS}
            ),
            target_calories=plan.target_calories,
            over_target=bool(plan.over_target),
            over_target_by=max(0.0, plan.total_calories - plan.target_calories),
        )

    @staticmethod
    def to_responses(plans: List[DayPlan]) -> List[DayPlanResponse]:
        return [DayPlanMapper.to_response(p) for p in plans]
