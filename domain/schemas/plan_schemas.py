from __future__ import annotations

import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.enums import MealSlot


class GenerateDayPlanRequest(BaseModel):
    user_id: UUID
    date: dt.date
    use_goal_calories: bool = False
    goal_id: Optional[UUID] = None


class GenerateWeekPlanRequest(BaseModel):
    user_id: UUID
    start_date: dt.date
    use_goal_calories: bool = False


class ReplaceMealRequest(BaseModel):
    user_id: UUID
    recipe_id: str = Field(..., min_length=1)


class MacroTotals(BaseModel):
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0


class IngredientResponse(BaseModel):
    name: str
    amount: str = ""


class PlannedMealResponse(BaseModel):
    type: str = Field(..., description="Slot label, e.g. 'Breakfast'")
    slot: MealSlot
    recipe_id: str
    name: str
    calories: float
    macros: MacroTotals
    image_url: Optional[str] = None
    ingredients: List[IngredientResponse] = []
    over_budget: bool = False


class DayPlanResponse(BaseModel):
    plan_id: UUID
    user_id: UUID
    date: dt.date
    goal_id: Optional[UUID] = None
    meals: List[PlannedMealResponse]
    total_calories: float
    total_macros: MacroTotals
    target_calories: int
    over_target: bool = False
    over_target_by: float = 0


class WeekPlanResponse(BaseModel):
    start_date: dt.date
    count: int
    plans: List[DayPlanResponse]
    message: Optional[str] = None


class DeletePlansResponse(BaseModel):
    deleted: int
