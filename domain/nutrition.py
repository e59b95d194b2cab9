"""
Value types consumed and produced by the meal engine.

These are plain dataclasses, independent of the ORM and of the recipe catalog
documents, so the engine can run as a pure function over them. Nutrition data
is copied into frozen values when a recipe is selected, which keeps generated
plans isolated from later catalog edits.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, List, Mapping, Optional, Tuple
from uuid import UUID

from domain.enums import ActivityLevel, DietPattern, MealSlot, MealTimeTag, Sex

MACRO_FIELDS = ("protein", "carbs", "fat", "fiber", "sugar")


def nutrient_amount(value: Any) -> float:
    if value is None:
        return 0.0
    try:
        return max(0.0, float(value))
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class MacroVector:
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0
    fiber: float = 0.0
    sugar: float = 0.0

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "MacroVector":
        """Build from a nutrition mapping; missing or empty fields count as 0."""
        data = data or {}
        return cls(**{name: nutrient_amount(data.get(name)) for name in MACRO_FIELDS})

    def __add__(self, other: "MacroVector") -> "MacroVector":
        return MacroVector(
            *(getattr(self, name) + getattr(other, name) for name in MACRO_FIELDS)
        )

    def to_dict(self) -> dict:
        return {name: getattr(self, name) for name in MACRO_FIELDS}


@dataclass(frozen=True)
class Ingredient:
    name: str
    amount: str = ""


@dataclass(frozen=True)
class RecipeNutritionRecord:
    """A catalog recipe as seen by the engine."""

    recipe_id: str
    name: str
    calories: float
    macros: MacroVector = field(default_factory=MacroVector)
    image_url: Optional[str] = None
    ingredients: Tuple[Ingredient, ...] = ()


@dataclass(frozen=True)
class MealSlotSelection:
    """One chosen dish in a slot, with a point-in-time nutrition snapshot."""

    slot: MealSlot
    recipe_id: str
    name: str
    calories: float
    macros: MacroVector
    image_url: Optional[str] = None
    ingredients: Tuple[Ingredient, ...] = ()
    over_budget: bool = False

    @property
    def label(self) -> str:
        return self.slot.label

    @classmethod
    def snapshot(
        cls, slot: MealSlot, record: RecipeNutritionRecord, over_budget: bool = False
    ) -> "MealSlotSelection":
        return cls(
            slot=slot,
            recipe_id=record.recipe_id,
            name=record.name,
            calories=record.calories,
            macros=MacroVector(*(getattr(record.macros, n) for n in MACRO_FIELDS)),
            image_url=record.image_url,
            ingredients=tuple(Ingredient(i.name, i.amount) for i in record.ingredients),
            over_budget=over_budget,
        )


@dataclass(frozen=True)
class SlotSpec:
    """A meal slot of the day with its catalog tag and nominal calorie budget."""

    slot: MealSlot
    tag: MealTimeTag
    budget: int

    @property
    def label(self) -> str:
        return self.slot.label


@dataclass(frozen=True)
class OverBudgetWarning:
    """Recorded when a day stays above its target after rebalancing."""

    total_calories: float
    target_calories: int

    @property
    def excess(self) -> float:
        return self.total_calories - self.target_calories

    @property
    def message(self) -> str:
        return (
            f"Day total {self.total_calories:.0f} kcal exceeds target "
            f"{self.target_calories} kcal by {self.excess:.0f} kcal"
        )

    def to_dict(self) -> dict:
        return {
            "code": "OVER_BUDGET",
            "message": self.message,
            "total_calories": self.total_calories,
            "target_calories": self.target_calories,
        }


@dataclass(frozen=True)
class DayPlanDraft:
    """An assembled, not yet persisted, day plan."""

    plan_date: date
    target_calories: int
    meals: Tuple[MealSlotSelection, ...]
    total_calories: float
    total_macros: MacroVector
    goal_id: Optional[UUID] = None
    warnings: Tuple[OverBudgetWarning, ...] = ()

    @property
    def over_target(self) -> bool:
        return self.total_calories > self.target_calories

    def slots(self) -> List[MealSlot]:
        """Slots in plan order, each listed once."""
        seen: List[MealSlot] = []
        for meal in self.meals:
            if meal.slot not in seen:
                seen.append(meal.slot)
        return seen


@dataclass(frozen=True)
class Profile:
    """Physiological snapshot of a user."""

    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age: Optional[int] = None
    birth_date: Optional[date] = None
    sex: Optional[Sex] = None
    activity: Optional[ActivityLevel] = None
    diet: DietPattern = DietPattern.NONE
    allergies: Tuple[str, ...] = ()
    meals: Tuple[str, ...] = ()
