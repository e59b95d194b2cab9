"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.plan_schemas import (
    GenerateDayPlanRequest,
    GenerateWeekPlanRequest,
    ReplaceMealRequest,
    MacroTotals,
    IngredientResponse,
    PlannedMealResponse,
    DayPlanResponse,
    WeekPlanResponse,
    DeletePlansResponse,
)
from domain.schemas.profile_schemas import ProfileUpdateRequest, ProfileResponse
from domain.schemas.goal_schemas import (
    GoalCreateRequest,
    WeightRecordRequest,
    GoalStatusRequest,
    MacroSplit,
    WeightRecordResponse,
    GoalResponse,
    GoalCreatedResponse,
)

__all__ = [
    # Plan schemas
    "GenerateDayPlanRequest",
    "GenerateWeekPlanRequest",
    "ReplaceMealRequest",
    "MacroTotals",
    "IngredientResponse",
    "PlannedMealResponse",
    "DayPlanResponse",
    "WeekPlanResponse",
    "DeletePlansResponse",
    # Profile schemas
    "ProfileUpdateRequest",
    "ProfileResponse",
    # Goal schemas
    "GoalCreateRequest",
    "WeightRecordRequest",
    "GoalStatusRequest",
    "MacroSplit",
    "WeightRecordResponse",
    "GoalResponse",
    "GoalCreatedResponse",
]
