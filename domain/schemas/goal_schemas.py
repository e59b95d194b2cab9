from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.enums import GoalStatus, GoalType


class GoalCreateRequest(BaseModel):
    user_id: UUID
    target_weight: float = Field(..., gt=0)
    duration: int = Field(..., ge=1)
    duration_unit: Literal["weeks", "months"] = "weeks"
    description: Optional[str] = None


class WeightRecordRequest(BaseModel):
    user_id: UUID
    weight: float = Field(..., gt=0)
    note: Optional[str] = None


class GoalStatusRequest(BaseModel):
    user_id: UUID
    status: GoalStatus


class MacroSplit(BaseModel):
    protein: int
    carbs: int
    fat: int


class WeightRecordResponse(BaseModel):
    recorded_on: date
    weight: float
    note: Optional[str] = None

    model_config = {"from_attributes": True}


class GoalResponse(BaseModel):
    goal_id: UUID
    user_id: UUID
    goal_type: GoalType
    start_weight: float
    target_weight: float
    current_weight: float
    start_date: date
    end_date: date
    duration_weeks: int
    weekly_weight_change: float
    target_calories_per_day: int
    status: GoalStatus
    description: Optional[str] = None
    warnings: List[str] = []
    progress: List[WeightRecordResponse] = []
    progress_percentage: int = 0


class GoalCreatedResponse(BaseModel):
    goal: GoalResponse
    bmr: float
    tdee: int
    tips: List[str] = []
    macros: MacroSplit
