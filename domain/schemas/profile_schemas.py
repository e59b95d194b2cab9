from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from domain.enums import ActivityLevel, DietPattern, MealSlot, Sex


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields keep their stored value."""

    weight_kg: Optional[float] = Field(None, gt=0, le=500)
    height_cm: Optional[float] = Field(None, gt=0, le=300)
    age: Optional[int] = Field(None, gt=0, lt=130)
    birth_date: Optional[date] = None
    sex: Optional[Sex] = None
    activity: Optional[ActivityLevel] = None
    diet: Optional[DietPattern] = None
    allergies: Optional[List[str]] = None
    meals: Optional[List[MealSlot]] = None

    @field_validator("activity", mode="before")
    @classmethod
    def normalize_activity(cls, v):
        """Accept 'very active' style spellings"""
        if isinstance(v, str):
            return ActivityLevel.parse(v) or v
        return v

    @field_validator("meals", mode="before")
    @classmethod
    def normalize_meals(cls, v):
        if isinstance(v, list):
            return [m.strip().lower() if isinstance(m, str) else m for m in v]
        return v


class ProfileResponse(BaseModel):
    user_id: UUID
    weight_kg: Optional[float] = None
    height_cm: Optional[float] = None
    age: Optional[int] = None
    birth_date: Optional[date] = None
    sex: Optional[Sex] = None
    activity: Optional[ActivityLevel] = None
    diet: DietPattern = DietPattern.NONE
    allergies: List[str] = []
    meals: List[MealSlot] = []
    updated_at: Optional[datetime] = None
