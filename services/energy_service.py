"""Daily energy target calculation (Mifflin-St Jeor BMR scaled by activity)."""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import List, Optional

from app.exceptions import ServiceValidationError
from domain.enums import ActivityLevel, GoalStatus, Sex
from domain.nutrition import Profile

logger = logging.getLogger("nutriplan.energy")

ACTIVITY_MULTIPLIERS = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHT: 1.375,
    ActivityLevel.MODERATE: 1.55,
    ActivityLevel.ACTIVE: 1.725,
    ActivityLevel.VERY_ACTIVE: 1.9,
}
DEFAULT_ACTIVITY_MULTIPLIER = 1.2

MALE_CONSTANT = 5
FEMALE_CONSTANT = -161


def round_calories(value: float) -> int:
    """Round half up to a whole calorie."""
    return int(math.floor(value + 0.5))


def resolve_age(
    age: Optional[int], birth_date: Optional[date], today: Optional[date] = None
) -> Optional[int]:
    """Explicit age wins; otherwise whole years since birth_date."""
    if age:
        return int(age)
    if birth_date is None:
        return None
    today = today or date.today()
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def calculate_bmr(weight_kg: float, height_cm: float, age: int, sex: Sex) -> float:
    sex_constant = MALE_CONSTANT if sex == Sex.MALE else FEMALE_CONSTANT
    return 10 * float(weight_kg) + 6.25 * float(height_cm) - 5 * age + sex_constant


def activity_multiplier(activity) -> float:
    level = ActivityLevel.parse(activity)
    return ACTIVITY_MULTIPLIERS.get(level, DEFAULT_ACTIVITY_MULTIPLIER)


def calculate_tdee(bmr: float, activity) -> int:
    return round_calories(bmr * activity_multiplier(activity))


def missing_body_metrics(profile: Profile, today: Optional[date] = None) -> List[str]:
    missing = []
    if not profile.weight_kg:
        missing.append("weight_kg")
    if not profile.height_cm:
        missing.append("height_cm")
    if resolve_age(profile.age, profile.birth_date, today) is None:
        missing.append("age")
    if not profile.sex:
        missing.append("sex")
    return missing


def compute_daily_calories(
    profile: Profile, active_goal=None, today: Optional[date] = None
) -> int:
    """
    Daily calorie target for a profile.

    An active goal carrying a precomputed target overrides the physiology
    based value. Otherwise BMR x activity multiplier, rounded to the nearest
    calorie. Raises ServiceValidationError listing every missing body metric.
    """
    if active_goal is not None:
        status = getattr(active_goal, "status", GoalStatus.ACTIVE)
        target = getattr(active_goal, "target_calories_per_day", None)
        if status == GoalStatus.ACTIVE and target:
            logger.info(f"daily_target source=goal calories={target}")
            return int(target)

    missing = missing_body_metrics(profile, today)
    if missing:
        raise ServiceValidationError(
            f"Profile is incomplete: missing {', '.join(missing)}",
            details={"missing_fields": missing},
            code="PROFILE_INCOMPLETE",
        )

    age = resolve_age(profile.age, profile.birth_date, today)
    bmr = calculate_bmr(profile.weight_kg, profile.height_cm, age, profile.sex)
    daily = calculate_tdee(bmr, profile.activity)
    logger.info(
        f"daily_target source=profile bmr={bmr:.2f} "
        f"activity={getattr(profile.activity, 'value', profile.activity)} calories={daily}"
    )
    return daily
