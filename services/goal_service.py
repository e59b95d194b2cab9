"""
Weight goals: safety validation, goal calorie targets, macro suggestions and
the goal lifecycle.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import GoalStatus, GoalType, Sex
from domain.models import Goal, GoalWeightRecord
from domain.schemas.goal_schemas import (
    GoalCreateRequest,
    GoalCreatedResponse,
    GoalResponse,
    MacroSplit,
    WeightRecordResponse,
)
from repositories import DayPlanRepository, GoalRepository, ProfileRepository
from domain.mappers.profile_mapper import ProfileMapper
from services.energy_service import (
    calculate_bmr,
    calculate_tdee,
    missing_body_metrics,
    resolve_age,
    round_calories,
)

logger = logging.getLogger("nutriplan.goals")

CALORIES_PER_KG = 7700
MAX_WEEKLY_LOSS_KG = 1.0
MAX_WEEKLY_GAIN_KG = 0.5
WARN_WEEKLY_LOSS_KG = 0.8
WARN_WEEKLY_GAIN_KG = 0.4
MIN_DAILY_CALORIES_MALE = 1500
MIN_DAILY_CALORIES_OTHER = 1200
MIN_BODY_WEIGHT_KG = 30
MAINTAIN_TOLERANCE_KG = 0.1
WEEKS_PER_MONTH = 4

MACRO_PERCENTAGES = {
    GoalType.WEIGHT_LOSS: (0.35, 0.35, 0.30),
    GoalType.WEIGHT_GAIN: (0.30, 0.45, 0.25),
    GoalType.MAINTAIN: (0.30, 0.40, 0.30),
}

HEALTH_TIPS = {
    GoalType.WEIGHT_LOSS: [
        "Drink 2-3 litres of water a day to support your metabolism",
        "Combine cardio with strength training to keep muscle while losing fat",
        "Prioritise protein to protect muscle and stay full longer",
        "Sleep 7-8 hours a night",
    ],
    GoalType.WEIGHT_GAIN: [
        "Eat plenty of high-quality protein to build muscle",
        "Strength train 3-4 times a week so the gain is muscle, not fat",
        "Split food into 5-6 smaller meals a day",
        "Rest between training sessions so muscles can recover",
    ],
    GoalType.MAINTAIN: [
        "Keep your weight stable with balanced meals",
        "Exercise 3-5 times a week",
        "Eat from every food group",
    ],
}


@dataclass
class GoalValidation:
    goal_type: GoalType
    weekly_change: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def validate_weight_goal(
    start_weight: float, target_weight: float, duration_weeks: int
) -> GoalValidation:
    """
    Classify a weight goal and check it against safe rates of change.

    Losing more than 1 kg or gaining more than 0.5 kg per week is an error;
    above 0.8 kg (loss) or 0.4 kg (gain) per week is a warning.
    """
    total_change = target_weight - start_weight
    if total_change < -MAINTAIN_TOLERANCE_KG:
        goal_type = GoalType.WEIGHT_LOSS
    elif total_change > MAINTAIN_TOLERANCE_KG:
        goal_type = GoalType.WEIGHT_GAIN
    else:
        goal_type = GoalType.MAINTAIN

    weekly_change = total_change / duration_weeks if duration_weeks > 0 else 0.0
    result = GoalValidation(goal_type=goal_type, weekly_change=weekly_change)

    if duration_weeks < 1:
        result.errors.append("Goal duration must be at least 1 week")

    if goal_type is not GoalType.MAINTAIN and duration_weeks >= 1:
        losing = goal_type is GoalType.WEIGHT_LOSS
        max_rate = MAX_WEEKLY_LOSS_KG if losing else MAX_WEEKLY_GAIN_KG
        warn_rate = WARN_WEEKLY_LOSS_KG if losing else WARN_WEEKLY_GAIN_KG
        verb = "lose" if losing else "gain"
        rate = abs(weekly_change)

        if rate > max_rate:
            result.errors.append(
                f"Trying to {verb} {rate:.1f} kg/week is unsafe; "
                f"the recommended maximum is {max_rate} kg/week"
            )
        elif rate > warn_rate:
            result.warnings.append(
                f"Trying to {verb} {rate:.1f} kg/week is on the high side"
            )

        min_weeks = math.ceil(abs(total_change) / max_rate)
        if duration_weeks < min_weeks:
            result.errors.append(
                f"To {verb} {abs(total_change):.1f} kg safely you need at least "
                f"{min_weeks} weeks"
            )

    if start_weight < MIN_BODY_WEIGHT_KG or target_weight < MIN_BODY_WEIGHT_KG:
        result.errors.append(f"Weights must be at least {MIN_BODY_WEIGHT_KG} kg")

    return result


def calculate_goal_calorie_target(tdee: float, weekly_change: float, sex) -> int:
    """TDEE shifted by the daily share of the weekly change, never below the floor."""
    target = round_calories(tdee + weekly_change * CALORIES_PER_KG / 7)
    floor = MIN_DAILY_CALORIES_MALE if sex == Sex.MALE else MIN_DAILY_CALORIES_OTHER
    return max(target, floor)


def suggest_macro_split(target_calories: int, goal_type: GoalType) -> Dict[str, int]:
    protein, carbs, fat = MACRO_PERCENTAGES[goal_type]
    return {
        "protein": round_calories(target_calories * protein / 4),
        "carbs": round_calories(target_calories * carbs / 4),
        "fat": round_calories(target_calories * fat / 9),
    }


def progress_percentage(goal: Goal) -> int:
    total = abs(goal.target_weight - goal.start_weight)
    if total == 0:
        return 100
    done = abs(goal.current_weight - goal.start_weight)
    return min(100, round_calories(done / total * 100))


def goal_to_response(goal: Goal) -> GoalResponse:
    return GoalResponse(
        goal_id=goal.goal_id,
        user_id=goal.user_id,
        goal_type=goal.goal_type,
        start_weight=goal.start_weight,
        target_weight=goal.target_weight,
        current_weight=goal.current_weight,
        start_date=goal.start_date,
        end_date=goal.end_date,
        duration_weeks=goal.duration_weeks,
        weekly_weight_change=goal.weekly_weight_change,
        target_calories_per_day=goal.target_calories_per_day,
        status=goal.status,
        description=goal.description,
        warnings=json.loads(goal.warnings) if goal.warnings else [],
        progress=[WeightRecordResponse.model_validate(r) for r in goal.progress],
        progress_percentage=progress_percentage(goal),
    )


class GoalService:
    """Business logic for weight goals"""

    @staticmethod
    def _get_owned(db: Session, goal_id: UUID, user_id: UUID) -> Goal:
        goal = GoalRepository(db).get_by_id(goal_id)
        if not goal:
            raise NotFoundError(f"Goal {goal_id} not found")
        if goal.user_id != user_id:
            raise ForbiddenError("Goal belongs to another user")
        return goal

    @staticmethod
    def create_goal(
        db: Session, request: GoalCreateRequest, today: Optional[date] = None
    ) -> GoalCreatedResponse:
        """
        Create a goal from the user's profile and a target weight.

        Raises:
            NotFoundError: No profile for the user
            ServiceValidationError: Incomplete profile or unsafe goal
            ConflictError: The user already has an active goal
        """
        today = today or date.today()
        record = ProfileRepository(db).get_by_user_id(request.user_id)
        if not record:
            raise NotFoundError(f"Profile for user {request.user_id} not found")

        profile = ProfileMapper.to_domain(record)
        missing = missing_body_metrics(profile, today)
        if missing:
            raise ServiceValidationError(
                f"Profile is incomplete: missing {', '.join(missing)}",
                details={"missing_fields": missing},
                code="PROFILE_INCOMPLETE",
            )

        duration_weeks = request.duration
        if request.duration_unit == "months":
            duration_weeks = request.duration * WEEKS_PER_MONTH

        validation = validate_weight_goal(
            profile.weight_kg, request.target_weight, duration_weeks
        )
        if not validation.is_valid:
            raise ServiceValidationError(
                "Goal is not safe",
                details={"errors": validation.errors, "warnings": validation.warnings},
                code="INVALID_GOAL",
            )

        repo = GoalRepository(db)
        if repo.get_active(request.user_id):
            raise ConflictError(
                "An active goal already exists; complete or cancel it first"
            )

        age = resolve_age(profile.age, profile.birth_date, today)
        bmr = calculate_bmr(profile.weight_kg, profile.height_cm, age, profile.sex)
        tdee = calculate_tdee(bmr, profile.activity)
        target = calculate_goal_calorie_target(tdee, validation.weekly_change, profile.sex)

        goal = Goal(
            user_id=request.user_id,
            goal_type=validation.goal_type,
            start_weight=profile.weight_kg,
            target_weight=request.target_weight,
            current_weight=profile.weight_kg,
            start_date=today,
            end_date=today + timedelta(weeks=duration_weeks),
            duration_weeks=duration_weeks,
            weekly_weight_change=validation.weekly_change,
            target_calories_per_day=target,
            status=GoalStatus.ACTIVE,
            description=request.description,
            warnings=json.dumps(validation.warnings),
        )
        goal.progress.append(
            GoalWeightRecord(recorded_on=today, weight=profile.weight_kg, note="Starting weight")
        )
        goal = repo.create(goal)
        logger.info(
            f"goal_created goal_id={goal.goal_id} user_id={request.user_id} "
            f"type={validation.goal_type.value} target_calories={target}"
        )

        return GoalCreatedResponse(
            goal=goal_to_response(goal),
            bmr=bmr,
            tdee=tdee,
            tips=HEALTH_TIPS[validation.goal_type],
            macros=MacroSplit(**suggest_macro_split(target, validation.goal_type)),
        )

    @staticmethod
    def get_active_goal(db: Session, user_id: UUID) -> Optional[Goal]:
        return GoalRepository(db).get_active(user_id)

    @staticmethod
    def record_weight(
        db: Session,
        goal_id: UUID,
        user_id: UUID,
        weight: float,
        note: Optional[str] = None,
        recorded_on: Optional[date] = None,
    ) -> Goal:
        """Log a weigh-in; reaching the target completes the goal."""
        goal = GoalService._get_owned(db, goal_id, user_id)
        goal.current_weight = weight

        reached = (
            goal.goal_type == GoalType.WEIGHT_LOSS and weight <= goal.target_weight
        ) or (goal.goal_type == GoalType.WEIGHT_GAIN and weight >= goal.target_weight)
        if reached and goal.status == GoalStatus.ACTIVE:
            goal.status = GoalStatus.COMPLETED
            logger.info(f"goal_completed goal_id={goal_id} weight={weight}")

        record = GoalWeightRecord(
            recorded_on=recorded_on or date.today(), weight=weight, note=note
        )
        return GoalRepository(db).add_weight_record(goal, record)

    @staticmethod
    def set_status(
        db: Session, goal_id: UUID, user_id: UUID, status: GoalStatus
    ) -> Goal:
        """Change a goal's status. Cancelling removes the day plans made for it."""
        goal = GoalService._get_owned(db, goal_id, user_id)

        if status == GoalStatus.ACTIVE and goal.status != GoalStatus.ACTIVE:
            other = GoalRepository(db).get_active(user_id)
            if other and other.goal_id != goal.goal_id:
                raise ConflictError("Another goal is already active")

        goal.status = status
        goal = GoalRepository(db).update(goal)

        if status == GoalStatus.CANCELLED:
            removed = DayPlanRepository(db).delete_by_goal(goal_id)
            logger.info(f"goal_cancelled goal_id={goal_id} plans_removed={removed}")
        return goal
