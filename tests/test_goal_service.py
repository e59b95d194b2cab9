"""
Tests for weight goals: safety validation, goal calorie targets, macro split
and the goal lifecycle against a real session.
"""

import uuid

import pytest
from datetime import date
from sqlalchemy.orm import Session

from app.exceptions import ConflictError, ForbiddenError, NotFoundError, ServiceValidationError
from domain.enums import GoalStatus, GoalType, Sex
from domain.models import DayPlan
from domain.schemas.goal_schemas import GoalCreateRequest
from services.goal_service import (
    GoalService,
    calculate_goal_calorie_target,
    suggest_macro_split,
    validate_weight_goal,
)
from test_fixtures import db_session, make_goal, make_profile


# =============================================================================
# VALIDATION & TARGETS
# =============================================================================


def test_loss_at_one_kg_per_week_is_a_warning_not_an_error():
    result = validate_weight_goal(80, 70, 10)

    assert result.goal_type == GoalType.WEIGHT_LOSS
    assert result.weekly_change == -1.0
    assert result.is_valid
    assert len(result.warnings) == 1


def test_loss_faster_than_one_kg_per_week_is_rejected():
    result = validate_weight_goal(80, 70, 8)

    assert not result.is_valid
    # rate error plus minimum-duration error
    assert len(result.errors) == 2


def test_gain_at_four_hundred_grams_per_week_is_clean():
    result = validate_weight_goal(60, 64, 10)

    assert result.goal_type == GoalType.WEIGHT_GAIN
    assert result.is_valid
    assert result.warnings == []


def test_gain_faster_than_half_kg_per_week_is_rejected():
    result = validate_weight_goal(60, 66, 10)
    assert not result.is_valid


def test_tiny_change_is_maintenance():
    result = validate_weight_goal(70, 70.05, 4)
    assert result.goal_type == GoalType.MAINTAIN
    assert result.is_valid


def test_implausible_weights_are_rejected():
    assert not validate_weight_goal(25, 28, 10).is_valid


def test_goal_calorie_target_applies_weekly_change():
    # 0.5 kg/week loss -> 0.5 * 7700 / 7 = 550 kcal/day deficit
    assert calculate_goal_calorie_target(2556, -0.5, Sex.MALE) == 2006


def test_goal_calorie_target_floors():
    assert calculate_goal_calorie_target(1400, -1.0, Sex.MALE) == 1500
    assert calculate_goal_calorie_target(1400, -1.0, Sex.FEMALE) == 1200
    assert calculate_goal_calorie_target(1400, -1.0, Sex.OTHER) == 1200


def test_macro_split_for_weight_loss():
    assert suggest_macro_split(2000, GoalType.WEIGHT_LOSS) == {
        "protein": 175,
        "carbs": 175,
        "fat": 67,
    }


def test_macro_split_for_weight_gain():
    assert suggest_macro_split(2400, GoalType.WEIGHT_GAIN) == {
        "protein": 180,
        "carbs": 270,
        "fat": 67,
    }


# =============================================================================
# LIFECYCLE
# =============================================================================


def test_create_goal_from_profile(db_session: Session):
    profile = make_profile(db_session, persona="michael")

    created = GoalService.create_goal(
        db_session,
        GoalCreateRequest(user_id=profile.user_id, target_weight=65, duration=10),
        today=date(2024, 6, 15),
    )

    goal = created.goal
    assert goal.goal_type == GoalType.WEIGHT_LOSS
    assert goal.weekly_weight_change == pytest.approx(-0.5)
    assert goal.target_calories_per_day == 2006
    assert goal.end_date == date(2024, 8, 24)
    assert goal.status == GoalStatus.ACTIVE
    assert created.tdee == 2556
    assert created.tips
    assert goal.progress[0].weight == 70.0


def test_duration_in_months_is_converted_to_weeks(db_session: Session):
    profile = make_profile(db_session, persona="michael")

    created = GoalService.create_goal(
        db_session,
        GoalCreateRequest(
            user_id=profile.user_id, target_weight=65, duration=3, duration_unit="months"
        ),
    )

    assert created.goal.duration_weeks == 12


def test_second_active_goal_conflicts(db_session: Session):
    profile = make_profile(db_session)
    make_goal(db_session, profile.user_id)

    with pytest.raises(ConflictError):
        GoalService.create_goal(
            db_session,
            GoalCreateRequest(user_id=profile.user_id, target_weight=65, duration=10),
        )


def test_unsafe_goal_lists_errors(db_session: Session):
    profile = make_profile(db_session)

    with pytest.raises(ServiceValidationError) as exc_info:
        GoalService.create_goal(
            db_session,
            GoalCreateRequest(user_id=profile.user_id, target_weight=55, duration=4),
        )

    assert exc_info.value.code == "INVALID_GOAL"
    assert exc_info.value.details["errors"]


def test_create_goal_requires_profile(db_session: Session):
    with pytest.raises(NotFoundError):
        GoalService.create_goal(
            db_session, GoalCreateRequest(user_id=uuid.uuid4(), target_weight=65, duration=10)
        )


def test_record_weight_completes_goal_on_target(db_session: Session):
    profile = make_profile(db_session)
    goal = make_goal(db_session, profile.user_id, start_weight=70, target_weight=65)

    goal = GoalService.record_weight(db_session, goal.goal_id, profile.user_id, 67.5)
    assert goal.status == GoalStatus.ACTIVE
    assert goal.current_weight == 67.5

    goal = GoalService.record_weight(db_session, goal.goal_id, profile.user_id, 64.8)
    assert goal.status == GoalStatus.COMPLETED
    assert len(goal.progress) == 2


def test_record_weight_on_someone_elses_goal(db_session: Session):
    profile = make_profile(db_session)
    goal = make_goal(db_session, profile.user_id)

    with pytest.raises(ForbiddenError):
        GoalService.record_weight(db_session, goal.goal_id, uuid.uuid4(), 68)


def test_cancel_deletes_goal_based_plans(db_session: Session):
    profile = make_profile(db_session)
    goal = make_goal(db_session, profile.user_id)
    for kind_goal in (goal.goal_id, None):
        db_session.add(
            DayPlan(
                user_id=profile.user_id,
                plan_date=date(2024, 3, 4),
                goal_id=kind_goal,
                is_goal_based=kind_goal is not None,
                target_calories=2000,
            )
        )
    db_session.commit()

    goal = GoalService.set_status(db_session, goal.goal_id, profile.user_id, GoalStatus.CANCELLED)

    assert goal.status == GoalStatus.CANCELLED
    remaining = db_session.query(DayPlan).all()
    assert len(remaining) == 1
    assert remaining[0].goal_id is None


def test_reactivating_with_another_active_goal_conflicts(db_session: Session):
    profile = make_profile(db_session)
    paused = make_goal(db_session, profile.user_id, status=GoalStatus.PAUSED)
    make_goal(db_session, profile.user_id)

    with pytest.raises(ConflictError):
        GoalService.set_status(db_session, paused.goal_id, profile.user_id, GoalStatus.ACTIVE)
