"""Weight goal routes"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from app.exceptions import NotFoundError
from domain.models import get_db_session
from domain.schemas.goal_schemas import (
    GoalCreateRequest,
    GoalCreatedResponse,
    GoalResponse,
    GoalStatusRequest,
    WeightRecordRequest,
)
from services.goal_service import GoalService, goal_to_response

router = APIRouter(prefix="/goals", tags=["Goals"])
logger = logging.getLogger("nutriplan.api.goals")


@router.post("", response_model=GoalCreatedResponse, status_code=status.HTTP_201_CREATED)
def create_goal(body: GoalCreateRequest, db: Session = Depends(get_db_session)):
    """
    Create a weight goal from the user's profile.

    The response carries the goal, the BMR and TDEE it was computed from,
    health tips and a suggested macro split for the goal's calorie target.
    """
    return GoalService.create_goal(db, body)


@router.get("/active", response_model=GoalResponse)
def get_active_goal(
    user_id: UUID = Query(..., description="User ID"),
    db: Session = Depends(get_db_session),
):
    goal = GoalService.get_active_goal(db, user_id)
    if not goal:
        raise NotFoundError(f"No active goal for user {user_id}")
    return goal_to_response(goal)


@router.post("/{goal_id}/progress", response_model=GoalResponse)
def record_progress(
    goal_id: UUID, body: WeightRecordRequest, db: Session = Depends(get_db_session)
):
    """Log a weigh-in. Reaching the target weight completes the goal."""
    goal = GoalService.record_weight(db, goal_id, body.user_id, body.weight, body.note)
    return goal_to_response(goal)


@router.patch("/{goal_id}/status", response_model=GoalResponse)
def update_goal_status(
    goal_id: UUID, body: GoalStatusRequest, db: Session = Depends(get_db_session)
):
    """Change a goal's status. Cancelling also deletes its goal-based plans."""
    goal = GoalService.set_status(db, goal_id, body.user_id, body.status)
    return goal_to_response(goal)
