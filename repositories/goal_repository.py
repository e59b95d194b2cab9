"""
Goal Repository - Data access layer for weight goals
"""

from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import GoalStatus
from domain.models import Goal, GoalWeightRecord


class GoalRepository(BaseRepository[Goal]):
    """Repository for goal data access"""

    id_field = "goal_id"

    def __init__(self, db: Session):
        super().__init__(db, Goal)

    def get_active(self, user_id: UUID) -> Optional[Goal]:
        """Get the user's active goal, newest first if several exist"""
        return (
            self.for_user(user_id)
            .filter(Goal.status == GoalStatus.ACTIVE)
            .order_by(Goal.created_at.desc())
            .first()
        )

    def add_weight_record(self, goal: Goal, record: GoalWeightRecord) -> Goal:
        """Attach a weigh-in and persist the goal's updated fields"""
        goal.progress.append(record)
        return self.update(goal)
