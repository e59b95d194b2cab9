"""
Day Plan Repository - Data access layer for generated day plans
"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.mappers.day_plan_mapper import DayPlanMapper
from domain.models import DayPlan
from domain.nutrition import DayPlanDraft

logger = logging.getLogger("nutriplan.repositories.day_plan")


class DayPlanRepository(BaseRepository[DayPlan]):
    """Repository for day plan data access"""

    id_field = "plan_id"

    def __init__(self, db: Session):
        super().__init__(db, DayPlan)

    def get_for_date_kind(
        self, user_id: UUID, plan_date: date, is_goal_based: bool
    ) -> Optional[DayPlan]:
        """Get the plan occupying a (user, date, kind) slot"""
        return (
            self.for_user(user_id)
            .filter(DayPlan.plan_date == plan_date, DayPlan.is_goal_based == is_goal_based)
            .first()
        )

    def list_for_date(self, user_id: UUID, plan_date: date) -> List[DayPlan]:
        """Both kinds of plan a user has for a date"""
        return (
            self.for_user(user_id)
            .filter(DayPlan.plan_date == plan_date)
            .order_by(DayPlan.is_goal_based)
            .all()
        )

    def list_in_range(
        self, user_id: UUID, start_date: date, end_date: date
    ) -> List[DayPlan]:
        """Plans with start_date <= plan_date <= end_date, oldest first"""
        return (
            self.for_user(user_id)
            .filter(DayPlan.plan_date >= start_date, DayPlan.plan_date <= end_date)
            .order_by(DayPlan.plan_date, DayPlan.is_goal_based)
            .all()
        )

    def upsert(self, user_id: UUID, draft: DayPlanDraft) -> DayPlan:
        """
        Store a draft in its (user, date, kind) slot, replacing any plan there.

        Two writers racing for the same slot both succeed; the later commit
        wins.
        """
        is_goal_based = draft.goal_id is not None
        plan = self.get_for_date_kind(user_id, draft.plan_date, is_goal_based)
        created = plan is None
        if created:
            plan = DayPlan(user_id=user_id)
            self.db.add(plan)
        DayPlanMapper.apply_draft(plan, draft)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            plan = self.get_for_date_kind(user_id, draft.plan_date, is_goal_based)
            if plan is None:
                # not a lost race on the slot; surface the database error as is
                raise
            logger.info(
                f"plan_upsert_conflict user={user_id} date={draft.plan_date} "
                f"goal_based={is_goal_based}"
            )
            DayPlanMapper.apply_draft(plan, draft)
            self.db.commit()
            created = False

        self.db.refresh(plan)
        logger.info(
            f"plan_{'created' if created else 'replaced'} plan_id={plan.plan_id} "
            f"user={user_id} date={draft.plan_date}"
        )
        return plan

    def delete_all(
        self,
        user_id: UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        """Delete a user's plans, optionally only those within a date range"""
        query = self.for_user(user_id)
        if start_date is not None:
            query = query.filter(DayPlan.plan_date >= start_date)
        if end_date is not None:
            query = query.filter(DayPlan.plan_date <= end_date)
        return self.delete_many(query.all())

    def delete_by_goal(self, goal_id: UUID) -> int:
        """Delete every plan generated for a goal"""
        return self.delete_many(self.db.query(DayPlan).filter(DayPlan.goal_id == goal_id).all())
