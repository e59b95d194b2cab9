from __future__ import annotations

import logging
import random
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ForbiddenError, NotFoundError, ServiceValidationError
from domain.enums import GoalStatus
from domain.mappers import DayPlanMapper, ProfileMapper
from domain.models import DayPlan, Goal
from domain.nutrition import MealSlotSelection, Profile, RecipeNutritionRecord, SlotSpec
from repositories import DayPlanRepository, GoalRepository, ProfileRepository, RecipeRepository
from services.day_assembler import assemble_day, rebalance, summarize
from services.energy_service import compute_daily_calories
from services.meal_composer import compose_slot
from services.slot_planner import plan_slots
from services.weekly_planner import WeeklyPlanner


logger = logging.getLogger("nutriplan.planner")


class PlannerService:
    """
    Day and week plan generation:
    - loads the profile and, when asked for, the goal whose target applies
    - turns the daily target into slots with equal budgets
    - samples candidates per slot from the recipe catalog
    - composes, assembles and rebalances each day
    - upserts each day into its (user, date, goal-based) slot
    """

    def __init__(
        self,
        db: Session,
        recipe_repo: Optional[RecipeRepository] = None,
        rng: Optional[random.Random] = None,
    ):
        self.db: Session = db
        self.recipes = recipe_repo or RecipeRepository()
        self.plans = DayPlanRepository(db)
        self.rng = rng

    # ------------------ Inputs ------------------
    def _load_profile(self, user_id: uuid.UUID) -> Profile:
        record = ProfileRepository(self.db).get_by_user_id(user_id)
        if not record:
            raise NotFoundError(f"Profile for user {user_id} not found")
        return ProfileMapper.to_domain(record)

    def _resolve_goal(
        self, user_id: uuid.UUID, use_goal_calories: bool, goal_id: Optional[uuid.UUID]
    ) -> Optional[Goal]:
        if not use_goal_calories:
            return None

        goals = GoalRepository(self.db)
        if goal_id is None:
            goal = goals.get_active(user_id)
            if not goal:
                raise ServiceValidationError(
                    "No active goal to take calories from", code="NO_ACTIVE_GOAL"
                )
            return goal

        goal = goals.get_by_id(goal_id)
        if not goal:
            raise NotFoundError(f"Goal {goal_id} not found")
        if goal.user_id != user_id:
            raise ForbiddenError("Goal belongs to another user")
        if goal.status != GoalStatus.ACTIVE:
            raise ServiceValidationError(
                f"Goal {goal_id} is {goal.status.value}, not active",
                details={"status": goal.status.value},
                code="GOAL_NOT_ACTIVE",
            )
        return goal

    def _fetch(self, spec: SlotSpec, profile: Profile, size: int) -> List[RecipeNutritionRecord]:
        return self.recipes.fetch_candidates(
            spec.tag.value,
            optional_tag=profile.diet.tag,
            excluded_ingredient_names=list(profile.allergies),
            sample_size=size,
        )

    def _get_owned(self, plan_id: uuid.UUID, user_id: uuid.UUID) -> DayPlan:
        plan = self.plans.get_by_id(plan_id)
        if not plan:
            raise NotFoundError(f"Plan {plan_id} not found")
        if plan.user_id != user_id:
            raise ForbiddenError("Plan belongs to another user")
        return plan

    # ------------------ Generation ------------------
    def generate_day(
        self,
        user_id: uuid.UUID,
        plan_date: date,
        use_goal_calories: bool = False,
        goal_id: Optional[uuid.UUID] = None,
    ) -> DayPlan:
        """Generate or regenerate one day and store it."""
        profile = self._load_profile(user_id)
        goal = self._resolve_goal(user_id, use_goal_calories, goal_id)
        target = compute_daily_calories(profile, goal)
        specs = plan_slots(profile.meals, target)

        selections = []
        for spec in specs:
            candidates = self._fetch(spec, profile, settings.candidate_sample_size)
            selections.append(compose_slot(candidates, spec.budget, spec.slot))

        draft = assemble_day(plan_date, target, selections, goal.goal_id if goal else None)
        draft = rebalance(draft)
        if draft.warnings:
            logger.warning(
                f"day_over_target user={user_id} date={plan_date} "
                f"total={draft.total_calories:.0f} target={target}"
            )
        return self.plans.upsert(user_id, draft)

    def generate_week(
        self, user_id: uuid.UUID, start_date: date, use_goal_calories: bool = False
    ) -> List[DayPlan]:
        """
        Generate seven consecutive days from start_date.

        Candidate pools are fetched once per tag. Every day is stored as soon
        as it is made; a failure part-way leaves the earlier days in place.
        """
        profile = self._load_profile(user_id)
        goal = self._resolve_goal(user_id, use_goal_calories, None)
        target = compute_daily_calories(profile, goal)
        specs = plan_slots(profile.meals, target)

        pools = {
            spec.tag: self._fetch(spec, profile, settings.weekly_pool_size)
            for spec in specs
        }
        planner = WeeklyPlanner(
            specs,
            pools,
            target,
            goal_id=goal.goal_id if goal else None,
            min_pool_size=settings.weekly_min_pool_size,
            rng=self.rng,
        )

        plans = []
        for draft in planner.days(start_date):
            plans.append(self.plans.upsert(user_id, draft))
        logger.info(f"week_generated user={user_id} start={start_date} days={len(plans)}")
        return plans

    def replace_meal(
        self, plan_id: uuid.UUID, slot_index: int, user_id: uuid.UUID, recipe_id: str
    ) -> DayPlan:
        """
        Swap one dish for a catalog recipe and recompute the plan's totals.

        slot_index addresses the plan's flat meal list. The composer and the
        rebalancer are not re-run.
        """
        plan = self._get_owned(plan_id, user_id)
        if not 0 <= slot_index < len(plan.meals):
            raise ServiceValidationError(
                f"slot_index {slot_index} is out of range",
                details={"slot_index": slot_index, "meal_count": len(plan.meals)},
            )

        record = self.recipes.get_record_by_id(recipe_id)
        if not record:
            raise NotFoundError(f"Recipe {recipe_id} not found")

        current = plan.meals[slot_index]
        selection = MealSlotSelection.snapshot(current.slot, record)
        plan.meals[slot_index] = DayPlanMapper.to_meal_row(current.position, selection)

        total_calories, total_macros = summarize(
            DayPlanMapper.to_selection(row) for row in plan.meals
        )
        DayPlanMapper.apply_totals(plan, total_calories, total_macros.to_dict())
        self.db.commit()
        self.db.refresh(plan)
        logger.info(
            f"meal_replaced plan_id={plan_id} index={slot_index} recipe_id={recipe_id} "
            f"total={total_calories:.0f}"
        )
        return plan

    # ------------------ Queries & deletion ------------------
    def list_plans(
        self,
        user_id: uuid.UUID,
        plan_date: Optional[date] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[DayPlan]:
        """Plans for one date (default today) or an inclusive date range."""
        if start_date is not None or end_date is not None:
            if start_date is None or end_date is None:
                raise ServiceValidationError(
                    "start_date and end_date must be given together"
                )
            if start_date > end_date:
                raise ServiceValidationError("start_date must not be after end_date")
            return self.plans.list_in_range(user_id, start_date, end_date)
        return self.plans.list_for_date(user_id, plan_date or date.today())

    def delete_plan(self, plan_id: uuid.UUID, user_id: uuid.UUID) -> None:
        plan = self._get_owned(plan_id, user_id)
        self.plans.delete_many([plan])
        logger.info(f"plan_deleted plan_id={plan_id} user={user_id}")

    def delete_all_plans(
        self,
        user_id: uuid.UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> int:
        if start_date and end_date and start_date > end_date:
            raise ServiceValidationError("start_date must not be after end_date")
        deleted = self.plans.delete_all(user_id, start_date, end_date)
        logger.info(
            f"plans_deleted user={user_id} start={start_date} end={end_date} count={deleted}"
        )
        return deleted
