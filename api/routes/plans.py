from __future__ import annotations

import datetime as dt
import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from api.dependencies import get_planner_service
from domain.mappers import DayPlanMapper
from domain.schemas.plan_schemas import (
    DayPlanResponse,
    DeletePlansResponse,
    GenerateDayPlanRequest,
    GenerateWeekPlanRequest,
    ReplaceMealRequest,
    WeekPlanResponse,
)
from services.planner_service import PlannerService

router = APIRouter(prefix="/plans", tags=["Meal Planning"])
logger = logging.getLogger("nutriplan.api.plans")


@router.post("/day", response_model=DayPlanResponse, status_code=status.HTTP_201_CREATED)
def generate_day_plan(
    body: GenerateDayPlanRequest, service: PlannerService = Depends(get_planner_service)
):
    """
    Generate (or regenerate) the meals for one date.

    This endpoint:
    1. Computes the daily calorie target from the profile or the goal
    2. Splits it evenly across the user's meal slots
    3. Samples tagged recipes per slot and picks one or two that fit
    4. Trims two-dish slots while the day is over target
    5. Replaces any plan of the same kind already stored for the date
    """
    logger.info(
        f"Generating day plan for user {body.user_id}: date={body.date}, "
        f"goal_calories={body.use_goal_calories}"
    )
    plan = service.generate_day(
        body.user_id, body.date, body.use_goal_calories, body.goal_id
    )
    return DayPlanMapper.to_response(plan)


@router.post("/week", response_model=WeekPlanResponse, status_code=status.HTTP_201_CREATED)
def generate_week_plan(
    body: GenerateWeekPlanRequest, service: PlannerService = Depends(get_planner_service)
):
    """
    Generate seven consecutive days starting at start_date.

    One random recipe per slot per day, avoiding repeats within a day.
    """
    logger.info(
        f"Generating week plan for user {body.user_id}: start={body.start_date}, "
        f"goal_calories={body.use_goal_calories}"
    )
    plans = service.generate_week(body.user_id, body.start_date, body.use_goal_calories)
    return WeekPlanResponse(
        start_date=body.start_date,
        count=len(plans),
        plans=DayPlanMapper.to_responses(plans),
        message="Weekly plan successfully generated.",
    )


@router.put("/{plan_id}/meals/{slot_index}", response_model=DayPlanResponse)
def replace_meal(
    plan_id: UUID,
    slot_index: int,
    body: ReplaceMealRequest,
    service: PlannerService = Depends(get_planner_service),
):
    """Swap the meal at slot_index for another recipe and recompute totals."""
    plan = service.replace_meal(plan_id, slot_index, body.user_id, body.recipe_id)
    return DayPlanMapper.to_response(plan)


@router.get("", response_model=List[DayPlanResponse])
def list_plans(
    user_id: UUID = Query(..., description="User ID to fetch plans for"),
    date: Optional[dt.date] = Query(None, description="Single date, defaults to today"),
    start_date: Optional[dt.date] = Query(None, description="Range start (inclusive)"),
    end_date: Optional[dt.date] = Query(None, description="Range end (inclusive)"),
    service: PlannerService = Depends(get_planner_service),
):
    """
    List a user's day plans for one date or a date range.

    Plans are ordered by date; on a single date the health-based plan comes
    before the goal-based one.
    """
    plans = service.list_plans(user_id, date, start_date, end_date)
    logger.info(f"Found {len(plans)} plans for user {user_id}")
    return DayPlanMapper.to_responses(plans)


@router.delete("/{plan_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_plan(
    plan_id: UUID,
    user_id: UUID = Query(..., description="Owner of the plan"),
    service: PlannerService = Depends(get_planner_service),
):
    service.delete_plan(plan_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("", response_model=DeletePlansResponse)
def delete_all_plans(
    user_id: UUID = Query(..., description="User whose plans are deleted"),
    start_date: Optional[dt.date] = Query(None),
    end_date: Optional[dt.date] = Query(None),
    service: PlannerService = Depends(get_planner_service),
):
    """Delete all of a user's plans, optionally only those within a date range."""
    deleted = service.delete_all_plans(user_id, start_date, end_date)
    return DeletePlansResponse(deleted=deleted)
