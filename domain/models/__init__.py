"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
)
from domain.models.profile import UserProfile
from domain.models.goal import Goal, GoalWeightRecord
from domain.models.day_plan import DayPlan, PlannedMeal

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    # Profile models
    "UserProfile",
    # Goal models
    "Goal",
    "GoalWeightRecord",
    # Day plan models
    "DayPlan",
    "PlannedMeal",
]
