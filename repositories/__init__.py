"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.profile_repository import ProfileRepository
from repositories.goal_repository import GoalRepository
from repositories.day_plan_repository import DayPlanRepository
from repositories.recipe_repository import RecipeRepository

__all__ = [
    "BaseRepository",
    "ProfileRepository",
    "GoalRepository",
    "DayPlanRepository",
    "RecipeRepository",
]
