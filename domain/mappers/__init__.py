"""
Domain mappers package.
Handles transformation between ORM models, catalog documents and DTOs.
"""

from domain.mappers.recipe_mapper import RecipeMapper
from domain.mappers.profile_mapper import ProfileMapper
from domain.mappers.day_plan_mapper import DayPlanMapper

__all__ = ["RecipeMapper", "ProfileMapper", "DayPlanMapper"]
