"""
API dependencies for dependency injection
"""

from typing import Generator
from fastapi import Depends
from sqlalchemy.orm import Session
from domain.models import get_db_session
from repositories import RecipeRepository
from services.planner_service import PlannerService


def get_db() -> Generator[Session, None, None]:
    """One session per request, closed when the response is sent"""
    yield from get_db_session()


def get_recipe_repository() -> RecipeRepository:
    """Recipe catalog access; overridden in tests with an in-memory catalog"""
    return RecipeRepository()


def get_planner_service(
    db: Session = Depends(get_db),
    recipes: RecipeRepository = Depends(get_recipe_repository),
) -> PlannerService:
    return PlannerService(db, recipe_repo=recipes)
