"""Services package - Business logic layer"""

from services.profile_service import ProfileService
from services.goal_service import GoalService
from services.planner_service import PlannerService

# Note: energy_service, slot_planner, meal_composer, day_assembler and
# weekly_planner hold the pure engine functions, not service classes

__all__ = [
    "ProfileService",
    "GoalService",
    "PlannerService",
]
