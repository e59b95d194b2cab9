"""
Day plan models.
"""

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Integer,
    Text,
    TIMESTAMP,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import MealSlot


class DayPlan(Base):
    """One user's meals for one date, goal-based or health-based"""

    __tablename__ = "day_plan"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "plan_date", "is_goal_based", name="uq_day_plan_user_date_kind"
        ),
    )

    plan_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False, index=True)
    plan_date = Column(Date, nullable=False)
    goal_id = Column(Uuid, ForeignKey("goal.goal_id", ondelete="SET NULL"))
    is_goal_based = Column(Boolean, nullable=False, default=False)
    target_calories = Column(Integer, nullable=False)
    total_calories = Column(Float, nullable=False, default=0)
    total_protein = Column(Float, nullable=False, default=0)
    total_carbs = Column(Float, nullable=False, default=0)
    total_fat = Column(Float, nullable=False, default=0)
    total_fiber = Column(Float, nullable=False, default=0)
    total_sugar = Column(Float, nullable=False, default=0)
    over_target = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    meals = relationship(
        "PlannedMeal",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="PlannedMeal.position",
    )


class PlannedMeal(Base):
    """Snapshot of a recipe chosen for a slot"""

    __tablename__ = "planned_meal"

    meal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id = Column(
        Uuid, ForeignKey("day_plan.plan_id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False)
    slot = Column(SQLEnum(MealSlot), nullable=False)
    recipe_id = Column(Text, nullable=False)
    name = Column(Text, nullable=False)
    calories = Column(Float, nullable=False)
    protein = Column(Float, nullable=False, default=0)
    carbs = Column(Float, nullable=False, default=0)
    fat = Column(Float, nullable=False, default=0)
    fiber = Column(Float, nullable=False, default=0)
    sugar = Column(Float, nullable=False, default=0)
    image_url = Column(Text)
    ingredients = Column(Text)  # JSON stored as text
    over_budget = Column(Boolean, nullable=False, default=False)

    plan = relationship("DayPlan", back_populates="meals")
