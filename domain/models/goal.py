"""
Weight goal models.
"""

from sqlalchemy import (
    Column,
    Date,
    Enum as SQLEnum,
    Float,
    ForeignKey,
    Index,
    Integer,
    Text,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base
from domain.enums import GoalStatus, GoalType


class Goal(Base):
    """Weight goal with its computed daily calorie target"""

    __tablename__ = "goal"
    __table_args__ = (Index("ix_goal_user_status", "user_id", "status"),)

    goal_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, nullable=False)
    goal_type = Column(SQLEnum(GoalType), nullable=False)
    start_weight = Column(Float, nullable=False)
    target_weight = Column(Float, nullable=False)
    current_weight = Column(Float, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    duration_weeks = Column(Integer, nullable=False)
    weekly_weight_change = Column(Float, nullable=False)  # kg/week, negative for loss
    target_calories_per_day = Column(Integer, nullable=False)
    status = Column(SQLEnum(GoalStatus), nullable=False, default=GoalStatus.ACTIVE)
    description = Column(Text)
    warnings = Column(Text)  # JSON array stored as text
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    progress = relationship(
        "GoalWeightRecord",
        back_populates="goal",
        cascade="all, delete-orphan",
        order_by="GoalWeightRecord.recorded_on",
    )


class GoalWeightRecord(Base):
    """Weigh-in logged against a goal"""

    __tablename__ = "goal_weight_record"

    record_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    goal_id = Column(
        Uuid, ForeignKey("goal.goal_id", ondelete="CASCADE"), nullable=False
    )
    recorded_on = Column(Date, nullable=False)
    weight = Column(Float, nullable=False)
    note = Column(Text)

    goal = relationship("Goal", back_populates="progress")
