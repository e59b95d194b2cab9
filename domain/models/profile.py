"""
User profile model.
"""

from sqlalchemy import Column, Date, Enum as SQLEnum, Float, Integer, Text, TIMESTAMP, Uuid
from sqlalchemy.sql import func

from domain.models.database import Base
from domain.enums import ActivityLevel, DietPattern, Sex


class UserProfile(Base):
    """Physiological snapshot and meal preferences of a user"""

    __tablename__ = "user_profile"

    user_id = Column(Uuid, primary_key=True)
    weight_kg = Column(Float)
    height_cm = Column(Float)
    age = Column(Integer)
    birth_date = Column(Date)
    sex = Column(SQLEnum(Sex))
    activity = Column(SQLEnum(ActivityLevel))
    diet = Column(SQLEnum(DietPattern), nullable=False, default=DietPattern.NONE)
    allergies = Column(Text)  # JSON array stored as text
    meals = Column(Text)  # JSON array stored as text
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )
