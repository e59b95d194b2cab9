"""
Domain enums for NutriPlan.
Contains the enumeration types and the fixed tag vocabulary shared by the
meal engine and the recipe catalog boundary.
"""

import enum
from typing import Optional

# Bump whenever a tag value below changes; the catalog is tagged against it.
TAG_VOCABULARY_VERSION = 1


class MealSlot(str, enum.Enum):
    """Meal occasions within a day"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    SNACK = "snack"
    DINNER = "dinner"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class MealTimeTag(str, enum.Enum):
    """Catalog tags marking when a recipe is eaten"""

    MORNING = "morning"
    MIDDAY = "midday"
    AFTERNOON = "afternoon"
    EVENING = "evening"


class DietPattern(str, enum.Enum):
    """Dietary pattern of a user"""

    NONE = "none"
    VEGETARIAN = "vegetarian"
    VEGAN = "vegan"
    KETO = "keto"
    PALEO = "paleo"
    GLUTEN_FREE = "gluten-free"

    @property
    def tag(self) -> Optional[str]:
        """Catalog tag required for this pattern, None when unrestricted"""
        return None if self is DietPattern.NONE else self.value


class ActivityLevel(str, enum.Enum):
    """Physical activity levels"""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @classmethod
    def parse(cls, value) -> Optional["ActivityLevel"]:
        """Accept enum members and loose strings such as 'Very Active'."""
        if value is None or isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace(" ", "_").replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            return None


class Sex(str, enum.Enum):
    """Biological sex used by the BMR formula"""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class GoalType(str, enum.Enum):
    """Direction of a weight goal"""

    WEIGHT_LOSS = "weight_loss"
    WEIGHT_GAIN = "weight_gain"
    MAINTAIN = "maintain"


class GoalStatus(str, enum.Enum):
    """Lifecycle of a goal"""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    PAUSED = "paused"


SLOT_ORDER = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.SNACK, MealSlot.DINNER)

SLOT_TAGS = {
    MealSlot.BREAKFAST: MealTimeTag.MORNING,
    MealSlot.LUNCH: MealTimeTag.MIDDAY,
    MealSlot.SNACK: MealTimeTag.AFTERNOON,
    MealSlot.DINNER: MealTimeTag.EVENING,
}
