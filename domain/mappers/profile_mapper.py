"""
Profile mappers.
Handles transformation between the UserProfile ORM model, the engine's Profile
value and the API response.
"""

import json

from domain.enums import ActivityLevel, DietPattern
from domain.models import UserProfile
from domain.nutrition import Profile
from domain.schemas.profile_schemas import ProfileResponse


def _json_list(raw) -> list:
    return json.loads(raw) if raw else []


class ProfileMapper:
    """Mapper for profile transformations."""

    @staticmethod
    def to_domain(profile: UserProfile) -> Profile:
        return Profile(
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            age=profile.age,
            birth_date=profile.birth_date,
            sex=profile.sex,
            activity=ActivityLevel.parse(profile.activity),
            diet=profile.diet or DietPattern.NONE,
            allergies=tuple(_json_list(profile.allergies)),
            meals=tuple(_json_list(profile.meals)),
        )

    @staticmethod
    def to_response(profile: UserProfile) -> ProfileResponse:
        return ProfileResponse(
            user_id=profile.user_id,
            weight_kg=profile.weight_kg,
            height_cm=profile.height_cm,
            age=profile.age,
            birth_date=profile.birth_date,
            sex=profile.sex,
            activity=profile.activity,
            diet=profile.diet or DietPattern.NONE,
            allergies=_json_list(profile.allergies),
            meals=_json_list(profile.meals),
            updated_at=profile.updated_at,
        )
