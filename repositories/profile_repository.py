"""
Profile Repository - Data access layer for user profiles
"""

import json
from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import UserProfile

_JSON_FIELDS = ("allergies", "meals")


class ProfileRepository(BaseRepository[UserProfile]):
    """Repository for user profile data access"""

    id_field = "user_id"

    def __init__(self, db: Session):
        super().__init__(db, UserProfile)

    def get_by_user_id(self, user_id: UUID) -> Optional[UserProfile]:
        """Get the profile of a user"""
        return self.get_by_id(user_id)

    def upsert(self, user_id: UUID, **fields) -> UserProfile:
        """Create or update a profile; list fields are stored as JSON text"""
        for key in _JSON_FIELDS:
            if fields.get(key) is not None:
                fields[key] = json.dumps(
                    [getattr(v, "value", v) for v in fields[key]]
                )

        profile = self.get_by_user_id(user_id)
        if profile is None:
            return self.create(UserProfile(user_id=user_id, **fields))

        for key, value in fields.items():
            if hasattr(profile, key):
                setattr(profile, key, value)
        return self.update(profile)
