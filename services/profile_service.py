from typing import Tuple
from uuid import UUID
from sqlalchemy.orm import Session
import logging

from domain.models import UserProfile
from domain.schemas.profile_schemas import ProfileUpdateRequest
from repositories import ProfileRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("nutriplan.profile")


class ProfileService:
    """Business logic for profile management"""

    @staticmethod
    def get_profile(db: Session, user_id: UUID) -> UserProfile:
        """Retrieve a user's profile or raise NotFoundError"""
        profile = ProfileRepository(db).get_by_user_id(user_id)
        if not profile:
            logger.warning(f"profile_not_found user_id={user_id}")
            raise NotFoundError(f"Profile for user {user_id} not found")

        logger.info(f"profile_fetched user_id={user_id}")
        return profile

    @staticmethod
    def upsert_profile(
        db: Session, user_id: UUID, profile_data: ProfileUpdateRequest
    ) -> Tuple[UserProfile, bool]:
        """
        Create or update a profile from the fields present in the request.
        Returns a tuple of (UserProfile, created_flag).
        """
        repo = ProfileRepository(db)
        created = repo.get_by_user_id(user_id) is None
        fields = profile_data.model_dump(exclude_unset=True)
        if fields.get("diet") is None:
            fields.pop("diet", None)

        profile = repo.upsert(user_id, **fields)
        logger.info(
            f"profile_{'created' if created else 'updated'} user_id={user_id} "
            f"fields={sorted(fields)}"
        )
        return profile, created
