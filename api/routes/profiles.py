"""Profile management routes (body metrics, diet, allergies, meal slots)"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from domain.models import get_db_session
from domain.schemas.profile_schemas import ProfileResponse, ProfileUpdateRequest
from services.profile_service import ProfileService
from domain.mappers import ProfileMapper

router = APIRouter(prefix="/profiles", tags=["Profiles"])
logger = logging.getLogger("nutriplan.api.profiles")


@router.get("/{user_id}", response_model=ProfileResponse)
def get_profile(user_id: UUID, db: Session = Depends(get_db_session)):
    """Get a user's profile."""
    profile = ProfileService.get_profile(db, user_id)
    return ProfileMapper.to_response(profile)


@router.put("/{user_id}", response_model=ProfileResponse)
def update_profile(
    user_id: UUID,
    profile_data: ProfileUpdateRequest,
    db: Session = Depends(get_db_session),
):
    """
    Create or update a profile. Only the fields sent are changed.
    Returns 201 with a Location header when the profile is new.
    """
    profile, created = ProfileService.upsert_profile(db, user_id, profile_data)
    resp = ProfileMapper.to_response(profile)
    if created:
        headers = {"Location": f"/profiles/{profile.user_id}"}
        return Response(
            content=resp.model_dump_json(),
            status_code=status.HTTP_201_CREATED,
            media_type="application/json",
            headers=headers,
        )
    return resp
