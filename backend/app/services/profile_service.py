"""
Profile management service functions.
"""

from sqlalchemy.orm import Session

from devconnector.constants import MSG_NO_PROFILE, MSG_PROFILE_NOT_FOUND
from devconnector.exceptions import NotFoundError
from devconnector.logging import LogContext, get_logger
from devconnector.models import Profile
from devconnector.repositories import ProfileRepository, UserRepository

from ..schemas import EducationRequest, ExperienceRequest, ProfileUpdateRequest
from .common import parse_id

logger = get_logger("profile_service")


def get_own_profile(db: Session, user_id: int) -> Profile:
    """
    Fetch the caller's profile.

    Raises:
        NotFoundError: 400 "There is no profile for this user"
    """
    profile = ProfileRepository(db).get_by_user_id(user_id)
    if profile is None:
        raise NotFoundError(MSG_NO_PROFILE, status_code=400)
    return profile


def upsert_profile(db: Session, user_id: int, payload: ProfileUpdateRequest) -> Profile:
    """Create the caller's profile, or update it when one exists."""
    with LogContext(user_id=user_id, operation="profile_upsert"):
        profile, created = ProfileRepository(db).upsert_by_owner(
            user_id,
            status=payload.status,
            skills=payload.skills,
            fields=payload.optional_fields(),
            social=payload.social_links(),
        )
        db.commit()
        logger.info("profile_created" if created else "profile_updated")
    return profile


def list_profiles(db: Session) -> list[Profile]:
    return ProfileRepository(db).list_all()


def get_profile_by_user(db: Session, raw_user_id: str) -> Profile:
    """
    Public profile lookup.

    A malformed id is reported the same way as a missing profile.
    """
    user_id = parse_id(raw_user_id)
    profile = ProfileRepository(db).get_by_user_id(user_id) if user_id else None
    if profile is None:
        raise NotFoundError(MSG_PROFILE_NOT_FOUND, status_code=400)
    return profile


def delete_account(db: Session, user_id: int) -> None:
    """
    Delete the caller's profile and user.

    Posts and comments written by the user are kept.
    """
    users = UserRepository(db)
    user = users.get_by_id(user_id)
    if user is not None:
        users.delete_user(user)
    db.commit()
    logger.info("account_deleted", user_id=user_id)


def add_experience(db: Session, user_id: int, payload: ExperienceRequest) -> Profile:
    profile = get_own_profile(db, user_id)
    entry = ProfileRepository(db).add_experience(profile, **payload.model_dump())
    db.commit()
    logger.info("experience_added", user_id=user_id, experience_id=entry.id)
    return profile


def remove_experience(db: Session, user_id: int, raw_experience_id: str) -> Profile:
    """Remove one experience entry. An unknown id leaves the profile unchanged."""
    profile = get_own_profile(db, user_id)
    experience_id = parse_id(raw_experience_id)
    removed = bool(experience_id) and ProfileRepository(db).remove_experience(profile, experience_id)
    db.commit()
    if removed:
        logger.info("experience_removed", user_id=user_id, experience_id=experience_id)
    else:
        logger.info("experience_not_found", user_id=user_id, experience_id=raw_experience_id)
    return profile


def add_education(db: Session, user_id: int, payload: EducationRequest) -> Profile:
    profile = get_own_profile(db, user_id)
    entry = ProfileRepository(db).add_education(profile, **payload.model_dump())
    db.commit()
    logger.info("education_added", user_id=user_id, education_id=entry.id)
    return profile


def remove_education(db: Session, user_id: int, raw_education_id: str) -> Profile:
    """Remove one education entry. An unknown id leaves the profile unchanged."""
    profile = get_own_profile(db, user_id)
    education_id = parse_id(raw_education_id)
    removed = bool(education_id) and ProfileRepository(db).remove_education(profile, education_id)
    db.commit()
    if removed:
        logger.info("education_removed", user_id=user_id, education_id=education_id)
    else:
        logger.info("education_not_found", user_id=user_id, education_id=raw_education_id)
    return profile
