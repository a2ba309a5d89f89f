"""
Profile management endpoints.

Covers the caller's own profile, public profile listings, experience and
education entries, and GitHub repository lookups for profile pages.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from devconnector.api import github_api
from devconnector.logging import get_logger

from ..auth.dependencies import AuthContext, get_auth_context, get_current_user
from ..database import get_db
from ..dependencies import validated_body
from ..models import User
from ..schemas import (
    EducationRequest,
    ExperienceRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpdateRequest,
    RepoPageResponse,
    RepoResponse,
)
from ..services import profile_service

logger = get_logger("profile")

router = APIRouter(prefix="/profile", tags=["profile"])


# =============================================================================
# Own profile
# =============================================================================


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    profile = profile_service.get_own_profile(db, auth.user_id)
    return ProfileResponse.model_validate(profile)


@router.post("", response_model=ProfileResponse)
def create_or_update_profile(
    current_user: User = Depends(get_current_user),
    payload: ProfileUpdateRequest = Depends(validated_body(ProfileUpdateRequest, 422)),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """
    Create the caller's profile or update the existing one.

    Optional text fields are only overwritten when supplied; supplied social
    links replace the stored set.
    """
    profile = profile_service.upsert_profile(db, current_user.id, payload)
    return ProfileResponse.model_validate(profile)


@router.delete("", response_model=MessageResponse)
def delete_account(
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> MessageResponse:
    """Delete the caller's profile and account."""
    profile_service.delete_account(db, auth.user_id)
    return MessageResponse(message="User deleted")


# =============================================================================
# Public profiles
# =============================================================================


@router.get("", response_model=list[ProfileResponse])
def list_profiles(db: Session = Depends(get_db)) -> list[ProfileResponse]:
    return [ProfileResponse.model_validate(p) for p in profile_service.list_profiles(db)]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(user_id: str, db: Session = Depends(get_db)) -> ProfileResponse:
    profile = profile_service.get_profile_by_user(db, user_id)
    return ProfileResponse.model_validate(profile)


# =============================================================================
# Experience / Education
# =============================================================================


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    current_user: User = Depends(get_current_user),
    payload: ExperienceRequest = Depends(validated_body(ExperienceRequest, 400)),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Add an experience entry; the newest entry is listed first."""
    profile = profile_service.add_experience(db, current_user.id, payload)
    return ProfileResponse.model_validate(profile)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def delete_experience(
    exp_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    profile = profile_service.remove_experience(db, auth.user_id, exp_id)
    return ProfileResponse.model_validate(profile)


@router.put("/education", response_model=ProfileResponse)
def add_education(
    current_user: User = Depends(get_current_user),
    payload: EducationRequest = Depends(validated_body(EducationRequest, 400)),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    """Add an education entry; the newest entry is listed first."""
    profile = profile_service.add_education(db, current_user.id, payload)
    return ProfileResponse.model_validate(profile)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def delete_education(
    edu_id: str,
    auth: AuthContext = Depends(get_auth_context),
    db: Session = Depends(get_db),
) -> ProfileResponse:
    profile = profile_service.remove_education(db, auth.user_id, edu_id)
    return ProfileResponse.model_validate(profile)


# =============================================================================
# GitHub repositories
# =============================================================================


@router.get("/github/{username}", response_model=list[RepoResponse])
def get_github_repos(username: str) -> list[dict]:
    """Latest repositories of a GitHub user, oldest first, one page."""
    return github_api.get_user_repos(username)


@router.get("/github-graphql/{username}", response_model=RepoPageResponse)
@router.get("/github-graphql/{username}/{cursor:path}", response_model=RepoPageResponse)
def get_github_repos_page(username: str, cursor: str | None = None) -> dict:
    """
    Cursor-paginated repository listing.

    Pass ``page_info.end_cursor`` from a previous response as ``cursor`` to
    fetch the next page.
    """
    logger.debug("github_graphql_lookup", username=username, has_cursor=cursor is not None)
    return github_api.get_user_repos_graphql(username, cursor=cursor)
