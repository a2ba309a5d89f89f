"""Developer profile repository."""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy.orm import selectinload

from devconnector.models import Education, Experience, Profile

from .base import BaseRepository


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations, including embedded experience/education."""

    model = Profile

    def _query(self):
        return self.session.query(Profile).options(
            selectinload(Profile.user),
            selectinload(Profile.experience),
            selectinload(Profile.education),
        )

    def get_by_user_id(self, user_id: int) -> Profile | None:
        """Get profile by owning user ID."""
        return self._query().filter(Profile.user_id == user_id).first()

    def list_all(self) -> list[Profile]:
        """All profiles, oldest first."""
        return self._query().order_by(Profile.id).all()

    def upsert_by_owner(
        self,
        user_id: int,
        status: str,
        skills: list[str],
        fields: dict[str, Any] | None = None,
        social: dict[str, str] | None = None,
    ) -> tuple[Profile, bool]:
        """
        Update the user's profile if it exists, otherwise insert it.

        Only optional fields present in ``fields`` are overwritten; a supplied
        ``social`` mapping replaces the stored one. The unique ``user_id``
        column keeps the one-profile-per-user invariant even when two
        requests race to insert.

        Returns:
            Tuple of (profile, created)
        """
        fields = fields or {}
        profile = self.get_by_user_id(user_id)
        created = profile is None

        if profile is None:
            profile = Profile(user_id=user_id, status=status, skills=skills, social={})
            self.session.add(profile)
        else:
            profile.status = status
            profile.skills = skills
            profile.updated_at = datetime.now(timezone.utc)

        for key, value in fields.items():
            if hasattr(Profile, key):
                setattr(profile, key, value)
        if social is not None:
            profile.social = dict(social)

        self.session.flush()
        return profile, created

    def add_experience(self, profile: Profile, **values: Any) -> Experience:
        """Insert an experience entry; it is listed first on the profile."""
        entry = Experience(profile_id=profile.id, **values)
        self.session.add(entry)
        self.session.flush()
        self.session.expire(profile, ["experience"])
        return entry

    def remove_experience(self, profile: Profile, experience_id: int) -> bool:
        """Delete an experience entry of this profile. Returns False when absent."""
        removed = (
            self.session.query(Experience)
            .filter(Experience.profile_id == profile.id, Experience.id == experience_id)
            .delete(synchronize_session=False)
        )
        self.session.expire(profile, ["experience"])
        return bool(removed)

    def add_education(self, profile: Profile, **values: Any) -> Education:
        """Insert an education entry; it is listed first on the profile."""
        entry = Education(profile_id=profile.id, **values)
        self.session.add(entry)
        self.session.flush()
        self.session.expire(profile, ["education"])
        return entry

    def remove_education(self, profile: Profile, education_id: int) -> bool:
        """Delete an education entry of this profile. Returns False when absent."""
        removed = (
            self.session.query(Education)
            .filter(Education.profile_id == profile.id, Education.id == education_id)
            .delete(synchronize_session=False)
        )
        self.session.expire(profile, ["education"])
        return bool(removed)
