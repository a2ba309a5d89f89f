"""
Pydantic schemas for request and response validation.

Request models give every required field an empty default so that a
missing value and a blank value produce the same, readable message.
"""

from datetime import date, datetime
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)

from devconnector.constants import MIN_PASSWORD_LENGTH, PROFILE_TEXT_FIELDS, SOCIAL_NETWORKS


def _required(value: str | None, message: str) -> str:
    if value is None or not str(value).strip():
        raise ValueError(message)
    return str(value).strip()


def _valid_email(value: Any, handler: ValidatorFunctionWrapHandler) -> str:
    try:
        email = handler(value.strip() if isinstance(value, str) else value)
    except ValidationError:
        raise ValueError("Please include a valid email") from None
    return email.lower()


# =============================================================================
# Auth / Users
# =============================================================================


class RegisterRequest(BaseModel):
    name: str = ""
    email: EmailStr = Field(default="", validate_default=True)
    password: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _required(v, "Name is required")

    @field_validator("email", mode="wrap")
    @classmethod
    def validate_email(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        return _valid_email(v, handler)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if len(v or "") < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Please enter a password with {MIN_PASSWORD_LENGTH} or more characters"
            )
        return v


class LoginRequest(BaseModel):
    email: EmailStr = Field(default="", validate_default=True)
    password: str = ""

    @field_validator("email", mode="wrap")
    @classmethod
    def validate_email(cls, v: Any, handler: ValidatorFunctionWrapHandler) -> str:
        return _valid_email(v, handler)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not v:
            raise ValueError("Password is required")
        return v


class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    avatar: str | None = None
    created_at: datetime | None = None


class MessageResponse(BaseModel):
    message: str


# =============================================================================
# Profiles
# =============================================================================


class ProfileUpdateRequest(BaseModel):
    """
    Create-or-update payload.

    ``skills`` is a comma separated string ("python, go") or a list. Social
    links may be sent flat (``twitter=...``) or nested under ``social``.
    """

    status: str = ""
    skills: str | list[str] = ""
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = Field(
        default=None, validation_alias=AliasChoices("github_username", "githubusername", "githubUsername")
    )
    social: dict[str, str] | None = None

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None
    wechat: str | None = None
    weibo: str | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return _required(v, "Status is required")

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str | list[str]) -> list[str]:
        raw = v.split(",") if isinstance(v, str) else v
        skills = [skill.strip() for skill in raw if skill and skill.strip()]
        if not skills:
            raise ValueError("Skills is required")
        return skills

    def optional_fields(self) -> dict[str, str]:
        """Free-text fields that were supplied with a non-empty value."""
        return {key: getattr(self, key) for key in PROFILE_TEXT_FIELDS if getattr(self, key)}

    def social_links(self) -> dict[str, str] | None:
        """Merged social mapping, or None when no link was supplied."""
        links = {
            name: url
            for name, url in (self.social or {}).items()
            if name in SOCIAL_NETWORKS and url
        }
        for name in SOCIAL_NETWORKS:
            url = getattr(self, name)
            if url:
                links[name] = url
        if not links and self.social is None:
            return None
        return links


class ExperienceRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    company: str = ""
    location: str = ""
    from_date: date | None = Field(
        default=None, validate_default=True, validation_alias=AliasChoices("from", "from_date")
    )
    to_date: date | None = Field(default=None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _required(v, "Title is required")

    @field_validator("company")
    @classmethod
    def validate_company(cls, v: str) -> str:
        return _required(v, "Company is required")

    @field_validator("location")
    @classmethod
    def validate_location(cls, v: str) -> str:
        return _required(v, "Location is required")

    @field_validator("from_date")
    @classmethod
    def validate_from_date(cls, v: date | None) -> date:
        if v is None:
            raise ValueError("From date is required")
        return v

    @model_validator(mode="after")
    def clear_end_date(self) -> "ExperienceRequest":
        if self.current:
            self.to_date = None
        return self


class EducationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    school: str = ""
    degree: str = ""
    field_of_study: str = Field(
        default="", validation_alias=AliasChoices("field_of_study", "fieldofstudy", "fieldOfStudy")
    )
    location: str | None = None
    from_date: date | None = Field(
        default=None, validate_default=True, validation_alias=AliasChoices("from", "from_date")
    )
    to_date: date | None = Field(default=None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = None

    @field_validator("school")
    @classmethod
    def validate_school(cls, v: str) -> str:
        return _required(v, "School is required")

    @field_validator("degree")
    @classmethod
    def validate_degree(cls, v: str) -> str:
        return _required(v, "Degree is required")

    @field_validator("field_of_study")
    @classmethod
    def validate_field_of_study(cls, v: str) -> str:
        return _required(v, "Field of study is required")

    @field_validator("from_date")
    @classmethod
    def validate_from_date(cls, v: date | None) -> date:
        if v is None:
            raise ValueError("From date is required")
        return v

    @model_validator(mode="after")
    def clear_end_date(self) -> "EducationRequest":
        if self.current:
            self.to_date = None
        return self


class ProfileUserSnapshot(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    avatar: str | None = None


class ExperienceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    company: str
    location: str
    from_date: date = Field(validation_alias=AliasChoices("from_date", "from"), serialization_alias="from")
    to_date: date | None = Field(
        default=None, validation_alias=AliasChoices("to_date", "to"), serialization_alias="to"
    )
    current: bool = False
    description: str | None = None


class EducationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    school: str
    degree: str
    field_of_study: str
    location: str | None = None
    from_date: date = Field(validation_alias=AliasChoices("from_date", "from"), serialization_alias="from")
    to_date: date | None = Field(
        default=None, validation_alias=AliasChoices("to_date", "to"), serialization_alias="to"
    )
    current: bool = False
    description: str | None = None


class ProfileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user: ProfileUserSnapshot | None = None
    status: str
    skills: list[str] = Field(default_factory=list)
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    github_username: str | None = None
    social: dict[str, str] = Field(default_factory=dict)
    experience: list[ExperienceResponse] = Field(default_factory=list)
    education: list[EducationResponse] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


# =============================================================================
# GitHub
# =============================================================================


class RepoResponse(BaseModel):
    id: Any
    name: str | None = None
    url: str | None = None
    created_at: str | None = None


class PageInfo(BaseModel):
    has_next_page: bool = False
    end_cursor: str | None = None


class RepoPageResponse(BaseModel):
    repos: list[RepoResponse]
    page_info: PageInfo


# =============================================================================
# Posts
# =============================================================================


class TextRequest(BaseModel):
    """Body of a new post or comment."""

    text: str = ""

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        return _required(v, "Text is required")


class LikeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    text: str
    name: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None


class PostResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    text: str
    name: str | None = None
    avatar: str | None = None
    created_at: datetime | None = None
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
