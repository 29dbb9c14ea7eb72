"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    TypeAdapter,
    ValidationError,
    field_validator,
    model_validator,
)

from api.schemas.common import not_blank

_HTTP_URL = TypeAdapter(HttpUrl)


class SocialLinks(BaseModel):
    """Social network links."""

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's Profile."""

    status: str = Field(..., min_length=1, max_length=100)
    skills: list[str] | str
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    githubusername: str | None = Field(None, max_length=100)
    social: SocialLinks | None = None

    @field_validator("status")
    @classmethod
    def validate_status(cls, v: str) -> str:
        return not_blank(v)

    @field_validator("website")
    @classmethod
    def validate_website(cls, v: str | None) -> str | None:
        """Must be an http(s) URL; stored as sent, not normalized."""
        if v is None:
            return None
        v = v.strip()
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError("must be a valid http(s) URL") from None
        return v

    @field_validator("skills")
    @classmethod
    def split_skills(cls, v: list[str] | str) -> list[str]:
        """Accept either a list or a comma-separated string."""
        items = v.split(",") if isinstance(v, str) else v
        skills = [item.strip() for item in items if item.strip()]
        if not skills:
            raise ValueError("at least one skill is required")
        return skills


class _DatedEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool = False
    description: str | None = None

    @model_validator(mode="after")
    def validate_range(self) -> "_DatedEntry":
        if self.to_date and self.to_date < self.from_date:
            raise ValueError("'to' must not be before 'from'")
        return self


class ExperienceCreate(_DatedEntry):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = Field(None, max_length=255)


class EducationCreate(_DatedEntry):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    fieldofstudy: str = Field(..., min_length=1, max_length=255)


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    school: str
    degree: str
    fieldofstudy: str
    from_date: date = Field(..., alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class ProfileOwner(BaseModel):
    """Public fields of the profile's owner."""

    id: UUID
    name: str
    avatar: str


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(populate_by_name=True)

    id: UUID
    user: ProfileOwner
    status: str
    skills: list[str]
    company: str | None = None
    website: str | None = None
    location: str | None = None
    bio: str | None = None
    githubusername: str | None = None
    experience: list[ExperienceResponse]
    education: list[EducationResponse]
    social: dict[str, str]
    created_at: datetime = Field(..., alias="date")
