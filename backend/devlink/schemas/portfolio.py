"""
Portfolio request/response schemas.

Requests accept snake_case or camelCase keys (``isPublic``, ``startDate``...).
Responses are always snake_case.
"""

from pydantic import BaseModel, Field, ConfigDict, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Any
from datetime import date, datetime


def parse_date(value: Any) -> Any:
    """Accept date, datetime, ISO strings (time part dropped) and YYYY-MM month values"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        value = value.strip().split("T", 1)[0]
        if len(value) == 7 and value[4] == "-":
            value = f"{value}-01"
    return value


def parse_technologies(value: Any) -> Any:
    """None -> [], "a, b" -> ["a", "b"]"""
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    return value


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================
# Section items (input)
# ============================================

class AboutInput(CamelModel):
    content: Optional[str] = None


class SkillInput(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    category: Optional[str] = None
    level: Optional[int] = None

    @field_validator("category", mode="after")
    @classmethod
    def default_category(cls, v):
        return v or "technical"

    @field_validator("level", mode="after")
    @classmethod
    def default_level(cls, v):
        if not v:
            return 3
        if v < 1 or v > 5:
            raise ValueError("level must be between 1 and 5")
        return v


class ProjectInput(CamelModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    github: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)
    featured: Optional[bool] = False

    normalize_technologies = field_validator("technologies", mode="before")(parse_technologies)

    @field_validator("featured", mode="after")
    @classmethod
    def default_featured(cls, v):
        return bool(v)


class ExperienceInput(CamelModel):
    company: str = Field(..., min_length=1, max_length=255)
    position: str = Field(..., min_length=1, max_length=255)
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: Optional[bool] = False
    description: Optional[str] = None
    technologies: List[str] = Field(default_factory=list)

    normalize_dates = field_validator("start_date", "end_date", mode="before")(parse_date)
    normalize_technologies = field_validator("technologies", mode="before")(parse_technologies)

    @field_validator("is_current", mode="after")
    @classmethod
    def default_is_current(cls, v):
        return bool(v)


class EducationInput(CamelModel):
    institution: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: Optional[bool] = False
    gpa: Optional[float] = None
    description: Optional[str] = None

    normalize_dates = field_validator("start_date", "end_date", mode="before")(parse_date)

    @field_validator("gpa", mode="before")
    @classmethod
    def blank_gpa(cls, v):
        return None if v == "" else v

    @field_validator("is_current", mode="after")
    @classmethod
    def default_is_current(cls, v):
        return bool(v)


class CertificationInput(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    issuer: str = Field(..., min_length=1, max_length=255)
    issue_date: date
    expiry_date: Optional[date] = None
    url: Optional[str] = None

    normalize_dates = field_validator("issue_date", "expiry_date", mode="before")(parse_date)


# ============================================
# Portfolio (input)
# ============================================

class PortfolioCreate(CamelModel):
    # Blank titles are rejected by the store with a ValidationError
    title: Optional[str] = Field(None, max_length=255)
    template: Optional[str] = None


class PortfolioUpdate(CamelModel):
    """
    Full-replace payload.

    Root scalars are a partial update (only keys sent are touched). Each
    collection key present replaces that whole collection; absent keys leave
    it alone. There is no slug field: slugs never change after creation.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    template: Optional[str] = None
    is_public: Optional[bool] = None

    name: Optional[str] = None
    professional_title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None

    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None

    about: Optional[AboutInput] = None
    skills: Optional[List[SkillInput]] = None
    projects: Optional[List[ProjectInput]] = None
    experience: Optional[List[ExperienceInput]] = None
    education: Optional[List[EducationInput]] = None
    certifications: Optional[List[CertificationInput]] = None

    @field_validator("title", mode="after")
    @classmethod
    def title_not_blank(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Title cannot be blank")
        return v


# Root columns a replace may assign
ROOT_FIELDS = (
    "title", "template", "is_public",
    "name", "professional_title", "email", "phone", "location", "avatar", "bio",
    "github", "linkedin", "twitter", "website",
)
# Root columns that can never be set to null
NON_NULLABLE_ROOT_FIELDS = ("title", "template", "is_public")
SECTION_FIELDS = ("skills", "projects", "experience", "education", "certifications")


# ============================================
# Responses
# ============================================

class AboutResponse(BaseModel):
    id: str
    content: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class SkillResponse(BaseModel):
    id: str
    name: str
    category: str
    level: int

    model_config = ConfigDict(from_attributes=True)


class ProjectResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    image: Optional[str] = None
    url: Optional[str] = None
    github: Optional[str] = None
    technologies: List[str] = []
    featured: bool = False

    model_config = ConfigDict(from_attributes=True)


class ExperienceResponse(BaseModel):
    id: str
    company: str
    position: str
    location: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False
    description: Optional[str] = None
    technologies: List[str] = []

    model_config = ConfigDict(from_attributes=True)


class EducationResponse(BaseModel):
    id: str
    institution: str
    degree: str
    field: Optional[str] = None
    start_date: date
    end_date: Optional[date] = None
    is_current: bool = False
    gpa: Optional[float] = None
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class CertificationResponse(BaseModel):
    id: str
    name: str
    issuer: str
    issue_date: date
    expiry_date: Optional[date] = None
    url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class PortfolioResponse(BaseModel):
    """Root record only; used where dependents are not loaded"""
    id: str
    user_id: str
    title: str
    slug: str
    template: str
    is_public: bool

    name: Optional[str] = None
    professional_title: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    avatar: Optional[str] = None
    bio: Optional[str] = None

    github: Optional[str] = None
    linkedin: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None

    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class PortfolioDetailResponse(PortfolioResponse):
    """Root record with every dependent section"""
    about: Optional[AboutResponse] = None
    skills: List[SkillResponse] = []
    projects: List[ProjectResponse] = []
    experience: List[ExperienceResponse] = []
    education: List[EducationResponse] = []
    certifications: List[CertificationResponse] = []


class PortfolioEnvelope(BaseModel):
    portfolio: PortfolioResponse


class PortfolioDetailEnvelope(BaseModel):
    portfolio: PortfolioDetailResponse


class PortfolioListResponse(BaseModel):
    portfolios: List[PortfolioResponse]


class PublishResponse(PortfolioEnvelope):
    public_url: str
