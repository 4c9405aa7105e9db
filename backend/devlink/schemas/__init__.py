# Pydantic schemas
from devlink.schemas.auth import (
    UserRegister,
    UserLogin,
    UserResponse,
    Token,
    RegisterResponse,
)
from devlink.schemas.portfolio import (
    PortfolioCreate,
    PortfolioUpdate,
    PortfolioResponse,
    PortfolioDetailResponse,
    PortfolioEnvelope,
    PortfolioDetailEnvelope,
    PortfolioListResponse,
    PublishResponse,
    AboutInput,
    SkillInput,
    ProjectInput,
    ExperienceInput,
    EducationInput,
    CertificationInput,
)
from devlink.schemas.content import GenerateContentRequest, GenerateContentResponse, AboutDetails
from devlink.schemas.export import ExportRequest
from devlink.schemas.template import TemplateInfo, TemplateListResponse
