# Re-export all models for convenient imports
from devlink.models.user import User
from devlink.models.portfolio import (
    Portfolio,
    About,
    Skill,
    Project,
    Experience,
    Education,
    Certification,
    SECTION_MODELS,
)

__all__ = [
    # User
    "User",
    # Portfolio aggregate
    "Portfolio",
    "About",
    "Skill",
    "Project",
    "Experience",
    "Education",
    "Certification",
    "SECTION_MODELS",
]
