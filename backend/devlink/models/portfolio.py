from sqlalchemy import (
    Column, String, Boolean, DateTime, Date, Integer, Float, Text, ForeignKey, JSON, Index
)
from sqlalchemy.orm import relationship
from datetime import datetime

from devlink.core.database import Base
from devlink.core.types import GUID, new_id


class Portfolio(Base):
    """Portfolio aggregate root; exclusively owns every section row below"""
    __tablename__ = "portfolios"

    __table_args__ = (
        Index('ix_portfolios_user_updated', 'user_id', 'updated_at'),  # list_owned ordering
    )

    id = Column(GUID, primary_key=True, default=new_id)
    user_id = Column(GUID, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    template = Column(String(50), default="modern", nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)

    # Personal info
    name = Column(String(255), nullable=True)
    professional_title = Column(String(255), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    location = Column(String(255), nullable=True)
    avatar = Column(Text, nullable=True)
    bio = Column(Text, nullable=True)

    # Social links
    github = Column(String(500), nullable=True)
    linkedin = Column(String(500), nullable=True)
    twitter = Column(String(500), nullable=True)
    website = Column(String(500), nullable=True)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Relationships; collections come back in insertion (seq) order
    user = relationship("User", back_populates="portfolios")
    about = relationship(
        "About", back_populates="portfolio", uselist=False,
        cascade="all, delete-orphan", passive_deletes=True,
    )
    skills = relationship(
        "Skill", back_populates="portfolio", order_by="Skill.seq",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    projects = relationship(
        "Project", back_populates="portfolio", order_by="Project.seq",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    experience = relationship(
        "Experience", back_populates="portfolio", order_by="Experience.seq",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    education = relationship(
        "Education", back_populates="portfolio", order_by="Education.seq",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    certifications = relationship(
        "Certification", back_populates="portfolio", order_by="Certification.seq",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    def __repr__(self):
        return f"<Portfolio {self.slug}>"


class About(Base):
    """Free-text about section, at most one per portfolio"""
    __tablename__ = "abouts"

    id = Column(GUID, primary_key=True, default=new_id)
    portfolio_id = Column(
        GUID, ForeignKey("portfolios.id", ondelete="CASCADE"),
        unique=True, nullable=False, index=True,
    )
    content = Column(Text, nullable=True)

    portfolio = relationship("Portfolio", back_populates="about")


class Skill(Base):
    """Skill model"""
    __tablename__ = "skills"
    # seq is the insertion-order key (never reused); id is the public identifier
    __table_args__ = {"sqlite_autoincrement": True}

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(GUID, unique=True, nullable=False, default=new_id)
    portfolio_id = Column(GUID, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(100), nullable=False)
    category = Column(String(50), default="technical", nullable=False)
    level = Column(Integer, default=3, nullable=False)  # 1-5

    portfolio = relationship("Portfolio", back_populates="skills")


class Project(Base):
    """Showcased project"""
    __tablename__ = "projects"
    __table_args__ = {"sqlite_autoincrement": True}

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(GUID, unique=True, nullable=False, default=new_id)
    portfolio_id = Column(GUID, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)

    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image = Column(Text, nullable=True)
    url = Column(String(500), nullable=True)
    github = Column(String(500), nullable=True)
    technologies = Column(JSON, default=list, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)

    portfolio = relationship("Portfolio", back_populates="projects")


class Experience(Base):
    """Work experience entry"""
    __tablename__ = "experiences"
    __table_args__ = {"sqlite_autoincrement": True}

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(GUID, unique=True, nullable=False, default=new_id)
    portfolio_id = Column(GUID, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)

    company = Column(String(255), nullable=False)
    position = Column(String(255), nullable=False)
    location = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False, nullable=False)
    description = Column(Text, nullable=True)
    technologies = Column(JSON, default=list, nullable=False)

    portfolio = relationship("Portfolio", back_populates="experience")


class Education(Base):
    """Education entry"""
    __tablename__ = "educations"
    __table_args__ = {"sqlite_autoincrement": True}

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(GUID, unique=True, nullable=False, default=new_id)
    portfolio_id = Column(GUID, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)

    institution = Column(String(255), nullable=False)
    degree = Column(String(255), nullable=False)
    field = Column(String(255), nullable=True)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=True)
    is_current = Column(Boolean, default=False, nullable=False)
    gpa = Column(Float, nullable=True)
    description = Column(Text, nullable=True)

    portfolio = relationship("Portfolio", back_populates="education")


class Certification(Base):
    """Certification entry"""
    __tablename__ = "certifications"
    __table_args__ = {"sqlite_autoincrement": True}

    seq = Column(Integer, primary_key=True, autoincrement=True)
    id = Column(GUID, unique=True, nullable=False, default=new_id)
    portfolio_id = Column(GUID, ForeignKey("portfolios.id", ondelete="CASCADE"), nullable=False, index=True)

    name = Column(String(255), nullable=False)
    issuer = Column(String(255), nullable=False)
    issue_date = Column(Date, nullable=False)
    expiry_date = Column(Date, nullable=True)
    url = Column(String(500), nullable=True)

    portfolio = relationship("Portfolio", back_populates="certifications")


# Collection name on the aggregate -> row model
SECTION_MODELS = {
    "skills": Skill,
    "projects": Project,
    "experience": Experience,
    "education": Education,
    "certifications": Certification,
}
