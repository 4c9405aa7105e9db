"""
Unit Tests for Portfolio Schemas
Tests for: input defaults, camelCase aliases, date parsing
"""
import pytest
from pydantic import ValidationError
from datetime import date, datetime

from devlink.schemas.portfolio import (
    PortfolioCreate,
    PortfolioUpdate,
    SkillInput,
    ProjectInput,
    ExperienceInput,
    EducationInput,
    CertificationInput,
)


class TestSkillInput:
    """Test SkillInput defaults"""

    def test_defaults(self):
        skill = SkillInput(name="Rust")
        assert skill.category == "technical"
        assert skill.level == 3

    def test_zero_level_and_blank_category_use_defaults(self):
        skill = SkillInput(name="Rust", level=0, category="")
        assert (skill.level, skill.category) == (3, "technical")

    def test_explicit_values_kept(self):
        skill = SkillInput(name="Go", category="backend", level=5)
        assert (skill.level, skill.category) == (5, "backend")

    @pytest.mark.parametrize("level", [6, -1, 100])
    def test_level_out_of_range(self, level):
        with pytest.raises(ValidationError):
            SkillInput(name="Go", level=level)

    def test_name_required(self):
        with pytest.raises(ValidationError):
            SkillInput(category="technical")


class TestProjectInput:
    """Test ProjectInput normalization"""

    def test_defaults(self):
        project = ProjectInput(title="DevLink")
        assert project.featured is False
        assert project.technologies == []

    def test_technologies_from_comma_string(self):
        project = ProjectInput(title="DevLink", technologies="python, fastapi,, sqlalchemy ")
        assert project.technologies == ["python", "fastapi", "sqlalchemy"]

    def test_null_featured_is_false(self):
        assert ProjectInput(title="DevLink", featured=None).featured is False


class TestDates:
    """Test date parsing on dated sections"""

    @pytest.mark.parametrize("value,expected", [
        ("2020-01-15", date(2020, 1, 15)),
        ("2020-01-15T10:30:00.000Z", date(2020, 1, 15)),
        ("2020-01", date(2020, 1, 1)),
        (date(2020, 1, 15), date(2020, 1, 15)),
        (datetime(2020, 1, 15, 23, 59), date(2020, 1, 15)),
    ])
    def test_start_date_formats(self, value, expected):
        exp = ExperienceInput(company="Acme", position="Dev", start_date=value)
        assert exp.start_date == expected

    def test_blank_end_date_is_none(self):
        exp = ExperienceInput(company="Acme", position="Dev", start_date="2020-01-01", end_date="")
        assert exp.end_date is None

    def test_start_date_required(self):
        with pytest.raises(ValidationError):
            ExperienceInput(company="Acme", position="Dev")
        with pytest.raises(ValidationError):
            EducationInput(institution="U", degree="BSc", start_date="")

    def test_issue_date_required(self):
        with pytest.raises(ValidationError):
            CertificationInput(name="CKA", issuer="CNCF")

    def test_invalid_date(self):
        with pytest.raises(ValidationError):
            CertificationInput(name="CKA", issuer="CNCF", issue_date="not-a-date")

    def test_blank_gpa_is_none(self):
        edu = EducationInput(institution="U", degree="BSc", start_date="2014-09-01", gpa="")
        assert edu.gpa is None


class TestPortfolioUpdate:
    """Test the full-replace payload"""

    def test_camel_case_aliases(self):
        update = PortfolioUpdate.model_validate({
            "professionalTitle": "Engineer",
            "isPublic": True,
            "experience": [{"company": "Acme", "position": "Dev", "startDate": "2020-01-01", "isCurrent": True}],
        })
        assert update.professional_title == "Engineer"
        assert update.is_public is True
        assert update.experience[0].is_current is True

    def test_snake_case_accepted(self):
        update = PortfolioUpdate.model_validate({"professional_title": "Engineer", "is_public": False})
        assert update.professional_title == "Engineer"
        assert update.is_public is False

    def test_absent_collections_are_unset(self):
        update = PortfolioUpdate.model_validate({"bio": "hi"})
        sent = update.model_dump(exclude_unset=True)
        assert sent == {"bio": "hi"}
        assert update.skills is None

    def test_empty_collection_kept(self):
        update = PortfolioUpdate.model_validate({"projects": []})
        assert update.projects == []

    def test_slug_not_accepted(self):
        update = PortfolioUpdate.model_validate({"slug": "other"})
        assert "slug" not in update.model_dump()

    def test_client_item_ids_ignored(self):
        update = PortfolioUpdate.model_validate({"skills": [{"id": 1712345678901, "name": "Go"}]})
        assert update.skills[0].model_dump() == {"name": "Go", "category": "technical", "level": 3}

    @pytest.mark.parametrize("title", ["", "   ", "\t\n"])
    def test_blank_title_rejected(self, title):
        with pytest.raises(ValidationError):
            PortfolioUpdate.model_validate({"title": title})

    def test_title_with_surrounding_spaces_kept(self):
        assert PortfolioUpdate.model_validate({"title": " Jane "}).title == " Jane "


class TestPortfolioCreate:
    """Test the create payload"""

    def test_title_length_capped(self):
        assert PortfolioCreate(title="x" * 255).title == "x" * 255
        with pytest.raises(ValidationError):
            PortfolioCreate(title="x" * 256)

    def test_missing_title_left_to_store(self):
        assert PortfolioCreate().title is None
