"""
Unit Tests for the Content Generator
"""
import pytest
from pydantic import ValidationError

from devlink.services.content_generator import (
    generate_content,
    generate_about,
    DEFAULT_CONTENT,
    PROJECT_DESCRIPTION,
    ABOUT_CLOSING,
)


class TestAbout:
    """Test personalized about text"""

    def test_defaults(self):
        about = generate_about({})
        assert about == (
            "I'm the developer, a passionate developer based in their location. " + ABOUT_CLOSING
        )

    def test_full_details(self):
        about = generate_about({
            "name": "Jane",
            "professionalTitle": "Backend Engineer",
            "location": "Berlin",
            "education": [{"degree": "BSc", "institution": "TU Berlin"}],
            "experience": [{"position": "Engineer", "company": "Acme", "technologies": ["Go", "Postgres"]}],
            "skills": [{"name": "Go"}, {"name": "Rust"}],
            "hobbies": "climbing, chess",
            "goals": "build tools, mentor juniors",
        })

        assert about.startswith("I'm Jane, a passionate Backend Engineer based in Berlin. ")
        assert "I'm currently pursuing BSc in Computer Science at TU Berlin. " in about
        assert "I work as a Engineer at Acme, where I focus on Go, Postgres. " in about
        assert "My technical expertise includes Go, Rust. " in about
        assert "When I'm not coding, I enjoy climbing, chess. " in about
        assert "My goal is to build tools and mentor juniors. " in about
        assert about.endswith(ABOUT_CLOSING)

    def test_only_first_education_and_experience_used(self):
        about = generate_about({
            "education": [
                {"degree": "MSc", "field": "Physics", "institution": "A"},
                {"degree": "BSc", "field": "Maths", "institution": "B"},
            ],
            "experience": [{"position": "Lead", "company": "X"}, {"position": "Junior", "company": "Y"}],
        })
        assert "MSc in Physics at A" in about
        assert "BSc" not in about
        assert "I work as a Lead at X, where I focus on various technologies. " in about
        assert "Junior" not in about

    def test_deterministic(self):
        details = {"name": "Jane", "skills": ["Go"]}
        assert generate_about(details) == generate_about(details)

    def test_bad_shape(self):
        with pytest.raises(ValidationError):
            generate_about({"education": "not a list"})


class TestDispatch:
    """Test content type dispatch"""

    def test_project(self):
        assert generate_content("project", "anything") == PROJECT_DESCRIPTION

    @pytest.mark.parametrize("content_type", ["skills", "bio", "ABOUT"])
    def test_other_types(self, content_type):
        assert generate_content(content_type) == DEFAULT_CONTENT

    def test_about_without_details(self):
        assert generate_content("about").startswith("I'm the developer")
