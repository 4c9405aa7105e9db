"""
Unit Tests for slug helpers
"""
import pytest

from devlink.utils.slug import (
    slugify,
    candidate_slugs,
    is_valid_slug,
    BASE_SLUG_MAX_LENGTH,
    SLUG_MAX_LENGTH,
)


class TestSlugify:
    """Test slug derivation from titles"""

    @pytest.mark.parametrize("title,expected", [
        ("Jane Doe", "jane-doe"),
        ("My Portfolio", "my-portfolio"),
        ("  leading and trailing  ", "leading-and-trailing"),
        ("Multiple---dashes___and   spaces", "multiple-dashes-and-spaces"),
        ("C++ & Rust!!", "c-rust"),
        ("Version 2.0", "version-2-0"),
        ("ALL CAPS", "all-caps"),
    ])
    def test_slugify(self, title, expected):
        assert slugify(title) == expected

    def test_deterministic(self):
        assert slugify("Same Title") == slugify("Same Title")

    @pytest.mark.parametrize("title", ["", "!!!", "日本語", None])
    def test_fallback_when_nothing_left(self, title):
        assert slugify(title) == "portfolio"

    def test_result_always_valid(self):
        for title in ["a", "-a-", "a--b", "é", "x_y_z", "123"]:
            assert is_valid_slug(slugify(title))

    def test_long_title_leaves_room_for_suffix(self):
        slug = slugify("word " * 100)

        assert len(slug) <= BASE_SLUG_MAX_LENGTH
        assert is_valid_slug(slug)
        assert len(f"{slug}-9999999") <= SLUG_MAX_LENGTH

    def test_cut_does_not_end_on_dash(self):
        title = "a" * (BASE_SLUG_MAX_LENGTH - 1) + " bcd"
        assert slugify(title) == "a" * (BASE_SLUG_MAX_LENGTH - 1)


class TestCandidates:
    """Test slug probe order"""

    def test_probe_order(self):
        assert list(candidate_slugs("my-portfolio", 4)) == [
            "my-portfolio", "my-portfolio-1", "my-portfolio-2", "my-portfolio-3"
        ]

    def test_limit(self):
        assert len(list(candidate_slugs("x", 1000))) == 1000

    @pytest.mark.parametrize("slug,valid", [
        ("jane-doe", True),
        ("jane-doe-1", True),
        ("-jane", False),
        ("jane-", False),
        ("jane--doe", False),
        ("Jane", False),
        ("", False),
        ("a" * (SLUG_MAX_LENGTH + 1), False),
    ])
    def test_is_valid_slug(self, slug, valid):
        assert is_valid_slug(slug) is valid
