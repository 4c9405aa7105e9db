"""URL slug helpers"""
import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")

SLUG_PATTERN = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
FALLBACK_SLUG = "portfolio"

# portfolios.slug is VARCHAR(255); keep room for a "-NNNNNNN" uniqueness suffix
SLUG_MAX_LENGTH = 255
SUFFIX_ROOM = 8
BASE_SLUG_MAX_LENGTH = SLUG_MAX_LENGTH - SUFFIX_ROOM


def slugify(title: str) -> str:
    """
    Lowercase, collapse every run of non [a-z0-9] characters into one '-',
    trim leading/trailing '-'. Titles with no ASCII letters or digits fall
    back to "portfolio". Long results are cut to BASE_SLUG_MAX_LENGTH.

        >>> slugify("Jane Doe")
        'jane-doe'
        >>> slugify("  C++ & Rust!! ")
        'c-rust'
    """
    slug = _NON_ALNUM.sub("-", (title or "").lower()).strip("-")
    slug = slug[:BASE_SLUG_MAX_LENGTH].rstrip("-")
    return slug or FALLBACK_SLUG


def candidate_slugs(base: str, limit: int):
    """base, base-1, base-2, ... (limit candidates in total)"""
    for n in range(limit):
        yield base if n == 0 else f"{base}-{n}"


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_PATTERN.match(slug or "")) and len(slug) <= SLUG_MAX_LENGTH
