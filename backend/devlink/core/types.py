"""Column types and id helpers shared by the DevLink models"""
import uuid
from typing import Optional

from sqlalchemy import String, TypeDecorator


def new_id() -> str:
    """Fresh primary key: lowercase, hyphenated UUID4"""
    return str(uuid.uuid4())


def canonical_uuid(value) -> Optional[str]:
    """Canonical form of a UUID given in any accepted spelling, else None"""
    try:
        return str(uuid.UUID(str(value).strip()))
    except (ValueError, TypeError, AttributeError):
        return None


class GUID(TypeDecorator):
    """
    UUID kept as VARCHAR(36) on every backend.

    Ids reach queries straight from URL paths, so a bound UUID in any spelling
    (uppercase, no hyphens, braces, uuid.UUID) is rewritten to the stored
    form. Anything that is not a UUID is bound unchanged and matches no row.
    """
    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return canonical_uuid(value) or str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else str(value)
