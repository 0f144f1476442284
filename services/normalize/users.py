"""
User Formatter
Converts raw GLPI user search rows to FormattedUser records
"""

from typing import Any, Iterable

import structlog

from shared.schemas.glpi import RawRecord
from shared.schemas.user import FormattedUser

from .fields import REQUIRED_USER_FIELDS, USER_FIELDS

logger = structlog.get_logger()


def _as_text(value: Any) -> str:
    """Empty string for null/falsy values, str() for everything else"""
    if not value:
        return ""
    return str(value)


def project_user(raw: RawRecord) -> FormattedUser:
    """Rename a raw user's field IDs to named attributes"""
    return FormattedUser(**{
        name: _as_text(raw.get(field_id))
        for field_id, name in USER_FIELDS.items()
    })


def is_listable(user: FormattedUser) -> bool:
    """True when nome, sobrenome and email are all present"""
    return all(getattr(user, name) for name in REQUIRED_USER_FIELDS)


def format_users(raw_records: Iterable[RawRecord]) -> list[FormattedUser]:
    """
    Project, filter and order raw user rows.

    Args:
        raw_records: Rows from /search/User

    Returns:
        Users with nome, sobrenome and email, sorted by nome (case-insensitive).
        Empty when nothing qualifies.
    """
    projected = [project_user(raw) for raw in raw_records or [] if isinstance(raw, dict)]
    users = [user for user in projected if is_listable(user)]

    dropped = len(projected) - len(users)
    if dropped:
        logger.debug("Dropped incomplete users", dropped=dropped, kept=len(users))

    # sorted() is stable, so equal names keep their upstream order
    return sorted(users, key=lambda user: user.nome.lower())
