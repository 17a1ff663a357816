"""Translation of store-level uniqueness violations into domain conflicts."""

from typing import Mapping

import logfire
from sqlalchemy.exc import IntegrityError

from roost.domain.error import ConflictError
from roost.domain.message import MessageKey

USER_CONSTRAINTS: Mapping[str, MessageKey] = {
    "uq_users_handle": MessageKey.USER_HANDLE_CONFLICT,
    "uq_users_email": MessageKey.USER_EMAIL_CONFLICT,
}

NEST_CONSTRAINTS: Mapping[str, MessageKey] = {
    "uq_nests_title": MessageKey.NEST_TITLE_CONFLICT,
}


def conflict_from(
    error: IntegrityError, constraints: Mapping[str, MessageKey]
) -> ConflictError:
    """Map an IntegrityError to a ConflictError by violated constraint name.

    Args:
        error: The error raised by the store
        constraints: Constraint names to message keys

    Returns:
        ConflictError with the matching key, RESOURCE_CONFLICT otherwise
    """
    detail = str(error.orig)
    for name, key in constraints.items():
        if name in detail:
            logfire.warn("Unique constraint violated", constraint=name)
            return ConflictError(key)

    logfire.warn("Integrity error without known constraint", error=detail)
    return ConflictError(MessageKey.RESOURCE_CONFLICT)
