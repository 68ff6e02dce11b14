"""Derive the flag-evaluation user context from request headers."""

from __future__ import annotations

from collections.abc import Mapping

from .models import ANONYMOUS_USER_KEY, UserContext

USER_ID_HEADER = "X-User-Id"
USER_NAME_HEADER = "X-User-Name"
USER_EMAIL_HEADER = "X-User-Email"


def user_context_from_headers(headers: Mapping[str, str]) -> UserContext:
    """
    Build a ``UserContext`` from ``X-User-*`` headers.

    A missing or empty ``X-User-Id`` yields the anonymous user. Lookups are
    case-insensitive when ``headers`` is a werkzeug ``Headers`` object.
    """
    key = headers.get(USER_ID_HEADER) or ANONYMOUS_USER_KEY
    return UserContext(
        key=key,
        name=headers.get(USER_NAME_HEADER) or None,
        email=headers.get(USER_EMAIL_HEADER) or None,
    )
