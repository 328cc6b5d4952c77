"""Read-time presentation rules for report authorship."""

from __future__ import annotations

from collections.abc import Iterable

from securezone.core.settings import settings
from securezone.models.report import Report
from securezone.models.user import User, UserRole

PRIVILEGED_ROLES = frozenset({UserRole.ADMIN, UserRole.MODERATOR})


def capabilities_of(requester: User | None) -> frozenset[UserRole]:
    """Return the capability set granted to ``requester``."""
    if requester is None:
        return frozenset()
    return frozenset({UserRole(requester.role)})


def is_privileged(capabilities: Iterable[UserRole | str]) -> bool:
    """Return True when the capability set includes ADMIN or MODERATOR.

    Raw strings are matched case-insensitively so role values read from
    tokens or legacy rows behave the same as enum members.
    """
    for capability in capabilities:
        name = capability.value if isinstance(capability, UserRole) else str(capability).upper()
        if name in {role.value for role in PRIVILEGED_ROLES}:
            return True
    return False


def display_name(report: Report, requester: User | None) -> str:
    """Return the author name ``requester`` is allowed to see for ``report``."""
    if report.is_anonymous and not is_privileged(capabilities_of(requester)):
        return settings.anonymous_display_name
    return report.user.username
