"""Role-based permission checks over role keys"""

import re
from typing import FrozenSet, Iterable

ROLE_ADMIN = "admin"
ROLE_CASHIER = "cashier"
ROLE_TRAINER = "trainer"
ROLE_STUDENT = "student"
ROLE_ATTENDANCE_CONTROLLER = "attendance_controller"

KNOWN_ROLES = frozenset({ROLE_ADMIN, ROLE_CASHIER, ROLE_TRAINER, ROLE_STUDENT, ROLE_ATTENDANCE_CONTROLLER})

# Roles allowed to change billing state (credit plans, payments)
BILLING_ROLES = frozenset({ROLE_ADMIN, ROLE_CASHIER})

_ROLE_SEPARATORS = re.compile(r"[|,]")


def parse_role_spec(spec: str) -> FrozenSet[str]:
    """
    Parse a role list such as "admin|attendance_controller" or "admin, cashier".

    Whitespace is trimmed and empty keys are dropped.
    """
    return frozenset(key.strip() for key in _ROLE_SEPARATORS.split(spec or "") if key.strip())


def has_any_role(user_roles: Iterable[str], allowed_roles: Iterable[str]) -> bool:
    """True when the user holds at least one of the allowed role keys"""
    return not frozenset(user_roles).isdisjoint(allowed_roles)
