"""Dependency injection for FastAPI endpoints"""

from datetime import date
from typing import Callable, FrozenSet, Optional

from fastapi import Header, HTTPException, Request
from boxschool_billing.domain.permissions import KNOWN_ROLES, has_any_role, parse_role_spec


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Business date used for defaults and lateness (overridable in tests)"""
    return date.today()


def require_roles(*allowed: str) -> Callable[..., FrozenSet[str]]:
    """
    Build a dependency that admits callers holding any of the allowed roles.

    Caller roles come from the X-User-Roles header set by the upstream
    authentication layer ("admin|cashier" or "admin,cashier").
    """
    allowed_roles = frozenset(allowed)

    def check_roles(x_user_roles: Optional[str] = Header(None)) -> FrozenSet[str]:
        if x_user_roles is None:
            raise HTTPException(status_code=401, detail="Not authenticated")

        roles = parse_role_spec(x_user_roles) & KNOWN_ROLES
        if not has_any_role(roles, allowed_roles):
            raise HTTPException(status_code=403, detail="Not authorized")
        return roles

    return check_roles
