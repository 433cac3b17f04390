# Admin gate for mutating endpoints
# app/core/security.py

import logging
from abc import ABC, abstractmethod
from enum import Enum

from fastapi import Depends, HTTPException, Request, status

logger = logging.getLogger(__name__)


class InsufficientPermissionsException(HTTPException):
    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class AuthorizationDecision(str, Enum):
    ALLOWED = "allowed"
    DENIED = "denied"


class AuthorizationPolicy(ABC):
    """
    Decides whether a request may run a mutating operation.

    Endpoints only see the decision, so a signed-token or session policy can
    replace the header check without touching them.
    """

    @abstractmethod
    def authorize(self, request: Request) -> AuthorizationDecision:
        ...


class RoleHeaderPolicy(AuthorizationPolicy):
    """
    Allows a request iff the role header equals the required role exactly.

    The value is client-supplied and unsigned: this is a coarse gate, not
    authentication.
    """

    def __init__(self, header_name: str = "role", required_role: str = "admin"):
        self.header_name = header_name
        self.required_role = required_role

    def authorize(self, request: Request) -> AuthorizationDecision:
        role = request.headers.get(self.header_name)
        if role is not None and role == self.required_role:
            return AuthorizationDecision.ALLOWED
        return AuthorizationDecision.DENIED


# --- FastAPI Dependencies ---

def get_authorization_policy(request: Request) -> AuthorizationPolicy:
    """Returns the policy installed on the application at startup."""
    return request.app.state.authorization_policy


async def require_admin(
    request: Request,
    policy: AuthorizationPolicy = Depends(get_authorization_policy),
) -> None:
    """
    FastAPI dependency placed in front of create/update/delete routes.

    Raises:
        InsufficientPermissionsException: 403 when the policy denies the request.
    """
    if policy.authorize(request) is AuthorizationDecision.DENIED:
        logger.warning(f"Denied {request.method} {request.url.path}: admin role required.")
        raise InsufficientPermissionsException()
