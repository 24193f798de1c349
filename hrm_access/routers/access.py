from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from hrm_access.schemas.security import AccessDecisionOut
from hrm_access.security.dependencies import get_access_engine, get_optional_user
from hrm_access.security.engine import AuthorizationEngine
from hrm_access.security.user import User

router = APIRouter(prefix="/access", tags=["access"])

# Decision endpoints for a front end that needs to hide links and buttons.
# Anonymous callers get "allowed": false rather than a 401.


@router.get("/routes", response_model=AccessDecisionOut)
def route_access(
    path: str = Query(..., min_length=1),
    engine: AuthorizationEngine = Depends(get_access_engine),
    user: User | None = Depends(get_optional_user),
) -> AccessDecisionOut:
    return AccessDecisionOut(target=path, allowed=engine.can_access_route(user, path))


@router.get("/operations/{operation}", response_model=AccessDecisionOut)
def operation_access(
    operation: str,
    engine: AuthorizationEngine = Depends(get_access_engine),
    user: User | None = Depends(get_optional_user),
) -> AccessDecisionOut:
    return AccessDecisionOut(target=operation, allowed=engine.can_perform_sensitive_operation(user, operation))


@router.get("/permissions/{permission}", response_model=AccessDecisionOut)
def permission_access(
    permission: str,
    engine: AuthorizationEngine = Depends(get_access_engine),
    user: User | None = Depends(get_optional_user),
) -> AccessDecisionOut:
    return AccessDecisionOut(target=permission, allowed=engine.has_permission(user, permission))
