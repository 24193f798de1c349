from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from hrm_access.schemas.security import UserCreateIn, UserOut, UserUpdateIn
from hrm_access.security.dependencies import (
    get_access_engine,
    get_current_user,
    get_session_store,
    require_operation,
)
from hrm_access.security.engine import AuthorizationEngine
from hrm_access.security.session_store import SessionStore
from hrm_access.security.user import User, UserUpdate

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[UserOut])
def list_users(
    store: SessionStore = Depends(get_session_store),
    user: User = Depends(get_current_user),
) -> list[User]:
    return store.list_users(user)


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(
    body: UserCreateIn,
    store: SessionStore = Depends(get_session_store),
    user: User = Depends(get_current_user),
) -> User:
    return store.create_user_account(body.email, body.password, body.name, body.role, user)


@router.patch("/users/{user_id}", response_model=UserOut)
def update_user(
    user_id: str,
    body: UserUpdateIn,
    store: SessionStore = Depends(get_session_store),
    user: User = Depends(get_current_user),
) -> User:
    return store.update_user(user_id, UserUpdate(**body.model_dump(exclude_none=True)), user)


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    store: SessionStore = Depends(get_session_store),
    user: User = Depends(get_current_user),
) -> Response:
    store.delete_user(user_id, user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/system", dependencies=[Depends(require_operation("system:settings"))])
def system_overview(engine: AuthorizationEngine = Depends(get_access_engine)) -> dict[str, int]:
    return {
        "routes": len(engine.config.model.routes),
        "operations": len(engine.config.model.operations),
    }
