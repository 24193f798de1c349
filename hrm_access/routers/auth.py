from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from hrm_access.schemas.security import LoginIn, LoginOut, UserOut
from hrm_access.security.dependencies import get_app_settings, get_current_user, get_session_store
from hrm_access.security.session_store import SessionStore
from hrm_access.security.user import User
from hrm_access.settings import Settings

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginOut)
def login(
    body: LoginIn,
    response: Response,
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_app_settings),
) -> LoginOut:
    """
    Check credentials and hand the token back to this client only.

    The token is returned in the body (for `Authorization: Bearer`) and as an httpOnly cookie.
    """

    # InvalidCredentials is mapped to 401 by the app-level handler.
    user = store.authenticate(body.email, body.password)
    token = store.issue_token(user)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.session_ttl_seconds,
        path="/",
    )
    return LoginOut(access_token=token, expires_in=settings.session_ttl_seconds, user=UserOut.model_validate(user))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
def logout(settings: Settings = Depends(get_app_settings)) -> Response:
    # Tokens are stateless; signing out drops this client's cookie.
    response = Response(status_code=status.HTTP_204_NO_CONTENT)
    response.delete_cookie(
        key=settings.session_cookie_name,
        path="/",
        samesite="lax",
        secure=settings.session_cookie_secure,
    )
    return response


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> User:
    return user
