# storefront/api/deps.py
import uuid
from functools import lru_cache

from fastapi import Depends, HTTPException, Request, Response

from storefront.domain.enums import Role
from storefront.domain.schemas import AuthUser
from storefront.repos.cart_repo import CartRepo
from storefront.utils.security import create_access_token, decode_access_token
from storefront.utils.settings import (
    AUTH_COOKIE_NAME,
    CART_COOKIE_NAME,
    CART_TTL_SECONDS,
    COOKIE_SECURE,
    JWT_EXPIRE_SECONDS,
)


def _user_from_token(token: str | None) -> AuthUser | None:
    if not token:
        return None
    claims = decode_access_token(token)
    if not claims:
        return None
    try:
        return AuthUser(id=int(claims["sub"]), email=claims.get("email", ""), role=claims.get("role"))
    except (KeyError, ValueError):
        return None


def get_optional_user(request: Request) -> AuthUser | None:
    return _user_from_token(request.cookies.get(AUTH_COOKIE_NAME))


def get_current_user(user: AuthUser | None = Depends(get_optional_user)) -> AuthUser:
    if not user:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return user


def require_admin(user: AuthUser = Depends(get_current_user)) -> AuthUser:
    # rola z tokena, nie z bazy
    if user.role != Role.ADMIN:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user


def set_auth_cookie(response: Response, user) -> None:
    token = create_access_token(user.id, user.email, user.role)
    response.set_cookie(
        AUTH_COOKIE_NAME,
        token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
        max_age=JWT_EXPIRE_SECONDS,
        path="/",
    )


def clear_auth_cookie(response: Response) -> None:
    response.delete_cookie(AUTH_COOKIE_NAME, path="/")


def get_cart_session(request: Request, response: Response) -> str:
    """Id sesji koszyka z ciasteczka; nowe jesli klient go nie ma."""
    session_id = request.cookies.get(CART_COOKIE_NAME) or uuid.uuid4().hex
    # max_age odswiezany przy kazdym requescie koszyka
    response.set_cookie(
        CART_COOKIE_NAME,
        session_id,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
        max_age=CART_TTL_SECONDS,
        path="/",
    )
    return session_id


@lru_cache
def get_cart_repo() -> CartRepo:
    return CartRepo()
