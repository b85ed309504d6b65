# storefront/api/routers/auth.py
from fastapi import APIRouter, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, set_auth_cookie, clear_auth_cookie
from storefront.data.database import get_db
from storefront.domain.schemas import AuthUser, AuthOut, LoginIn, ProfileUpdate, RegisterIn
from storefront.services.user_service import UserService
from storefront.utils.errors import ConflictError, NotFoundError, http_error

router = APIRouter(prefix="/auth", tags=["auth"])


def get_service(db: Session):
    return UserService(db)


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: RegisterIn, response: Response, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        user = svc.register(payload)
    except ConflictError as e:
        raise http_error(e)
    set_auth_cookie(response, user)
    return {"user": user}


@router.post("/login", response_model=AuthOut)
def login(payload: LoginIn, response: Response, db: Session = Depends(get_db)):
    svc = get_service(db)
    user = svc.authenticate(payload.email, payload.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid credentials")
    set_auth_cookie(response, user)
    return {"user": user}


@router.post("/logout")
def logout(response: Response):
    clear_auth_cookie(response)
    return {"success": True}


@router.get("/me", response_model=AuthOut)
def me(current: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return {"user": svc.get_user(current.id)}
    except NotFoundError:
        raise HTTPException(status_code=401, detail="Unauthorized")


@router.put("/profile", response_model=AuthOut)
def update_profile(
    payload: ProfileUpdate,
    response: Response,
    current: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        user = svc.update_profile(current.id, payload)
    except (ConflictError, NotFoundError) as e:
        raise http_error(e)
    # nowy token z aktualnymi danymi
    set_auth_cookie(response, user)
    return {"user": user}
