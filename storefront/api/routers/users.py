from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import AuthUser, RoleUpdate, UserListOut, UserRead
from storefront.services.user_service import UserService
from storefront.utils.errors import NotFoundError, http_error

router = APIRouter(prefix="/admin/users", tags=["admin"])


def get_service(db: Session):
    return UserService(db)


@router.get("", response_model=UserListOut)
def list_users(
    search: str | None = Query(None),
    role: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).list_users(search, role, page, limit)


@router.put("/{user_id}", response_model=UserRead)
def set_role(
    user_id: int,
    payload: RoleUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.set_role(admin.id, user_id, payload.role)
    except (ValueError, NotFoundError) as e:
        raise http_error(e)


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_user(admin.id, user_id)
    except (ValueError, NotFoundError) as e:
        raise http_error(e)
    return {"success": True}
