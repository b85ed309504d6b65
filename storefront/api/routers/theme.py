from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import AuthUser, ThemeOut, ThemeUpdate
from storefront.services.theme_service import ThemeService
from storefront.utils.errors import ConflictError, http_error

router = APIRouter(prefix="/theme", tags=["theme"])


@router.get("", response_model=ThemeOut)
def get_theme(db: Session = Depends(get_db)):
    return ThemeService(db).get_theme()


@router.put("", response_model=ThemeOut)
def set_theme(
    payload: ThemeUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    try:
        return ThemeService(db).set_theme(payload)
    except ConflictError as e:
        raise http_error(e)
