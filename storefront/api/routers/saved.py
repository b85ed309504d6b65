from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import AuthUser, SavedListOut, SavedToggleIn, SavedToggleOut
from storefront.services.saved_service import SavedService
from storefront.utils.errors import NotFoundError, http_error

router = APIRouter(prefix="/saved", tags=["saved"])


@router.get("", response_model=SavedListOut)
def list_saved(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return SavedService(db).list_saved(user.id)


@router.post("", response_model=SavedToggleOut)
def toggle_saved(
    payload: SavedToggleIn,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    try:
        return SavedService(db).toggle_saved(user.id, payload.product_id)
    except NotFoundError as e:
        raise http_error(e)
