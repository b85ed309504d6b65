from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, get_optional_user
from storefront.data.database import get_db
from storefront.domain.schemas import AuthUser, ReviewIn, ReviewListOut, ReviewSubmitOut
from storefront.services.review_service import ReviewService
from storefront.utils.errors import http_error

router = APIRouter(prefix="/reviews", tags=["reviews"])


def get_service(db: Session):
    return ReviewService(db)


@router.get("", response_model=ReviewListOut)
def list_reviews(
    product_id: int = Query(..., gt=0),
    viewer: AuthUser | None = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    return get_service(db).list_reviews(product_id, viewer)


@router.post("", response_model=ReviewSubmitOut)
def submit_review(
    payload: ReviewIn,
    response: Response,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        review, created = svc.submit_review(user.id, payload)
    except PermissionError as e:
        raise http_error(e)

    if created:
        response.status_code = 201
        return {"review": review, "message": "Review created"}
    return {"review": review, "message": "Review updated"}
