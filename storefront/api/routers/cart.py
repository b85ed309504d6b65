# storefront/api/routers/cart.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_cart_repo, get_cart_session, get_current_user
from storefront.data.database import get_db
from storefront.domain.schemas import AuthUser, CartItemIn, CartOut, CartQuantityIn, CheckoutIn, CheckoutOut
from storefront.repos.cart_repo import CartRepo
from storefront.services.cart_service import CartService
from storefront.utils.errors import NotFoundError, http_error

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session, repo: CartRepo):
    return CartService(db=db, repo=repo)


@router.get("", response_model=CartOut)
def get_cart(
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    return get_service(db, repo).get_cart(session_id)


@router.post("/items", response_model=CartOut)
def add_item(
    payload: CartItemIn,
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    svc = get_service(db, repo)
    try:
        return svc.add_item(session_id, payload)
    except NotFoundError as e:
        raise http_error(e)


@router.patch("/items", response_model=CartOut)
def update_quantity(
    payload: CartQuantityIn,
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    return get_service(db, repo).update_quantity(session_id, payload)


@router.delete("/items", response_model=CartOut)
def remove_item(
    product_id: int = Query(..., gt=0),
    size: str | None = Query(None),
    color: str | None = Query(None),
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    return get_service(db, repo).remove_item(session_id, product_id, size, color)


@router.delete("", response_model=CartOut)
def clear_cart(
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    return get_service(db, repo).clear(session_id)


@router.post("/toggle", response_model=CartOut)
def toggle_cart(
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    return get_service(db, repo).toggle(session_id)


@router.post("/checkout", response_model=CheckoutOut, status_code=201)
def checkout(
    payload: CheckoutIn,
    user: AuthUser = Depends(get_current_user),
    session_id: str = Depends(get_cart_session),
    repo: CartRepo = Depends(get_cart_repo),
    db: Session = Depends(get_db),
):
    svc = get_service(db, repo)
    try:
        return svc.checkout(session_id, user.id, payload.address)
    except ValueError as e:
        raise http_error(e)
