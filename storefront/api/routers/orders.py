# storefront/api/routers/orders.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_admin
from storefront.data.database import get_db
from storefront.domain.enums import OrderStatus
from storefront.domain.schemas import (
    AuthUser,
    OrderCreate,
    OrderListOut,
    OrderOut,
    OrderStatusUpdate,
    OwnOrdersOut,
)
from storefront.services.order_service import OrderService
from storefront.utils.errors import NotFoundError, http_error

router = APIRouter(prefix="/orders", tags=["orders"])


def get_service(db: Session):
    return OrderService(db)


@router.post("", response_model=OrderOut, status_code=201)
def create_order(
    payload: OrderCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Tworzy zamowienie (PENDING) ze snapshotu koszyka wyslanego przez klienta.
    """
    svc = get_service(db)
    try:
        return svc.create_order(user.id, payload)
    except ValueError as e:
        raise http_error(e)


@router.get("", response_model=OrderListOut)
def list_orders(
    status: str | None = Query(None),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Lista wszystkich zamowien dla admina, najnowsze pierwsze.
    """
    if status and status != "ALL" and status not in OrderStatus.__members__:
        raise http_error(ValueError(f"Unknown status {status}"))
    return get_service(db).list_orders(status, page, limit)


@router.get("/user", response_model=OwnOrdersOut)
def list_own_orders(
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return {"orders": get_service(db).list_own_orders(user.id)}


@router.get("/{order_id}", response_model=OrderOut)
def get_order(
    order_id: int,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Pobiera szczegoly zamowienia (wlasciciel albo admin).
    """
    svc = get_service(db)
    try:
        return svc.get_order(order_id, user)
    except (PermissionError, NotFoundError) as e:
        raise http_error(e)


@router.put("/{order_id}", response_model=OrderOut)
def update_status(
    order_id: int,
    payload: OrderStatusUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_status(order_id, payload.status)
    except (ValueError, NotFoundError) as e:
        raise http_error(e)
