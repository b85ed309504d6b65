# storefront/api/routers/products.py
from decimal import Decimal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.enums import Category
from storefront.domain.schemas import AuthUser, ProductCreate, ProductListOut, ProductOut, ProductUpdate
from storefront.services.product_service import ProductService
from storefront.utils.errors import NotFoundError, http_error

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=ProductListOut)
def list_products(
    gender: str | None = Query(None),
    category: Category | None = Query(None),
    featured: bool = Query(False),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    search: str | None = Query(None),
    sort: str = Query("newest"),
    page: int = Query(1, ge=1),
    limit: int = Query(12, ge=1, le=100),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return svc.list_products(
        gender=gender,
        category=category.value if category else None,
        featured=featured,
        min_price=min_price,
        max_price=max_price,
        search=search,
        sort=sort,
        page=page,
        limit=limit,
    )


@router.get("/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.get_product(product_id)
    except NotFoundError as e:
        raise http_error(e)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).create_product(payload)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.update_product(product_id, payload)
    except NotFoundError as e:
        raise http_error(e)


@router.delete("/{product_id}")
def delete_product(
    product_id: int,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        svc.delete_product(product_id)
    except NotFoundError as e:
        raise http_error(e)
    return {"success": True}
