# storefront/repos/product_repo.py
from decimal import Decimal

from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel

# klucz sortowania -> kolumna
_SORTS = {
    "newest": (ProductModel.created_at.desc(), ProductModel.id.desc()),
    "price_asc": (ProductModel.price.asc(), ProductModel.id.asc()),
    "price_desc": (ProductModel.price.desc(), ProductModel.id.desc()),
    "popularity": (ProductModel.popularity.desc(), ProductModel.id.desc()),
}


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def create_product(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.commit()
        self.db.refresh(product)
        return product

    def save(self, product: ProductModel) -> ProductModel:
        self.db.commit()
        self.db.refresh(product)
        return product

    def delete_product(self, product: ProductModel) -> None:
        self.db.delete(product)
        self.db.commit()

    def count(self) -> int:
        return self.db.execute(select(func.count(ProductModel.id))).scalar_one()

    def list_products(
        self,
        gender: str | None = None,
        category: str | None = None,
        featured: bool = False,
        min_price: Decimal | None = None,
        max_price: Decimal | None = None,
        search: str | None = None,
        sort: str = "newest",
        page: int = 1,
        limit: int = 12,
    ):
        stmt = select(ProductModel)
        if gender:
            stmt = stmt.where(ProductModel.gender == gender)
        if category:
            stmt = stmt.where(ProductModel.category == category)
        if featured:
            stmt = stmt.where(ProductModel.is_featured.is_(True))
        if min_price is not None:
            stmt = stmt.where(ProductModel.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(ProductModel.price <= max_price)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(
                or_(ProductModel.name.ilike(pattern), ProductModel.description.ilike(pattern))
            )

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        products = self.db.execute(
            stmt.order_by(*_SORTS.get(sort, _SORTS["newest"]))
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()
        return products, total
