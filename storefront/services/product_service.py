# storefront/services/product_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.data.models.product import ProductModel
from storefront.domain.cart import ProductSnapshot
from storefront.domain.schemas import ProductCreate, ProductUpdate
from storefront.repos.product_repo import ProductRepo
from storefront.utils.errors import NotFoundError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# aliasy z frontendu
_SORT_ALIASES = {"price-asc": "price_asc", "price-desc": "price_desc"}


class ProductService:
    """
    Katalog produktow: odczyt dla wszystkich, zapis tylko admin
    (uprawnienia sprawdza router).
    """

    def __init__(self, db: Session):
        self.repo = ProductRepo(db)

    #query
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
    ) -> dict:
        if gender == "ALL":
            gender = None
        sort = _SORT_ALIASES.get(sort, sort)

        products, total = self.repo.list_products(
            gender=gender,
            category=category,
            featured=featured,
            min_price=min_price,
            max_price=max_price,
            search=search,
            sort=sort,
            page=page,
            limit=limit,
        )
        return {
            "products": products,
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": -(-total // limit),
        }

    def get_product(self, product_id: int) -> ProductModel:
        product = self.repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")
        return product

    def snapshot(self, product_id: int) -> ProductSnapshot:
        """Kopia ceny/nazwy produktu do koszyka."""
        product = self.get_product(product_id)
        return ProductSnapshot(
            id=product.id,
            name=product.name,
            price=product.price,
            image=product.images[0] if product.images else None,
        )

    #commands
    def create_product(self, payload: ProductCreate) -> ProductModel:
        data = payload.model_dump()
        data["category"] = payload.category.value
        data["gender"] = payload.gender.value
        created = self.repo.create_product(ProductModel(**data))
        logger.info(f"Utworzono produkt {created.id} ({created.name})")
        return created

    def update_product(self, product_id: int, payload: ProductUpdate) -> ProductModel:
        product = self.get_product(product_id)

        for field, value in payload.model_dump(exclude_unset=True).items():
            if field in ("category", "gender") and value is not None:
                value = value.value
            if value is None and field != "original_price":
                continue
            setattr(product, field, value)

        updated = self.repo.save(product)
        logger.info(f"Zaktualizowano produkt {product_id}")
        return updated

    def delete_product(self, product_id: int) -> None:
        product = self.get_product(product_id)
        self.repo.delete_product(product)
        logger.info(f"Usunieto produkt {product_id}")
