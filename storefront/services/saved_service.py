from sqlalchemy.orm import Session

from storefront.repos.product_repo import ProductRepo
from storefront.repos.saved_repo import SavedRepo
from storefront.utils.errors import NotFoundError


class SavedService:
    def __init__(self, db: Session):
        self.repo = SavedRepo(db)
        self.products = ProductRepo(db)

    def list_saved(self, user_id: int) -> dict:
        rows = self.repo.list_for_user(user_id)
        return {
            "products": [r.product for r in rows],
            "ids": [r.product_id for r in rows],
        }

    def toggle_saved(self, user_id: int, product_id: int) -> dict:
        """Jest -> usun (saved=False), nie ma -> dodaj (saved=True)."""
        existing = self.repo.get(user_id, product_id)
        if existing:
            self.repo.delete(existing)
            return {"saved": False, "message": "Removed from saved items"}

        if not self.products.get_product(product_id):
            raise NotFoundError("Product not found")

        self.repo.add(user_id, product_id)
        return {"saved": True, "message": "Added to saved items"}
