from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.saved_product import SavedProductModel


class SavedRepo:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int, product_id: int) -> SavedProductModel | None:
        return self.db.execute(
            select(SavedProductModel).where(
                SavedProductModel.user_id == user_id,
                SavedProductModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def add(self, user_id: int, product_id: int) -> SavedProductModel:
        row = SavedProductModel(user_id=user_id, product_id=product_id)
        self.db.add(row)
        self.db.commit()
        return row

    def delete(self, row: SavedProductModel) -> None:
        self.db.delete(row)
        self.db.commit()

    def list_for_user(self, user_id: int):
        return self.db.execute(
            select(SavedProductModel)
            .options(selectinload(SavedProductModel.product))
            .where(SavedProductModel.user_id == user_id)
            .order_by(SavedProductModel.created_at.desc(), SavedProductModel.id.desc())
        ).scalars().all()
