from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.review import ReviewModel


class ReviewRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_for_user(self, user_id: int, product_id: int) -> ReviewModel | None:
        return self.db.execute(
            select(ReviewModel).where(
                ReviewModel.user_id == user_id,
                ReviewModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_for_product(self, product_id: int):
        return self.db.execute(
            select(ReviewModel)
            .options(selectinload(ReviewModel.user))
            .where(ReviewModel.product_id == product_id)
            .order_by(ReviewModel.created_at.desc(), ReviewModel.id.desc())
        ).scalars().all()

    def add_review(self, review: ReviewModel) -> ReviewModel:
        self.db.add(review)
        self.db.commit()
        self.db.refresh(review)
        return review

    def save(self, review: ReviewModel) -> ReviewModel:
        self.db.commit()
        self.db.refresh(review)
        return review
