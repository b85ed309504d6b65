# storefront/services/review_service.py
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.orm import Session

from storefront.data.models.review import ReviewModel
from storefront.domain.enums import REVIEW_ELIGIBLE_STATUSES
from storefront.domain.schemas import AuthUser, ReviewIn
from storefront.repos.order_repo import OrderRepo
from storefront.repos.review_repo import ReviewRepo
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    """Recenzje tylko od kupujacych; jedna recenzja na (user, produkt)."""

    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.orders = OrderRepo(db)

    def can_review(self, user_id: int, product_id: int) -> bool:
        # dowolne zamowienie z produktem, oprocz CANCELLED
        return self.orders.has_purchased(user_id, product_id, REVIEW_ELIGIBLE_STATUSES)

    def list_reviews(self, product_id: int, viewer: AuthUser | None = None) -> dict:
        reviews = self.repo.list_for_product(product_id)
        avg = Decimal(0)
        if reviews:
            # do 0.1, polowki w gore
            avg = (Decimal(sum(r.rating for r in reviews)) / len(reviews)).quantize(
                Decimal("0.1"), rounding=ROUND_HALF_UP
            )

        can_review = False
        has_reviewed = False
        if viewer:
            can_review = self.can_review(viewer.id, product_id)
            has_reviewed = self.repo.get_for_user(viewer.id, product_id) is not None

        return {
            "reviews": reviews,
            "average_rating": float(avg),
            "total_reviews": len(reviews),
            "can_review": can_review,
            "has_reviewed": has_reviewed,
        }

    def submit_review(self, user_id: int, payload: ReviewIn) -> tuple[ReviewModel, bool]:
        """
        Use Case: Dodanie / aktualizacja recenzji.
        Zwraca (recenzja, created).
        """
        if not self.can_review(user_id, payload.product_id):
            raise PermissionError("You can only review products you have purchased")

        existing = self.repo.get_for_user(user_id, payload.product_id)
        if existing:
            existing.rating = payload.rating
            existing.comment = payload.comment
            logger.info(f"Recenzja {existing.id} zaktualizowana przez {user_id}")
            return self.repo.save(existing), False

        review = self.repo.add_review(
            ReviewModel(
                user_id=user_id,
                product_id=payload.product_id,
                rating=payload.rating,
                comment=payload.comment,
            )
        )
        logger.info(f"Recenzja {review.id} dodana przez {user_id} dla produktu {payload.product_id}")
        return review, True
