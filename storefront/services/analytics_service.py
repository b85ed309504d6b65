# storefront/services/analytics_service.py
from collections import Counter
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.orm import Session

from storefront.domain.enums import OrderStatus
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.repos.user_repo import UserRepo


class AnalyticsService:
    """Statystyki panelu admina za ostatnie `period` dni."""

    def __init__(self, db: Session):
        self.orders = OrderRepo(db)
        self.users = UserRepo(db)
        self.products = ProductRepo(db)

    def summary(self, period_days: int = 30, now: datetime | None = None) -> dict:
        now = now or datetime.now(timezone.utc)
        since = now - timedelta(days=period_days)

        orders = self.orders.list_created_since(since)

        revenue = Decimal("0.00")
        daily: dict[str, dict] = {}
        statuses: Counter = Counter()

        for order in orders:
            day = order.created_at.date().isoformat()
            bucket = daily.setdefault(day, {"revenue": Decimal("0.00"), "orders": 0})
            bucket["orders"] += 1
            statuses[order.status] += 1
            # anulowane nie licza sie do przychodu
            if order.status != OrderStatus.CANCELLED.value:
                bucket["revenue"] += order.total
                revenue += order.total

        return {
            "stats": {
                "total_orders": len(orders),
                "total_revenue": revenue,
                "total_users": self.users.count_created_since(since),
                "total_products": self.products.count(),
            },
            "revenue_chart_data": [
                {"date": day, "revenue": data["revenue"], "orders": data["orders"]}
                for day, data in daily.items()
            ],
            "order_status_data": [
                {"name": name, "value": value} for name, value in statuses.items()
            ],
        }
