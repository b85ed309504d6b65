# storefront/repos/order_repo.py
from sqlalchemy import select, func
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add_order(self, order: OrderModel) -> OrderModel:
        # zamowienie + pozycje w jednym commicie
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.id == order_id)
        ).scalar_one_or_none()

    def update_order_status(self, order_id: int, status: str) -> OrderModel | None:
        order = self.get_order(order_id)
        if order:
            order.status = status
            self.db.commit()
            self.db.refresh(order)
        return order

    def list_orders(self, status: str | None, page: int, limit: int):
        stmt = select(OrderModel)
        if status:
            stmt = stmt.where(OrderModel.status == status)

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        orders = self.db.execute(
            stmt.options(selectinload(OrderModel.items))
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()
        return orders, total

    def list_user_orders(self, user_id: int):
        return self.db.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items))
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        ).scalars().all()

    def has_purchased(self, user_id: int, product_id: int, statuses) -> bool:
        found = self.db.execute(
            select(OrderItemModel.id)
            .join(OrderModel, OrderItemModel.order_id == OrderModel.id)
            .where(
                OrderModel.user_id == user_id,
                OrderItemModel.product_id == product_id,
                OrderModel.status.in_([s.value for s in statuses]),
            )
            .limit(1)
        ).first()
        return found is not None

    def list_created_since(self, since):
        return self.db.execute(
            select(OrderModel)
            .where(OrderModel.created_at >= since)
            .order_by(OrderModel.created_at.asc())
        ).scalars().all()

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
