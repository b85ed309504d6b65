# storefront/services/order_service.py
from sqlalchemy.orm import Session

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.domain.enums import OrderStatus, can_transition
from storefront.domain.schemas import AuthUser, OrderCreate
from storefront.repos.order_repo import OrderRepo
from storefront.repos.product_repo import ProductRepo
from storefront.utils.errors import NotFoundError
from storefront.utils.settings import ENFORCE_STOCK_ON_ORDER, ORDER_STATUS_GUARD
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.
    Zamowienie powstaje ze snapshotu koszyka i dalej zyje niezaleznie od niego.
    """

    def __init__(
        self,
        db: Session,
        enforce_stock: bool = ENFORCE_STOCK_ON_ORDER,
        status_guard: bool = ORDER_STATUS_GUARD,
    ):
        self.db = db
        self.repo = OrderRepo(db)
        self.products = ProductRepo(db)
        self.enforce_stock = enforce_stock
        self.status_guard = status_guard

    def create_order(self, user_id: int, payload: OrderCreate) -> OrderModel:
        """
        Use Case: Tworzenie zamowienia.

        1. (opcjonalnie) sprawdza i zdejmuje stan magazynowy
        2. zapisuje zamowienie PENDING z kopiami pozycji (cena, ilosc, wariant)
        3. wszystko w jednym commicie
        """
        if self.enforce_stock:
            self._reserve_stock(payload)

        order = OrderModel(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            subtotal=payload.subtotal,
            shipping=payload.shipping,
            total=payload.total,
            address=payload.address.model_dump(),
            items=[
                OrderItemModel(
                    product_id=item.product_id,
                    price=item.price,
                    quantity=item.quantity,
                    size=item.size,
                    color=item.color,
                )
                for item in payload.items
            ],
        )

        created = self.repo.add_order(order)

        logger.info(
            f"Order {created.id} created for user {user_id}: "
            f"{len(payload.items)} items, total {created.total}"
        )
        return created

    def _reserve_stock(self, payload: OrderCreate) -> None:
        needed: dict[int, int] = {}
        for item in payload.items:
            needed[item.product_id] = needed.get(item.product_id, 0) + item.quantity

        for product_id, quantity in needed.items():
            product = self.products.get_product(product_id)
            if not product:
                self.repo.rollback()
                raise ValueError(f"Product {product_id} does not exist")
            if product.stock < quantity:
                self.repo.rollback()
                raise ValueError(f"Insufficient stock for {product.name}")
            product.stock -= quantity

    def get_order(self, order_id: int, viewer: AuthUser) -> OrderModel:
        """
        Use Case: Pobranie zamowienia (Query). Wlasciciel albo admin.
        """
        order = self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found")

        if not viewer.is_admin and order.user_id != viewer.id:
            raise PermissionError("Forbidden")

        return order

    def list_orders(self, status: str | None, page: int, limit: int) -> dict:
        if status == "ALL":
            status = None
        orders, total = self.repo.list_orders(status, page, limit)
        return {
            "orders": orders,
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": -(-total // limit),
        }

    def list_own_orders(self, user_id: int):
        return self.repo.list_user_orders(user_id)

    def update_status(self, order_id: int, status: OrderStatus) -> OrderModel:
        """
        Use Case: Zmiana statusu przez admina.
        Domyslnie bez walidacji przejsc (dowolny status -> dowolny).
        Bez efektow ubocznych: brak zwrotu stanu magazynowego, brak powiadomien.
        """
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")

        current = OrderStatus(order.status)
        if self.status_guard and not can_transition(current, status):
            raise ValueError(f"Cannot change status from {current.value} to {status.value}")

        updated = self.repo.update_order_status(order_id, status.value)
        logger.info(f"Order {order_id} status {current.value} -> {status.value}")
        return updated
