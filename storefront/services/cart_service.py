# storefront/services/cart_service.py
import time
from decimal import Decimal
from typing import Dict, Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.cart import Cart
from storefront.domain.schemas import AddressIn, CartItemIn, CartQuantityIn, OrderCreate, OrderItemIn
from storefront.repos.cart_repo import CartRepo
from storefront.services.order_service import OrderService
from storefront.services.product_service import ProductService
from storefront.utils.settings import (
    FREE_SHIPPING_THRESHOLD,
    SHIPPING_FEE,
    CHECKOUT_OPTIMISTIC_CONFIRMATION,
)
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

_BASE36 = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def calc_shipping(subtotal: Decimal) -> Decimal:
    # darmowa wysylka powyzej progu
    if subtotal > FREE_SHIPPING_THRESHOLD:
        return Decimal("0.00")
    return SHIPPING_FEE


def fallback_reference(now_ms: int | None = None) -> str:
    """GS-<timestamp ms w base36>, pokazywany gdy zamowienia nie udalo sie zapisac."""
    n = now_ms if now_ms is not None else int(time.time() * 1000)
    digits = ""
    while n:
        n, r = divmod(n, 36)
        digits = _BASE36[r] + digits
    return f"GS-{digits or '0'}"


class CartService:
    """
    Use case'y koszyka klienta.
    Koszyk zyje po stronie klienta (sesja), serwer tylko go przechowuje;
    kazda zmiana zapisuje caly koszyk.
    """

    def __init__(
        self,
        db: Session,
        repo: CartRepo,
        optimistic_checkout: bool = CHECKOUT_OPTIMISTIC_CONFIRMATION,
    ):
        self.db = db
        self.repo = repo
        self.products = ProductService(db)
        self.orders = OrderService(db)
        self.optimistic_checkout = optimistic_checkout

    @staticmethod
    def _to_dict(cart: Cart) -> Dict[str, Any]:
        return {
            "items": cart.items,
            "total_items": cart.total_items(),
            "total_price": cart.total_price(),
            "is_open": cart.is_open,
        }

    #query
    def get_cart(self, session_id: str) -> Dict[str, Any]:
        return self._to_dict(self.repo.load(session_id))

    #commands
    def add_item(self, session_id: str, payload: CartItemIn) -> Dict[str, Any]:
        # snapshot ceny z katalogu, bez sprawdzania stanu magazynowego
        product = self.products.snapshot(payload.product_id)

        cart = self.repo.load(session_id)
        item = cart.add_item(product, payload.quantity, payload.size, payload.color)
        self.repo.save(session_id, cart)

        logger.info(
            f"Koszyk {session_id}: produkt {product.id} ({payload.size}/{payload.color}) "
            f"ilosc {item.quantity if item else 0}"
        )
        return self._to_dict(cart)

    def update_quantity(self, session_id: str, payload: CartQuantityIn) -> Dict[str, Any]:
        cart = self.repo.load(session_id)
        cart.update_quantity(payload.product_id, payload.quantity, payload.size, payload.color)
        self.repo.save(session_id, cart)
        return self._to_dict(cart)

    def remove_item(
        self,
        session_id: str,
        product_id: int,
        size: str | None = None,
        color: str | None = None,
    ) -> Dict[str, Any]:
        cart = self.repo.load(session_id)
        cart.remove_item(product_id, size, color)
        self.repo.save(session_id, cart)
        return self._to_dict(cart)

    def clear(self, session_id: str) -> Dict[str, Any]:
        cart = self.repo.load(session_id)
        cart.clear()
        self.repo.save(session_id, cart)
        return self._to_dict(cart)

    def toggle(self, session_id: str) -> Dict[str, Any]:
        cart = self.repo.load(session_id)
        cart.toggle()
        self.repo.save(session_id, cart)
        return self._to_dict(cart)

    def checkout(self, session_id: str, user_id: int, address: AddressIn) -> Dict[str, Any]:
        """
        Use Case: Zlozenie zamowienia z koszyka.

        - bledy walidacji (pusty koszyk, zly adres, brak stanu) -> wyjatek, koszyk zostaje
        - blad zapisu w bazie + optimistic_checkout -> koszyk czyszczony,
          potwierdzenie z zastepczym numerem (fallback=True)
        - sukces -> koszyk czyszczony
        """
        cart = self.repo.load(session_id)
        if not cart.items:
            raise ValueError("Cart is empty")

        subtotal = cart.total_price()
        shipping = calc_shipping(subtotal)

        payload = OrderCreate(
            items=[
                OrderItemIn(
                    product_id=i.product_id,
                    quantity=i.quantity,
                    price=i.product.price,
                    size=i.size,
                    color=i.color,
                )
                for i in cart.items
            ],
            address=address,
            subtotal=subtotal,
            shipping=shipping,
            total=subtotal + shipping,
        )

        try:
            order = self.orders.create_order(user_id, payload)
        except SQLAlchemyError as e:
            self.db.rollback()
            if not self.optimistic_checkout:
                raise
            reference = fallback_reference()
            logger.warning(f"Checkout koszyka {session_id} nie zapisal zamowienia ({e}), potwierdzenie {reference}")
            cart.clear()
            self.repo.save(session_id, cart)
            return {"order_id": None, "reference": reference, "fallback": True, "order": None}

        cart.clear()
        self.repo.save(session_id, cart)

        logger.info(f"Checkout koszyka {session_id} -> zamowienie {order.id}")
        return {"order_id": order.id, "reference": str(order.id), "fallback": False, "order": order}
