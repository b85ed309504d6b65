# storefront/domain/enums.py
from enum import Enum


class Role(str, Enum):
    USER = "USER"
    ADMIN = "ADMIN"


class Category(str, Enum):
    UPPER_WEAR = "UPPER_WEAR"
    LOWER_WEAR = "LOWER_WEAR"
    WINTER_WEAR = "WINTER_WEAR"
    SUMMER_WEAR = "SUMMER_WEAR"
    ACCESSORIES = "ACCESSORIES"


class Gender(str, Enum):
    MEN = "MEN"
    WOMEN = "WOMEN"
    UNISEX = "UNISEX"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# dozwolone przejscia, uzywane tylko gdy ORDER_STATUS_GUARD jest wlaczony
ORDER_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED, OrderStatus.CANCELLED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

# zamowienia ktore uprawniaja do wystawienia recenzji
REVIEW_ELIGIBLE_STATUSES = (
    OrderStatus.PENDING,
    OrderStatus.PROCESSING,
    OrderStatus.SHIPPED,
    OrderStatus.DELIVERED,
)


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    if current == new:
        return True
    return new in ORDER_TRANSITIONS[current]
