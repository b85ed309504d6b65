# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr, model_validator
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from storefront.domain.cart import CartLineItem
from storefront.domain.enums import Role, Category, Gender, OrderStatus

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"
CENT = Decimal("0.01")


# =====================================================
# AUTH / USERS
# =====================================================
class AuthUser(BaseModel):
    """Zalogowany uzytkownik odczytany z tokena (rola nie jest brana z bazy)."""

    id: int
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


class RegisterIn(BaseModel):
    name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=8)


class LoginIn(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2, max_length=50)
    email: Optional[EmailStr] = None
    avatar: Optional[str] = None


class UserBrief(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class UserRead(BaseModel):
    """Schema dla uzytkownika (response)."""

    id: int
    name: str
    email: str
    role: Role
    avatar: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthOut(BaseModel):
    user: UserRead


class RoleUpdate(BaseModel):
    role: Role


class UserListOut(BaseModel):
    users: List[UserRead]
    total: int
    page: int
    limit: int
    total_pages: int


# =====================================================
# PRODUCTS
# =====================================================
class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu (tylko admin)."""

    name: str = Field(..., min_length=2)
    description: str = ""
    price: Decimal = Field(..., gt=0, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    images: List[str] = Field(default_factory=list)
    videos: List[str] = Field(default_factory=list)
    category: Category
    gender: Gender
    sizes: List[str] = Field(default_factory=list)
    colors: List[str] = Field(default_factory=list)
    stock: int = Field(..., ge=0)
    is_featured: bool = False
    is_active: bool = True
    popularity: float = Field(0, ge=0)


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    original_price: Optional[Decimal] = Field(None, gt=0, decimal_places=2)
    images: Optional[List[str]] = None
    videos: Optional[List[str]] = None
    category: Optional[Category] = None
    gender: Optional[Gender] = None
    sizes: Optional[List[str]] = None
    colors: Optional[List[str]] = None
    stock: Optional[int] = Field(None, ge=0)
    is_featured: Optional[bool] = None
    is_active: Optional[bool] = None
    popularity: Optional[float] = Field(None, ge=0)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    original_price: Optional[Decimal] = None
    images: List[str]
    videos: List[str]
    category: Category
    gender: Gender
    sizes: List[str]
    colors: List[str]
    stock: int
    is_featured: bool
    is_active: bool
    popularity: float
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListOut(BaseModel):
    products: List[ProductOut]
    total: int
    page: int
    limit: int
    total_pages: int


# =====================================================
# CART
# =====================================================
class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, ge=1)
    size: Optional[str] = None
    color: Optional[str] = None


class CartQuantityIn(BaseModel):
    """Ilosc <= 0 usuwa pozycje."""

    product_id: int = Field(..., gt=0)
    quantity: int
    size: Optional[str] = None
    color: Optional[str] = None


class CartOut(BaseModel):
    items: List[CartLineItem]
    total_items: int
    total_price: Decimal
    is_open: bool


# =====================================================
# ORDERS
# =====================================================
class AddressIn(BaseModel):
    full_name: str = Field(..., min_length=1)
    line1: str = Field(..., min_length=1)
    line2: Optional[str] = ""
    city: str = Field(..., min_length=1)
    state: str
    postal_code: str
    country: str = Field(..., min_length=1)
    phone: Optional[str] = None


class OrderItemIn(BaseModel):
    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)
    price: Decimal = Field(..., gt=0)
    size: Optional[str] = None
    color: Optional[str] = None


class OrderCreate(BaseModel):
    """Schema dla tworzenia zamowienia ze snapshotu koszyka."""

    items: List[OrderItemIn] = Field(..., min_length=1)
    address: AddressIn
    subtotal: Decimal = Field(..., ge=0)
    shipping: Decimal = Field(..., ge=0)
    total: Decimal = Field(..., ge=0)

    @model_validator(mode="after")
    def check_total(self):
        if self.total.quantize(CENT) != (self.subtotal + self.shipping).quantize(CENT):
            raise ValueError("total must equal subtotal + shipping")
        return self


class OrderItemOut(BaseModel):
    id: int
    product_id: int
    price: Decimal
    quantity: int
    size: Optional[str] = None
    color: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: int
    status: OrderStatus
    subtotal: Decimal
    shipping: Decimal
    total: Decimal
    address: dict
    items: List[OrderItemOut]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class OrderListOut(BaseModel):
    orders: List[OrderOut]
    total: int
    page: int
    limit: int
    total_pages: int


class OwnOrdersOut(BaseModel):
    orders: List[OrderOut]


class CheckoutIn(BaseModel):
    address: AddressIn


class CheckoutOut(BaseModel):
    """Potwierdzenie zamowienia; fallback=True gdy zapis sie nie udal."""

    order_id: Optional[int] = None
    reference: str
    fallback: bool = False
    order: Optional[OrderOut] = None


# =====================================================
# REVIEWS / SAVED
# =====================================================
class ReviewIn(BaseModel):
    product_id: int = Field(..., gt=0)
    rating: int = Field(..., ge=1, le=5)
    comment: str = Field(..., min_length=3, max_length=1000)


class ReviewOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    rating: int
    comment: str
    user: UserBrief
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ReviewSubmitOut(BaseModel):
    review: ReviewOut
    message: str


class ReviewListOut(BaseModel):
    reviews: List[ReviewOut]
    average_rating: float
    total_reviews: int
    can_review: bool = False
    has_reviewed: bool = False


class SavedToggleIn(BaseModel):
    product_id: int = Field(..., gt=0)


class SavedToggleOut(BaseModel):
    saved: bool
    message: str


class SavedListOut(BaseModel):
    products: List[ProductOut]
    ids: List[int]


# =====================================================
# CHAT
# =====================================================
class ConversationCreate(BaseModel):
    subject: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1, max_length=2000)


class MessageCreate(BaseModel):
    content: str = Field(..., min_length=1, max_length=2000)


class ConversationPatch(BaseModel):
    is_open: bool = False


class MessageOut(BaseModel):
    id: int
    conversation_id: int
    sender_id: int
    sender: UserBrief
    content: str
    is_admin: bool
    is_read: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ConversationOut(BaseModel):
    id: int
    user_id: int
    user: UserBrief
    subject: str
    is_open: bool
    created_at: datetime
    updated_at: datetime
    messages: List[MessageOut] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class ConversationSummary(BaseModel):
    id: int
    user_id: int
    user: UserBrief
    subject: str
    is_open: bool
    created_at: datetime
    updated_at: datetime
    last_message: Optional[MessageOut] = None
    unread_count: int


class ConversationListOut(BaseModel):
    conversations: List[ConversationSummary]
    poll_interval: int


# =====================================================
# THEME
# =====================================================
class ThemeOut(BaseModel):
    primary_color: str
    secondary_color: str
    accent_color: str
    is_dark_mode: bool
    version: int
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ThemeUpdate(BaseModel):
    primary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    secondary_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    accent_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    is_dark_mode: Optional[bool] = None
    # oczekiwana wersja (optimistic locking), opcjonalna
    version: Optional[int] = Field(None, ge=0)


# =====================================================
# ADMIN / PRESENCE / UPLOAD
# =====================================================
class AnalyticsStats(BaseModel):
    total_orders: int
    total_revenue: Decimal
    total_users: int
    total_products: int


class RevenuePoint(BaseModel):
    date: str
    revenue: Decimal
    orders: int


class StatusCount(BaseModel):
    name: str
    value: int


class AnalyticsOut(BaseModel):
    stats: AnalyticsStats
    revenue_chart_data: List[RevenuePoint]
    order_status_data: List[StatusCount]


class HeartbeatIn(BaseModel):
    session_id: str = Field(..., min_length=1, max_length=100)


class OnlineOut(BaseModel):
    count: int


class UploadOut(BaseModel):
    url: str
    public_id: Optional[str] = None
