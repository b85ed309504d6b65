#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from storefront.data.models.user import UserModel
from storefront.data.models.product import ProductModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.saved_product import SavedProductModel
from storefront.data.models.review import ReviewModel
from storefront.data.models.chat_conversation import ChatConversationModel
from storefront.data.models.chat_message import ChatMessageModel
from storefront.data.models.site_theme import SiteThemeModel
from storefront.data.models.active_session import ActiveSessionModel

__all__ = [
    "UserModel",
    "ProductModel",
    "OrderModel",
    "OrderItemModel",
    "SavedProductModel",
    "ReviewModel",
    "ChatConversationModel",
    "ChatMessageModel",
    "SiteThemeModel",
    "ActiveSessionModel",
]
