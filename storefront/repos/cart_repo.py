# storefront/repos/cart_repo.py
import redis

from storefront.domain.cart import Cart
from storefront.utils.retry import redis_retry
from storefront.utils.settings import REDIS_URL, CART_TTL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CartRepo:
    """
    Koszyk trzymany w redisie pod kluczem cart:{session_id}
    - caly koszyk zapisywany po kazdej zmianie (JSON)
    - TTL odswiezany przy kazdym zapisie, nieuzywany koszyk sam wygasa
    """

    def __init__(self, client: redis.Redis | None = None, ttl: int = CART_TTL_SECONDS):
        self.redis = client or redis.Redis.from_url(REDIS_URL, decode_responses=True)
        self.ttl = ttl

    @staticmethod
    def _key(session_id: str) -> str:
        return f"cart:{session_id}"

    @redis_retry()
    def load(self, session_id: str) -> Cart:
        raw = self.redis.get(self._key(session_id))
        return Cart.from_json(raw)

    @redis_retry()
    def save(self, session_id: str, cart: Cart) -> None:
        key = self._key(session_id)
        logger.debug(f"Zapis koszyka {key} ({cart.total_items()} szt.)")
        self.redis.set(name=key, value=cart.to_json(), ex=self.ttl)
