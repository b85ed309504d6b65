# storefront/services/chat_service.py
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from storefront.data.models.chat_conversation import ChatConversationModel
from storefront.data.models.chat_message import ChatMessageModel
from storefront.domain.schemas import AuthUser
from storefront.repos.chat_repo import ChatRepo
from storefront.utils.errors import NotFoundError
from storefront.utils.settings import CHAT_POLL_INTERVAL_SECONDS
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ChatService:
    """
    Czat klient <-> admin.

    Nieprzeczytane liczymy zawsze od "drugiej strony": admin widzi wiadomosci
    klienta (is_admin=False), klient widzi wiadomosci admina (is_admin=True).
    Swiezosc danych zapewnia polling po stronie klienta.
    """

    def __init__(self, db: Session):
        self.repo = ChatRepo(db)

    def _get_accessible(self, viewer: AuthUser, conversation_id: int, with_messages: bool = False):
        conversation = self.repo.get_conversation(conversation_id, with_messages=with_messages)
        if not conversation:
            raise NotFoundError("Conversation not found")
        if not viewer.is_admin and conversation.user_id != viewer.id:
            raise PermissionError("Forbidden")
        return conversation

    #query
    def list_conversations(self, viewer: AuthUser) -> dict:
        conversations = self.repo.list_conversations(None if viewer.is_admin else viewer.id)
        # wiadomosci drugiej strony
        unread = self.repo.unread_counts([c.id for c in conversations], from_admin=not viewer.is_admin)

        return {
            "conversations": [
                {
                    "id": c.id,
                    "user_id": c.user_id,
                    "user": c.user,
                    "subject": c.subject,
                    "is_open": c.is_open,
                    "created_at": c.created_at,
                    "updated_at": c.updated_at,
                    "last_message": self.repo.last_message(c.id),
                    "unread_count": unread.get(c.id, 0),
                }
                for c in conversations
            ],
            "poll_interval": CHAT_POLL_INTERVAL_SECONDS,
        }

    def open_conversation(self, viewer: AuthUser, conversation_id: int) -> ChatConversationModel:
        """
        Pelna historia (od najstarszej). Efekt uboczny: wiadomosci drugiej
        strony oznaczane jako przeczytane.
        """
        conversation = self._get_accessible(viewer, conversation_id)

        marked = self.repo.mark_read(conversation_id, from_admin=not viewer.is_admin)
        self.repo.commit()
        if marked:
            logger.info(f"Rozmowa {conversation_id}: {marked} wiadomosci oznaczone jako przeczytane")

        return self.repo.get_conversation(conversation_id, with_messages=True)

    #commands
    def create_conversation(self, viewer: AuthUser, subject: str, message: str) -> ChatConversationModel:
        now = datetime.now(timezone.utc)
        conversation = self.repo.add_conversation(
            ChatConversationModel(
                user_id=viewer.id,
                subject=subject,
                is_open=True,
                created_at=now,
                updated_at=now,
            )
        )
        self.repo.add_message(
            ChatMessageModel(
                conversation_id=conversation.id,
                sender_id=viewer.id,
                content=message,
                is_admin=viewer.is_admin,
                created_at=now,
            )
        )
        self.repo.commit()

        logger.info(f"Nowa rozmowa {conversation.id} od uzytkownika {viewer.id}")
        return self.repo.get_conversation(conversation.id, with_messages=True)

    def send_message(self, viewer: AuthUser, conversation_id: int, content: str) -> ChatMessageModel:
        conversation = self._get_accessible(viewer, conversation_id)

        now = datetime.now(timezone.utc)
        message = self.repo.add_message(
            ChatMessageModel(
                conversation_id=conversation_id,
                sender_id=viewer.id,
                content=content,
                is_admin=viewer.is_admin,
                created_at=now,
            )
        )
        # podbij rozmowe w skrzynce
        conversation.updated_at = now
        self.repo.commit()
        self.repo.refresh(message)
        return message

    def set_open(self, conversation_id: int, is_open: bool) -> ChatConversationModel:
        conversation = self.repo.get_conversation(conversation_id)
        if not conversation:
            raise NotFoundError("Conversation not found")

        conversation.is_open = is_open
        self.repo.commit()
        logger.info(f"Rozmowa {conversation_id} {'otwarta' if is_open else 'zamknieta'}")
        return self.repo.get_conversation(conversation_id, with_messages=True)
