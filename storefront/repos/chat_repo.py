# storefront/repos/chat_repo.py
from sqlalchemy import select, update, func
from sqlalchemy.orm import Session, selectinload

from storefront.data.models.chat_conversation import ChatConversationModel
from storefront.data.models.chat_message import ChatMessageModel


class ChatRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_conversation(self, conversation_id: int, with_messages: bool = False) -> ChatConversationModel | None:
        stmt = select(ChatConversationModel).where(ChatConversationModel.id == conversation_id)
        if with_messages:
            stmt = stmt.options(
                selectinload(ChatConversationModel.user),
                selectinload(ChatConversationModel.messages).selectinload(ChatMessageModel.sender),
            )
        return self.db.execute(stmt).scalar_one_or_none()

    def list_conversations(self, user_id: int | None = None):
        """user_id=None -> wszystkie rozmowy (admin)."""
        stmt = select(ChatConversationModel).options(selectinload(ChatConversationModel.user))
        if user_id is not None:
            stmt = stmt.where(ChatConversationModel.user_id == user_id)
        return self.db.execute(
            stmt.order_by(ChatConversationModel.updated_at.desc(), ChatConversationModel.id.desc())
        ).scalars().all()

    def unread_counts(self, conversation_ids, from_admin: bool) -> dict:
        if not conversation_ids:
            return {}
        rows = self.db.execute(
            select(ChatMessageModel.conversation_id, func.count(ChatMessageModel.id))
            .where(
                ChatMessageModel.conversation_id.in_(conversation_ids),
                ChatMessageModel.is_read.is_(False),
                ChatMessageModel.is_admin.is_(from_admin),
            )
            .group_by(ChatMessageModel.conversation_id)
        ).all()
        return {cid: count for cid, count in rows}

    def last_message(self, conversation_id: int) -> ChatMessageModel | None:
        return self.db.execute(
            select(ChatMessageModel)
            .options(selectinload(ChatMessageModel.sender))
            .where(ChatMessageModel.conversation_id == conversation_id)
            .order_by(ChatMessageModel.created_at.desc(), ChatMessageModel.id.desc())
            .limit(1)
        ).scalar_one_or_none()

    def mark_read(self, conversation_id: int, from_admin: bool) -> int:
        result = self.db.execute(
            update(ChatMessageModel)
            .where(
                ChatMessageModel.conversation_id == conversation_id,
                ChatMessageModel.is_read.is_(False),
                ChatMessageModel.is_admin.is_(from_admin),
            )
            .values(is_read=True)
        )
        return result.rowcount

    def add_conversation(self, conversation: ChatConversationModel) -> ChatConversationModel:
        self.db.add(conversation)
        self.db.flush()
        return conversation

    def add_message(self, message: ChatMessageModel) -> ChatMessageModel:
        self.db.add(message)
        self.db.flush()
        return message

    def commit(self):
        self.db.commit()

    def refresh(self, obj):
        self.db.refresh(obj)
