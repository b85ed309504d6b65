# storefront/api/routers/chat.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.api.deps import get_current_user, require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import (
    AuthUser,
    ConversationCreate,
    ConversationListOut,
    ConversationOut,
    ConversationPatch,
    MessageCreate,
    MessageOut,
)
from storefront.services.chat_service import ChatService
from storefront.utils.errors import NotFoundError, http_error

router = APIRouter(prefix="/chat", tags=["chat"])


def get_service(db: Session):
    return ChatService(db)


@router.get("", response_model=ConversationListOut)
def list_conversations(user: AuthUser = Depends(get_current_user), db: Session = Depends(get_db)):
    """Admin widzi wszystkie rozmowy, uzytkownik tylko swoje."""
    return get_service(db).list_conversations(user)


@router.post("", response_model=ConversationOut, status_code=201)
def create_conversation(
    payload: ConversationCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return get_service(db).create_conversation(user, payload.subject, payload.message)


@router.get("/{conversation_id}", response_model=ConversationOut)
def open_conversation(
    conversation_id: int,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Uwaga: GET oznacza wiadomosci drugiej strony jako przeczytane."""
    svc = get_service(db)
    try:
        return svc.open_conversation(user, conversation_id)
    except (PermissionError, NotFoundError) as e:
        raise http_error(e)


@router.post("/{conversation_id}", response_model=MessageOut, status_code=201)
def send_message(
    conversation_id: int,
    payload: MessageCreate,
    user: AuthUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.send_message(user, conversation_id, payload.content)
    except (PermissionError, NotFoundError) as e:
        raise http_error(e)


@router.patch("/{conversation_id}", response_model=ConversationOut)
def set_open(
    conversation_id: int,
    payload: ConversationPatch,
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    try:
        return svc.set_open(conversation_id, payload.is_open)
    except NotFoundError as e:
        raise http_error(e)
