from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import HeartbeatIn, OnlineOut
from storefront.services.presence_service import PresenceService

router = APIRouter(prefix="/online", tags=["online"])


@router.post("", response_model=OnlineOut)
def heartbeat(payload: HeartbeatIn, db: Session = Depends(get_db)):
    return {"count": PresenceService(db).heartbeat(payload.session_id)}


@router.get("", response_model=OnlineOut)
def online_count(db: Session = Depends(get_db)):
    return {"count": PresenceService(db).online_count()}
