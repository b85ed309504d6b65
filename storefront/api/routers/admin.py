from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.api.deps import require_admin
from storefront.data.database import get_db
from storefront.domain.schemas import AnalyticsOut, AuthUser
from storefront.services.analytics_service import AnalyticsService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/analytics", response_model=AnalyticsOut)
def analytics(
    period: int = Query(30, ge=1, le=365),
    admin: AuthUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return AnalyticsService(db).summary(period)
