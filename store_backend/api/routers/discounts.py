# store_backend/api/routers/discounts.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from store_backend.data.database import get_db
from store_backend.domain.schemas import DiscountListEnvelope
from store_backend.services.discount_service import DiscountService

router = APIRouter(prefix="/api/v1/store/discount", tags=["discount"])


@router.get("", response_model=DiscountListEnvelope)
def list_discounts(
    mobile_no: Optional[str] = Query(None, alias="mobileNo"),
    db: Session = Depends(get_db),
):
    svc = DiscountService(db)
    return {"data": svc.list_for_user(mobile_no)}
