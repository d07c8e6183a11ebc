# store_backend/api/routers/admin.py
import secrets

from fastapi import APIRouter, Depends, Header, HTTPException
from sqlalchemy.orm import Session

from store_backend.data.database import get_db
from store_backend.domain.schemas import GlobalCodeIn, GlobalCodeEnvelope, StatisticsEnvelope
from store_backend.services.discount_service import DiscountService
from store_backend.services.order_service import OrderService
from store_backend.utils import settings


def check_admin(api_key: str | None = Header(None, alias="x-api-key")):
    if not settings.ADMIN_API_KEY:
        raise HTTPException(status_code=503, detail="Admin API is not configured")
    if not api_key or not secrets.compare_digest(api_key, settings.ADMIN_API_KEY):
        raise HTTPException(status_code=401, detail="Invalid API key")


router = APIRouter(prefix="/api/v1/admin", tags=["admin"], dependencies=[Depends(check_admin)])


@router.post("/discount-codes", response_model=GlobalCodeEnvelope, status_code=201)
def create_global_discount_code(payload: GlobalCodeIn, db: Session = Depends(get_db)):
    svc = DiscountService(db)
    result = svc.mint_global_code(payload.order_number, payload.discount_percent)
    return {"message": "Global discount code created successfully", "data": result}


@router.get("/statistics", response_model=StatisticsEnvelope)
def get_statistics(db: Session = Depends(get_db)):
    svc = OrderService(db)
    return {"data": svc.statistics()}
