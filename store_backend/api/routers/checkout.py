# store_backend/api/routers/checkout.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from store_backend.data.database import get_db
from store_backend.domain.schemas import CheckoutIn, CheckoutEnvelope
from store_backend.services.checkout_service import CheckoutService

router = APIRouter(prefix="/api/v1/store/checkout", tags=["checkout"])


def get_service(db: Session):
    return CheckoutService(db)


@router.post("", response_model=CheckoutEnvelope, response_model_exclude_none=True)
def checkout(
    payload: CheckoutIn,
    mobile_no: Optional[str] = Query(None, alias="mobileNo"),
    db: Session = Depends(get_db),
):
    """
    Zamienia koszyk usera w zamowienie.
    Bledy domenowe (pusty koszyk, brak stanu, zly kod...) mapuje handler w main.py.
    """
    svc = get_service(db)
    result = svc.checkout(mobile_no, payload.shipping_address, payload.discount_code)
    return {
        "data": {
            "order_id": result.order_id,
            "message": "Order created successfully",
            "discount_code_created": result.new_discount_code,
        }
    }
