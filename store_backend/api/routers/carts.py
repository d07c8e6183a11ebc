# store_backend/api/routers/carts.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from store_backend.data.database import get_db
from store_backend.domain.schemas import CartEnvelope, UpdateCartIn, UpdateCartEnvelope
from store_backend.services.cart_service import CartService

router = APIRouter(prefix="/api/v1/store/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(db)


@router.get("", response_model=CartEnvelope)
def get_cart(
    mobile_no: Optional[str] = Query(None, alias="mobileNo"),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    return {"data": svc.get_cart(mobile_no)}


@router.put("", response_model=UpdateCartEnvelope)
def update_cart(
    payload: UpdateCartIn,
    mobile_no: Optional[str] = Query(None, alias="mobileNo"),
    db: Session = Depends(get_db),
):
    svc = get_service(db)
    svc.replace_cart(mobile_no, payload.items)
    return {"data": {"success": True, "message": "Cart updated successfully"}}
