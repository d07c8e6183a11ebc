# store_backend/data/models/discount_code.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Boolean, Numeric

from store_backend.data.database import Base


class DiscountCodeModel(Base):
    __tablename__ = "discount_codes"

    id = Column(Integer, primary_key=True)
    code = Column(String(32), nullable=False, unique=True, index=True)

    # null = kod globalny (admin), inaczej kod tylko dla tego usera
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    order_number = Column(Integer, nullable=False)
    discount_percent = Column(Numeric(5, 2), nullable=False, default=10)

    # is_used zawsze zapisywane razem z used_by_order_id
    is_used = Column(Boolean, nullable=False, default=False)
    used_by_order_id = Column(Integer, ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)
    is_global_order = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    @property
    def used(self) -> bool:
        return self.used_by_order_id is not None
