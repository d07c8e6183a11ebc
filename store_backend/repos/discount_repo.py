# store_backend/repos/discount_repo.py
from sqlalchemy import select, update, or_
from sqlalchemy.orm import Session

from store_backend.data.models.discount_code import DiscountCodeModel


class DiscountRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_code(self, code: str) -> DiscountCodeModel | None:
        return self.db.execute(
            select(DiscountCodeModel).where(DiscountCodeModel.code == code)
        ).scalar_one_or_none()

    def code_exists(self, code: str) -> bool:
        return self.db.execute(
            select(DiscountCodeModel.id).where(DiscountCodeModel.code == code).limit(1)
        ).first() is not None

    def add_code(self, discount: DiscountCodeModel) -> DiscountCodeModel:
        self.db.add(discount)
        self.db.flush()
        return discount

    def savepoint(self):
        return self.db.begin_nested()

    def mark_used(self, discount_code_id: int, order_id: int) -> int:
        """
        Optimistic locking na kodzie rabatowym:
        UPDATE ... SET used WHERE id = ? AND nieuzyty.
        rowcount 0 = inny request zuzyl kod pierwszy.
        """
        result = self.db.execute(
            update(DiscountCodeModel)
            .where(
                DiscountCodeModel.id == discount_code_id,
                DiscountCodeModel.used_by_order_id.is_(None),
                DiscountCodeModel.is_used == False,  # noqa: E712
            )
            .values(is_used=True, used_by_order_id=order_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def codes_visible_to_user(self, user_id: int) -> list[DiscountCodeModel]:
        # kody usera + wszystkie globalne
        return list(
            self.db.execute(
                select(DiscountCodeModel)
                .where(or_(DiscountCodeModel.user_id == user_id, DiscountCodeModel.user_id.is_(None)))
                .order_by(DiscountCodeModel.id)
            ).scalars()
        )

    def all_codes(self) -> list[DiscountCodeModel]:
        return list(
            self.db.execute(
                select(DiscountCodeModel).order_by(DiscountCodeModel.created_at, DiscountCodeModel.id)
            ).scalars()
        )

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
