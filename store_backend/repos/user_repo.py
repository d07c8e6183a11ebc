from sqlalchemy import select
from sqlalchemy.orm import Session

from store_backend.data.models.user import UserModel
from store_backend.data.models.cart import CartModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_mobile_no(self, mobile_no: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.mobile_no == mobile_no)
        ).scalar_one_or_none()

    def create_user_with_cart(self, mobile_no: str) -> UserModel:
        user = UserModel(mobile_no=mobile_no)
        self.db.add(user)
        self.db.flush()
        self.db.add(CartModel(user_id=user.id))
        self.db.flush()
        return user

    def commit(self):
        self.db.commit()

    def rollback(self):
        self.db.rollback()
