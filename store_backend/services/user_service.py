# store_backend/services/user_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from store_backend.data.models.user import UserModel
from store_backend.domain.errors import ValidationError
from store_backend.repos.user_repo import UserRepo
from store_backend.utils.logging import get_logger

logger = get_logger(__name__)


def normalize_mobile_no(mobile_no) -> str:
    if not isinstance(mobile_no, str) or not mobile_no.strip():
        raise ValidationError("Mobile number is required")
    return mobile_no.strip()


class UserService:
    """
    User Resolver: numer telefonu -> rekord usera.
    Koszyk i rabaty tworza usera leniwie, checkout tylko go szuka.
    """

    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def find_user(self, mobile_no: str) -> UserModel | None:
        return self.repo.get_by_mobile_no(normalize_mobile_no(mobile_no))

    def resolve_user(self, mobile_no: str) -> UserModel:
        mobile_no = normalize_mobile_no(mobile_no)

        user = self.repo.get_by_mobile_no(mobile_no)
        if user:
            return user

        try:
            user = self.repo.create_user_with_cart(mobile_no)
            self.repo.commit()
        except IntegrityError:
            # rownolegly request zalozyl tego samego usera, bierzemy jego rekord
            self.repo.rollback()
            user = self.repo.get_by_mobile_no(mobile_no)
            if user is None:
                raise
            return user

        logger.info(f"Created user {user.id} for mobile number {mobile_no}")
        return user
