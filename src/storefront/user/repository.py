"""Repository for the User aggregate."""

from datetime import datetime

from storefront.domain import storefront
from storefront.user.user import Role, User


@storefront.repository(part_of=User)
class UserRepository:
    def find_by_email(self, email: str) -> User | None:
        if not email:
            return None
        return self._dao.query.filter(email=email.strip().lower()).all().first

    def find_by_id(self, user_id) -> User | None:
        if not user_id:
            return None
        return self._dao.query.filter(id=str(user_id)).all().first

    def inactive_since(self, cutoff: datetime) -> list[User]:
        """Non-admin users whose last activity is older than ``cutoff``."""
        candidates = []
        for role in (Role.USER.value, Role.PREMIUM.value):
            candidates.extend(self._dao.query.filter(role=role).all().items)

        return [user for user in candidates if user.last_activity() is not None and user.last_activity() < cutoff]
