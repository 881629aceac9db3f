from sqlalchemy import select

from tocs.db.models.user import User
from tocs.db.repositories.base_repo import BaseRepository
from tocs.utils.ids import generate_id
from tocs.utils.time import utc_now_iso


class UserRepository(BaseRepository):
    def get_user(self, user_id: str) -> User | None:
        return self.db.get(User, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return self.db.scalars(stmt).first()

    def create_user(self, *, email: str, name: str | None = None, image: str | None = None) -> User:
        normalized = email.strip().lower()
        user = User(
            id=generate_id("user"),
            email=normalized,
            name=(name or "").strip() or normalized.split("@")[0],
            image=image,
            created_at=utc_now_iso(),
        )
        return self._add(user)

    def get_or_create_by_email(self, email: str, *, name: str | None = None) -> User:
        return self.get_user_by_email(email) or self.create_user(email=email, name=name)
