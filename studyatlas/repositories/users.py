from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from studyatlas.models.user import User


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, user_id: UUID) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_username(self, username: str) -> Optional[User]:
        return self.session.scalar(select(User).where(User.username == username))

    def get_usernames(self, user_ids: List[UUID]) -> Dict[UUID, Optional[str]]:
        if not user_ids:
            return {}
        stmt = select(User.id, User.username).where(User.id.in_(user_ids))
        return {row.id: row.username for row in self.session.execute(stmt)}

    def upsert(self, user_id: UUID, **fields) -> User:
        user = self.get_by_id(user_id)
        if user is None:
            user = User(id=user_id)
            self.session.add(user)
        for key, value in fields.items():
            setattr(user, key, value)
        self.session.commit()
        self.session.refresh(user)
        return user
