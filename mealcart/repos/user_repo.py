from typing import Dict, Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session
from mealcart.data.models.user import UserModel

class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_names(self, user_ids: Iterable[int]) -> Dict[int, str]:
        ids = set(user_ids)
        if not ids:
            return {}
        rows = self.db.execute(
            select(UserModel.id, UserModel.name).where(UserModel.id.in_(ids))
        ).all()
        return {row.id: row.name for row in rows}

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user
