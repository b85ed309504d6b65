from sqlalchemy import select, func, or_
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def get_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user: UserModel) -> None:
        self.db.delete(user)
        self.db.commit()

    def list_users(self, search: str | None, role: str | None, page: int, limit: int):
        stmt = select(UserModel)
        if search:
            pattern = f"%{search}%"
            stmt = stmt.where(or_(UserModel.name.ilike(pattern), UserModel.email.ilike(pattern)))
        if role:
            stmt = stmt.where(UserModel.role == role)

        total = self.db.execute(select(func.count()).select_from(stmt.subquery())).scalar_one()
        users = self.db.execute(
            stmt.order_by(UserModel.created_at.desc(), UserModel.id.desc())
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()
        return users, total

    def count_created_since(self, since) -> int:
        return self.db.execute(
            select(func.count(UserModel.id)).where(UserModel.created_at >= since)
        ).scalar_one()
