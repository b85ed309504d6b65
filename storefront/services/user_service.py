from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.enums import Role
from storefront.domain.schemas import RegisterIn, ProfileUpdate
from storefront.repos.user_repo import UserRepo
from storefront.utils.errors import NotFoundError, ConflictError
from storefront.utils.security import hash_password, verify_password
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: RegisterIn) -> UserModel:
        if self.repo.get_by_email(payload.email):
            raise ConflictError("Email already registered")

        user = UserModel(
            name=payload.name,
            email=payload.email.lower(),
            password_hash=hash_password(payload.password),
            role=Role.USER.value,
        )
        created = self.repo.create_user(user)
        logger.info(f"Zarejestrowano uzytkownika {created.id}")
        return created

    def authenticate(self, email: str, password: str) -> UserModel | None:
        user = self.repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            return None
        return user

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def update_profile(self, user_id: int, payload: ProfileUpdate) -> UserModel:
        user = self.get_user(user_id)

        if payload.email and payload.email.lower() != user.email:
            other = self.repo.get_by_email(payload.email)
            if other and other.id != user.id:
                raise ConflictError("Email already in use")
            user.email = payload.email.lower()

        if payload.name:
            user.name = payload.name
        if payload.avatar is not None:
            user.avatar = payload.avatar

        return self.repo.save(user)

    # admin
    def list_users(self, search: str | None, role: str | None, page: int, limit: int) -> dict:
        if role == "ALL":
            role = None
        users, total = self.repo.list_users(search, role, page, limit)
        return {
            "users": users,
            "total": total,
            "page": page,
            "limit": limit,
            "total_pages": -(-total // limit),
        }

    def set_role(self, actor_id: int, user_id: int, role: Role) -> UserModel:
        if actor_id == user_id:
            raise ValueError("Cannot change your own role")

        user = self.get_user(user_id)
        user.role = role.value
        logger.info(f"Uzytkownik {user_id} ma teraz role {role.value}")
        # zmiana roli dziala dopiero po ponownym wydaniu tokena
        return self.repo.save(user)

    def delete_user(self, actor_id: int, user_id: int) -> None:
        if actor_id == user_id:
            raise ValueError("Cannot delete your own account")

        user = self.get_user(user_id)
        self.repo.delete_user(user)
        logger.info(f"Usunieto uzytkownika {user_id}")
