from typing import Protocol

from loguru import logger
from sqlmodel import Session

from src.user_api.entities.user.entity import User
from src.user_api.entities.user.repository import UserRepository


class UserStore(Protocol):
    """Persistence contract consumed by the user endpoints."""

    def get_all_users(self) -> list[User]: ...

    def get_user_by_id(self, user_id: int) -> User | None: ...

    def create_user(self, user: User) -> User: ...

    def update_user(self, user_id: int, user: User) -> User | None: ...

    def delete_user(self, user_id: int) -> bool: ...


class UserService:
    """Database-backed user store.

    Reads go straight to the repository. Each mutating call runs in its own
    transaction: committed on success, rolled back and re-raised on failure.
    """

    def __init__(self, db_session: Session):
        self._db_session = db_session
        self._user_repo = UserRepository(db_session)

    def get_all_users(self) -> list[User]:
        return self._user_repo.list_all()

    def get_user_by_id(self, user_id: int) -> User | None:
        return self._user_repo.get(user_id)

    def create_user(self, user: User) -> User:
        try:
            created_user = self._user_repo.create(user)
            self._db_session.commit()
        except Exception as e:
            logger.error(f"Error creating user: {e}")
            self._db_session.rollback()
            raise

        logger.bind(user_id=created_user.id).info("user.created")
        return created_user

    def update_user(self, user_id: int, user: User) -> User | None:
        try:
            updated_user = self._user_repo.update(user_id, user)
            if updated_user is None:
                self._db_session.rollback()
                return None
            self._db_session.commit()
        except Exception as e:
            logger.error(f"Error updating user {user_id}: {e}")
            self._db_session.rollback()
            raise

        logger.bind(user_id=user_id).info("user.updated")
        return updated_user

    def delete_user(self, user_id: int) -> bool:
        try:
            deleted = self._user_repo.delete(user_id)
            if not deleted:
                self._db_session.rollback()
                return False
            self._db_session.commit()
        except Exception as e:
            logger.error(f"Error deleting user {user_id}: {e}")
            self._db_session.rollback()
            raise

        logger.bind(user_id=user_id).info("user.deleted")
        return True
