"""User repository for data access operations."""

from sqlmodel import Session, select

from src.user_api.entities.user.entity import User
from src.user_api.entities.user.table import UserTable


class UserRepository:
    """Data-access layer for users.

    The repository flushes so that generated identifiers are visible, but it
    never commits; transaction boundaries belong to the caller.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[User]:
        statement = select(UserTable).order_by(UserTable.id)
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def get(self, user_id: int) -> User | None:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def create(self, user: User) -> User:
        """Insert a new row; any identifier on ``user`` is ignored."""
        row = UserTable.model_validate(user.model_dump(exclude={"id"}))
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def update(self, user_id: int, user: User) -> User | None:
        """Replace every mutable field of the row, or return None if it is missing."""
        row = self._session.get(UserTable, user_id)
        if row is None:
            return None

        for field, value in user.model_dump(exclude={"id"}).items():
            setattr(row, field, value)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def delete(self, user_id: int) -> bool:
        row = self._session.get(UserTable, user_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True
