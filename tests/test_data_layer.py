"""Consolidated data layer tests.

This module covers:
- User entity construction and equality
- User table persistence
- User repository operations (using in-memory SQLite for fast, real database testing)
"""

from sqlmodel import Session, select

from src.user_api.entities.user import User, UserRepository, UserTable


class TestUserEntity:
    """Test User domain entity."""

    def test_user_creation(self):
        """Test user entity creation with all fields."""
        user = User(
            name="John Doe",
            email="john.doe@example.com",
            phone="555-1234",
            address="123 Main St",
        )

        assert user.name == "John Doe"
        assert user.email == "john.doe@example.com"
        assert user.phone == "555-1234"
        assert user.address == "123 Main St"

    def test_user_id_is_unassigned_until_stored(self):
        """A freshly built user has no identity; the store assigns it."""
        user = User(name="Test")
        assert user.id is None

    def test_user_optional_fields(self):
        """Test user with null fields."""
        user = User(name="Test", email=None)

        assert user.name == "Test"
        assert user.email is None
        assert user.phone is None
        assert user.address is None

    def test_user_equality(self):
        """Should compare users by all their attributes."""
        user1 = User(id=1, name="John", email="john.doe@example.com")
        user2 = User(id=1, name="John", email="john.doe@example.com")
        user3 = User(id=2, name="Jane", email="jane.smith@example.com")

        assert user1 == user2
        assert user1 != user3

    def test_user_representation(self):
        """Should have a meaningful string representation."""
        user = User(id=1, name="John Doe", email="john.doe@example.com")

        user_str = str(user)
        assert "John Doe" in user_str
        assert "john.doe@example.com" in user_str

    def test_user_validation_invalid_email(self):
        """Should allow any email format (no validation constraints in entity)."""
        user = User(id=1, name="John", email="not-a-valid-email")
        assert user.email == "not-a-valid-email"

    def test_user_with_extreme_values(self):
        """Test user entity with boundary and edge case values."""
        long_name = "A" * 1000
        user = User(name=long_name)
        assert user.name == long_name

        user_unicode = User(name="José 山田", address="東京都")
        assert user_unicode.name == "José 山田"
        assert user_unicode.address == "東京都"


class TestUserTable:
    """Test User database table operations."""

    def test_user_table_creation(self, session: Session):
        """Test creating user table records."""
        user_table = UserTable(name="Database User", email="db.user@example.com")

        session.add(user_table)
        session.commit()
        session.refresh(user_table)

        assert user_table.id is not None
        saved_user = session.get(UserTable, user_table.id)
        assert saved_user is not None
        assert saved_user.name == "Database User"
        assert saved_user.email == "db.user@example.com"

    def test_user_table_ids_are_sequential(self, session: Session):
        """The database assigns increasing integer identifiers."""
        first = UserTable(name="Alice")
        second = UserTable(name="Bob")
        session.add(first)
        session.add(second)
        session.commit()

        rows = session.exec(select(UserTable).order_by(UserTable.id)).all()
        assert [row.name for row in rows] == ["Alice", "Bob"]
        assert rows[0].id < rows[1].id


class TestUserRepository:
    """Test UserRepository against a real in-memory database."""

    def test_create_assigns_identity(self, session: Session):
        repo = UserRepository(session)

        created = repo.create(User(name="Ann", email="a@x.com", phone="555", address="1 Rd"))

        assert created.id is not None
        assert created.name == "Ann"
        assert created.email == "a@x.com"
        assert created.phone == "555"
        assert created.address == "1 Rd"

    def test_create_ignores_supplied_identity(self, session: Session):
        repo = UserRepository(session)

        created = repo.create(User(id=999, name="Ann"))

        assert created.id != 999
        assert repo.get(999) is None

    def test_get_existing_user(self, session: Session):
        repo = UserRepository(session)
        created = repo.create(User(name="Ann", email="a@x.com"))

        fetched = repo.get(created.id)

        assert fetched == created

    def test_get_missing_user(self, session: Session):
        repo = UserRepository(session)
        assert repo.get(12345) is None

    def test_list_all_in_identity_order(self, session: Session):
        repo = UserRepository(session)
        names = ["Ann", "Bob", "Cid"]
        for name in names:
            repo.create(User(name=name))

        users = repo.list_all()

        assert [user.name for user in users] == names
        assert [user.id for user in users] == sorted(user.id for user in users)

    def test_list_all_empty(self, session: Session):
        assert UserRepository(session).list_all() == []

    def test_update_replaces_all_fields(self, session: Session):
        repo = UserRepository(session)
        created = repo.create(
            User(name="Ann", email="a@x.com", phone="555", address="1 Rd")
        )

        updated = repo.update(created.id, User(name="Anna", email="anna@x.com"))

        assert updated is not None
        assert updated.id == created.id
        assert updated.name == "Anna"
        assert updated.email == "anna@x.com"
        # Full replacement: omitted fields are cleared
        assert updated.phone is None
        assert updated.address is None

    def test_update_keeps_path_identity(self, session: Session):
        repo = UserRepository(session)
        created = repo.create(User(name="Ann"))

        updated = repo.update(created.id, User(id=777, name="Anna"))

        assert updated is not None
        assert updated.id == created.id
        assert repo.get(777) is None

    def test_update_missing_user(self, session: Session):
        repo = UserRepository(session)
        assert repo.update(42, User(name="Nobody")) is None

    def test_delete_existing_then_missing(self, session: Session):
        repo = UserRepository(session)
        created = repo.create(User(name="Ann"))

        assert repo.delete(created.id) is True
        assert repo.get(created.id) is None
        assert repo.delete(created.id) is False
