"""Database initialization script."""

from src.user_api.core.services.database.db_manage import DbManageService
from src.user_api.core.services.database.db_session import DbSessionService


def init_db(drop_existing: bool = False) -> None:
    """Create all database tables."""
    database_service = DbSessionService()
    manage_service = DbManageService(database_service.engine)
    try:
        if drop_existing:
            manage_service.drop_all()
        manage_service.create_all()
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
