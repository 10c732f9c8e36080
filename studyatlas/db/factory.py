from studyatlas.config import get_settings
from studyatlas.db.interfaces.postgresql import PostgreSQLDatabase


def make_database() -> PostgreSQLDatabase:
    """Create the database wrapper from settings and check connectivity."""
    settings = get_settings()
    database = PostgreSQLDatabase(
        database_url=settings.postgres_database_url,
        echo=settings.postgres_echo_sql,
        pool_size=settings.postgres_pool_size,
        max_overflow=settings.postgres_max_overflow,
    )
    database.startup()
    return database
