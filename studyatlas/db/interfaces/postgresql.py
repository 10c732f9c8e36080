import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from studyatlas.db.interfaces.base import BaseDatabase

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class PostgreSQLDatabase(BaseDatabase):
    """SQLAlchemy engine plus a session factory.

    Any SQLAlchemy URL is accepted; ``sqlite://`` URLs get a static pool so an
    in-memory database survives across sessions (used by the test suite).
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 10,
        max_overflow: int = 20,
    ):
        self.database_url = database_url
        self.engine: Engine = self._create_engine(database_url, echo, pool_size, max_overflow)
        self.session_factory = sessionmaker(bind=self.engine, expire_on_commit=False)

    def _create_engine(self, url: str, echo: bool, pool_size: int, max_overflow: int) -> Engine:
        if url.startswith("sqlite"):
            engine = create_engine(
                url,
                echo=echo,
                connect_args={"check_same_thread": False},
                poolclass=StaticPool,
            )

            @event.listens_for(engine, "connect")
            def _enable_foreign_keys(dbapi_connection, _):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA foreign_keys=ON")
                cursor.close()

            return engine
        return create_engine(
            url,
            echo=echo,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
        )

    def startup(self) -> None:
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("Database connection verified")

    def create_all(self) -> None:
        """Create every mapped table. Migrations own the schema in deployments."""
        import studyatlas.models  # noqa: F401

        Base.metadata.create_all(self.engine)

    def teardown(self) -> None:
        self.engine.dispose()
        logger.info("Database engine disposed")

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        session: Optional[Session] = None
        try:
            session = self.session_factory()
            yield session
        except Exception:
            if session is not None:
                session.rollback()
            raise
        finally:
            if session is not None:
                session.close()
