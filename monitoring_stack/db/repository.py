"""
User persistence.

SQLAlchemy 2.0 ORM mapping for the ``users`` table and a small repository
over a session factory. MySQL in the deployed stack, SQLite locally and in
tests.
"""

from typing import Optional

import structlog
from sqlalchemy import String, create_engine, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Mapped, Session, mapped_column, sessionmaker
from sqlalchemy.pool import StaticPool

logger = structlog.get_logger(__name__)


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255))
    email: Mapped[str] = mapped_column(String(255))

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, email={self.email!r})"


def create_db_engine(database_url: str) -> Engine:
    """
    Create an engine and make sure the schema exists.

    In-memory SQLite gets a single shared connection so every session sees
    the same database.
    """
    kwargs: dict = {"pool_pre_ping": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(database_url, **kwargs)
    Base.metadata.create_all(engine)
    logger.info("database_initialized", dialect=engine.dialect.name)
    return engine


class UserRepository:
    """CRUD access to users."""

    def __init__(self, session_factory: sessionmaker[Session]):
        self._session_factory = session_factory

    @classmethod
    def from_engine(cls, engine: Engine) -> "UserRepository":
        return cls(sessionmaker(bind=engine, autoflush=False, expire_on_commit=False))

    def find_all(self) -> list[User]:
        with self._session_factory() as session:
            return list(session.scalars(select(User).order_by(User.id)))

    def find_by_id(self, user_id: int) -> Optional[User]:
        with self._session_factory() as session:
            return session.get(User, user_id)

    def save(self, user: User) -> User:
        with self._session_factory() as session:
            session.add(user)
            session.commit()
            session.refresh(user)
            logger.debug("user_saved", user_id=user.id)
            return user

    def count(self) -> int:
        with self._session_factory() as session:
            return session.scalar(select(func.count()).select_from(User)) or 0
