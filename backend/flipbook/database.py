# backend/flipbook/database.py
from typing import Optional

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings
from .utils.logging import db_logger

Base = declarative_base()

LOCAL_HOSTS = {"localhost", "127.0.0.1", "::1"}


def normalize_database_url(url: str) -> str:
    """Point bare PostgreSQL URLs (as issued by most hosts) at the psycopg driver"""
    for prefix in ("postgres://", "postgresql://"):
        if url.startswith(prefix):
            return "postgresql+psycopg://" + url[len(prefix):]
    return url


def connect_args_for(url: str, use_ssl: Optional[bool] = None) -> dict:
    """Driver arguments for a database URL.

    Remote PostgreSQL servers get ``sslmode=require`` unless SSL is
    explicitly disabled; local ones and SQLite connect without SSL.
    """
    parsed = make_url(url)
    if parsed.get_backend_name() == "sqlite":
        return {"check_same_thread": False}

    if parsed.get_backend_name() == "postgresql":
        if use_ssl is None:
            use_ssl = (parsed.host or "localhost") not in LOCAL_HOSTS
        return {"sslmode": "require"} if use_ssl else {}

    return {}


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Store:
    """Connection pool and session factory shared by the request handlers.

    Opened when the application starts and disposed on shutdown.
    """

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None,
                 use_ssl: Optional[bool] = None):
        if engine is None:
            url = normalize_database_url(url or settings.DATABASE_URL)
            db_logger.info("Connecting to database", extra={"backend": make_url(url).get_backend_name()})
            engine = create_engine(
                url,
                connect_args=connect_args_for(url, use_ssl if use_ssl is not None else settings.DATABASE_SSL),
                pool_pre_ping=True,
                echo=False
            )

        if engine.dialect.name == "sqlite":
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        self.engine = engine
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def ping(self) -> None:
        """Run a trivial query, raising if the store is unreachable"""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))

    def dispose(self) -> None:
        db_logger.info("Closing database connections")
        self.engine.dispose()


def get_store(request: Request) -> Store:
    return request.app.state.store


def get_db(request: Request):
    db = get_store(request).session()
    try:
        yield db
    finally:
        db.close()
