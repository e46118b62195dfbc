from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from collections.abc import Generator

from flask import Flask, g
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.feedboard.config import is_production
from app.feedboard.errors import DatabaseUnavailable

logger = logging.getLogger(__name__)

_connect_lock = threading.Lock()


def init_db(app: Flask) -> None:
    db_url = app.config["DATABASE_URL"]
    is_postgres = db_url.startswith("postgres")
    engine_kwargs: dict[str, object] = {
        "future": True,
        "pool_pre_ping": True,
    }
    if is_postgres:
        engine_kwargs.update(
            {
                "pool_recycle": 1800,
                "pool_size": 5,
                "max_overflow": 10,
                "pool_timeout": 30,
            }
        )
    engine = create_engine(db_url, **engine_kwargs)
    if not is_production(app.config.get("ENV")):
        @event.listens_for(engine, "checkout")
        def _receive_checkout(dbapi_connection, connection_record, connection_proxy):  # type: ignore[no-redef]
            app.logger.debug("DB connection checkout from pool")
    app.extensions["sqlalchemy_engine"] = engine
    app.extensions["sqlalchemy_connected"] = False
    app.extensions["sqlalchemy_sessionmaker"] = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def connect(app: Flask | None = None) -> Engine:
    """
    Verify (once per process) that the configured database is reachable.

    Idempotent: after the first successful round-trip the engine is returned
    as-is. A failed attempt is logged and raised as DatabaseUnavailable; the
    next call tries again.
    """
    if app is None:
        from flask import current_app

        app = current_app
    engine: Engine | None = app.extensions.get("sqlalchemy_engine")
    if engine is None:
        raise DatabaseUnavailable()
    if app.extensions.get("sqlalchemy_connected"):
        return engine
    with _connect_lock:
        if app.extensions.get("sqlalchemy_connected"):
            return engine
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.error("Database connection failed (%s): %s", engine.url.render_as_string(hide_password=True), e)
            raise DatabaseUnavailable() from e
        app.extensions["sqlalchemy_connected"] = True
        logger.info("Database connection established (%s)", engine.url.render_as_string(hide_password=True))
    return engine


def db_session(app: Flask | None = None) -> Session:
    """
    Request-scoped session. Use inside request handlers.
    """
    if hasattr(g, "db_session") and g.db_session is not None:
        return g.db_session
    if app is None:
        from flask import current_app

        app = current_app
    connect(app)
    sm = app.extensions["sqlalchemy_sessionmaker"]
    g.db_session = sm()  # type: ignore[assignment]
    return g.db_session


def teardown_db_session(_exc: BaseException | None) -> None:
    s: Session | None = getattr(g, "db_session", None)
    if s is not None:
        try:
            s.close()
        except SQLAlchemyError as e:
            logger.warning("Failed to close DB session: %s", e)
        g.db_session = None


@contextmanager
def session_scope(app: Flask) -> Generator[Session, None, None]:
    """
    Non-request helper for scripts and tests: yields a session and commits/rolls back.
    """
    sm = app.extensions["sqlalchemy_sessionmaker"]
    s: Session = sm()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
