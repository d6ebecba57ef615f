"""
Database connection and session management for the account service
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.exc import SQLAlchemyError
from fastapi import Request
from typing import Generator
import logging

logger = logging.getLogger(__name__)

Base = declarative_base()


def create_db_engine(database_url: str) -> Engine:
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, connect_args=connect_args, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def init_db(engine: Engine) -> None:
    """
    Create all tables and make sure the database answers.

    Called once on application startup. Failure is fatal: the error is
    logged and re-raised so the process does not start without a store.
    """
    try:
        # Import models to ensure they are registered with Base
        from .models import User, AccountEvent  # noqa: F401

        Base.metadata.create_all(bind=engine)
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info("Database initialized successfully")
    except SQLAlchemyError as e:
        logger.critical("Failed to initialize database: %s", e)
        raise


def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
