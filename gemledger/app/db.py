from __future__ import annotations

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

load_dotenv()

DATABASE_URL_VARS = ("GEMLEDGER_DATABASE_URL", "DATABASE_URL")


def resolve_database_url(environ: Optional[Mapping[str, str]] = None) -> str:
    """First non-blank of GEMLEDGER_DATABASE_URL, DATABASE_URL."""
    env = os.environ if environ is None else environ
    for name in DATABASE_URL_VARS:
        value = (env.get(name) or "").strip()
        if value:
            return value
    raise RuntimeError(
        "gemledger needs a database: set GEMLEDGER_DATABASE_URL or DATABASE_URL "
        "(e.g. sqlite:///gemledger.db)."
    )


def _build_engine(database_url: str):
    # sqlite connections are shared across FastAPI's worker threads.
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    return create_engine(database_url, future=True, connect_args=connect_args)


DATABASE_URL = resolve_database_url()
engine = _build_engine(DATABASE_URL)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


class Base(DeclarativeBase):
    pass


def init_db() -> None:
    """Create the invoice, row and reference-list tables if missing."""
    import gemledger.app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
