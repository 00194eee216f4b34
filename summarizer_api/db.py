# summarizer_api/db.py
import logging
import re

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import settings

logger = logging.getLogger("db")

DATABASE_URL = settings.DATABASE_URL

if not DATABASE_URL:
    # clear, actionable error
    raise RuntimeError(
        "DATABASE_URL is not set. Expected it in summarizer_api/.env or OS envs.\n"
        "Hint: for local development use DATABASE_URL=sqlite:///./summarizer.db"
    )

def _mask(url: str) -> str:
    return re.sub(r"://([^:]+):([^@]+)@", r"://\1:***@", url)

logger.info(f"[db] Using DATABASE_URL={_mask(DATABASE_URL)}")

_is_sqlite = DATABASE_URL.startswith("sqlite")

engine = create_engine(
    DATABASE_URL,
    echo=False,
    future=True,
    connect_args={"check_same_thread": False} if _is_sqlite else {},
)

if _is_sqlite:
    # SQLite only honours ON DELETE CASCADE with foreign keys switched on
    @event.listens_for(engine, "connect")
    def _sqlite_fk_on(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys=ON")
        cur.close()

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True)
Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
