import logging
from sqlalchemy import text
from sqlmodel import SQLModel, Session, create_engine

from config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str):
    """
    Create the pooled engine. SQLite gets a thread-safe connection instead of a
    sized pool; other backends queue callers once DB_POOL_SIZE connections are busy.
    """
    if database_url.startswith("sqlite"):
        return create_engine(database_url, connect_args={"check_same_thread": False})
    return create_engine(
        database_url,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=0,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_pre_ping=True,
    )


engine = build_engine(settings.DATABASE_URL)


# ✅ Dependency to get DB session in routes
def get_session():
    with Session(engine) as session:
        yield session


# ✅ Function to create tables
def init_db():
    from db import models  # noqa: F401  registers the drugs table
    SQLModel.metadata.create_all(bind=engine)


def check_connection() -> bool:
    try:
        with engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        logger.info("✓ Database connected successfully")
        return True
    except Exception as e:
        logger.error("✗ Database connection failed: %s", e)
        if "refused" in str(e).lower() or "name or service not known" in str(e).lower():
            logger.error(
                "Hint: Check if the database server is running and accessible. "
                "Free database hosts may sleep when inactive."
            )
        return False
