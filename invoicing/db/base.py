from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from invoicing.core.config import settings


def normalize_database_url(url: str) -> str:
    """Route plain postgresql:// URLs to the psycopg3 driver; other URLs (SQLite in tests) pass through."""
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


engine = create_engine(normalize_database_url(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()
