from sqlalchemy import inspect
import logging

from database import engine, Base
import models  # noqa: F401  registers the tables on Base.metadata

logger = logging.getLogger(__name__)


def init_database(bind=None):
    """Create any missing tables"""
    bind = bind or engine
    existing = set(inspect(bind).get_table_names())
    Base.metadata.create_all(bind=bind)

    created = sorted(set(Base.metadata.tables) - existing)
    if created:
        logger.info(f"✅ Created tables: {', '.join(created)}")
    else:
        logger.info("Database schema up to date")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_database()
    print("Database initialized successfully")
