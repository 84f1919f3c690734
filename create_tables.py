# create_tables.py
import asyncio
import logging

from app.database.database import create_tables

# Import all models so SQLAlchemy knows which tables exist
import app.models  # noqa: F401

logger = logging.getLogger(__name__)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    logger.info("Creating verification code tables...")
    asyncio.run(create_tables())
    logger.info("Done, all tables created.")
