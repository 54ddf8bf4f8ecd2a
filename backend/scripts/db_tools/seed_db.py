import sys
import os
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))), ".env"))

# Add the backend directory to python path
sys.path.append(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from fitu.database import SessionLocal, engine, Base
import fitu.models  # noqa: F401
from fitu.crud.exercise import seed_exercises

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("seed_db")

# Ensure tables exist
Base.metadata.create_all(bind=engine)


def seed():
    db = SessionLocal()
    try:
        added = seed_exercises(db)
        if added:
            logger.info(f"Seeded {added} exercises successfully.")
        else:
            logger.info("Exercise catalog already seeded.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
