import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from fitu.config import CORS_ORIGINS, LOG_LEVEL, RUN_MIGRATIONS
from fitu.database import engine, Base, SessionLocal
import fitu.models  # noqa: F401
from fitu.api import ai_recommendations, calorie_balance, calorie_entries, exercise_logging, profile
from fitu.api.errors import register_exception_handlers
from fitu.crud.exercise import seed_exercises

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
logger = logging.getLogger(__name__)

BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


# Run Alembic migrations on startup
def run_migrations():
    """Run pending Alembic migrations, then make sure every table exists."""
    try:
        from alembic.config import Config
        from alembic import command
        alembic_cfg = Config(os.path.join(BACKEND_DIR, "alembic.ini"))
        alembic_cfg.set_main_option("script_location", os.path.join(BACKEND_DIR, "alembic"))
        command.upgrade(alembic_cfg, "head")
        logger.info("[Alembic] Migrations applied successfully")
    except Exception as e:
        logger.warning(f"[Alembic] Migration failed, falling back to create_all: {e}")

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        seed_exercises(db)
    finally:
        db.close()


if RUN_MIGRATIONS:
    run_migrations()

app = FastAPI(title="FitU API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(calorie_balance.router)
app.include_router(calorie_entries.router)
app.include_router(exercise_logging.router)
app.include_router(ai_recommendations.router)
app.include_router(profile.router)


# Root endpoint
@app.get("/")
def root():
    return {
        "message": "Welcome to FitU API",
        "docs": "/docs",
        "redoc": "/redoc"
    }


# Health check endpoint
@app.get("/health")
def health_check():
    return {"status": "healthy", "message": "API is running"}
