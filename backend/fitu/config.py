import os
from dotenv import load_dotenv

load_dotenv(override=False)

SQLALCHEMY_DATABASE_URL = os.getenv("SQLALCHEMY_DATABASE_URL", "sqlite:///./fitu.db")

# Bearer tokens are issued by the external identity provider; we only verify them.
SECRET_KEY = os.getenv("SECRET_KEY", "change-me")
ALGORITHM = os.getenv("ALGORITHM", "HS256")

# Server-local wall clock used for "today" and day windows, e.g. "Asia/Kolkata"
APP_TIMEZONE = os.getenv("APP_TIMEZONE", "UTC")

HISTORY_DAYS = int(os.getenv("HISTORY_DAYS", "30"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
RUN_MIGRATIONS = os.getenv("RUN_MIGRATIONS", "true").lower() in ("1", "true", "yes")

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",")
    if origin.strip()
]
