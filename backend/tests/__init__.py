import os

# Keep the test run off the real database and skip startup migrations
os.environ.setdefault("SQLALCHEMY_DATABASE_URL", "sqlite://")
os.environ.setdefault("RUN_MIGRATIONS", "false")
os.environ.setdefault("APP_TIMEZONE", "UTC")
