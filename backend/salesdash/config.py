# backend/salesdash/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/salesdash.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///salesdash.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Fixed key names of the persisted collections
    USERS_KEY = os.environ.get("SALESDASH_USERS_KEY", "dashboard_users")
    SALES_KEY = os.environ.get("SALESDASH_SALES_KEY", "dashboard_sales")
    SESSION_KEY = os.environ.get("SALESDASH_SESSION_KEY", "dashboard_auth")

    # First-run accounts (plaintext, matched exactly at login)
    DEFAULT_ADMIN_USERNAME = os.environ.get("DEFAULT_ADMIN_USERNAME", "admin")
    DEFAULT_ADMIN_PASSWORD = os.environ.get("DEFAULT_ADMIN_PASSWORD", "admin123")
    DEFAULT_USER_USERNAME = os.environ.get("DEFAULT_USER_USERNAME", "user")
    DEFAULT_USER_PASSWORD = os.environ.get("DEFAULT_USER_PASSWORD", "user123")

    # Zone used to bucket sales into calendar days
    DASHBOARD_TIMEZONE = os.environ.get("DASHBOARD_TIMEZONE", "UTC")

    TOP_ITEMS_LIMIT = int(os.environ.get("TOP_ITEMS_LIMIT", "10"))

    # Browser origins allowed to call the API (comma-separated); none by default
    CORS_ORIGINS = tuple(
        origin.strip()
        for origin in os.environ.get("CORS_ORIGINS", "").split(",")
        if origin.strip()
    )

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
