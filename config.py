"""
config.py
---------
Central configuration module. Loads environment variables from the .env
file and exposes them on the Config class used by app.config.from_object().
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()


class Config:
    # ── Flask / session ───────────────────────────────────────
    SECRET_KEY = os.getenv("SECRET_KEY", "change-this-secret")
    SESSION_COOKIE_NAME = "session"
    SESSION_COOKIE_HTTPONLY = True
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)

    # ── MongoDB ───────────────────────────────────────────────
    MONGO_URI = os.getenv("DB_URL", "mongodb://localhost:27017/school_admin")

    # ── Seed admin account ────────────────────────────────────
    ADMIN_MAIL_ID = os.getenv("ADMIN_MAIL_ID", "admin@localhost.in")
    ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "admin@1234")

    # ── Cloudinary ────────────────────────────────────────────
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_KEY = os.getenv("CLOUDINARY_KEY", "")
    CLOUDINARY_SECRET = os.getenv("CLOUDINARY_SECRET", "")
    CLOUDINARY_FOLDER = os.getenv("CLOUDINARY_FOLDER", "school-admin")
    UPLOAD_MAX_BYTES = int(os.getenv("UPLOAD_MAX_BYTES", str(2 * 1024 * 1024)))

    # ── Logging ───────────────────────────────────────────────
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    MONGO_URI = "mongodb://localhost:27017/school_admin_test"
    ADMIN_PASSWORD = "admin@123456789"
