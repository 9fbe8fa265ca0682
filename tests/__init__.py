"""Test package. Points the app at in-memory SQLite and a cheap bcrypt cost before portal is imported."""

import os

os.environ.setdefault("APP_ENV", "dev")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
