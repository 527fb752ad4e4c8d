"""Application settings and validation."""

import os
from pathlib import Path

BASE = Path(__file__).resolve().parent.parent


class Settings:
    ENV: str
    DATABASE_URL: str
    FRONTEND_ORIGIN: str
    ALLOW_DEV_CORS: bool
    LOG_LEVEL: str
    SQL_ECHO: bool

    def __init__(self):
        self.ENV = os.getenv("ENV", "dev").lower()
        self.DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{BASE / 'app.db'}")
        self.FRONTEND_ORIGIN = os.getenv("FRONTEND_ORIGIN", "http://localhost:3000")
        self.ALLOW_DEV_CORS = os.getenv("ALLOW_DEV_CORS", "true").lower() == "true"
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
        self.SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() == "true"
        self._validate()

    def _validate(self):
        if not self.DATABASE_URL.strip():
            raise RuntimeError("DATABASE_URL must not be empty")
        if self.ENV != "dev" and self.FRONTEND_ORIGIN.strip() == "*":
            raise RuntimeError("FRONTEND_ORIGIN must name a single origin in non-dev environments")


settings = Settings()
