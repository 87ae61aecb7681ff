# daogen/settings.py
from __future__ import annotations
import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

class Settings:
    DEFAULT_PACKAGE: Optional[str]
    SCHEMA_PATH: str
    DIALECT: str
    LOG_LEVEL: str

    def __init__(self) -> None:
        self.DEFAULT_PACKAGE = os.getenv("DAOGEN_DEFAULT_PACKAGE") or None
        self.SCHEMA_PATH = os.getenv("DAOGEN_SCHEMA_PATH", "schema.json")
        self.DIALECT = os.getenv("DAOGEN_DIALECT", "sqlite").lower()
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

@lru_cache
def get_settings() -> Settings:
    return Settings()
