from typing import Literal, List

from pydantic_settings import BaseSettings
from functools import lru_cache

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./contactbook.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    CREATE_TABLES_ON_STARTUP: bool = True

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    API_TITLE: str = "The Contact Book API"

    CORS_ORIGINS_STR: str = "http://localhost:5174"

    @property
    def CORS_ORIGINS(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS_STR.split(',') if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


    def model_post_init(self, __context) -> None:
        if self.DB_POOL_SIZE < 1:
            raise ValueError("DB_POOL_SIZE must be at least 1")


    class Config:
        env_file = ".env"

@lru_cache()
def get_settings():
    return Settings()
