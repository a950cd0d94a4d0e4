from typing import Literal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite+aiosqlite:///./splitshare.db"
    HOST: str = "127.0.0.1"
    PORT: int = 8000
    LOG_LEVEL: str = "INFO"

    DB_CONNECT_RETRIES: int = 5
    DB_CONNECT_DELAY: float = 2.0

    # "payer" splits a new expense across the payer only, "group" across the
    # group's roster
    SPLIT_MODE: Literal["payer", "group"] = "payer"
    RECOMPUTE_SHARES_ON_UPDATE: bool = True
    DEFAULT_PAGE_SIZE: int = 20

    class Config:
        env_file = ".env"
