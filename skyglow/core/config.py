# File: skyglow/core/config.py

import os
from functools import lru_cache
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    # env-derived defaults go through the validators below as well
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "Skyglow Light Pollution API"
    VERSION: str = "0.1.0"

    # Raster (required at startup, path relative to the working directory)
    raster_path: str = os.getenv("SKYGLOW_RASTER_PATH", "World_Atlas_2015.tif")
    raster_preload: bool = _env_flag("SKYGLOW_RASTER_PRELOAD")

    # Population density passthrough for the map client
    population_csv_path: str = os.getenv("SKYGLOW_POPULATION_CSV", "API_EN.POP.DNST.csv")

    # Server
    host: str = os.getenv("SKYGLOW_HOST", "localhost")
    port: int = Field(default_factory=lambda: os.getenv("SKYGLOW_PORT", "8080"))
    worker_threads: int = Field(
        default_factory=lambda: os.getenv("SKYGLOW_WORKER_THREADS", "40")
    )

    # CORS
    backend_cors_origins: List[str] = os.getenv("SKYGLOW_CORS_ORIGINS", "*")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("worker_threads")
    @classmethod
    def check_worker_threads(cls, v: int) -> int:
        if v < 1:
            raise ValueError("worker_threads must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.strip().upper() or "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
