"""
Configuración de la aplicación DoseTrack
"""
from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, validator

from dosetrack.core.clock import load_timezone


class Settings(BaseSettings):
    """Configuración de la aplicación"""

    # Información del proyecto
    PROJECT_NAME: str = Field(default="DoseTrack API", env="PROJECT_NAME")
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = Field(default="development", env="ENVIRONMENT")
    DEBUG: bool = Field(default=False, env="DEBUG")

    # Configuración del servidor
    HOST: str = Field(default="0.0.0.0", env="HOST")
    PORT: int = Field(default=8081, env="PORT")

    # Base de datos (SQLite por defecto, MySQL con mysql+pymysql://...)
    DATABASE_URL: str = Field(default="sqlite:///./dosetrack.db", env="DATABASE_URL")
    DB_POOL_SIZE: int = Field(default=20, env="DB_POOL_SIZE")
    DB_MAX_OVERFLOW: int = Field(default=30, env="DB_MAX_OVERFLOW")

    # CORS
    CORS_ORIGINS: List[str] = Field(
        default=[
            "http://localhost:3000",
            "http://localhost:5173"
        ],
        env="CORS_ORIGINS"
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", env="LOG_LEVEL")

    # Zona horaria de referencia para calcular el día calendario de cada dosis
    DEFAULT_TIMEZONE: str = Field(default="UTC", env="DEFAULT_TIMEZONE")

    # Cumplimiento
    COMPLIANCE_THRESHOLD: float = Field(default=75.0, env="COMPLIANCE_THRESHOLD")
    MAX_WINDOW_DAYS: int = Field(default=366, env="MAX_WINDOW_DAYS")
    MAX_FUTURE_SKEW_MINUTES: int = Field(default=5, env="MAX_FUTURE_SKEW_MINUTES")

    @validator("DEFAULT_TIMEZONE")
    def validate_timezone(cls, v):
        # Una zona inválida debe impedir el arranque
        load_timezone(v)
        return v

    @property
    def database_url(self) -> str:
        """URL de conexión a la base de datos"""
        return self.DATABASE_URL

    @property
    def is_sqlite(self) -> bool:
        """Verificar si la base de datos es SQLite"""
        return self.DATABASE_URL.startswith("sqlite")

    @property
    def is_production(self) -> bool:
        """Verificar si estamos en producción"""
        return self.ENVIRONMENT.lower() == "production"

    class Config:
        env_file = ".env"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Obtener configuración con cache"""
    return Settings()
