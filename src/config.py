from pydantic_settings import BaseSettings
from typing import Dict, List, Optional
from datetime import date

class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./transit.db"
    PGHOST: Optional[str] = None
    PGDATABASE: Optional[str] = None
    PGUSER: Optional[str] = None
    PGPASSWORD: Optional[str] = None
    PGSSLMODE: str = "require"
    DB_ISOLATION_LEVEL: Optional[str] = None
    DB_ECHO: bool = False

    # Security
    SECRET_KEY: str = "change-me-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30

    # Application
    PROJECT_NAME: str = "Transit Fare & Ticketing Engine"
    API_V1_STR: str = "/api/v1"
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Fares & analytics
    REFERENCE_TIMEZONE: str = "UTC"
    HOLIDAYS: List[date] = []
    FARE_POLICY_OVERRIDES: Dict[str, str] = {}

    @property
    def database_url(self) -> str:
        if self.PGHOST and self.PGDATABASE and self.PGUSER:
            return f"postgresql://{self.PGUSER}:{self.PGPASSWORD}@{self.PGHOST}/{self.PGDATABASE}?sslmode={self.PGSSLMODE}"
        return self.DATABASE_URL

    class Config:
        env_file = ".env"
        case_sensitive = True

settings = Settings()
