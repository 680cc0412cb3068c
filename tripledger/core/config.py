"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    APP_NAME: str = "Tripledger"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Database
    DATABASE_URL: str = "sqlite:///./tripledger.db"
    DB_ECHO: bool = False
    
    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000", "http://localhost:8080"]
    
    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v
    
    # Currency used for new trips when none is given (no conversion is performed)
    DEFAULT_CURRENCY: str = "INR"
    
    @field_validator("LOG_LEVEL", "DEFAULT_CURRENCY", mode="before")
    @classmethod
    def upper_case(cls, v):
        """Normalise level names and currency codes to upper case."""
        if isinstance(v, str):
            return v.strip().upper()
        return v
    
    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
