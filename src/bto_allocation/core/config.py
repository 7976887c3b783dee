"""
Configuration Management
Pydantic Settings with strict validation
"""
from typing import Optional
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with strict validation"""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="BTO_",
        case_sensitive=True,
        extra="ignore"
    )
    
    # Application
    APP_NAME: str = "BTO Allocation System"
    ENVIRONMENT: str = Field(default="development")
    
    # Database (sync SQLAlchemy, SQLite by default)
    DATABASE_URL: str = "sqlite:///bto.db"
    DB_ECHO: bool = False
    
    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_JSON_FORMAT: bool = False
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "logs"
    
    # Allocation rules
    DEFAULT_MAX_OFFICER_SLOTS: int = Field(default=10, ge=1)
    ENQUIRY_ID_LENGTH: int = Field(default=8, ge=4, le=32)
    
    # Passwords
    BCRYPT_ROUNDS: int = Field(default=12, ge=4, le=31)
    DEFAULT_PASSWORD: Optional[str] = Field(
        default="password",
        description="Initial password given to seeded accounts"
    )
    
    # Persistence
    FLUSH_AFTER_COMMAND: bool = True
    
    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and check the loguru level name"""
        allowed = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        level = v.upper()
        if level not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of: {', '.join(allowed)}")
        return level


# Global settings instance
settings = Settings()
