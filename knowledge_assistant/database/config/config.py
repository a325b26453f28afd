from typing import Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Application configuration settings loaded from environment variables
    or a `.env` file. Provides strongly typed access to environment values.
    """

    API_KEY: str
    """OpenAI API key used by the completion gateway."""

    OPEN_AI_MODEL: str = "gpt-3.5-turbo-instruct"
    """OpenAI completion model name."""

    SECRET_KEY: str
    """Secret key used for signing access tokens."""

    ALGORITHM: str = "HS512"
    """Cryptographic algorithm used for JWT signing (e.g., `HS512`)."""

    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440
    """Duration (in minutes) before access tokens expire."""

    DB_DRIVER_NAME: str = "sqlite"
    """Database driver (e.g., `postgresql+psycopg2`, `mysql+pymysql`, `sqlite`)."""

    DB_USERNAME: Optional[str] = None
    """Database username credential."""

    DB_PASSWORD: Optional[str] = None
    """Database password credential."""

    DB_HOST: Optional[str] = None
    """Hostname or IP address of the database server."""

    DB_DATABASE_NAME: str = "knowledge_assistant.db"
    """Name of the application’s database (file path for sqlite)."""

    FRONTEND_URL: str = "*"
    """Origin of the frontend client application, allowed by CORS."""

    LOG_LEVEL: str = "INFO"
    """Root logging level."""

    class Config:
        """
        Configuration for Pydantic settings. Loads values from `.env` file by default.
        """
        env_file = ".env"


# Singleton instance of Settings, ready to be imported across the app
settings = Settings()
"""Defines a Settings object that contains the contents of the .env file"""
