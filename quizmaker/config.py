"""
Configuration module for the application.
All configuration values are read from environment variables
(a .env file is loaded first by the application factory).
"""
import os
import secrets
import warnings


DEFAULT_API_TOKEN = "dev-token"


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self):
        """Initialize configuration from environment variables."""
        # Flask Configuration
        self.SECRET_KEY: str = os.getenv("SECRET_KEY", "")
        self.FLASK_ENV: str = os.getenv("FLASK_ENV", "")
        self.FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "").lower() == "true"

        # Generate a development SECRET_KEY if not set and in development mode
        if not self.SECRET_KEY and self.FLASK_ENV != "production":
            self.SECRET_KEY = secrets.token_urlsafe(32)
            warnings.warn(
                "SECRET_KEY not set. Generated a temporary key for development. "
                "Set SECRET_KEY in your .env file for production!",
                UserWarning
            )

        # Bearer token shared with the client
        self.API_TOKEN: str = os.getenv("API_TOKEN", DEFAULT_API_TOKEN)

        # Database Configuration
        self.DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///quizmaker.db")

        # API Configuration
        self.API_PREFIX: str = os.getenv("API_PREFIX", "")

        # Request body limit (bytes)
        self.MAX_CONTENT_LENGTH: int = int(os.getenv("MAX_CONTENT_LENGTH", "1048576"))

        cors_origins = os.getenv("CORS_ALLOWED_ORIGINS", "*")
        self.CORS_ALLOWED_ORIGINS: list[str] = [o.strip() for o in cors_origins.split(",") if o.strip()]

        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

        # SQLAlchemy Configuration
        self.SQLALCHEMY_TRACK_MODIFICATIONS: bool = False
        sqlalchemy_echo = os.getenv("SQLALCHEMY_ECHO", "")
        self.SQLALCHEMY_ECHO: bool = sqlalchemy_echo.lower() == "true" if sqlalchemy_echo else False

    @property
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Database URI, normalised for SQLAlchemy."""
        uri = self.DATABASE_URL
        # Hosted Postgres providers still hand out the legacy scheme
        if uri.startswith("postgres://"):
            uri = "postgresql://" + uri[len("postgres://"):]
        return uri

    @property
    def is_sqlite(self) -> bool:
        return self.SQLALCHEMY_DATABASE_URI.startswith("sqlite")

    def validate(self) -> None:
        """
        Validate required configuration values.
        Only enforces secrets in production environment.
        """
        if self.FLASK_ENV != "production":
            return
        if not self.SECRET_KEY:
            raise ValueError(
                "SECRET_KEY environment variable is required in production. "
                "Set it in your .env file or environment variables."
            )
        if not self.API_TOKEN or self.API_TOKEN == DEFAULT_API_TOKEN:
            raise ValueError(
                "API_TOKEN must be set to a non-default value in production."
            )


# Global config instance - will be re-initialized after load_dotenv()
config = Config()
