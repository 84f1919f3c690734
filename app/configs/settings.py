from typing import List, Optional
from pydantic_settings import BaseSettings
from pathlib import Path

# Project root, so the .env file is found regardless of the working directory
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    # Application settings
    APP_NAME: str = "Verified Signup API"
    PORT: int = 5000
    LOG_LEVEL: str = "INFO"

    # CORS settings
    CORS_ORIGINS: List[str] = ["*"]

    # Database settings (verification code store)
    DATABASE_URL: str

    # Supabase settings (identity provider and content store)
    SUPABASE_URL: str
    SUPABASE_SERVICE_ROLE_KEY: str
    SUPABASE_ANON_KEY: Optional[str] = None

    # Mail Settings
    MAIL_USERNAME: str
    MAIL_PASSWORD: str
    MAIL_FROM: str
    MAIL_FROM_NAME: str = "Web3ix"
    MAIL_SERVER: str = "smtp.gmail.com"
    MAIL_PORT: int = 587
    MAIL_STARTTLS: bool = True
    MAIL_SSL_TLS: bool = False

    # Verification settings
    VERIFICATION_EMAIL_SUBJECT: str = "Your Web3ix Verification Code"
    VERIFICATION_CODE_TTL_MINUTES: int = 10

    # Wallet signup settings
    WALLET_PROVIDER_NAME: str = "phantom"
    WALLET_RETRY_ON_DUPLICATE: bool = False

    # Celery settings
    CELERY_BROKER_URL: str = "redis://localhost:6379/0"
    CELERY_RESULT_BACKEND: str = "redis://localhost:6379/0"
    CELERY_TASK_ALWAYS_EAGER: bool = False
    EXPIRED_CODE_PURGE_INTERVAL_SECONDS: float = 3600.0

    @property
    def supabase_public_key(self) -> str:
        """Key used for end-user sign in / sign up calls."""
        return self.SUPABASE_ANON_KEY or self.SUPABASE_SERVICE_ROLE_KEY

    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = 'utf-8'
        case_sensitive = True
        extra = 'ignore'

settings = Settings()
