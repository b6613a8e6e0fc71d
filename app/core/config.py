# app/core/config.py
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # tell pydantic-settings which .env file to load
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    MONGO_URI: str = "mongodb://localhost:27017"
    MASTER_DB: str = "tenant_signup_db"

    # every signup gets a subdomain below this suffix
    SIGNUP_DOMAIN_SUFFIX: str = ".on.seatsurfing.de"

    MAIL_SENDER: str = "info@seatsurfing.de"
    MAIL_TEMPLATE_DIR: Path = Path(__file__).resolve().parent.parent / "templates" / "mail"
    SMTP_HOST: str = "localhost"
    SMTP_PORT: int = 25
    SMTP_USERNAME: str = ""
    SMTP_PASSWORD: str = ""
    SMTP_STARTTLS: bool = False

    LOG_LEVEL: str = "INFO"

settings = Settings()
