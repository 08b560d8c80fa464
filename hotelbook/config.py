import os
from dotenv import load_dotenv
from fastapi import Request

load_dotenv()

class Settings:
    APP_NAME: str = "Hotelbook"
    # Core settings
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    DEBUG: bool = os.getenv("DEBUG", "false").lower() == "true"
    CORS_ORIGINS: list[str] = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    # Auth tokens
    TOKEN_TTL_HOURS: int = int(os.getenv("TOKEN_TTL_HOURS", "8"))

    # Database
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./hotelbook.db")

    # Default admin bootstrap (skipped unless both email and password are set)
    ADMIN_EMAIL: str = os.getenv("ADMIN_EMAIL", "")
    ADMIN_USERNAME: str = os.getenv("ADMIN_USERNAME", "admin")
    ADMIN_PASSWORD: str = os.getenv("ADMIN_PASSWORD", "")

    # Upload constraints
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "./upload-tmp")
    UPLOAD_IMAGE_MAX_MB: int = int(os.getenv("UPLOAD_IMAGE_MAX_MB", "5"))

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    RATE_LIMIT_AUTH_API: str = os.getenv("RATE_LIMIT_AUTH_API", "10/minute")

    def __init__(self, **overrides):
        for key, value in overrides.items():
            if not hasattr(type(self), key):
                raise AttributeError(f"Unknown setting: {key}")
            setattr(self, key, value)

    @property
    def UPLOAD_IMAGE_MAX_BYTES(self) -> int:
        return self.UPLOAD_IMAGE_MAX_MB * 1024 * 1024


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
