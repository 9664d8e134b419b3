"""
Configuration management for the FastAPI application.
Uses Pydantic Settings for environment variable management.
"""
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    API_TITLE: str = "Gallery Admin API"
    API_VERSION: str = "0.1.0"
    API_DESCRIPTION: str = "Admin and artist portal backend for gallery artworks, artists and events"

    # CORS Configuration
    # Admin frontend and common local development ports
    CORS_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:3002",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:3002",
    ]

    # Database Configuration
    # Empty value falls back to an in-memory SQLite database
    DATABASE_URL: str = ""

    # Cloudinary Configuration
    CLOUDINARY_CLOUD_NAME: str = ""
    CLOUDINARY_API_KEY: str = ""
    CLOUDINARY_API_SECRET: str = ""
    CLOUDINARY_UPLOAD_FOLDER: str = "artworks/private"

    # Watermark overlay applied to delivered artwork images
    WATERMARK_LOGO_PUBLIC_ID: str = "watermarks:friendship-gallery-logo"
    WATERMARK_TEXT: str = "Friendship Center Gallery"

    # JWT Configuration
    # Tokens are issued by the identity provider; this service only verifies them.
    # JWT_SECRET_KEY must match the provider's signing secret.
    JWT_SECRET_KEY: str = "your-secret-key-change-this-in-production-use-openssl-rand-hex-32"
    JWT_ALGORITHM: str = "HS256"
    ADMIN_ROLES: List[str] = ["admin", "super_admin"]

    # Main site cache revalidation
    MAIN_SITE_URL: str = "https://friendshipcentergallery.org"
    REVALIDATE_SECRET: str = ""
    REVALIDATE_TIMEOUT_SECONDS: float = 10.0

    # Rate limiting (slowapi)
    RATE_LIMIT_ENABLED: bool = True

    # Artist onboarding
    INVITATION_TTL_DAYS: int = 7
    PUBLIC_BASE_URL: str = "http://localhost:3002"

    # Outgoing email (Resend). Empty API key disables sending
    RESEND_API_KEY: str = ""
    EMAIL_FROM_ARTISTS: str = "Friendship Center Gallery <artists@friendshipcentergallery.org>"
    EMAIL_BCC: List[str] = []

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields in .env that aren't defined in Settings


# Global settings instance
settings = Settings()
