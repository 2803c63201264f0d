"""
Configuration settings for paygate
Reads gateway credentials from environment variables or a .env file
"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    """Gateway settings"""

    PAYGATE_DEFAULT_GATEWAY: str = "tripay"

    # Tripay
    TRIPAY_MERCHANT_CODE: Optional[str] = None
    TRIPAY_APIKEY: Optional[str] = None
    TRIPAY_PRIVATE_KEY: Optional[str] = None
    TRIPAY_BASE_URL: Optional[str] = None
    TRIPAY_PRODUCTION: bool = False
    TRIPAY_FEE_ITEM_SKU: Optional[str] = None

    @field_validator("PAYGATE_DEFAULT_GATEWAY")
    @classmethod
    def normalize_gateway(cls, v):
        return v.strip().lower()

    @field_validator("TRIPAY_BASE_URL", "TRIPAY_FEE_ITEM_SKU")
    @classmethod
    def blank_to_none(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignore extra fields from .env file


# Create settings instance
settings = Settings()
