from typing import List, Optional

from pydantic_settings import BaseSettings
from pydantic import Field


class StorefrontSettings(BaseSettings):
    """
    Order numbering and customer defaults.
    """

    order_number_prefix: str = Field(default="TC", alias="ORDER_NUMBER_PREFIX")
    order_number_max_attempts: int = Field(default=5, alias="ORDER_NUMBER_MAX_ATTEMPTS")
    default_country_code: str = Field(default="IN", alias="DEFAULT_COUNTRY_CODE")
    cors_origins: List[str] = Field(default=["*"], alias="CORS_ORIGINS")

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


class BrandingSettings(BaseSettings):
    """
    Seller identity printed on invoices.
    Loaded from .env with prefix BRAND_*
    """

    business_name: str = "Luxe Threads"
    address_lines: List[str] = ["Bengaluru, Karnataka", "India"]
    gstin: Optional[str] = None
    email: Optional[str] = "support@luxethreads.in"
    phone: Optional[str] = None
    website: Optional[str] = None
    logo_path: Optional[str] = None
    currency_symbol: str = "Rs."
    footer_note: str = "This is a computer generated invoice and does not require a signature."

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "env_prefix": "BRAND_",
        "extra": "ignore",
    }
