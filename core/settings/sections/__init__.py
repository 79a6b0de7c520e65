"""Settings sections."""
from .auth import AuthSettings
from .cache import CacheSettings
from .database import DatabaseSettings
from .storefront import BrandingSettings, StorefrontSettings

__all__ = [
    "AuthSettings",
    "BrandingSettings",
    "CacheSettings",
    "DatabaseSettings",
    "StorefrontSettings",
]
