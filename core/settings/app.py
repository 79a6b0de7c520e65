# core/settings/app.py
from functools import lru_cache

# Sections
from core.settings.sections import (
    AuthSettings,
    BrandingSettings,
    CacheSettings,
    DatabaseSettings,
    StorefrontSettings,
)


class AppSettings:
    """
    Central application settings aggregator.
    Settings are loaded lazily inside __init__
    to prevent eager evaluation at import time.
    """

    def __init__(self):
        self.database = DatabaseSettings()
        self.cache = CacheSettings()
        self.auth = AuthSettings()
        self.storefront = StorefrontSettings()
        self.branding = BrandingSettings()


@lru_cache()
def get_app_settings() -> AppSettings:
    """Return cached global settings for the entire app."""
    return AppSettings()
