"""
Test settings loading.

Every key documented in .env.example must map onto a settings field,
either through an explicit alias or through a section's env prefix.
"""
from __future__ import annotations

from pathlib import Path
import re

import pytest

# Import api.dependencies so dotenv loads exactly once (canonical location).
import api.dependencies  # noqa: F401

from core.settings import AppSettings
from core.settings.sections import (
    AuthSettings,
    BrandingSettings,
    CacheSettings,
    DatabaseSettings,
    StorefrontSettings,
)

SECTIONS = [DatabaseSettings, CacheSettings, AuthSettings, StorefrontSettings, BrandingSettings]


def _parse_env_keys(env_path: Path) -> list[str]:
    keys: list[str] = []
    for line in env_path.read_text(encoding="utf-8").splitlines():
        s = line.strip()
        if not s or s.startswith("#") or "=" not in s:
            continue
        k = s.split("=", 1)[0].strip()
        if re.fullmatch(r"[A-Za-z_][A-Za-z0-9_]*", k) and k not in keys:
            keys.append(k)
    return keys


def _env_names(section) -> set[str]:
    prefix = section.model_config.get("env_prefix", "")
    names = set()
    for field_name, field in section.model_fields.items():
        names.add(field.alias if field.alias else f"{prefix}{field_name}".upper())
    return names


def test_every_documented_env_key_is_mapped():
    repo_root = Path(__file__).resolve().parents[1]
    keys = _parse_env_keys(repo_root / ".env.example")

    known: set[str] = set()
    for section in SECTIONS:
        duplicates = known & _env_names(section)
        assert not duplicates, f"Env names mapped twice: {duplicates}"
        known |= _env_names(section)

    missing = [k for k in keys if k not in known]
    assert not missing, f"Unmapped env keys: {missing}"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ORDER_NUMBER_PREFIX", "LT")
    monkeypatch.setenv("CACHE_ENABLED", "false")
    monkeypatch.setenv("BRAND_BUSINESS_NAME", "Test Threads")
    monkeypatch.setenv("BRAND_ADDRESS_LINES", '["Line 1", "Line 2"]')
    monkeypatch.setenv("DB_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

    settings = AppSettings()

    assert settings.storefront.order_number_prefix == "LT"
    assert settings.cache.enabled is False
    assert settings.branding.business_name == "Test Threads"
    assert settings.branding.address_lines == ["Line 1", "Line 2"]
    assert settings.database.database_url == "sqlite+aiosqlite:///:memory:"


@pytest.mark.parametrize("section", SECTIONS)
def test_sections_load_without_env(section):
    assert section() is not None
