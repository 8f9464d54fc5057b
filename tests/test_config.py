"""
Tests for `pos_api/core/config.py` and the limiter built from it.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from pos_api.core.config import Settings, settings
from pos_api.core.rate_limiter import limiter


def test_defaults(monkeypatch) -> None:
    for name in ("ENV", "DATABASE_URL", "SALES_RATE_LIMIT", "RATE_LIMIT_ENABLED"):
        monkeypatch.delenv(name, raising=False)

    defaults = Settings(_env_file=None)

    assert defaults.ENV == "development"
    assert defaults.RATE_LIMIT_ENABLED is True
    assert defaults.SALES_RATE_LIMIT == "30/minute"
    assert defaults.LOW_STOCK_THRESHOLD == 10


def test_unknown_settings_are_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(_env_file=None, DEBUG=True)


def test_test_run_keeps_limiter_enabled_with_a_high_limit() -> None:
    assert settings.ENV == "test"
    assert settings.SALES_RATE_LIMIT == "10000/minute"
    assert limiter.enabled is True
