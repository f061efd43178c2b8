"""
Pytest configuration for the kundali_calc suite.

- Registers Hypothesis profiles for local dev and CI.
- Freezes the process TZ to UTC and clears KUNDALI_* overrides, so the
  engine settings come from defaults unless a test sets them.
"""

import os

import pytest
from hypothesis import HealthCheck, settings

from kundali_calc.config import Settings, get_settings


# ── Hypothesis profiles ─────────────────────────────────────────
settings.register_profile(
    "dev",
    settings(
        deadline=None,
        max_examples=60,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)
settings.register_profile(
    "ci",
    settings(
        deadline=None,
        max_examples=200,
        suppress_health_check=[HealthCheck.too_slow],
    ),
)

_profile = (
    "ci"
    if (os.getenv("CI") or os.getenv("GITHUB_ACTIONS"))
    else os.getenv("HYPOTHESIS_PROFILE", "dev")
)
settings.load_profile(_profile)


def pytest_report_header(config):
    return f"Hypothesis profile: '{_profile}'"


# ── Fixtures ────────────────────────────────────────────────────

@pytest.fixture(scope="session", autouse=True)
def freeze_tz_env():
    prev = os.environ.get("TZ")
    os.environ["TZ"] = "UTC"
    try:
        yield
    finally:
        if prev is None:
            os.environ.pop("TZ", None)
        else:
            os.environ["TZ"] = prev


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for var in ("KUNDALI_CONFIG", "KUNDALI_ENV", "KUNDALI_DEFAULT_TZ_OFFSET", "LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def production():
    return Settings(environment="production")


@pytest.fixture
def development():
    return Settings(environment="development")


@pytest.fixture
def delhi_birth():
    return {
        "dateOfBirth": "1990-06-15",
        "timeOfBirth": "10:30",
        "latitude": 28.6139,
        "longitude": 77.2090,
        "timezone": "Asia/Kolkata",
    }
