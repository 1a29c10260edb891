"""Pytest configuration and fixtures.

Provides environment isolation and shared fixtures. Fixtures marked autouse
apply to every test unless opted out.
"""

from __future__ import annotations

import logging
import os

import pytest

from tests.helpers import RecordingNotifier, ServiceConfig, ServiceSection

# =============================================================================
# Shared Fixtures
# =============================================================================


@pytest.fixture
def notifier() -> RecordingNotifier:
    """Return a fresh notifier that records override notifications."""
    return RecordingNotifier()


@pytest.fixture
def service_config() -> ServiceConfig:
    """Return ``{Service: {Port: 8080, Host: "x"}}`` with other defaults."""
    return ServiceConfig(Service=ServiceSection(Host="x", Port=8080))


# =============================================================================
# Environment Isolation (Autouse)
# =============================================================================

_LEGACY_KEYS = ("edgex_registry", "edgex_profile", "startup_duration", "startup_interval")


@pytest.fixture(autouse=True)
def isolate_bootstrap_env(request, monkeypatch):
    """Clear EDGEX_* and legacy bootstrap variables for each test.

    Opt-out: @pytest.mark.allow_env_pollution
    """
    if request.node.get_closest_marker("allow_env_pollution"):
        return
    for key in list(os.environ.keys()):
        if key.startswith("EDGEX_") or key in _LEGACY_KEYS:
            monkeypatch.delenv(key, raising=False)


# =============================================================================
# Logging
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def quiet_noisy_libraries():
    """Suppress noisy third-party loggers."""
    logging.getLogger("dotenv").setLevel(logging.WARNING)
