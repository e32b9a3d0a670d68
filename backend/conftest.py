"""
Root conftest.py for all backend tests.

This file makes fixtures available to all test files across all apps.
"""
import pytest


# ============================================================================
# AUTO-USE FIXTURES (Run automatically for every test)
# ============================================================================

@pytest.fixture(autouse=True)
def reset_app_settings():
    """
    Re-read stand tunables after each test.

    CRITICAL: Tests that change KITCHEN_PARALLELISM or the order code settings
    through the `settings` fixture call app_settings.reload(). pytest-django
    restores django.conf.settings afterwards, but the cached values would
    otherwise leak into the next test.
    """
    from core_backend.config import app_settings

    yield  # Run the test

    app_settings.reload()


# ============================================================================
# API CLIENT FIXTURES
# ============================================================================

@pytest.fixture
def api_client():
    """
    Provide DRF API client for API tests.

    Usage:
        def test_my_api(api_client):
            response = api_client.get('/api/items/')
            assert response.status_code == 200
    """
    from rest_framework.test import APIClient
    return APIClient()


# ============================================================================
# IMPORT ALL FIXTURES FROM core_backend/tests/fixtures.py
# ============================================================================

from core_backend.tests.fixtures import *  # noqa: E402,F401,F403
