"""
Pytest configuration and fixtures.
"""

import pytest
from pathlib import Path
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from fastapi.testclient import TestClient

from mai_gateway.config import get_settings


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Start every test from default settings, ignoring the developer's env."""
    for name in (
        "MAX_BODY_BYTES",
        "PLANS_API_URL",
        "PLANS_API_KEY",
        "FIREWORKS_API_KEY",
        "API_BASE",
    ):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def configure(monkeypatch):
    """Set environment-backed settings for a single test."""
    def _configure(**values):
        for name, value in values.items():
            monkeypatch.setenv(name.upper(), str(value))
        get_settings.cache_clear()
        return get_settings()
    return _configure


@pytest.fixture
def client():
    """Create test client."""
    from mai_gateway.main import app
    return TestClient(app)


@pytest.fixture
def sample_plan_lookup():
    """Plan lookup payload as sent by the extension."""
    return {
        "zip": "33101",
        "county": "Miami-Dade",
        "drugs": ["atorvastatin 20mg", "metformin 500mg"],
        "providers": ["Dr. Ana Lopez"],
    }


@pytest.fixture
def sample_plans():
    """Upstream plans API response."""
    return {
        "plans": [
            {"id": "H1234-001", "name": "Sunshine Advantage HMO", "premium": 0},
            {"id": "H5678-002", "name": "Coastal Choice PPO", "premium": 29.5},
        ]
    }


@pytest.fixture
def mock_fetch_plans(mocker, sample_plans):
    """Replace the plan-fetch collaborator used by the routes."""
    return mocker.patch(
        "mai_gateway.api.routes.fetch_plans",
        new=mocker.AsyncMock(return_value=sample_plans),
    )


@pytest.fixture
def mock_generate_script(mocker):
    """Replace the script-generation collaborator used by the routes."""
    return mocker.patch(
        "mai_gateway.api.routes.generate_closing_script",
        new=mocker.AsyncMock(return_value={
            "script": "Based on everything we've covered today...",
            "talking_points": ["$0 premium", "Your doctor is in network"],
        }),
    )


@pytest.fixture
def mock_fireworks(mocker):
    """Mock Fireworks client for unit tests."""
    mock_client = mocker.MagicMock()
    mock_client.generate_json.return_value = {
        "script": "  Mrs. Smith, Sunshine Advantage keeps Dr. Lopez in network.  ",
        "talking_points": ["$0 premium", " ", "Dr. Lopez is in network"],
    }

    mocker.patch(
        "mai_gateway.services.ai_assistant.get_fireworks_client",
        return_value=mock_client,
    )

    return mock_client
