"""Shared pytest fixtures"""

import pytest

from core.providers.mock import MockFreepikClient
from core.session import StudioSession
from tests.mocks.fixtures import make_config, make_reference_image
from tests.mocks.sinks import RecordingSink


# ============================================================
# Clients and Sessions
# ============================================================

@pytest.fixture
def mock_client():
    """Fresh offline client for each test"""
    client = MockFreepikClient()
    yield client
    client.reset()


@pytest.fixture
def studio_config():
    """Config with zero delays"""
    return make_config()


@pytest.fixture
def recording_sink():
    return RecordingSink()


@pytest.fixture
def session(mock_client, studio_config, recording_sink):
    """Initialized session over the mock client"""
    return StudioSession(mock_client, config=studio_config, sink=recording_sink, user_name="Tester").init()


@pytest.fixture
def studio(session):
    from workflows.orchestrator import StudioOrchestrator
    return StudioOrchestrator(session)


# ============================================================
# Test Data Fixtures
# ============================================================

@pytest.fixture
def reference_image():
    """Small inline JPEG used as character/product reference"""
    return make_reference_image()


# ============================================================
# Markers Configuration
# ============================================================

def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks integration tests"
    )
    config.addinivalue_line(
        "markers", "live_api: marks tests that hit real APIs (requires keys)"
    )
