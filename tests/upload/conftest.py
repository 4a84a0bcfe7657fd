"""
Upload Test Configuration and Fixtures

This file contains pytest fixtures shared across upload tests.
Mirrors the pattern from catalog/conftest.py.

To use pytest:
    pip install -e ".[test]"
    pytest tests/upload/
"""

import pytest

from catalog.implementations.mock_catalog import MockCatalog
from upload.auth.credentials import StaticTokenProvider
from upload.controllers.upload_coordinator import UploadCoordinator
from upload.implementations.mock_transport import MockTransport
from upload.models.media_asset import MediaAsset

FIXED_TIMESTAMP_MS = 1_700_000_000_000


# =============================================================================
# ASSET FIXTURES
# =============================================================================


@pytest.fixture
def video_file(tmp_path):
    """
    Provide a small real file with a video extension.

    Usage:
        def test_upload(video_file):
            asset = MediaAsset.from_path(str(video_file))
    """
    path = tmp_path / "clip.mp4"
    path.write_bytes(b"\x00" * 2048)
    return path


@pytest.fixture
def video_asset(video_file):
    """MediaAsset for video_file"""
    return MediaAsset.from_path(str(video_file))


# =============================================================================
# COLLABORATOR FIXTURES
# =============================================================================


@pytest.fixture
def mock_catalog():
    """Fresh in-memory catalog for each test"""
    catalog = MockCatalog()
    yield catalog
    catalog.cleanup()


@pytest.fixture
def credentials():
    return StaticTokenProvider("test-token")


@pytest.fixture
def manual_transport():
    """
    Transport whose events are driven by the test.

    Usage:
        def test_progress(coordinator_factory, manual_transport):
            coordinator = coordinator_factory(manual_transport)
            coordinator.begin_upload(asset)
            manual_transport.emit_progress(40)
    """
    return MockTransport(manual=True)


@pytest.fixture
def coordinator_factory(mock_catalog, credentials):
    """
    Build an UploadCoordinator around a given transport.

    The clock is fixed so derived identifiers are predictable.
    """

    def _factory(transport, catalog=None, creds=None, owner_id="user-1"):
        return UploadCoordinator(
            transport=transport,
            catalog=catalog or mock_catalog,
            credentials=creds or credentials,
            owner_id=owner_id,
            clock=lambda: FIXED_TIMESTAMP_MS,
        )

    return _factory


@pytest.fixture
def manual_coordinator(coordinator_factory, manual_transport):
    """Coordinator wired to manual_transport"""
    return coordinator_factory(manual_transport)


@pytest.fixture
def fixed_timestamp_ms():
    """Clock value used by coordinator_factory"""
    return FIXED_TIMESTAMP_MS
