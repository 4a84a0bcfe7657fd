"""
Processing Test Configuration and Fixtures

To use pytest:
    pip install -e ".[test]"
    pytest tests/processing/
"""

from unittest.mock import MagicMock

import pytest

from processing.models.processing_request import ProcessingRequest


@pytest.fixture
def processing_request():
    return ProcessingRequest(
        video_url="https://storage.test/videos/v1?alt=media",
        video_id="v1",
        user_id="user-1",
        prompt="make it vertical",
    )


@pytest.fixture
def http_session():
    """
    requests.Session stand-in.

    Usage:
        def test_post(http_session):
            http_session.post.return_value = response
    """
    return MagicMock()


def make_response(status_code, text=""):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    return response


@pytest.fixture
def response_factory():
    return make_response
