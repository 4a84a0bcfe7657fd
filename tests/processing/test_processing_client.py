"""
Processing Client Tests

Tests for fire-and-forget processing requests showing:
- JSON payload shape (prompt omitted when empty)
- Accept / reject mapping
- Auth failures raised, network failures reported

To run these tests:
    pytest tests/processing/test_processing_client.py -v
"""

import pytest
import requests

from core.errors import AuthError
from processing.constants import ProcessingStatus
from processing.factory import ProcessingClientFactory
from processing.implementations.http_processing_client import HttpProcessingClient
from processing.implementations.mock_processing_client import MockProcessingClient
from processing.models.processing_request import ProcessingRequest
from upload.auth.credentials import StaticTokenProvider

ENDPOINT = "https://jobs.test/process"

# =============================================================================
# PAYLOAD TESTS
# =============================================================================


@pytest.mark.unit
def test_payload_with_prompt(processing_request):
    assert processing_request.to_payload() == {
        "videoUrl": "https://storage.test/videos/v1?alt=media",
        "videoId": "v1",
        "userId": "user-1",
        "prompt": "make it vertical",
    }


@pytest.mark.unit
@pytest.mark.parametrize("prompt", ["", "   "])
def test_payload_omits_empty_prompt(prompt):
    request = ProcessingRequest(video_url="u", video_id="v", user_id="o", prompt=prompt)

    assert "prompt" not in request.to_payload()


# =============================================================================
# HTTP CLIENT TESTS
# =============================================================================


@pytest.mark.unit
def test_accepted(http_session, response_factory, processing_request):
    http_session.post.return_value = response_factory(202)
    client = HttpProcessingClient(
        ENDPOINT,
        credentials=StaticTokenProvider("tok"),
        session=http_session,
    )

    result = client.request_processing(processing_request)

    assert result.accepted
    assert result.status == ProcessingStatus.ACCEPTED
    assert result.status_code == 202

    _, kwargs = http_session.post.call_args
    assert http_session.post.call_args.args[0] == ENDPOINT
    assert kwargs["json"] == processing_request.to_payload()
    assert kwargs["headers"]["Authorization"] == "Bearer tok"


@pytest.mark.unit
def test_rejected(http_session, response_factory, processing_request):
    http_session.post.return_value = response_factory(500, "queue full")
    client = HttpProcessingClient(ENDPOINT, session=http_session)

    result = client.request_processing(processing_request)

    assert not result.accepted
    assert result.status == ProcessingStatus.REJECTED
    assert result.status_code == 500
    assert result.error_message == "queue full"


@pytest.mark.unit
@pytest.mark.parametrize("status_code", [401, 403])
def test_auth_rejection_raises(
    http_session,
    response_factory,
    processing_request,
    status_code,
):
    http_session.post.return_value = response_factory(status_code, "denied")
    client = HttpProcessingClient(ENDPOINT, session=http_session)

    with pytest.raises(AuthError):
        client.request_processing(processing_request)


@pytest.mark.unit
def test_missing_token_raises(http_session, processing_request):
    client = HttpProcessingClient(
        ENDPOINT,
        credentials=StaticTokenProvider(""),
        session=http_session,
    )

    with pytest.raises(AuthError):
        client.request_processing(processing_request)
    http_session.post.assert_not_called()


@pytest.mark.unit
def test_network_error_is_rejected_result(http_session, processing_request):
    http_session.post.side_effect = requests.Timeout("timed out")
    client = HttpProcessingClient(ENDPOINT, session=http_session)

    result = client.request_processing(processing_request)

    assert not result.accepted
    assert result.status == ProcessingStatus.NETWORK_ERROR
    assert result.status_code is None


@pytest.mark.unit
def test_endpoint_required():
    with pytest.raises(ValueError):
        HttpProcessingClient("")


# =============================================================================
# FACTORY TESTS
# =============================================================================


@pytest.mark.unit
def test_factory_auto_without_endpoint_is_mock(monkeypatch):
    monkeypatch.setattr("processing.factory.PROCESSING_ENDPOINT_URL", "")

    client = ProcessingClientFactory.create_client(mode="auto")

    assert isinstance(client, MockProcessingClient)


@pytest.mark.unit
def test_factory_http_with_endpoint():
    client = ProcessingClientFactory.create_client(mode="http", endpoint_url=ENDPOINT)

    assert isinstance(client, HttpProcessingClient)
    assert client.is_available()


@pytest.mark.unit
def test_factory_http_without_endpoint_raises(monkeypatch):
    monkeypatch.setattr("processing.factory.PROCESSING_ENDPOINT_URL", "")

    with pytest.raises(RuntimeError):
        ProcessingClientFactory.create_client(mode="http")


@pytest.mark.unit
def test_mock_client_history(processing_request):
    client = MockProcessingClient()

    client.request_processing(processing_request)

    assert client.get_request_count() == 1
    assert client.last_request is processing_request
