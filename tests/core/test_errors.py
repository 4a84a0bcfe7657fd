"""
Error Taxonomy Tests

To run these tests:
    pytest tests/core/test_errors.py -v
"""

import logging

import pytest

from core.errors import (
    AssetNotFound,
    AssetValidationError,
    AuthError,
    FailureReason,
    InvalidAssetType,
    TransferError,
    VideoAppError,
)
from core.logging_setup import setup_logging


@pytest.mark.unit
def test_reason_is_carried_by_class():
    assert InvalidAssetType("text/plain").reason == FailureReason.INVALID_ASSET_TYPE
    assert AssetNotFound("gone").reason == FailureReason.ASSET_NOT_FOUND
    assert AuthError("expired").reason == FailureReason.AUTH_ERROR


@pytest.mark.unit
def test_reason_can_be_overridden():
    error = VideoAppError("boom", reason=FailureReason.CANCELLED)

    assert error.reason == FailureReason.CANCELLED
    assert str(error) == "boom"


@pytest.mark.unit
def test_validation_errors_share_a_base():
    assert issubclass(InvalidAssetType, AssetValidationError)
    assert issubclass(AssetNotFound, AssetValidationError)


@pytest.mark.unit
def test_transfer_error_keeps_response():
    error = TransferError("HTTP 503", status_code=503, body="try later")

    assert error.status_code == 503
    assert error.body == "try later"
    assert error.reason == FailureReason.TRANSFER_ERROR


@pytest.mark.unit
def test_setup_logging_writes_to_file(tmp_path):
    root = logging.getLogger()
    saved = list(root.handlers)
    log_file = tmp_path / "app.log"

    try:
        setup_logging(level=logging.DEBUG, log_file=str(log_file))
        logging.getLogger("tests.core").info("hello log")
        for handler in root.handlers:
            handler.flush()

        assert "hello log" in log_file.read_text()
    finally:
        for handler in root.handlers[:]:
            if handler not in saved:
                root.removeHandler(handler)
                handler.close()
