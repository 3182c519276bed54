"""Tests for retry and upload event models."""

import pytest
from pydantic import ValidationError

from ferry.events import (
    ErrorInfo,
    RetryExhaustedEvent,
    RetryingEvent,
    UploadCompletedEvent,
    UploadFailedEvent,
    UploadPausedEvent,
    UploadProgressEvent,
    UploadResumedEvent,
    UploadStartedEvent,
)


@pytest.fixture
def error_info() -> ErrorInfo:
    return ErrorInfo(exc_type="builtins.ConnectionError", message="reset")


class TestEventTypes:
    """Each event carries its dotted event type by default."""

    def test_retry_event_types(self, error_info):
        retrying = RetryingEvent(
            operation="chunk-upload",
            attempt=1,
            max_retries=3,
            delay_seconds=1.0,
            error=error_info,
        )
        exhausted = RetryExhaustedEvent(operation="chunk-upload", attempts=4)

        assert retrying.event_type == "retry.retrying"
        assert exhausted.event_type == "retry.exhausted"
        assert exhausted.file_id is None
        assert exhausted.error is None

    def test_upload_event_types(self, error_info):
        common = {"file_id": "a.bin-1", "file_name": "a.bin"}

        events = [
            UploadStartedEvent(**common, total_chunks=3, total_bytes=25),
            UploadProgressEvent(
                **common, chunk_index=0, uploaded_chunks=1, total_chunks=3, progress=33
            ),
            UploadPausedEvent(**common, uploaded_chunks=1),
            UploadResumedEvent(**common, uploaded_chunks=1),
            UploadCompletedEvent(**common, total_chunks=3),
            UploadFailedEvent(**common, chunk_index=1, error=error_info),
        ]

        assert [e.event_type for e in events] == [
            "upload.started",
            "upload.progress",
            "upload.paused",
            "upload.resumed",
            "upload.completed",
            "upload.failed",
        ]


class TestEventValidation:
    def test_progress_bounded_to_percent(self):
        with pytest.raises(ValidationError):
            UploadProgressEvent(
                file_id="a.bin-1",
                file_name="a.bin",
                chunk_index=0,
                uploaded_chunks=1,
                total_chunks=1,
                progress=101,
            )

    def test_retrying_attempt_is_one_indexed(self, error_info):
        with pytest.raises(ValidationError):
            RetryingEvent(
                operation="chunk-upload",
                attempt=0,
                max_retries=3,
                delay_seconds=1.0,
                error=error_info,
            )

    def test_delay_cannot_be_negative(self, error_info):
        with pytest.raises(ValidationError):
            RetryingEvent(
                operation="chunk-upload",
                attempt=1,
                max_retries=3,
                delay_seconds=-1,
                error=error_info,
            )
