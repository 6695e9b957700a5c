"""
Resume ingestion errors.

Every failure of the upload -> extract -> parse -> persist pipeline is one of
these. Each carries the pipeline stage it happened in and the HTTP status the
upload route answers with. None of them is retried by the pipeline.
"""

from typing import Optional


class ResumeIngestionError(Exception):
    """Base class for all resume pipeline failures."""

    status_code: int = 500
    default_stage: str = "failed"

    def __init__(self, message: str, stage: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.stage = stage or self.default_stage

    def __str__(self) -> str:
        return self.message


# Validation (client errors)

class UnsupportedFormat(ResumeIngestionError):
    status_code = 400
    default_stage = "validated"


class FileTooLarge(ResumeIngestionError):
    status_code = 413
    default_stage = "validated"


# Storage / extraction

class StorageError(ResumeIngestionError):
    default_stage = "stored"


class FileOpenError(ResumeIngestionError):
    default_stage = "extracted"


class MalformedDocumentError(ResumeIngestionError):
    default_stage = "extracted"


class NoTextExtracted(ResumeIngestionError):
    default_stage = "extracted"


# Remote parsing

class TransportError(ResumeIngestionError):
    status_code = 502
    default_stage = "parsed"


class NonSuccessStatus(ResumeIngestionError):
    status_code = 502
    default_stage = "parsed"

    def __init__(self, message: str, remote_status: int, body: str = ""):
        super().__init__(message)
        self.remote_status = remote_status
        self.body = body


class MalformedEnvelope(ResumeIngestionError):
    default_stage = "parsed"


class MalformedPayload(ResumeIngestionError):
    default_stage = "parsed"


# Persistence

class PersistenceError(ResumeIngestionError):
    default_stage = "persisted"
