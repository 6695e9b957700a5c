"""
Resume Ingestion Service - upload -> extract -> parse -> persist.

Stages (linear, no back-edges):
    received -> validated -> stored -> extracted -> parsed -> persisted

A failure at any stage raises a ResumeIngestionError tagged with that stage
and nothing after it runs. Earlier side effects are kept: a stored file stays
on disk if parsing fails. Its path is deterministic, so the next upload from
the same user overwrites it.
"""

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from jobboard.core.config import Settings, get_settings
from jobboard.core.errors import ResumeIngestionError, FileTooLarge, StorageError
from jobboard.schemas.schemas import ParsedFields
from jobboard.services.gemini_client import GeminiClient, get_gemini_client
from jobboard.services.profile_store import ProfileStore, get_profile_store
from jobboard.utils.file_upload import format_from_filename, extract_text
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)


class IngestionStage(str, Enum):
    received = "received"
    validated = "validated"
    stored = "stored"
    extracted = "extracted"
    parsed = "parsed"
    persisted = "persisted"


@dataclass
class IngestionResult:
    user_id: int
    file_path: str
    parsed_data: ParsedFields
    stage: IngestionStage = IngestionStage.persisted


def resume_storage_path(uploads_dir: str, user_id: int, filename: str) -> str:
    """uploads_dir/<user_id>_<filename>, with any directory part of filename dropped."""
    return os.path.join(uploads_dir, f"{user_id}_{os.path.basename(filename)}")


class ResumeIngestionService:
    """
    Drives one resume upload through the pipeline.

    Collaborators are injected so the route (and tests) decide which parser
    client and profile store are used.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        parser: Optional[GeminiClient] = None,
        profile_store: Optional[ProfileStore] = None
    ):
        self.settings = settings or get_settings()
        self.parser = parser or get_gemini_client()
        self.profile_store = profile_store or get_profile_store()

    def ingest(self, user_id: int, filename: str, content: bytes) -> IngestionResult:
        """
        Run the full pipeline for one upload.

        Args:
            user_id: Owner of the resume
            filename: Filename as declared by the client
            content: Raw uploaded bytes

        Returns:
            IngestionResult with the stored path and parsed fields

        Raises:
            ResumeIngestionError subclass naming the failed stage
        """
        stage = IngestionStage.received
        logger.info("Resume received for user %s: %s (%d bytes)", user_id, filename, len(content))

        try:
            # received -> validated
            doc_format = format_from_filename(filename)
            if len(content) > self.settings.max_resume_size_bytes:
                raise FileTooLarge(
                    f"File too large. Maximum size: {self.settings.max_resume_size_mb}MB"
                )
            stage = IngestionStage.validated

            # validated -> stored
            file_path = self._store(user_id, filename, content)
            stage = IngestionStage.stored
            logger.info("Resume stored for user %s: %s", user_id, file_path)

            # stored -> extracted
            resume_text = extract_text(file_path, doc_format)
            stage = IngestionStage.extracted
            logger.info("Extracted %d characters from %s", len(resume_text), file_path)

            # extracted -> parsed
            parsed = self.parser.parse_resume(resume_text)
            stage = IngestionStage.parsed

            # parsed -> persisted
            self.profile_store.upsert(user_id, file_path, parsed)
            stage = IngestionStage.persisted
            logger.info("Profile updated for user %s", user_id)

        except ResumeIngestionError as e:
            logger.warning(
                "Resume ingestion failed for user %s after stage '%s' (%s): %s",
                user_id, stage.value, e.stage, e
            )
            raise

        return IngestionResult(user_id=user_id, file_path=file_path, parsed_data=parsed, stage=stage)

    def _store(self, user_id: int, filename: str, content: bytes) -> str:
        file_path = resume_storage_path(self.settings.uploads_dir, user_id, filename)
        try:
            os.makedirs(self.settings.uploads_dir, exist_ok=True)
            with open(file_path, 'wb') as f:
                f.write(content)
        except OSError as e:
            logger.error("Error saving file for user %s: %s", user_id, e)
            raise StorageError("Failed to save resume") from e
        return file_path


def get_resume_service() -> ResumeIngestionService:
    """FastAPI dependency - resume ingestion service with default collaborators."""
    return ResumeIngestionService()
