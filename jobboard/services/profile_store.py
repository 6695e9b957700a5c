"""
Profile Store - persistence for resume-derived applicant profiles.

One row per user (unique on user_id). Uploading a new resume replaces the
previous row's fields; concurrent writers for the same user resolve as
last-writer-wins through the database's upsert.
"""

from typing import Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from jobboard.core.errors import PersistenceError
from jobboard.db.postgres import get_db_session
from jobboard.schemas.schemas import ParsedFields
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

PROFILE_COLUMNS = (
    "profile_id, user_id, resume_file_path, name, email, phone, "
    "education, experience, skills, created_at, updated_at"
)


class ProfileStore:
    """Upsert and read profiles keyed by user id."""

    def upsert(self, user_id: int, file_path: str, fields: ParsedFields) -> None:
        """Insert the profile, or replace every field if one exists."""
        params = {"user_id": user_id, "resume_file_path": file_path, **fields.model_dump()}
        try:
            with get_db_session() as db:
                db.execute(
                    text("""
                        INSERT INTO profiles (user_id, resume_file_path, name, email, phone,
                            education, experience, skills)
                        VALUES (:user_id, :resume_file_path, :name, :email, :phone,
                            :education, :experience, :skills)
                        ON CONFLICT (user_id) DO UPDATE SET
                            resume_file_path = EXCLUDED.resume_file_path,
                            name = EXCLUDED.name,
                            email = EXCLUDED.email,
                            phone = EXCLUDED.phone,
                            education = EXCLUDED.education,
                            experience = EXCLUDED.experience,
                            skills = EXCLUDED.skills,
                            updated_at = CURRENT_TIMESTAMP
                    """),
                    params
                )
        except SQLAlchemyError as e:
            logger.error("Error saving profile for user %s: %s", user_id, e)
            raise PersistenceError("Failed to save profile") from e

    def get(self, user_id: int) -> Optional[dict]:
        with get_db_session() as db:
            result = db.execute(
                text(f"SELECT {PROFILE_COLUMNS} FROM profiles WHERE user_id = :id"),
                {"id": user_id}
            )
            row = result.mappings().fetchone()
        return dict(row) if row else None


_profile_store: ProfileStore = None


def get_profile_store() -> ProfileStore:
    """Get or create the profile store (singleton pattern)"""
    global _profile_store
    if _profile_store is None:
        _profile_store = ProfileStore()
    return _profile_store
