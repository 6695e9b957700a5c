"""
Table definitions.

Tables:
- users: applicants and admins
- jobs: postings created by admins
- applications: one row per (applicant, job)
- profiles: resume-derived fields, at most one per user

Routes and services query these with raw SQL via get_db_session();
the Table objects only exist so init_db() can create the schema.
"""

from sqlalchemy import (
    MetaData, Table, Column, Integer, String, Text, Boolean, DateTime,
    ForeignKey, UniqueConstraint, func, true
)

from jobboard.db.postgres import engine
from jobboard.utils.logger import get_logger

logger = get_logger(__name__)

metadata = MetaData()

users = Table(
    "users", metadata,
    Column("user_id", Integer, primary_key=True, autoincrement=True),
    Column("name", String(100), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("address", String(255)),
    Column("user_type", String(10), nullable=False),
    Column("password_hash", String(255), nullable=False),
    Column("profile_headline", String(255)),
    Column("is_active", Boolean, nullable=False, server_default=true()),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

jobs = Table(
    "jobs", metadata,
    Column("job_id", Integer, primary_key=True, autoincrement=True),
    Column("title", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("company_name", String(200), nullable=False),
    Column("posted_by_id", Integer, ForeignKey("users.user_id"), nullable=False),
    Column("total_applications", Integer, nullable=False, server_default="0"),
    Column("posted_on", DateTime, nullable=False, server_default=func.current_timestamp()),
)

applications = Table(
    "applications", metadata,
    Column("application_id", Integer, primary_key=True, autoincrement=True),
    Column("applicant_id", Integer, ForeignKey("users.user_id"), nullable=False),
    Column("job_id", Integer, ForeignKey("jobs.job_id", ondelete="CASCADE"), nullable=False),
    Column("applied_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    UniqueConstraint("applicant_id", "job_id", name="uq_applications_applicant_job"),
)

profiles = Table(
    "profiles", metadata,
    Column("profile_id", Integer, primary_key=True, autoincrement=True),
    Column("user_id", Integer, ForeignKey("users.user_id"), nullable=False, unique=True),
    Column("resume_file_path", String(500)),
    Column("name", Text),
    Column("email", Text),
    Column("phone", Text),
    Column("education", Text),
    Column("experience", Text),
    Column("skills", Text),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("updated_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)


def init_db():
    """
    Create all tables that don't exist yet.
    Call this once during app startup.
    """
    metadata.create_all(engine)
    logger.info("Database tables ready")
