"""
Admin Routes

POST /admin/job - Create job posting
GET /admin/job/{job_id} - Get job with its applicants
GET /admin/applicants - List all applicant accounts
GET /admin/applicant/{applicant_id} - Get an applicant's resume profile
"""

from typing import List

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from jobboard.db.postgres import get_db_session, execute_raw_sql
from jobboard.core.auth import get_current_admin
from jobboard.services.profile_store import ProfileStore, get_profile_store
from jobboard.schemas.schemas import (
    JobCreate, JobCreatedResponse, JobResponse, JobDetailResponse,
    ApplicantSummary, ProfileResponse, UserType
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/job", response_model=JobCreatedResponse, status_code=201)
async def create_job(job: JobCreate, admin: dict = Depends(get_current_admin)):
    """Create a new job posting."""
    with get_db_session() as db:
        result = db.execute(
            text("""
                INSERT INTO jobs (title, description, company_name, posted_by_id)
                VALUES (:title, :description, :company_name, :posted_by_id)
                RETURNING job_id
            """),
            {
                "title": job.title,
                "description": job.description,
                "company_name": job.company_name,
                "posted_by_id": admin["user_id"]
            }
        )
        job_id = result.fetchone()[0]

    return JobCreatedResponse(message="Job created successfully", job_id=job_id)


@router.get("/job/{job_id}", response_model=JobDetailResponse)
async def get_job(job_id: int, admin: dict = Depends(get_current_admin)):
    """Get a job and everyone who applied to it."""
    results = execute_raw_sql("""
        SELECT job_id, title, description, company_name, posted_by_id, total_applications, posted_on
        FROM jobs WHERE job_id = :jid
    """, {"jid": job_id})

    if not results:
        raise HTTPException(status_code=404, detail="Job not found")

    applicants = execute_raw_sql("""
        SELECT u.user_id, u.name, u.email, u.profile_headline, u.address
        FROM applications a JOIN users u ON a.applicant_id = u.user_id
        WHERE a.job_id = :jid ORDER BY a.applied_at, a.application_id
    """, {"jid": job_id})

    return JobDetailResponse(
        job=JobResponse(**results[0]),
        applicants=[ApplicantSummary(**a) for a in applicants]
    )


@router.get("/applicants", response_model=List[ApplicantSummary])
async def get_all_applicants(admin: dict = Depends(get_current_admin)):
    """List all applicant accounts."""
    results = execute_raw_sql("""
        SELECT user_id, name, email, profile_headline, address
        FROM users WHERE user_type = :user_type ORDER BY user_id
    """, {"user_type": UserType.applicant.value})
    return [ApplicantSummary(**r) for r in results]


@router.get("/applicant/{applicant_id}", response_model=ProfileResponse)
async def get_applicant_data(
    applicant_id: int,
    admin: dict = Depends(get_current_admin),
    store: ProfileStore = Depends(get_profile_store)
):
    """Get an applicant's resume-derived profile."""
    profile = store.get(applicant_id)
    if not profile:
        raise HTTPException(status_code=404, detail="Applicant profile not found")
    return ProfileResponse(**profile)
