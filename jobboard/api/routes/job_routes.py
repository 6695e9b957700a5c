"""
Job Routes

GET /jobs - List all jobs (any authenticated user)
POST /jobs/{job_id}/apply - Apply to job (applicant only)
"""

from fastapi import APIRouter, HTTPException, Depends
from sqlalchemy import text

from jobboard.db.postgres import get_db_session, execute_raw_sql
from jobboard.core.auth import get_current_user, get_current_applicant
from jobboard.schemas.schemas import JobResponse, JobListResponse, MessageResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])

JOB_COLUMNS = "job_id, title, description, company_name, posted_by_id, total_applications, posted_on"


@router.get("", response_model=JobListResponse)
async def list_jobs(user: dict = Depends(get_current_user)):
    """List all job postings, newest first."""
    results = execute_raw_sql(f"SELECT {JOB_COLUMNS} FROM jobs ORDER BY posted_on DESC, job_id DESC")
    jobs = [JobResponse(**r) for r in results]
    return JobListResponse(jobs=jobs, total=len(jobs))


@router.post("/{job_id}/apply", response_model=MessageResponse)
async def apply_to_job(job_id: int, applicant: dict = Depends(get_current_applicant)):
    """Apply to a job. Applicants only. Cannot apply twice to same job."""
    with get_db_session() as db:
        # Check job exists
        result = db.execute(text("SELECT job_id FROM jobs WHERE job_id = :jid"), {"jid": job_id})
        if not result.fetchone():
            raise HTTPException(status_code=404, detail="Job not found")

        # Check not already applied
        result = db.execute(
            text("SELECT application_id FROM applications WHERE applicant_id = :aid AND job_id = :jid"),
            {"aid": applicant["user_id"], "jid": job_id}
        )
        if result.fetchone():
            raise HTTPException(status_code=400, detail="Already applied to this job")

        # Create application
        db.execute(
            text("INSERT INTO applications (applicant_id, job_id) VALUES (:aid, :jid)"),
            {"aid": applicant["user_id"], "jid": job_id}
        )

        db.execute(
            text("UPDATE jobs SET total_applications = total_applications + 1 WHERE job_id = :jid"),
            {"jid": job_id}
        )

    return MessageResponse(message="Applied to job successfully")
